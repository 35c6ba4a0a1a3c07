"""
The envelope every response (success or error) is wrapped in.
"""

from typing import Generic, TypeVar

from pydantic import Field

from .base import CamelModel

T = TypeVar("T")


class ApiResponse(CamelModel):
    success: bool = Field(default=True, description="Whether the operation succeeded")
    message: str = Field(..., description="Human readable outcome")


class DataResponse(ApiResponse, Generic[T]):
    data: T = Field(..., description="Operation payload")
