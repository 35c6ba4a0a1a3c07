"""
Pydantic schemas defining the contract for user identity and authentication
across the Presentation (API) and Service Layers.
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from .base import CamelModel

# --- Input Schemas (Requests / Commands) ---


class UserRegistration(CamelModel):
    """
    Schema for user registration requests. Password confirmation is compared by
    the Service Layer, not here, so a mismatch is reported as a business-rule failure.
    """

    username: str = Field(..., min_length=6, max_length=10, description="Display name (6-10 characters)")
    phone_number: str = Field(
        ..., min_length=6, max_length=20, pattern=r"^\d+$", description="Phone number, digits only"
    )
    password: str = Field(..., min_length=6, max_length=50, description="Plain text password (will be hashed)")
    confirm_password: str = Field(..., description="Must equal password")


class UserLogin(CamelModel):
    """
    Minimal schema for user authentication/login command.
    """

    phone_number: str = Field(..., min_length=6, max_length=50, description="Registered phone number")
    password: str = Field(..., min_length=6, max_length=50, description="User's plain text password")


# --- Output Schema (Response / Projection) ---


class UserResponse(CamelModel):
    """
    Public projection of a user. Never carries credentials.
    """

    # Configuration allows mapping from SQLAlchemy ORM objects
    model_config = ConfigDict(from_attributes=True)

    username: str = Field(..., description="User's display name")
    phone_number: str = Field(..., description="User's phone number")
    created_at: datetime = Field(..., description="Date and time of user creation")
