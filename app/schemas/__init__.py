from .response import ApiResponse, DataResponse
from .user import UserLogin, UserRegistration, UserResponse
from .wallet import WalletRegistration, WalletResponse

__all__ = [
    "ApiResponse",
    "DataResponse",
    "UserLogin",
    "UserRegistration",
    "UserResponse",
    "WalletRegistration",
    "WalletResponse",
]
