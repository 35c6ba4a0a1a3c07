from .user import UserRepository
from .wallet import WalletRepository

__all__ = ["UserRepository", "WalletRepository"]
