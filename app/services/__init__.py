from .user import UserService
from .wallet import MAX_WALLET_COUNT, WalletService

__all__ = ["UserService", "WalletService", "MAX_WALLET_COUNT"]
