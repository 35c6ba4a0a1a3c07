from .base import Base
from .definitions import User
from .wallet import Wallet, WalletScheme, WalletType

__all__ = ["Base", "User", "Wallet", "WalletScheme", "WalletType"]
