import uuid
from datetime import datetime

from pydantic import Field

from app.models.wallet import Wallet, WalletScheme, WalletType

from .base import CamelModel


class WalletRegistration(CamelModel):
    name: str = Field(..., min_length=1, max_length=50, description="Wallet display name")
    scheme: WalletScheme = Field(..., description="Payment network")
    pan: str = Field(..., min_length=6, max_length=50, description="Primary account number")


class WalletResponse(CamelModel):
    """Public projection of a wallet; the owner is identified by phone number."""

    id: uuid.UUID
    name: str
    type: WalletType
    scheme: WalletScheme
    number: str = Field(..., description="Stored number (BIN prefix for cards)")
    created_at: datetime
    owner: str = Field(..., description="Owner's phone number")

    @classmethod
    def from_wallet(cls, wallet: Wallet) -> "WalletResponse":
        return cls(
            id=wallet.id,
            name=wallet.name,
            type=wallet.type,
            scheme=wallet.scheme,
            number=wallet.number,
            created_at=wallet.created_at,
            owner=wallet.owner.phone_number,
        )
