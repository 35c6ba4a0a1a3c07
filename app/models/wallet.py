import uuid
from enum import Enum as PyEnum

from sqlalchemy import Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IdentityMixin, TimestampMixin
from .definitions import User


class WalletType(str, PyEnum):
    CARD = "Card"
    MOMO = "Momo"  # Mobile money


class WalletScheme(str, PyEnum):
    # Card networks
    VISA = "Visa"
    MASTERCARD = "Mastercard"

    # Mobile money networks
    MTN = "Mtn"
    VODAFONE = "Vodafone"
    AIRTEL_TIGO = "AirtelTigo"

    @property
    def wallet_type(self) -> WalletType:
        try:
            return _SCHEME_WALLET_TYPES[self]
        except KeyError:
            raise ValueError(f"No wallet type defined for wallet scheme: {self.value}") from None


_SCHEME_WALLET_TYPES: dict[WalletScheme, WalletType] = {
    WalletScheme.VISA: WalletType.CARD,
    WalletScheme.MASTERCARD: WalletType.CARD,
    WalletScheme.MTN: WalletType.MOMO,
    WalletScheme.VODAFONE: WalletType.MOMO,
    WalletScheme.AIRTEL_TIGO: WalletType.MOMO,
}


class Wallet(Base, IdentityMixin, TimestampMixin):
    """
    The Wallet Table (T_Wallet).
    Registers the identity of a card or mobile money account for exactly one user.
    Wallets are never edited in place; they are only created and deleted.
    """

    __tablename__ = "wallets"
    __table_args__ = (UniqueConstraint("owner_id", "number", name="uq_wallets_owner_number"),)

    name: Mapped[str] = mapped_column(String(50), nullable=False, comment="Display name (1-50 chars).")

    type: Mapped[WalletType] = mapped_column(
        Enum(WalletType, native_enum=False, values_callable=lambda e: [m.value for m in e], length=10),
        nullable=False,
        comment="Card or Momo, derived from the scheme.",
    )
    scheme: Mapped[WalletScheme] = mapped_column(
        Enum(WalletScheme, native_enum=False, values_callable=lambda e: [m.value for m in e], length=20),
        nullable=False,
        comment="Payment network the number belongs to.",
    )

    number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Normalized account number: the 6-char BIN prefix for cards, the full number for momo.",
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(User.id, ondelete="CASCADE"), nullable=False, index=True, comment="The owning user."
    )

    owner: Mapped[User] = relationship(back_populates="wallets", lazy="joined")
