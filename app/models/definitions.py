from typing import TYPE_CHECKING

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IdentityMixin, TimestampMixin

if TYPE_CHECKING:
    from .wallet import Wallet

# --- CORE IDENTITY ENTITY ---


class User(Base, IdentityMixin, TimestampMixin):
    """
    The User Definition Table (T_User).
    The identity every wallet hangs off.

    CRITICAL DESIGN CHOICE: The phone number is the unique login identifier and the
    only claim carried in issued tokens. The 'username' field is a display name.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(10), nullable=False, comment="User's display name (6-10 chars).")

    phone_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        index=True,
        comment="User's unique phone number (digits only), used as the login identifier.",
    )

    password_hash: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, comment="Digest of the user's password.")
    password_salt: Mapped[bytes] = mapped_column(
        LargeBinary, nullable=False, comment="Salt the password digest was computed with."
    )

    # Eagerly loaded: wallet uniqueness and quota checks navigate this collection in memory.
    wallets: Mapped[list["Wallet"]] = relationship(
        back_populates="owner", lazy="selectin", cascade="all, delete-orphan", order_by="Wallet.created_at"
    )
