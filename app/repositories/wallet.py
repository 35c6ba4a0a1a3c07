import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.wallet import Wallet


class WalletRepository:
    """
    Data access for Wallet records. Lookups that serve a caller are always
    scoped to the owner; unscoped lookups are for internal use only.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, wallet_id: uuid.UUID) -> Wallet | None:
        """Retrieves a Wallet by ID regardless of owner."""
        return await self.session.get(Wallet, wallet_id)

    async def get_by_id_and_owner(self, wallet_id: uuid.UUID, owner_id: uuid.UUID) -> Wallet | None:
        """Retrieves a Wallet only if both the ID and the owner match."""
        stmt = select(Wallet).where(Wallet.id == wallet_id, Wallet.owner_id == owner_id)
        return (await self.session.scalars(stmt)).unique().one_or_none()

    async def add(self, wallet: Wallet) -> Wallet:
        """
        Adds a Wallet and flushes it so its ID is assigned.

        Raises:
            IntegrityError: If the owner already holds a wallet with the same number.
        """
        self.session.add(wallet)
        await self.session.flush()
        return wallet

    async def remove(self, wallet: Wallet) -> None:
        """Deletes a Wallet and detaches it from its owner's loaded collection."""
        owner = wallet.owner
        if owner is not None and wallet in owner.wallets:
            owner.wallets.remove(wallet)
        await self.session.delete(wallet)
        await self.session.flush()
