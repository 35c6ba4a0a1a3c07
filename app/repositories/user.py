from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.definitions import User

# Never populated from caller-supplied data.
PROTECTED_FIELDS = frozenset({"id", "created_at", "wallets"})


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_phone_number(self, phone_number: str) -> User | None:
        """Retrieves a User (wallets attached) by their unique phone number (login ID)."""
        stmt = select(User).where(User.phone_number == phone_number)
        return (await self.session.scalars(stmt)).one_or_none()

    async def create(self, create_data: dict[str, Any]) -> User:
        """
        Creates a new User record and flushes it.

        Raises:
            IntegrityError: If the phone number is already taken.
        """
        fields = {key: value for key, value in create_data.items() if key not in PROTECTED_FIELDS}
        # New users start with an empty, already-loaded wallet collection.
        user = User(wallets=[], **fields)
        self.session.add(user)
        await self.session.flush()
        return user
