import unittest

from app.core.config import Settings
from app.core.validators import ValidatorFactory
from app.db.session import build_engine, build_session_factory, create_schema
from app.models.definitions import User
from app.repositories import UserRepository, WalletRepository
from app.schemas import UserRegistration
from app.services import UserService, WalletService

JWT_KEY = "test-signing-key-that-is-long-enough-0123456789"
PASSWORD = "Password123"


def make_settings(**overrides) -> Settings:
    values = {
        "jwt_key": JWT_KEY,
        "jwt_duration": 5,
        "bcrypt_rounds": 4,
        "database_url": "sqlite+aiosqlite://",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


def registration(phone_number: str, password: str = PASSWORD, confirm_password: str | None = None) -> UserRegistration:
    return UserRegistration(
        username="tester01",
        phone_number=phone_number,
        password=password,
        confirm_password=password if confirm_password is None else confirm_password,
    )


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh in-memory database per test; each `async with self.session()` block acts like one request."""

    database_url = "sqlite+aiosqlite://"

    async def asyncSetUp(self) -> None:
        self.settings = make_settings(database_url=self.database_url)
        self.engine = build_engine(self.settings.database_url)
        await create_schema(self.engine)
        self.session = build_session_factory(self.engine)
        self.validator_factory = ValidatorFactory()

    async def asyncTearDown(self) -> None:
        await self.engine.dispose()

    def user_service(self, session) -> UserService:
        return UserService(session, UserRepository(session), self.validator_factory, self.settings)

    def wallet_service(self, session) -> WalletService:
        return WalletService(session, WalletRepository(session), self.validator_factory)

    async def register(self, phone_number: str) -> None:
        async with self.session() as session:
            await self.user_service(session).register(registration(phone_number))

    async def load_user(self, session, phone_number: str) -> User:
        user = await UserRepository(session).get_by_phone_number(phone_number)
        assert user is not None
        return user
