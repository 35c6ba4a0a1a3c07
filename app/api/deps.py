"""
FastAPI dependencies wiring the Service Layer to a request.
"""

from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.security import decode_token
from app.core.validators import ValidatorFactory
from app.db.session import get_session
from app.exceptions.http import UnauthorizedError
from app.models.definitions import User
from app.repositories import UserRepository, WalletRepository
from app.services import UserService, WalletService

# auto_error is off so a missing header goes through the envelope handler as a 401.
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def get_validator_factory(request: Request) -> ValidatorFactory:
    return request.app.state.validator_factory


ValidatorFactoryDep = Annotated[ValidatorFactory, Depends(get_validator_factory)]


def get_user_service(session: SessionDep, factory: ValidatorFactoryDep, settings: SettingsDep) -> UserService:
    return UserService(session, UserRepository(session), factory, settings)


def get_wallet_service(session: SessionDep, factory: ValidatorFactoryDep) -> WalletService:
    return WalletService(session, WalletRepository(session), factory)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
WalletServiceDep = Annotated[WalletService, Depends(get_wallet_service)]


def get_principal(
    settings: SettingsDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> dict[str, Any]:
    """Verifies the bearer token and returns its claims."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token.")
    return decode_token(credentials.credentials, settings.jwt_key)


PrincipalDep = Annotated[dict[str, Any], Depends(get_principal)]


async def get_current_user(principal: PrincipalDep, user_service: UserServiceDep) -> User:
    return await user_service.get_authenticated_user(principal)


CurrentUserDep = Annotated[User, Depends(get_current_user)]
