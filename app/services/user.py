import asyncio
import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, NoReturn

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.security import PHONE_NUMBER_CLAIM, check_password, hash_password, issue_token
from app.core.validators import ValidatorFactory
from app.exceptions.http import BadRequestError, ConflictError, UnauthorizedError
from app.models.definitions import User
from app.repositories import UserRepository
from app.schemas import DataResponse, UserLogin, UserRegistration, UserResponse

logger = logging.getLogger(__name__)

# Same message for unknown user and wrong password: no account enumeration.
INVALID_CREDENTIALS = "Invalid credentials."


class UserService:
    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository,
        validator_factory: ValidatorFactory,
        settings: Settings,
    ):
        self._session = session
        self._user_repo = user_repo
        self._validator_factory = validator_factory
        self._settings = settings

    # --- 1. USER REGISTRATION ---

    async def register(self, data: UserRegistration) -> DataResponse[str]:
        """
        Registers a new user identified by their phone number.

        Raises:
            BadRequestError: Passwords differ, or the phone number is not valid.
            ConflictError: A user with the phone number already exists.
        """
        logger.info("Registering new user: %s", data.phone_number)

        if data.password != data.confirm_password:
            self._registration_failed(data.phone_number, "Provided passwords do not match.", BadRequestError)

        if not self._validator_factory.get_phone_number_validator()(data.phone_number):
            self._registration_failed(
                data.phone_number, f"The provided phone number: {data.phone_number} is not valid.", BadRequestError
            )

        already_exists = f"User with phone number: {data.phone_number} already exists."
        if await self.get_user(data.phone_number):
            self._registration_failed(data.phone_number, already_exists, ConflictError)

        logger.info("Generating password hash and salt.")
        # bcrypt is CPU-bound and must not run on the event loop.
        password_hash, password_salt = await asyncio.to_thread(
            hash_password, data.password, rounds=self._settings.bcrypt_rounds
        )

        new_user_data = data.model_dump(exclude={"password", "confirm_password"})
        new_user_data["password_hash"] = password_hash
        new_user_data["password_salt"] = password_salt

        try:
            created_user = await self._user_repo.create(new_user_data)
            await self._session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration for the same phone number.
            await self._session.rollback()
            self._registration_failed(data.phone_number, already_exists, ConflictError)

        logger.info("Registered new user: %s successfully.", created_user.phone_number)
        return DataResponse[str](message="User created successfully", data=created_user.phone_number)

    @staticmethod
    def _registration_failed(phone_number: str, reason: str, error: type[Exception]) -> NoReturn:
        logger.info("Failed to register new user: %s. Reason: %s", phone_number, reason)
        raise error(reason)

    # --- 2. USER AUTHENTICATION ---

    async def login(self, credentials: UserLogin) -> DataResponse[str]:
        """
        Verifies credentials and issues a signed token carrying the phone number.

        Raises:
            UnauthorizedError: Unknown phone number or wrong password (indistinguishable).
        """
        logger.info("Logging in user: %s", credentials.phone_number)

        user = await self.get_user(credentials.phone_number)
        if user is None:
            logger.info("Failed to log in user: %s. Reason: User does not exist.", credentials.phone_number)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not await asyncio.to_thread(check_password, credentials.password, user.password_hash, user.password_salt):
            logger.info("Failed to log in user: %s. Reason: Provided password incorrect.", credentials.phone_number)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = issue_token(
            {PHONE_NUMBER_CLAIM: user.phone_number},
            self._settings.jwt_key,
            timedelta(minutes=self._settings.jwt_duration),
        )

        logger.info("Logged in user: %s successfully.", credentials.phone_number)
        return DataResponse[str](message="User logged in successfully.", data=token)

    async def get_authenticated_user(self, principal: Mapping[str, Any]) -> User:
        """
        Resolves the caller behind an already verified token to a User with wallets attached.

        Raises:
            UnauthorizedError: The claim is missing or no longer matches a user.
        """
        logger.info("Retrieving authenticated user details.")

        phone_number = principal.get(PHONE_NUMBER_CLAIM)
        user = await self.get_user(phone_number) if isinstance(phone_number, str) else None
        if user is None:
            logger.error("Failed to retrieve authenticated user details. Reason: Account does not exist.")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("Retrieved authenticated user details successfully.")
        return user

    # --- 3. USER DETAILS ---

    async def get_user_details(self, phone_number: str) -> DataResponse[UserResponse]:
        """
        Returns the public projection of a user.

        Raises:
            BadRequestError: No such user. Kept as 400 (not 404) for compatibility with
                existing clients of the /me endpoint.
        """
        logger.info("Retrieving account details for user: %s", phone_number)

        user = await self.get_user(phone_number)
        if user is None:
            reason = f"User with phone number: {phone_number} does not exist"
            logger.info("Failed to retrieve account details for user: %s. Reason: %s", phone_number, reason)
            raise BadRequestError(reason)

        logger.info("Retrieved account details for user: %s successfully.", phone_number)
        return DataResponse[UserResponse](
            message="Retrieved user details successfully.", data=UserResponse.model_validate(user)
        )

    async def get_user(self, phone_number: str) -> User | None:
        return await self._user_repo.get_by_phone_number(phone_number)
