import logging
import uuid
from typing import NoReturn

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.validators import ValidatorFactory
from app.exceptions.http import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from app.models.definitions import User
from app.models.wallet import Wallet, WalletScheme, WalletType
from app.repositories import WalletRepository
from app.schemas import ApiResponse, DataResponse, WalletRegistration, WalletResponse

logger = logging.getLogger(__name__)

MAX_WALLET_COUNT = 5

# Card wallets keep only this many leading digits of the PAN.
CARD_NUMBER_PREFIX_LENGTH = 6


def normalize_wallet_number(scheme: WalletScheme, pan: str) -> str:
    """The number actually stored: the BIN-like prefix for cards, the full number for momo."""
    if scheme.wallet_type is WalletType.CARD:
        return pan[:CARD_NUMBER_PREFIX_LENGTH]
    return pan


class WalletService:
    """
    Wallet lifecycle for an authenticated owner.

    The owner passed in must have its wallet collection loaded; duplicate and
    quota checks read that collection rather than querying the store.
    """

    def __init__(self, session: AsyncSession, wallet_repo: WalletRepository, validator_factory: ValidatorFactory):
        self._session = session
        self._wallet_repo = wallet_repo
        self._validator_factory = validator_factory

    # --- 1. CREATION ---

    async def create_wallet(self, owner: User, data: WalletRegistration) -> DataResponse[str]:
        """
        Registers a wallet for owner after validating it.

        Checks run in this order, so a duplicate is reported as a conflict even at full quota:
            BadRequestError: The PAN is not valid for the scheme.
            ConflictError: The owner already holds a wallet with the same stored number.
            ForbiddenError: The owner already holds MAX_WALLET_COUNT wallets.
        """
        phone_number = owner.phone_number
        logger.info("Creating wallet for user: %s", phone_number)

        if not self._validator_factory.get_scheme_validator(data.scheme)(data.pan):
            reason = f"The provided scheme number: {data.pan} is not valid for scheme: {data.scheme.value}."
            self._creation_failed(phone_number, reason, BadRequestError)

        wallet_type = data.scheme.wallet_type
        number = normalize_wallet_number(data.scheme, data.pan)

        if any(wallet.number == number for wallet in owner.wallets):
            self._creation_failed(phone_number, "Wallet already exists.", ConflictError)

        if len(owner.wallets) >= MAX_WALLET_COUNT:
            self._creation_failed(phone_number, "Maximum number of wallets reached.", ForbiddenError)

        wallet = Wallet(name=data.name, scheme=data.scheme, type=wallet_type, number=number, owner=owner)
        try:
            await self._wallet_repo.add(wallet)
            await self._session.commit()
        except IntegrityError:
            # A concurrent request registered the same number first.
            await self._session.rollback()
            self._creation_failed(phone_number, "Wallet already exists.", ConflictError)

        logger.info("Wallet created successfully for user: %s", phone_number)
        return DataResponse[str](message="Wallet created successfully", data=str(wallet.id))

    @staticmethod
    def _creation_failed(phone_number: str, reason: str, error: type[Exception]) -> NoReturn:
        logger.info("Failed to create wallet for user: %s. Reason: %s", phone_number, reason)
        raise error(reason)

    # --- 2. RETRIEVAL ---

    async def get_wallet_by_id(self, owner: User, wallet_id: uuid.UUID) -> DataResponse[WalletResponse]:
        """
        Raises:
            NotFoundError: No wallet with that ID belongs to owner. Another user's
                wallet is reported exactly like a missing one.
        """
        logger.info("Retrieving wallet with id: %s", wallet_id)

        wallet = await self._get_owned_wallet(owner, wallet_id, action="retrieve")

        logger.info("Retrieved wallet with id: %s successfully.", wallet_id)
        return DataResponse[WalletResponse](
            message="Retrieved user wallet successfully.", data=WalletResponse.from_wallet(wallet)
        )

    async def get_wallets_by_user(self, owner: User) -> DataResponse[list[WalletResponse]]:
        logger.info("Retrieving all wallets for user: %s", owner.phone_number)

        wallets = [WalletResponse.from_wallet(wallet) for wallet in owner.wallets]

        logger.info("Retrieved all wallets for user: %s successfully.", owner.phone_number)
        return DataResponse[list[WalletResponse]](message="Retrieved all user wallets successfully.", data=wallets)

    async def fetch_wallet_by_id(self, wallet_id: uuid.UUID) -> Wallet | None:
        """Unscoped lookup; never expose its result to a caller without an ownership check."""
        return await self._wallet_repo.get_by_id(wallet_id)

    # --- 3. DELETION ---

    async def delete_wallet_by_id(self, owner: User, wallet_id: uuid.UUID) -> ApiResponse:
        """
        Raises:
            NotFoundError: Same ownership-scoped rule as get_wallet_by_id.
        """
        logger.info("Deleting wallet with id: %s", wallet_id)

        wallet = await self._get_owned_wallet(owner, wallet_id, action="delete")
        await self._wallet_repo.remove(wallet)
        await self._session.commit()

        logger.info("Deleted wallet with id: %s successfully.", wallet_id)
        return ApiResponse(message="Wallet deleted successfully.")

    async def _get_owned_wallet(self, owner: User, wallet_id: uuid.UUID, action: str) -> Wallet:
        wallet = await self._wallet_repo.get_by_id_and_owner(wallet_id, owner.id)
        if wallet is None:
            reason = f"Wallet with id: {wallet_id} does not exist."
            logger.info("Failed to %s wallet with id: %s. Reason: %s", action, wallet_id, reason)
            raise NotFoundError(reason)
        return wallet
