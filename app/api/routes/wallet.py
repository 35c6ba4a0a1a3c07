import uuid

from fastapi import APIRouter, status

from app.api.deps import CurrentUserDep, WalletServiceDep
from app.schemas import ApiResponse, DataResponse, WalletRegistration, WalletResponse

router = APIRouter(prefix="/api/v1/wallet", tags=["wallet"], responses={401: {"model": ApiResponse}})


@router.post(
    "/new",
    status_code=status.HTTP_201_CREATED,
    response_model=DataResponse[str],
    responses={400: {"model": ApiResponse}, 403: {"model": ApiResponse}, 409: {"model": ApiResponse}},
    summary="Create a new wallet",
)
async def create_wallet(registration: WalletRegistration, user: CurrentUserDep, wallet_service: WalletServiceDep):
    return await wallet_service.create_wallet(user, registration)


# Declared before /{wallet_id} so "all" is never parsed as an id.
@router.get("/all", response_model=DataResponse[list[WalletResponse]], summary="Get all of the user's wallets")
async def get_wallets_by_user(user: CurrentUserDep, wallet_service: WalletServiceDep):
    return await wallet_service.get_wallets_by_user(user)


@router.get(
    "/{wallet_id}",
    response_model=DataResponse[WalletResponse],
    responses={404: {"model": ApiResponse}},
    summary="Get wallet details by ID",
)
async def get_wallet_by_id(wallet_id: uuid.UUID, user: CurrentUserDep, wallet_service: WalletServiceDep):
    return await wallet_service.get_wallet_by_id(user, wallet_id)


@router.delete(
    "/{wallet_id}",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ApiResponse,
    responses={404: {"model": ApiResponse}},
    summary="Delete a wallet by ID",
)
async def delete_wallet(wallet_id: uuid.UUID, user: CurrentUserDep, wallet_service: WalletServiceDep):
    return await wallet_service.delete_wallet_by_id(user, wallet_id)
