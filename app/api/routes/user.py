from fastapi import APIRouter, status

from app.api.deps import CurrentUserDep, UserServiceDep
from app.schemas import ApiResponse, DataResponse, UserLogin, UserRegistration, UserResponse

router = APIRouter(prefix="/api/v1/user", tags=["user"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=DataResponse[str],
    responses={400: {"model": ApiResponse}, 409: {"model": ApiResponse}},
    summary="Register a new user",
)
async def register(registration: UserRegistration, user_service: UserServiceDep):
    return await user_service.register(registration)


@router.post(
    "/login",
    response_model=DataResponse[str],
    responses={401: {"model": ApiResponse}},
    summary="Log in a user and receive a bearer token",
)
async def login(credentials: UserLogin, user_service: UserServiceDep):
    return await user_service.login(credentials)


@router.get(
    "/me",
    response_model=DataResponse[UserResponse],
    responses={401: {"model": ApiResponse}},
    summary="Get the authenticated user's details",
)
async def get_my_details(user: CurrentUserDep, user_service: UserServiceDep):
    return await user_service.get_user_details(user.phone_number)
