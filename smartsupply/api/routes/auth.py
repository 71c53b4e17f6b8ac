"""Registration, login and profile endpoints."""

from fastapi import APIRouter, Depends, status

from smartsupply.api.dependencies import (
    get_authenticate_user_use_case,
    get_current_user,
    get_register_user_use_case,
    get_usr_store,
)
from smartsupply.application.dto.requests import LoginRequest, RegisterRequest
from smartsupply.application.dto.responses import AuthResponse, ErrorResponse, UserResponse
from smartsupply.application.use_cases import AuthenticateUserUseCase, RegisterUserUseCase
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import UserNotFoundError
from smartsupply.core.interfaces import IUserStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def register(
    request: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> AuthResponse:
    """Create an account and return an access token for it."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    use_case: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
) -> AuthResponse:
    """Exchange email and password for an access token."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/profile",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def profile(
    current_user: CurrentUser = Depends(get_current_user),
    store: IUserStore = Depends(get_usr_store),
) -> UserResponse:
    """Get the authenticated user's profile."""
    user = await store.get_user(current_user.id)
    if user is None:
        raise UserNotFoundError(current_user.email)
    return UserResponse.model_validate(user)
