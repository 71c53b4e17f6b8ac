"""Register User Use Case."""

from dataclasses import dataclass

from smartsupply.application.dto.requests import RegisterRequest
from smartsupply.application.dto.responses import AuthResponse, UserResponse
from smartsupply.config import get_logger
from smartsupply.core.entities.user import CurrentUser, User
from smartsupply.core.exceptions import DuplicateUserEmailError
from smartsupply.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)


@dataclass
class AuthResult:
    """Authenticated user plus the token issued for it."""

    user: User
    access_token: str
    token_type: str
    expires_at: object  # datetime


def auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        expires_at=result.expires_at,
        user=UserResponse.model_validate(result.user),
    )


class RegisterUserUseCase:
    """Create an account and log it in."""

    def __init__(self, user_store: IUserStore | None = None, token_service=None):
        self._user_store = user_store
        self._token_service = token_service

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

    def _get_token_service(self):
        if self._token_service is None:
            from smartsupply.infrastructure.security import get_token_service

            self._token_service = get_token_service()
        return self._token_service

    async def execute(self, request: RegisterRequest) -> AuthResult:
        """
        Execute register use case.

        Raises:
            DuplicateUserEmailError: email already registered
        """
        from smartsupply.infrastructure.security import hash_password

        store = await self._get_user_store()
        if await store.get_user_by_email(request.email) is not None:
            raise DuplicateUserEmailError(request.email)

        user = await store.create_user(
            User(
                email=request.email,
                password_hash=hash_password(request.password),
                first_name=request.first_name,
                last_name=request.last_name,
                role=request.role,
            )
        )
        token = self._get_token_service().issue(CurrentUser.from_user(user))

        logger.info("user_registered", user_id=user.id, role=user.role.value)
        return AuthResult(
            user=user,
            access_token=token.access_token,
            token_type=token.token_type,
            expires_at=token.expires_at,
        )

    def to_response(self, result: AuthResult) -> AuthResponse:
        """Convert result to API response."""
        return auth_response(result)
