"""Authenticate User Use Case: email and password login."""

from smartsupply.application.dto.requests import LoginRequest
from smartsupply.application.dto.responses import AuthResponse
from smartsupply.application.use_cases.register_user import AuthResult, auth_response
from smartsupply.config import get_logger
from smartsupply.core.entities.user import CurrentUser
from smartsupply.core.exceptions import InvalidCredentialsError
from smartsupply.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)


class AuthenticateUserUseCase:
    """Verify credentials and issue an access token."""

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

    async def execute(self, request: LoginRequest) -> AuthResult:
        """
        Execute login use case.

        Unknown email and wrong password raise the same error.

        Raises:
            InvalidCredentialsError: credentials do not match an account
        """
        from smartsupply.infrastructure.security import verify_password

        store = await self._get_user_store()
        user = await store.get_user_by_email(request.email)
        if user is None or not verify_password(request.password, user.password_hash):
            logger.warning("login_failed", email=request.email)
            raise InvalidCredentialsError()

        token = self._get_token_service().issue(CurrentUser.from_user(user))

        logger.info("user_logged_in", user_id=user.id)
        return AuthResult(
            user=user,
            access_token=token.access_token,
            token_type=token.token_type,
            expires_at=token.expires_at,
        )

    def to_response(self, result: AuthResult) -> AuthResponse:
        """Convert result to API response."""
        return auth_response(result)
