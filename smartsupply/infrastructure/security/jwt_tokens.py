"""
HS256 access tokens.

The subject claim carries the user's email; the user id and role ride along
so the caller can be resolved without another lookup.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from smartsupply.config import get_settings
from smartsupply.core.entities.user import CurrentUser, Role
from smartsupply.core.exceptions import InvalidTokenError


@dataclass
class IssuedToken:
    access_token: str
    expires_at: datetime
    token_type: str = "bearer"


class TokenService:
    """Issues and verifies signed access tokens."""

    def __init__(
        self,
        secret: str | None = None,
        algorithm: str | None = None,
        expire_minutes: int | None = None,
    ):
        settings = get_settings().auth
        self._secret = secret or settings.jwt_secret
        self._algorithm = algorithm or settings.jwt_algorithm
        self._expire_minutes = expire_minutes or settings.access_token_expire_minutes

    def issue(self, user: CurrentUser) -> IssuedToken:
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expire_minutes)
        payload = {
            "sub": user.email,
            "uid": user.id,
            "role": user.role.value,
            "iat": now,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(access_token=token, expires_at=expires_at)

    def verify(self, token: str) -> CurrentUser:
        """
        Decode and validate a token.

        Raises:
            InvalidTokenError: bad signature, expired, or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("token expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e)) from e

        try:
            return CurrentUser(
                id=payload["uid"],
                email=payload["sub"],
                role=Role(payload["role"]),
            )
        except (KeyError, ValueError) as e:
            raise InvalidTokenError("malformed claims") from e


_token_service: TokenService | None = None


def get_token_service() -> TokenService:
    """Get or create the token service singleton."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service
