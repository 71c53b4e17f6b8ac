"""Authentication primitives: password hashing and access tokens."""

from smartsupply.infrastructure.security.jwt_tokens import (
    IssuedToken,
    TokenService,
    get_token_service,
)
from smartsupply.infrastructure.security.passwords import hash_password, verify_password

__all__ = [
    "IssuedToken",
    "TokenService",
    "get_token_service",
    "hash_password",
    "verify_password",
]
