"""Tests for password hashing and access tokens."""

import time

import jwt
import pytest

from smartsupply.core.entities.user import CurrentUser, Role
from smartsupply.core.exceptions import InvalidTokenError
from smartsupply.infrastructure.security import TokenService, hash_password, verify_password

SECRET = "test-secret-with-enough-length-0123456789"


@pytest.fixture
def caller() -> CurrentUser:
    return CurrentUser(id="user-1", email="ops@example.com", role=Role.PROCUREMENT)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret1", rounds=4)
        assert hashed != "secret1"
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_malformed_hash(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


class TestTokenService:
    def test_round_trip(self, caller):
        tokens = TokenService(secret=SECRET)
        issued = tokens.issue(caller)
        assert issued.token_type == "bearer"
        assert tokens.verify(issued.access_token) == caller

    def test_subject_is_email(self, caller):
        issued = TokenService(secret=SECRET).issue(caller)
        claims = jwt.decode(issued.access_token, SECRET, algorithms=["HS256"])
        assert claims["sub"] == "ops@example.com"
        assert claims["role"] == "PROCUREMENT"

    def test_wrong_secret(self, caller):
        issued = TokenService(secret=SECRET).issue(caller)
        with pytest.raises(InvalidTokenError):
            TokenService(secret="another-secret-with-enough-length-987654").verify(
                issued.access_token
            )

    def test_expired(self, caller):
        now = int(time.time())
        claims = {"sub": caller.email, "uid": caller.id, "role": "ADMIN", "exp": now - 60}
        token = jwt.encode(claims, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError, match="token expired"):
            TokenService(secret=SECRET).verify(token)

    def test_missing_claims(self):
        token = jwt.encode({"sub": "ops@example.com", "exp": int(time.time()) + 60}, SECRET)
        with pytest.raises(InvalidTokenError):
            TokenService(secret=SECRET).verify(token)

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            TokenService(secret=SECRET).verify("not.a.token")
