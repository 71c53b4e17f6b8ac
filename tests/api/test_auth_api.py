"""API tests for authentication and route protection."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from smartsupply.api.dependencies import (
    get_authenticate_user_use_case,
    get_prod_store,
    get_register_user_use_case,
    get_tokens,
    get_usr_store,
)
from smartsupply.api.main import app
from smartsupply.application.use_cases import AuthenticateUserUseCase, RegisterUserUseCase
from smartsupply.core.entities.user import CurrentUser, Role, User
from smartsupply.infrastructure.security import TokenService, hash_password

SECRET = "test-secret-with-enough-length-0123456789"


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret=SECRET)


@pytest.fixture
def stored_user() -> User:
    return User(
        id="user-1",
        email="ops@example.com",
        password_hash=hash_password("secret1", rounds=4),
        role=Role.MANAGER,
    )


@pytest.fixture
def mock_user_store(stored_user):
    store = AsyncMock()
    store.get_user_by_email.return_value = None
    store.get_user.return_value = stored_user
    store.create_user.side_effect = lambda user: user
    return store


@pytest.fixture
async def auth_client(anonymous_client: AsyncClient, mock_user_store, token_service):
    app.dependency_overrides[get_tokens] = lambda: token_service
    app.dependency_overrides[get_usr_store] = lambda: mock_user_store
    app.dependency_overrides[get_register_user_use_case] = lambda: RegisterUserUseCase(
        user_store=mock_user_store, token_service=token_service
    )
    app.dependency_overrides[get_authenticate_user_use_case] = lambda: AuthenticateUserUseCase(
        user_store=mock_user_store, token_service=token_service
    )
    products = AsyncMock()
    products.list_products.return_value = []
    products.count_products.return_value = 0
    app.dependency_overrides[get_prod_store] = lambda: products
    yield anonymous_client


class TestRegisterAndLogin:
    async def test_register(self, auth_client: AsyncClient):
        response = await auth_client.post(
            "/auth/register",
            json={"email": "New@Example.com", "password": "secret1", "firstName": "Ada"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["tokenType"] == "bearer"
        assert body["user"]["email"] == "new@example.com"
        assert body["user"]["role"] == "WAREHOUSE_OP"
        assert body["user"]["firstName"] == "Ada"
        assert "passwordHash" not in body["user"]
        assert "password_hash" not in body["user"]

    async def test_register_short_password(self, auth_client: AsyncClient):
        response = await auth_client.post(
            "/auth/register", json={"email": "new@example.com", "password": "123"}
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_register_duplicate(self, auth_client, mock_user_store, stored_user):
        mock_user_store.get_user_by_email.return_value = stored_user
        response = await auth_client.post(
            "/auth/register", json={"email": "ops@example.com", "password": "secret1"}
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_USER_EMAIL"

    async def test_login(self, auth_client, mock_user_store, stored_user, token_service):
        mock_user_store.get_user_by_email.return_value = stored_user
        response = await auth_client.post(
            "/auth/login", json={"email": "ops@example.com", "password": "secret1"}
        )
        assert response.status_code == 200
        caller = token_service.verify(response.json()["accessToken"])
        assert caller.id == "user-1"

    async def test_login_wrong_password(self, auth_client, mock_user_store, stored_user):
        mock_user_store.get_user_by_email.return_value = stored_user
        response = await auth_client.post(
            "/auth/login", json={"email": "ops@example.com", "password": "nope"}
        )
        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_CREDENTIALS"


class TestProtection:
    async def test_missing_token(self, auth_client: AsyncClient):
        response = await auth_client.get("/products")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        body = response.json()
        assert body["error_code"] == "UNAUTHORIZED"
        assert body["path"] == "/products"

    async def test_invalid_token(self, auth_client: AsyncClient):
        response = await auth_client.get(
            "/products", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"

    async def test_valid_token(self, auth_client: AsyncClient, token_service):
        token = token_service.issue(
            CurrentUser(id="user-1", email="ops@example.com", role=Role.MANAGER)
        ).access_token
        response = await auth_client.get(
            "/products", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200
        assert response.json()["total"] == 0

    async def test_profile(self, auth_client: AsyncClient, token_service):
        token = token_service.issue(
            CurrentUser(id="user-1", email="ops@example.com", role=Role.MANAGER)
        ).access_token
        response = await auth_client.get(
            "/auth/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200
        assert response.json()["role"] == "MANAGER"

    async def test_health_is_public(self, auth_client: AsyncClient):
        response = await auth_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
