"""Fixtures for route tests.

Routes are exercised through TestClient with services replaced via
``app.dependency_overrides``. The lifespan is not started, so no database
is needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.core.exceptions import AuthenticationError
from app.main import app as fastapi_app
from app.models.principal import Principal
from app.services.identity.auth import NOT_AUTHORIZED


@pytest.fixture
def mock_auth() -> MagicMock:
    """Auth service that treats every caller as anonymous."""
    auth = MagicMock()
    auth.principal_from_token = AsyncMock(side_effect=AuthenticationError(NOT_AUTHORIZED))
    return auth


@pytest.fixture
def api_app(config, mock_auth):
    """Application with anonymous callers and test settings."""
    fastapi_app.dependency_overrides[deps.get_settings] = lambda: config
    fastapi_app.dependency_overrides[deps.get_auth_service] = lambda: mock_auth
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(api_app) -> TestClient:
    return TestClient(api_app, raise_server_exceptions=False)


@pytest.fixture
def sign_in(api_app):
    """Make every request run as ``principal``."""

    def install(principal: Principal) -> Principal:
        api_app.dependency_overrides[deps.get_current_principal] = lambda: principal
        return principal

    return install


@pytest.fixture
def override(api_app):
    """Replace a service provider with a mock and return the mock."""

    def install(provider, **methods) -> MagicMock:
        service = MagicMock()
        for name, value in methods.items():
            setattr(service, name, AsyncMock(return_value=value))
        api_app.dependency_overrides[provider] = lambda: service
        return service

    return install
