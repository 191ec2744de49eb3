"""Unit tests for Dependency Injection Container.

Tests cover:
- Container initialization and configuration
- Provider types (Singleton, Factory)
- Service wiring with overridden infrastructure
- Shutdown of shared clients
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from dependency_injector import containers

from app.core.config import get_config
from app.core.container import (
    container,
    create_container,
    get_container,
    shutdown_container,
)
from app.services.content import NewsService
from app.services.identity import AuthService
from app.services.tracks import TrackWorkflow

SERVICES = [
    "auth_service",
    "user_service",
    "staff_service",
    "channel_service",
    "broadcaster_service",
    "program_service",
    "interview_service",
    "applicant_service",
    "news_service",
    "event_service",
    "advertisement_service",
    "competition_service",
    "static_info_service",
    "track_workflow",
]


@pytest.fixture
def wired():
    """Global container with mocked infrastructure singletons."""
    session_factory = MagicMock()
    media = MagicMock()
    mailer = MagicMock()
    infrastructure = container.infrastructure
    with (
        infrastructure.db_session_factory.override(session_factory),
        infrastructure.media_client.override(media),
        infrastructure.mailer.override(mailer),
    ):
        yield session_factory, media, mailer


class TestContainerCreation:
    """Tests for container creation and configuration."""

    def test_create_container_returns_container_with_providers(self) -> None:
        new_container = create_container()
        assert isinstance(new_container, containers.DynamicContainer)
        assert hasattr(new_container, "infrastructure")
        assert hasattr(new_container, "services")

    def test_config_is_shared_settings(self) -> None:
        """The container reuses the process-wide settings object."""
        assert create_container().config() is get_config()

    def test_get_container_returns_global_container(self) -> None:
        assert get_container() is container


class TestServiceContainer:
    """Every route dependency has a provider."""

    @pytest.mark.parametrize("name", SERVICES)
    def test_provider_exists(self, name: str) -> None:
        assert hasattr(container.services, name)


class TestServiceInstantiation:
    """Tests for service instantiation through container."""

    def test_content_service_receives_infrastructure(self, wired) -> None:
        session_factory, media, _ = wired

        service = container.services.news_service()

        assert isinstance(service, NewsService)
        assert service.db_session_factory is session_factory
        assert service.media is media

    def test_auth_service_receives_mailer(self, wired) -> None:
        _, _, mailer = wired

        service = container.services.auth_service()

        assert isinstance(service, AuthService)
        assert service.mailer is mailer
        assert service.config is get_config()

    def test_track_workflow(self, wired) -> None:
        workflow = container.services.track_workflow()
        assert isinstance(workflow, TrackWorkflow)

    def test_services_are_factories(self, wired) -> None:
        assert container.services.channel_service() is not container.services.channel_service()

    def test_templates_are_singleton(self) -> None:
        first = container.infrastructure.email_templates()
        assert first is container.infrastructure.email_templates()


class TestShutdown:
    @pytest.mark.asyncio
    async def test_closes_http_client_and_engine(self) -> None:
        app_container = create_container()
        http_client = MagicMock()
        http_client.close = AsyncMock()
        engine = MagicMock()
        engine.dispose = AsyncMock()

        with (
            app_container.infrastructure.http_client.override(http_client),
            app_container.infrastructure.db_engine.override(engine),
        ):
            await shutdown_container(app_container)

        http_client.close.assert_awaited_once()
        engine.dispose.assert_awaited_once()


class TestContainerExports:
    """Tests for module exports."""

    def test_all_exports_exist(self) -> None:
        from app.core import container as container_module

        for name in container_module.__all__:
            assert hasattr(container_module, name), f"Missing export: {name}"
