"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: One instance for the entire application (engine, clients)
- Transient: New instance every time (Factory), used for services

Usage:
    # In FastAPI
    from app.core.container import container

    @router.get("/")
    async def endpoint(service: NewsService = Depends(get_news_service)):
        ...

    # In tests
    with container.infrastructure.media_client.override(mock_media):
        ...
"""

from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Config, get_config


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (database, external clients).

    These are Singleton and closed by the application lifespan.
    """

    global_config = providers.Dependency(instance_of=Config)

    # ============================================
    # Database
    # ============================================

    db_engine = providers.Singleton(
        create_async_engine,
        url=global_config.provided.database_url,
        echo=global_config.provided.database_echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=global_config.provided.database_pool_size,
        max_overflow=global_config.provided.database_max_overflow,
    )

    db_session_factory = providers.Singleton(
        async_sessionmaker,
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    # ============================================
    # HTTP Client
    # ============================================

    http_client = providers.Singleton(
        "app.infrastructure.http_client.HTTPClient",
        timeout=global_config.provided.media_timeout_seconds,
    )

    # ============================================
    # Media Host
    # ============================================

    media_client = providers.Singleton(
        "app.infrastructure.media.MediaClient",
        http_client=http_client,
        cloud_name=global_config.provided.cloudinary_cloud_name,
        api_key=global_config.provided.cloudinary_api_key,
        api_secret=global_config.provided.cloudinary_api_secret,
        api_base=global_config.provided.cloudinary_api_base,
        chunk_size=global_config.provided.media_chunk_size,
    )

    # ============================================
    # Mail
    # ============================================

    mailer = providers.Singleton(
        "app.infrastructure.mailer.Mailer",
        host=global_config.provided.smtp_host,
        port=global_config.provided.smtp_port,
        username=global_config.provided.smtp_username,
        password=global_config.provided.smtp_password,
        sender=global_config.provided.mail_sender,
        use_tls=global_config.provided.smtp_use_tls,
    )

    email_templates = providers.Singleton(
        "app.services.notifications.manager.EmailTemplateManager",
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies.

    Services are Transient (Factory) and receive infrastructure via injection.
    """

    global_config = providers.Dependency(instance_of=Config)
    infrastructure = providers.DependenciesContainer()

    # ============================================
    # Identity Services
    # ============================================

    auth_service = providers.Factory(
        "app.services.identity.auth.AuthService",
        db_session_factory=infrastructure.db_session_factory,
        config=global_config,
        mailer=infrastructure.mailer,
        templates=infrastructure.email_templates,
    )

    user_service = providers.Factory(
        "app.services.identity.users.UserService",
        db_session_factory=infrastructure.db_session_factory,
        config=global_config,
        media=infrastructure.media_client,
    )

    staff_service = providers.Factory(
        "app.services.identity.staff.StaffService",
        db_session_factory=infrastructure.db_session_factory,
        config=global_config,
    )

    # ============================================
    # Content Services
    # ============================================

    channel_service = providers.Factory(
        "app.services.content.channel.ChannelService",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
    )

    broadcaster_service = providers.Factory(
        "app.services.content.broadcaster.BroadcasterService",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
    )

    program_service = providers.Factory(
        "app.services.content.program.ProgramService",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
    )

    interview_service = providers.Factory(
        "app.services.content.interview.InterviewService",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
    )

    applicant_service = providers.Factory(
        "app.services.content.interview.ApplicantService",
        db_session_factory=infrastructure.db_session_factory,
    )

    news_service = providers.Factory(
        "app.services.content.news.NewsService",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
    )

    event_service = providers.Factory(
        "app.services.content.event.EventService",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
    )

    advertisement_service = providers.Factory(
        "app.services.content.advertisement.AdvertisementService",
        db_session_factory=infrastructure.db_session_factory,
    )

    competition_service = providers.Factory(
        "app.services.content.competition.CompetitionService",
        db_session_factory=infrastructure.db_session_factory,
    )

    static_info_service = providers.Factory(
        "app.services.content.static_info.StaticInfoService",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
    )

    # ============================================
    # Track Workflow
    # ============================================

    track_workflow = providers.Factory(
        "app.services.tracks.workflow.TrackWorkflow",
        db_session_factory=infrastructure.db_session_factory,
        media=infrastructure.media_client,
        mailer=infrastructure.mailer,
        templates=infrastructure.email_templates,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Global Config singleton (environment variables)
    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    # Sub-containers
    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
    )

    services = providers.Container(
        ServiceContainer,
        global_config=config,
        infrastructure=infrastructure,
    )


def create_container() -> ApplicationContainer:
    """Create and configure the application container.

    Returns:
        Configured ApplicationContainer instance
    """
    return ApplicationContainer()


# Global container instance
container = create_container()


# ============================================
# FastAPI Integration
# ============================================


def get_container() -> ApplicationContainer:
    """Get the global container (for FastAPI Depends)."""
    return container


async def shutdown_container(app_container: ApplicationContainer | None = None) -> None:
    """Close the shared HTTP client and dispose of the engine."""
    app_container = app_container or container
    await app_container.infrastructure.http_client().close()
    await app_container.infrastructure.db_engine().dispose()


__all__ = [
    "ApplicationContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "container",
    "create_container",
    "get_config",
    "get_container",
    "shutdown_container",
]
