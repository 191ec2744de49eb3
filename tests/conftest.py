"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

import uuid
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.config import Config
from app.core.logging import setup_logging
from app.core.types import BestEffortResult
from app.models.channel import Channel
from app.models.principal import Principal, Role

# Setup logging for tests
setup_logging()


@pytest.fixture
def config(tmp_path) -> Config:
    """Settings with a fixed signing key and a per-test upload directory."""
    return Config(
        _env_file=None,
        jwt_secret_key="test-secret-key-for-unit-tests-only",
        upload_temp_dir=str(tmp_path / "uploads"),
        default_avatar_url="https://ui-avatars.com/api/",
        max_image_file_size=1024,
        max_media_file_size=4096,
    )


@pytest.fixture
def mock_db_session_factory():
    """Create mock database session factory.

    Returns:
        Tuple of (factory, session)
    """
    session = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()

    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory, session


@pytest.fixture
def mock_media():
    """Media client whose uploads and destroys always succeed."""
    from app.infrastructure.media import MediaAsset

    media = MagicMock()
    media.upload = AsyncMock(
        return_value=MediaAsset(public_id="seagulls/x/abc", url="https://cdn.test/abc.png")
    )
    media.destroy_quietly = AsyncMock(return_value=BestEffortResult.success())
    media.destroy_all = AsyncMock(return_value=[])
    return media


@pytest.fixture
def scalar_result():
    """Build a mock ``session.execute`` result for single-row reads."""

    def build(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        result.scalar_one.return_value = value
        result.first.return_value = value
        return result

    return build


@pytest.fixture
def scalars_result():
    """Build a mock ``session.execute`` result for ``scalars().all()``."""

    def build(values):
        result = MagicMock()
        result.scalars.return_value.all.return_value = list(values)
        return result

    return build


@pytest.fixture
def make_principal():
    """Build detached principals."""

    def build(role: Role = Role.USER, **overrides) -> Principal:
        fields = {
            "id": uuid.uuid4(),
            "role": role.value,
            "name": "Test Listener",
            "email": f"{role.value}@seagulls.fm",
            "phone_number": "+201001234567",
            "password_hash": "",
            "image": {"public_id": None, "url": "https://ui-avatars.com/api/?name=Test"},
            "is_active": True,
            "otp_verified": False,
            "created_at": datetime(2026, 10, 1, tzinfo=UTC),
            "updated_at": datetime(2026, 10, 1, tzinfo=UTC),
        }
        fields.update(overrides)
        return Principal(**fields)

    return build


@pytest.fixture
def channel() -> Channel:
    now = datetime(2026, 10, 1, tzinfo=UTC)
    return Channel(id=uuid.uuid4(), name="Seagulls Cairo", created_at=now, updated_at=now)
