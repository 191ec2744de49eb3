"""Tests for app.core.types module."""

from pathlib import Path

import pytest

from app.core.types import BestEffortResult, LocalFile


@pytest.mark.unit
class TestBestEffortResult:
    def test_success(self):
        result = BestEffortResult.success()

        assert result.ok is True
        assert result.error is None

    def test_failure_from_exception(self):
        result = BestEffortResult.failure(ConnectionError("SMTP server unreachable"))

        assert result.ok is False
        assert result.error == "SMTP server unreachable"

    def test_failure_from_message(self):
        assert BestEffortResult.failure("timed out").error == "timed out"

    def test_frozen(self):
        result = BestEffortResult.success()

        with pytest.raises(AttributeError):
            result.ok = False


@pytest.mark.unit
class TestLocalFile:
    @pytest.mark.parametrize(
        "content_type, expected",
        [("audio/mpeg", True), ("audio/wav", True), ("video/mp4", False), ("image/png", False)],
    )
    def test_is_audio(self, content_type, expected):
        file = LocalFile(path=Path("/tmp/song"), filename="song", content_type=content_type)

        assert file.is_audio is expected

    def test_default_size(self):
        file = LocalFile(path=Path("/tmp/a.png"), filename="a.png", content_type="image/png")

        assert file.size == 0
