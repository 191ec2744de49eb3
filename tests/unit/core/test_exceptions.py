"""Tests for the exception hierarchy."""

from datetime import UTC, datetime

import pytest

from app.core.exceptions import (
    AuthenticationError,
    InputValidationError,
    MailDeliveryError,
    MediaUploadError,
    PermissionDeniedError,
    QuotaExceededError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    SeagullsError,
)


@pytest.mark.unit
class TestHttpStatus:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (SeagullsError("boom"), 500),
            (InputValidationError("bad"), 400),
            (AuthenticationError("who"), 401),
            (PermissionDeniedError("no"), 403),
            (RecordNotFoundError("News", "1"), 404),
            (RecordAlreadyExistsError("StaticInfo", "channel_id", "1"), 409),
            (QuotaExceededError("slow down", datetime(2026, 10, 23, tzinfo=UTC)), 429),
            (MediaUploadError("host down"), 500),
        ],
    )
    def test_status(self, error, status):
        assert error.http_status == status


@pytest.mark.unit
class TestContext:
    def test_with_context_chains(self):
        error = SeagullsError("boom").with_context(track_id="t1")
        assert error.context == {"track_id": "t1"}
        assert error.to_dict()["error_type"] == "SeagullsError"

    def test_not_found_default_message(self):
        error = RecordNotFoundError("Channel", "abc")
        assert error.message == "Channel not found"
        assert error.context == {"model": "Channel", "record_id": "abc"}

    def test_not_found_custom_message(self):
        error = RecordNotFoundError("StaticInfo", "abc", message="Static info not found")
        assert str(error) == "Static info not found"

    def test_already_exists_status_override(self):
        error = RecordAlreadyExistsError(
            "Principal", "email", "a@b.cd", message="in use", http_status=400
        )
        assert error.http_status == 400
        assert RecordAlreadyExistsError.http_status == 409

    def test_quota_details_carry_reset_date(self):
        reset = datetime(2026, 10, 23, tzinfo=UTC)
        error = QuotaExceededError("limit", reset_date=reset)
        assert error.details == {"resetDate": reset.isoformat()}

    def test_input_validation_records_field(self):
        error = InputValidationError("Image is required", field="image")
        assert error.field == "image"
        assert error.context["field"] == "image"
        assert error.errors == []

    def test_external_services_named(self):
        assert MediaUploadError("x").service == "cloudinary"
        assert MailDeliveryError("x", status_code=421).context["status_code"] == 421
