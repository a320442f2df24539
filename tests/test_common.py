"""Tests for shared infrastructure: exceptions, envelopes, settings, DB manager."""

import pytest

from common.database import MongoDB
from common.utils import (
    BadRequestException,
    NotFoundException,
    ValidationException,
    error_response,
    success_response,
)
from annie.config import Settings
from annie import dependencies


class TestExceptions:
    def test_detail_carries_message_and_code(self):
        exc = NotFoundException("Check-in not found", code="CHECKIN_NOT_FOUND")

        assert exc.status_code == 404
        assert exc.detail == {"message": "Check-in not found", "code": "CHECKIN_NOT_FOUND"}
        assert exc.code == "CHECKIN_NOT_FOUND"
        assert exc.details is None

    @pytest.mark.parametrize("exc_class,status", [
        (BadRequestException, 400),
        (NotFoundException, 404),
        (ValidationException, 422),
    ])
    def test_status_codes(self, exc_class, status):
        assert exc_class().status_code == status

    def test_details_included_when_given(self):
        exc = ValidationException("Invalid severity", details={"field": "severity"})

        assert exc.detail["details"] == {"field": "severity"}


class TestResponses:
    def test_success_envelope(self):
        assert success_response({"status": "ok"}) == {"success": True, "data": {"status": "ok"}}
        assert success_response() == {"success": True}

    def test_error_envelope_omits_empty_fields(self):
        assert error_response("Not found") == {"success": False, "error": {"message": "Not found"}}

    def test_error_envelope_with_code_and_details(self):
        body = error_response("Bad", code="BAD_REQUEST", details=[1])

        assert body["error"] == {"message": "Bad", "code": "BAD_REQUEST", "details": [1]}


class TestSettings:
    def test_cors_origins_are_split(self):
        settings = Settings(CORS_ORIGINS="https://a.example, https://b.example")

        assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]

    def test_wildcard_cors(self):
        assert Settings(CORS_ORIGINS="*").get_cors_origins() == ["*"]

    def test_validate_required_rejects_empty_uri(self):
        with pytest.raises(ValueError, match="MONGODB_URI"):
            Settings(MONGODB_URI="").validate_required()


class TestMongoDB:
    def test_db_before_connect_raises(self):
        db = MongoDB()

        assert db.is_connected is False
        with pytest.raises(RuntimeError):
            db.db

    @pytest.mark.asyncio
    async def test_disconnect_without_connect_is_noop(self):
        db = MongoDB()

        await db.disconnect()

        assert db.is_connected is False


class TestDependencies:
    def test_getters_raise_before_init(self, monkeypatch):
        monkeypatch.setattr(dependencies, "_checkin_service", None)
        monkeypatch.setattr(dependencies, "_insight_service", None)

        with pytest.raises(RuntimeError):
            dependencies.get_checkin_service()
        with pytest.raises(RuntimeError):
            dependencies.get_insight_service()

    def test_init_wires_services(self, monkeypatch, mock_db):
        monkeypatch.setattr(dependencies, "_checkin_service", None)
        monkeypatch.setattr(dependencies, "_insight_service", None)

        dependencies.init_all_services(mock_db)

        assert dependencies.get_checkin_service() is not None
        assert dependencies.get_insight_service() is not None
