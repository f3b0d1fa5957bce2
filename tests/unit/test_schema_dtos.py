"""Unit tests for request and response DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from errors import RateLimitError
from schemas.dto.requests.finder_message import FinderMessageRequest
from schemas.dto.requests.reveal import RevealContactRequest
from schemas.dto.requests.scan import RecordScanRequest
from schemas.dto.responses.common import ErrorResponse, HealthResponse
from schemas.dto.responses.reveal import RevealContactResponse, RevealedContact
from schemas.dto.responses.tag import FinderViewResponse, TagResponse


# ── RevealContactRequest ──────────────────────────────────────────────────────


class TestRevealContactRequest:
    def test_complete_request(self):
        req = RevealContactRequest.model_validate(
            {"scan_id": 42, "qr_identifier": "LOQ-A-001", "turnstile_token": "tok"}
        )
        assert req.has_required_fields is True

    def test_empty_body_is_valid_but_incomplete(self):
        req = RevealContactRequest.model_validate({})
        assert req.has_required_fields is False

    def test_unknown_fields_ignored(self):
        req = RevealContactRequest.model_validate({"scan_id": 1, "foo": "bar"})
        assert not hasattr(req, "foo")

    def test_location_only_includes_sent_fields(self):
        req = RevealContactRequest(latitude=0.0, address="Main Rd")
        assert req.location() == {"latitude": 0.0, "address": "Main Rd"}

    def test_location_empty(self):
        assert RevealContactRequest().location() == {}

    def test_rejects_non_numeric_scan_id(self):
        with pytest.raises(ValidationError):
            RevealContactRequest.model_validate({"scan_id": "forty-two"})


# ── RecordScanRequest ─────────────────────────────────────────────────────────


class TestRecordScanRequest:
    def test_all_optional(self):
        req = RecordScanRequest()
        assert req.latitude is None

    @pytest.mark.parametrize(
        "body", [{"latitude": 91}, {"longitude": -181}, {"address": "x" * 501}]
    )
    def test_rejects_out_of_range(self, body):
        with pytest.raises(ValidationError):
            RecordScanRequest.model_validate(body)


# ── FinderMessageRequest ──────────────────────────────────────────────────────


class TestFinderMessageRequest:
    def test_strips_and_blanks_become_none(self):
        req = FinderMessageRequest(item_id=3, name="  Sam ", email="   ", phone="")
        assert req.name == "Sam"
        assert req.email is None
        assert req.phone is None

    def test_message_length_limit(self):
        with pytest.raises(ValidationError):
            FinderMessageRequest(item_id=3, name="Sam", message="x" * 2001)


# ── Responses ─────────────────────────────────────────────────────────────────


class TestRevealResponses:
    def test_contact_is_frozen(self):
        contact = RevealedContact(owner_name="Jane Doe")
        with pytest.raises(ValidationError):
            contact.owner_name = "Mallory"

    def test_first_name(self):
        assert RevealedContact(owner_name="Jane Doe").first_name == "Jane"

    def test_response_shape(self):
        body = RevealContactResponse(
            contact=RevealedContact(owner_name="Jane Doe", owner_email="jane@x.com")
        ).model_dump()
        assert body == {
            "success": True,
            "contact": {
                "owner_name": "Jane Doe",
                "owner_email": "jane@x.com",
                "owner_phone": None,
                "whatsapp_url": None,
            },
        }

    def test_contact_requires_owner_name(self):
        with pytest.raises(ValidationError):
            RevealedContact.model_validate({"owner_email": "jane@x.com"})


class TestCommonResponses:
    def test_error_response_matches_app_error_body(self):
        body = RateLimitError("Rate limit exceeded: 12 contact reveals per hour").to_dict()
        assert ErrorResponse.model_validate(body).model_dump(exclude_none=True) == body

    def test_error_response_optional_fields(self):
        err = ErrorResponse(error="Missing required fields")
        assert err.model_dump(exclude_none=True) == {"error": "Missing required fields"}

    def test_health_response(self):
        h = HealthResponse(status="healthy", checks={"mongodb": "ok"})
        assert h.checks["mongodb"] == "ok"


class TestFinderViewResponse:
    def test_defaults(self):
        view = FinderViewResponse(
            tag=TagResponse(
                id=1, loqatr_id="LOQ-A-001", is_public=True, status="active", claimed=True
            )
        )
        assert view.item is None
        assert view.item_details == []
        assert view.display_owner_name == "Owner"
