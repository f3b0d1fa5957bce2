"""Unit tests for AppError hierarchy."""

import pytest

from errors import (
    AppError,
    AuthenticationError,
    CaptchaVerificationError,
    ConfigurationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
    ValidationError,
)


@pytest.mark.parametrize(
    "cls, status, code",
    [
        (ValidationError, 400, "validation_error"),
        (AuthenticationError, 401, "authentication_error"),
        (ForbiddenError, 403, "forbidden"),
        (CaptchaVerificationError, 403, "captcha_failed"),
        (NotFoundError, 404, "not_found"),
        (ConflictError, 409, "conflict"),
        (RateLimitError, 429, "rate_limit_exceeded"),
        (ConfigurationError, 500, "configuration_error"),
        (ServiceUnavailableError, 503, "service_unavailable"),
    ],
)
def test_status_and_code(cls, status, code):
    e = cls("boom")
    assert e.status_code == status
    assert e.error_code == code
    assert e.message == "boom"
    assert isinstance(e, AppError)


def test_captcha_error_is_forbidden():
    assert isinstance(CaptchaVerificationError("x"), ForbiddenError)


def test_base_error_defaults_to_500():
    assert AppError("x").status_code == 500


class TestAppErrorToDict:
    def test_body_is_error_message_only(self):
        assert NotFoundError("Contact information not available").to_dict() == {
            "error": "Contact information not available"
        }

    def test_optional_keys_present(self):
        d = ValidationError("invalid", field="name", details={"max": 100}).to_dict()
        assert d["field"] == "name"
        assert d["details"] == {"max": 100}

    def test_no_optional_keys_when_absent(self):
        d = RateLimitError("Rate limit exceeded").to_dict()
        assert "field" not in d
        assert "details" not in d
