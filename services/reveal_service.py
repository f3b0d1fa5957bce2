"""
Contact-reveal service: the server half of the reveal gate.

Steps are strictly sequential:

1. verify the captcha token with the caller IP,
2. stamp the IP on the scan (best effort; failures are logged only),
3. run the reveal procedure, which enforces the hourly quota.

Stamping before the procedure means the current attempt already counts
toward the caller's quota, including the attempt that exceeds it. Every
outcome is returned or raised as an AppError; nothing else escapes.
"""

from __future__ import annotations

from errors import (
    UNEXPECTED_ERROR_MESSAGE,
    AppError,
    CaptchaVerificationError,
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.reveal.protocol import (
    RevealErrorKind,
    RevealProcedure,
    classify_procedure_error,
)
from repositories.scan_repository import ScanRepository
from schemas.dto.requests.reveal import RevealContactRequest
from schemas.dto.responses.reveal import RevealContactResponse
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields"
CAPTCHA_FAILED_MESSAGE = "Captcha verification failed"
NOT_AVAILABLE_MESSAGE = "Contact information not available"


class RevealService:
    def __init__(
        self,
        captcha: CaptchaProvider,
        scans: ScanRepository,
        procedure: RevealProcedure,
    ) -> None:
        self._captcha = captcha
        self._scans = scans
        self._procedure = procedure

    async def reveal(
        self, request: RevealContactRequest, client_ip: str
    ) -> RevealContactResponse:
        if not request.has_required_fields:
            log.warning(
                "reveal_missing_fields",
                scan_id=request.scan_id,
                qr_identifier=request.qr_identifier,
                has_captcha=bool(request.turnstile_token),
            )
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        try:
            return await self._reveal(request, client_ip)
        except AppError:
            raise
        except Exception as e:
            log.error(
                "reveal_unexpected_error",
                scan_id=request.scan_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise AppError(UNEXPECTED_ERROR_MESSAGE) from e

    async def _reveal(
        self, request: RevealContactRequest, client_ip: str
    ) -> RevealContactResponse:
        scan_id = request.scan_id
        log.info(
            "reveal_requested",
            scan_id=scan_id,
            qr_identifier=request.qr_identifier,
            ip_hash=hash_ip(client_ip),
        )

        if not self._captcha.is_configured:
            log.error("turnstile_secret_not_configured")
            raise ConfigurationError("Server configuration error")

        if not await self._captcha.verify(request.turnstile_token, client_ip):
            raise CaptchaVerificationError(CAPTCHA_FAILED_MESSAGE)

        await self._stamp_ip(request, client_ip)

        try:
            rows = await self._procedure.reveal(request.qr_identifier, scan_id)
        except Exception as e:
            failure = classify_procedure_error(e)
            log.error(
                "reveal_procedure_error",
                scan_id=scan_id,
                kind=failure.kind.value,
                error=failure.message,
            )
            if failure.kind is RevealErrorKind.RATE_LIMITED:
                raise RateLimitError(failure.message) from e
            raise AppError(failure.message or UNEXPECTED_ERROR_MESSAGE) from e

        if not rows:
            log.info(
                "reveal_contact_unavailable",
                scan_id=scan_id,
                qr_identifier=request.qr_identifier,
            )
            raise NotFoundError(NOT_AVAILABLE_MESSAGE)

        log.info("contact_revealed", scan_id=scan_id)
        return RevealContactResponse(contact=rows[0])

    async def _stamp_ip(self, request: RevealContactRequest, client_ip: str) -> None:
        try:
            matched = await self._scans.stamp_ip(
                request.scan_id, client_ip, request.location()
            )
            if not matched:
                log.warning("scan_ip_stamp_no_match", scan_id=request.scan_id)
        except Exception as e:
            log.error(
                "scan_ip_stamp_failed",
                scan_id=request.scan_id,
                error=str(e),
                error_type=type(e).__name__,
            )
