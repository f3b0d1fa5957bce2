"""
Async client for the LOQATR finder API.

Used by finder-side code (the reveal gate, the private message form). Every
error comes back as a ``LoqatrApiError``; reveal failures carry a
``RevealFailureKind`` so callers branch on kind instead of message text.
Success payloads are validated against the shared schemas before they are
handed out.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from infrastructure.http_client import HttpClient
from schemas.dto.requests.finder_message import FinderMessageRequest
from schemas.dto.requests.scan import RecordScanRequest
from schemas.dto.responses.reveal import RevealContactResponse, RevealedContact
from schemas.dto.responses.tag import (
    FinderMessageResponse,
    FinderViewResponse,
    RecordScanResponse,
)
from shared.logging import get_logger

log = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
RATE_LIMIT_TEXT = "Rate limit"


class RevealFailureKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    CAPTCHA_FAILED = "captcha_failed"
    NOT_AVAILABLE = "not_available"
    INVALID_REQUEST = "invalid_request"
    TIMEOUT = "timeout"
    FAILED = "failed"


_KIND_BY_STATUS = {
    400: RevealFailureKind.INVALID_REQUEST,
    403: RevealFailureKind.CAPTCHA_FAILED,
    404: RevealFailureKind.NOT_AVAILABLE,
    429: RevealFailureKind.RATE_LIMITED,
}


class LoqatrApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RevealError(LoqatrApiError):
    def __init__(
        self,
        kind: RevealFailureKind,
        message: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code)
        self.kind = kind


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


class LoqatrClient:
    def __init__(
        self,
        base_url: str,
        http_client: Optional[HttpClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http = http_client or HttpClient(timeout=timeout, base_url=base_url)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "LoqatrClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def reveal_contact(
        self,
        *,
        scan_id: int,
        qr_identifier: str,
        turnstile_token: str,
        tag_id: Optional[int] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        address: Optional[str] = None,
    ) -> RevealedContact:
        body = {
            "tag_id": tag_id,
            "scan_id": scan_id,
            "qr_identifier": qr_identifier,
            "turnstile_token": turnstile_token,
            "latitude": latitude,
            "longitude": longitude,
            "address": address,
        }
        try:
            response = await self._http.post("/functions/reveal-contact", json=body)
        except httpx.TimeoutException as e:
            raise RevealError(RevealFailureKind.TIMEOUT, "The request timed out") from e
        except httpx.HTTPError as e:
            log.warning("reveal_request_failed", error=str(e), error_type=type(e).__name__)
            raise RevealError(RevealFailureKind.FAILED, "Failed to reach the server") from e

        if response.status_code != 200:
            message = _error_message(response)
            kind = _KIND_BY_STATUS.get(response.status_code, RevealFailureKind.FAILED)
            # Gateways in front of the function can rewrite the status
            if RATE_LIMIT_TEXT in message:
                kind = RevealFailureKind.RATE_LIMITED
            raise RevealError(kind, message, response.status_code)

        try:
            return RevealContactResponse.model_validate(response.json()).contact
        except (ValueError, PydanticValidationError) as e:
            log.warning("reveal_payload_malformed", error=str(e))
            raise RevealError(
                RevealFailureKind.FAILED, "Malformed contact payload", response.status_code
            ) from e

    async def get_tag(self, loqatr_id: str) -> FinderViewResponse:
        response = await self._request("GET", f"/tags/{loqatr_id}")
        return FinderViewResponse.model_validate(response.json())

    async def record_scan(
        self,
        loqatr_id: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        address: Optional[str] = None,
    ) -> int:
        payload = RecordScanRequest(latitude=latitude, longitude=longitude, address=address)
        response = await self._request(
            "POST", f"/tags/{loqatr_id}/scans", json=payload.model_dump()
        )
        return RecordScanResponse.model_validate(response.json()).scan_id

    async def submit_finder_message(
        self, message: FinderMessageRequest
    ) -> FinderMessageResponse:
        response = await self._request(
            "POST", "/functions/submit-finder-message", json=message.model_dump()
        )
        return FinderMessageResponse.model_validate(response.json())

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            if method == "GET":
                response = await self._http.get(url, **kwargs)
            else:
                response = await self._http.post(url, **kwargs)
        except httpx.HTTPError as e:
            raise LoqatrApiError(f"Request failed: {type(e).__name__}") from e
        if response.status_code >= 400:
            raise LoqatrApiError(_error_message(response), response.status_code)
        return response
