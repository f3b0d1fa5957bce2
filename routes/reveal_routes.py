"""
Contact-reveal and finder-message functions.

POST /functions/reveal-contact         — captcha-gated owner contact reveal
POST /functions/submit-finder-message  — relayed message for private tags

The reveal body is parsed by hand so that malformed or incomplete input
answers with the function contract's 400 rather than FastAPI's 422.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from dependencies import get_finder_message_service, get_reveal_service
from schemas.dto.requests.finder_message import FinderMessageRequest
from schemas.dto.requests.reveal import RevealContactRequest
from schemas.dto.responses.common import ErrorResponse
from schemas.dto.responses.reveal import RevealContactResponse
from schemas.dto.responses.tag import FinderMessageResponse
from services.finder_message_service import FinderMessageService
from services.reveal_service import MISSING_FIELDS_MESSAGE, RevealService
from shared.ip_utils import get_client_ip
from shared.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])


async def _json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


_REVEAL_ERRORS = {
    status: {"model": ErrorResponse} for status in (400, 403, 404, 429, 500)
}


@router.post(
    "/reveal-contact",
    response_model=RevealContactResponse,
    responses=_REVEAL_ERRORS,
)
async def reveal_contact(
    request: Request,
    service: RevealService = Depends(get_reveal_service),
) -> RevealContactResponse:
    body = await _json_body(request)
    try:
        payload = RevealContactRequest.model_validate(body)
    except PydanticValidationError as e:
        log.warning("reveal_invalid_body", errors=e.error_count())
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    return await service.reveal(payload, get_client_ip(request))


@router.post(
    "/submit-finder-message",
    response_model=FinderMessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def submit_finder_message(
    request: Request,
    service: FinderMessageService = Depends(get_finder_message_service),
) -> FinderMessageResponse:
    body = await _json_body(request)
    try:
        payload = FinderMessageRequest.model_validate(body)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else None
        raise ValidationError(f"Invalid {field or 'request'}", field=field)

    return await service.submit(payload)
