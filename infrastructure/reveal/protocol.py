"""RevealProcedure protocol — the reveal service depends on this, not on the database.

The procedure enforces the per-IP hourly quota and returns the owner's
contact fields. Failures carry an explicit kind so callers never have to
match on message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from schemas.dto.responses.reveal import RevealedContact

RATE_LIMIT_MARKER = "Rate limit exceeded"


class RevealErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


class RevealProcedureError(Exception):
    def __init__(self, kind: RevealErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class RevealProcedure(Protocol):
    async def reveal(
        self, qr_identifier: str, scan_id: int
    ) -> list[RevealedContact]: ...


def classify_procedure_error(exc: Exception) -> RevealProcedureError:
    """Map an arbitrary procedure failure onto a RevealProcedureError.

    Procedures backed by an external database can only report failures as
    text; the rate-limit marker at that boundary is the one place the kind
    is recovered from the message.
    """
    if isinstance(exc, RevealProcedureError):
        return exc
    message = str(exc)
    if RATE_LIMIT_MARKER in message:
        return RevealProcedureError(RevealErrorKind.RATE_LIMITED, message)
    return RevealProcedureError(RevealErrorKind.FAILED, message)
