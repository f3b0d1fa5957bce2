"""MongoDB implementation of RevealProcedure.

Returns zero rows when the tag is unknown or not (or no longer) public and
active, so a tag unpublished between scan and reveal reads as
"not available" rather than as an error.

The quota counts every reveal attempt recorded for the caller's IP inside
the window, the current one included; the reveal service stamps the scan
(recording the attempt) before calling here. The window runs from the
attempt time, not the scan time, so an old scan reused later still counts.
Scans without an IP are not counted against anyone.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from infrastructure.reveal.protocol import (
    RATE_LIMIT_MARKER,
    RevealErrorKind,
    RevealProcedureError,
)
from repositories.scan_repository import ScanRepository
from repositories.tag_repository import TagRepository, UserRepository
from schemas.dto.responses.reveal import RevealedContact
from schemas.models.user import UserDoc
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)

_NON_DIGITS = re.compile(r"\D")


def whatsapp_url_for(phone: Optional[str]) -> Optional[str]:
    if not phone:
        return None
    digits = _NON_DIGITS.sub("", phone)
    return f"https://wa.me/{digits}" if digits else None


def contact_from_owner(owner: UserDoc) -> RevealedContact:
    return RevealedContact(
        owner_name=owner.name,
        owner_email=owner.email or None,
        owner_phone=owner.phone or None,
        whatsapp_url=whatsapp_url_for(owner.phone),
    )


class MongoRevealProcedure:
    def __init__(
        self,
        tags: TagRepository,
        scans: ScanRepository,
        users: UserRepository,
        limit_per_window: int = 12,
        window: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._tags = tags
        self._scans = scans
        self._users = users
        self._limit = limit_per_window
        self._window = window
        self._clock = clock

    @property
    def rate_limit_message(self) -> str:
        return f"{RATE_LIMIT_MARKER}: {self._limit} contact reveals per hour"

    async def reveal(self, qr_identifier: str, scan_id: int) -> list[RevealedContact]:
        try:
            return await self._reveal(qr_identifier, scan_id)
        except RevealProcedureError:
            raise
        except Exception as e:
            log.error(
                "reveal_procedure_failed",
                qr_identifier=qr_identifier,
                scan_id=scan_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise RevealProcedureError(
                RevealErrorKind.FAILED, "Failed to reveal contact"
            ) from e

    async def _reveal(self, qr_identifier: str, scan_id: int) -> list[RevealedContact]:
        tag = await self._tags.get_by_loqatr_id(qr_identifier)
        if tag is None or not tag.accepts_reveal:
            return []

        scan = await self._scans.get(scan_id)
        if scan is None or scan.qr_code_id != tag.id:
            return []

        if scan.ip_address:
            since = self._clock() - self._window
            used = await self._scans.count_from_ip_since(scan.ip_address, since)
            if used > self._limit:
                log.warning(
                    "reveal_rate_limited",
                    ip_hash=hash_ip(scan.ip_address),
                    used=used,
                    limit=self._limit,
                )
                raise RevealProcedureError(
                    RevealErrorKind.RATE_LIMITED, self.rate_limit_message
                )

        owner = await self._users.get(tag.assigned_to)
        if owner is None:
            return []

        await self._scans.mark_contact_revealed(scan_id)
        return [contact_from_owner(owner)]
