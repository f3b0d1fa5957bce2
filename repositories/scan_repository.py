"""Async repository for the `scans` collection and its reveal attempts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pymongo.asynchronous.database import AsyncDatabase

from repositories.base import BaseRepository
from schemas.models.base import utcnow
from schemas.models.scan import RevealAttemptDoc, ScanDoc

REVEAL_ATTEMPTS_COLLECTION = "reveal_attempts"


class ScanRepository(BaseRepository):
    collection_name = "scans"

    def __init__(self, db: AsyncDatabase) -> None:
        super().__init__(db)
        self._attempts = db[REVEAL_ATTEMPTS_COLLECTION]

    async def create(self, scan: ScanDoc) -> ScanDoc:
        scan.id = await self._allocate_id()
        await self._col.insert_one(scan.to_mongo())
        return scan

    async def get(self, scan_id: int) -> Optional[ScanDoc]:
        return ScanDoc.from_mongo(await self._col.find_one({"_id": scan_id}))

    async def stamp_ip(
        self,
        scan_id: int,
        ip_address: str,
        location: Optional[dict[str, Any]] = None,
        stamped_at: Optional[datetime] = None,
    ) -> bool:
        """Attach the caller IP (and any location sent with it) to a scan.

        Every call also records a reveal attempt for the IP, so a scan reused
        for several reveals counts once per reveal. Returns whether a scan
        matched.
        """
        stamped_at = stamped_at or utcnow()
        await self._attempts.insert_one(
            RevealAttemptDoc(
                scan_id=scan_id, ip_address=ip_address, attempted_at=stamped_at
            ).model_dump()
        )
        updates: dict[str, Any] = {"ip_address": ip_address, "ip_stamped_at": stamped_at}
        if location:
            updates.update(location)
        result = await self._col.update_one({"_id": scan_id}, {"$set": updates})
        return result.matched_count > 0

    async def count_from_ip_since(self, ip_address: str, since: datetime) -> int:
        """Reveal attempts from ``ip_address`` at or after ``since``."""
        return await self._attempts.count_documents(
            {"ip_address": ip_address, "attempted_at": {"$gte": since}}
        )

    async def mark_contact_revealed(self, scan_id: int) -> None:
        await self._col.update_one(
            {"_id": scan_id}, {"$set": {"contact_revealed": True}}
        )
