"""Index definitions, applied once at startup."""

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from shared.logging import get_logger

log = get_logger(__name__)

REVEAL_ATTEMPT_TTL_SECONDS = 7 * 24 * 3600


async def ensure_indexes(db: AsyncDatabase) -> None:
    try:
        await db["qrcodes"].create_index([("loqatr_id", ASCENDING)], unique=True)
        await db["qrcodes"].create_index([("assigned_to", ASCENDING)])

        # Per-IP reveal quota lookups
        await db["reveal_attempts"].create_index(
            [("ip_address", ASCENDING), ("attempted_at", DESCENDING)]
        )
        # Attempts only matter inside the quota window
        await db["reveal_attempts"].create_index(
            [("attempted_at", ASCENDING)], expireAfterSeconds=REVEAL_ATTEMPT_TTL_SECONDS
        )
        await db["scans"].create_index([("ip_address", ASCENDING)])
        await db["scans"].create_index([("qr_code_id", ASCENDING)])

        await db["item_details"].create_index([("item_id", ASCENDING)])
        await db["notifications"].create_index(
            [("qrcode_id", ASCENDING), ("type", ASCENDING), ("created_at", DESCENDING)]
        )
        await db["notifications"].create_index(
            [("user_id", ASCENDING), ("created_at", DESCENDING)]
        )
        log.info("mongo_indexes_ensured")
    except Exception as e:
        log.error("mongo_index_creation_failed", error=str(e), error_type=type(e).__name__)
