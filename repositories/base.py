"""
Shared plumbing for the async MongoDB repositories.

Ids are integers allocated from the `counters` collection, one sequence
per collection, so they can be exposed unchanged in the HTTP contract.
"""

from __future__ import annotations

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

COUNTERS_COLLECTION = "counters"


async def next_id(db: AsyncDatabase, sequence: str) -> int:
    """Atomically allocate the next integer id for ``sequence``."""
    doc = await db[COUNTERS_COLLECTION].find_one_and_update(
        {"_id": sequence},
        {"$inc": {"value": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(doc["value"])


class BaseRepository:
    collection_name: str

    def __init__(self, db: AsyncDatabase) -> None:
        self._db = db
        self._col = db[self.collection_name]

    async def _allocate_id(self) -> int:
        return await next_id(self._db, self.collection_name)
