"""Async repositories for tags, their items and owners."""

from __future__ import annotations

from typing import Optional

from repositories.base import BaseRepository
from schemas.models.item import ItemDetailDoc, ItemDoc
from schemas.models.tag import TagDoc
from schemas.models.user import UserDoc


class TagRepository(BaseRepository):
    collection_name = "qrcodes"

    async def get_by_loqatr_id(self, loqatr_id: str) -> Optional[TagDoc]:
        return TagDoc.from_mongo(await self._col.find_one({"loqatr_id": loqatr_id}))

    async def get(self, tag_id: int) -> Optional[TagDoc]:
        return TagDoc.from_mongo(await self._col.find_one({"_id": tag_id}))


class ItemRepository(BaseRepository):
    collection_name = "items"

    async def get(self, item_id: int) -> Optional[ItemDoc]:
        return ItemDoc.from_mongo(await self._col.find_one({"_id": item_id}))

    async def list_details(self, item_id: int) -> list[ItemDetailDoc]:
        cursor = self._db["item_details"].find({"item_id": item_id}, {"_id": 0})
        return [ItemDetailDoc.model_validate(doc) async for doc in cursor]


class UserRepository(BaseRepository):
    collection_name = "users"

    async def get(self, user_id: int) -> Optional[UserDoc]:
        return UserDoc.from_mongo(await self._col.find_one({"_id": user_id}))
