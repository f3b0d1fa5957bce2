"""Async repositories for finder messages and owner notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from repositories.base import BaseRepository
from schemas.models.finder_message import FinderMessageDoc
from schemas.models.notification import NotificationDoc, NotificationType


class FinderMessageRepository(BaseRepository):
    collection_name = "finder_messages"

    async def create(self, message: FinderMessageDoc) -> FinderMessageDoc:
        message.id = await self._allocate_id()
        await self._col.insert_one(message.to_mongo())
        return message


class NotificationRepository(BaseRepository):
    collection_name = "notifications"

    async def create(self, notification: NotificationDoc) -> NotificationDoc:
        notification.id = await self._allocate_id()
        await self._col.insert_one(notification.to_mongo())
        return notification

    async def latest_for_tag(
        self, qrcode_id: int, type_: NotificationType, since: datetime
    ) -> Optional[NotificationDoc]:
        doc = await self._col.find_one(
            {
                "qrcode_id": qrcode_id,
                "type": type_.value,
                "created_at": {"$gte": since},
            },
            sort=[("created_at", -1)],
        )
        return NotificationDoc.from_mongo(doc)
