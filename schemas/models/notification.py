"""
Notification document model.

Maps to the `notifications` collection, read by the owner's inbox.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from schemas.models.base import DocBaseModel, utcnow


class NotificationType(str, Enum):
    TAG_ASSIGNED = "tag_assigned"
    TAG_UNASSIGNED = "tag_unassigned"
    TAG_SCANNED = "tag_scanned"
    MESSAGE_RECEIVED = "message_received"


class NotificationDoc(DocBaseModel):
    user_id: int
    type: NotificationType
    title: str
    message: Optional[str] = None
    qrcode_id: Optional[int] = None
    finder_message_id: Optional[int] = None
    location: Optional[str] = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=utcnow)
