"""
Tag document model.

Maps to the `qrcodes` MongoDB collection. A tag is a physical QR code; its
public identifier (``loqatr_id``) is what the printed code resolves to.

status values: assigned, unassigned, active, retired. Only ``active`` tags
with an owner are shown to finders.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from schemas.models.base import DocBaseModel, utcnow


class TagStatus(str, Enum):
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    ACTIVE = "active"
    RETIRED = "retired"


class TagDoc(DocBaseModel):
    """Document model for the `qrcodes` collection."""

    loqatr_id: str
    is_public: bool = False
    item_id: Optional[int] = None
    assigned_to: Optional[int] = None
    status: TagStatus = TagStatus.UNASSIGNED
    batch_id: Optional[int] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @property
    def is_claimed(self) -> bool:
        return self.assigned_to is not None and self.status == TagStatus.ACTIVE

    @property
    def accepts_reveal(self) -> bool:
        return self.is_claimed and self.is_public
