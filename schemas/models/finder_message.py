"""
Finder message document model.

Maps to the `finder_messages` collection: the relayed message a finder
leaves for the owner of a private tag.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.models.base import DocBaseModel, utcnow


class FinderMessageDoc(DocBaseModel):
    item_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
