"""
Scan document models.

`scans` holds one row per finder view of a tag. The caller IP is stamped
later by the reveal flow. Each stamp also adds a row to `reveal_attempts`,
which is what the per-IP hourly reveal quota counts against.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.models.base import DocBaseModel, utcnow


class ScanDoc(DocBaseModel):
    """Document model for the `scans` collection."""

    qr_code_id: int
    scanned_at: datetime = Field(default_factory=utcnow)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    contact_revealed: bool = False
    is_owner: bool = False
    ip_address: Optional[str] = None
    ip_stamped_at: Optional[datetime] = None


class RevealAttemptDoc(BaseModel):
    """Document model for the `reveal_attempts` collection."""

    scan_id: int
    ip_address: str
    attempted_at: datetime = Field(default_factory=utcnow)
