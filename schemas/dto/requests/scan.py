"""
Request DTO for recording a tag scan.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RecordScanRequest(BaseModel):
    """Request body for POST /tags/{loqatr_id}/scans. All fields optional."""

    model_config = ConfigDict(populate_by_name=True)

    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address: Optional[str] = Field(default=None, max_length=500)
