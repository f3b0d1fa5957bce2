"""
Request DTO for the private-mode finder message.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FinderMessageRequest(BaseModel):
    """Request body for POST /functions/submit-finder-message.

    Strings are trimmed and blanks become None; the service enforces which
    combinations are required so that it can answer with the function's own
    error messages.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    item_id: Optional[int] = None
    name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    message: Optional[str] = Field(default=None, max_length=2000)
    qrcode_id: Optional[int] = None
    owner_id: Optional[int] = None
    location_address: Optional[str] = None

    @field_validator("name", "email", "phone", "message", "location_address")
    @classmethod
    def _strip_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
