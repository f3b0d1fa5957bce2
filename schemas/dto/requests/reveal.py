"""
Request DTO for the contact-reveal function.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RevealContactRequest(BaseModel):
    """Request body for POST /functions/reveal-contact.

    Every field is optional at the schema level so that the route can answer
    a missing field with the contract's 400 ``Missing required fields``
    rather than FastAPI's 422. ``has_required_fields`` applies the check;
    zero and empty strings count as missing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    scan_id: Optional[int] = None
    qr_identifier: Optional[str] = None
    turnstile_token: Optional[str] = None

    # Sent by the finder page; optional
    tag_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None

    @property
    def has_required_fields(self) -> bool:
        return bool(self.scan_id and self.qr_identifier and self.turnstile_token)

    def location(self) -> dict:
        """Finder-supplied location fields that were actually sent."""
        fields = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
        }
        return {k: v for k, v in fields.items() if v is not None}
