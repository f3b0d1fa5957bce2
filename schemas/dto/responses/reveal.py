"""
Response DTOs for the contact-reveal function.

RevealedContact is the one schema shared by the server and the client SDK:
the server builds its response from it and the client validates the payload
against it before showing anything to the finder.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RevealedContact(BaseModel):
    """Owner contact fields disclosed after a successful reveal. Never persisted."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    owner_name: str
    owner_email: Optional[str] = None
    owner_phone: Optional[str] = None
    whatsapp_url: Optional[str] = None

    @property
    def first_name(self) -> str:
        return self.owner_name.split(" ")[0] if self.owner_name else ""


class RevealContactResponse(BaseModel):
    """Response body for a successful POST /functions/reveal-contact."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    contact: RevealedContact
