"""
Contact options shown to a finder once the owner's contact is revealed.

Pure functions: a link is produced only when the contact field behind it
is present, never as a disabled placeholder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import quote

from schemas.dto.responses.reveal import RevealedContact

_NON_DIGITS = re.compile(r"\D")
# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


class ContactLinkKind(str, Enum):
    CALL = "call"
    WHATSAPP = "whatsapp"
    EMAIL = "email"


@dataclass(frozen=True)
class ContactLink:
    kind: ContactLinkKind
    label: str
    description: str
    url: str


def _encode(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def phone_link(contact: RevealedContact) -> Optional[str]:
    if not contact.owner_phone:
        return None
    return f"tel:{contact.owner_phone}"


def whatsapp_link(
    contact: RevealedContact, item_name: str, location_address: Optional[str] = None
) -> Optional[str]:
    if not contact.owner_phone:
        return None
    clean_phone = _NON_DIGITS.sub("", contact.owner_phone)
    if not clean_phone:
        return None
    location_text = f"\n\n📍 Location: {location_address}" if location_address else ""
    message = (
        f"Hi {contact.first_name} 👋🏼\n\n"
        f"I found your {item_name} using your *LOQATR* tag! 👀\n\n"
        f"How can I help? 🥳{location_text}\n\n"
        "_Get yours! www.loqatr.com_"
    )
    return f"https://wa.me/{clean_phone}?text={_encode(message)}"


def email_link(
    contact: RevealedContact, item_name: str, location_address: Optional[str] = None
) -> Optional[str]:
    if not contact.owner_email:
        return None
    location_text = f"\n\nFound at: {location_address}" if location_address else ""
    subject = _encode(f"Found: {item_name}")
    body = _encode(
        f"Hi {contact.first_name},\n\n"
        f"I found your {item_name} tagged with Loqatr.{location_text}\n\n"
        "Please let me know how I can return it to you."
    )
    return f"mailto:{contact.owner_email}?subject={subject}&body={body}"


def build_contact_links(
    contact: RevealedContact,
    item_name: str,
    location_address: Optional[str] = None,
) -> list[ContactLink]:
    """Call, WhatsApp and email options, in display order, for present fields only."""
    name = contact.first_name
    links: list[ContactLink] = []

    url = phone_link(contact)
    if url:
        links.append(
            ContactLink(ContactLinkKind.CALL, "Call", f"Speak directly with {name}", url)
        )

    url = whatsapp_link(contact, item_name, location_address)
    if url:
        links.append(
            ContactLink(ContactLinkKind.WHATSAPP, "WhatsApp", "Send a quick message", url)
        )

    url = email_link(contact, item_name, location_address)
    if url:
        links.append(
            ContactLink(ContactLinkKind.EMAIL, "Email", "Send a detailed message", url)
        )

    return links
