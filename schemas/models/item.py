"""
Item document models.

`items` holds what a tag is attached to; `item_details` holds free-form
labelled facts about it ("Colour", "Item owner name", ...).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from schemas.models.base import DocBaseModel

OWNER_NAME_DETAIL = "Item owner name"


class ItemDoc(DocBaseModel):
    """Document model for the `items` collection."""

    name: str
    description: Optional[str] = None
    icon_name: Optional[str] = None


class ItemDetailDoc(BaseModel):
    """Document model for the `item_details` collection."""

    item_id: int
    type: str = "Info"
    value: str
