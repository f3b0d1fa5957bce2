"""
Response DTOs for finder-facing tag endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ItemDetailResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    value: str


class ItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: Optional[str] = None
    icon_name: Optional[str] = None


class TagResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    loqatr_id: str
    is_public: bool
    status: str
    claimed: bool


class FinderViewResponse(BaseModel):
    """Response body for GET /tags/{loqatr_id}.

    ``owner_first_name`` is only filled for public tags; ``display_owner_name``
    prefers the "Item owner name" detail, then the owner's first name, then
    "Owner".
    """

    model_config = ConfigDict(populate_by_name=True)

    tag: TagResponse
    item: Optional[ItemResponse] = None
    item_details: list[ItemDetailResponse] = []
    owner_first_name: Optional[str] = None
    display_owner_name: str = "Owner"


class RecordScanResponse(BaseModel):
    """Response body for POST /tags/{loqatr_id}/scans."""

    model_config = ConfigDict(populate_by_name=True)

    scan_id: int


class FinderMessageResponse(BaseModel):
    """Response body for POST /functions/submit-finder-message."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    finder_message_id: int
