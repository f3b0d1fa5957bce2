"""
Finder-facing tag lookups and scan logging.
"""

from __future__ import annotations

from typing import Optional

from errors import NotFoundError
from repositories.scan_repository import ScanRepository
from repositories.tag_repository import ItemRepository, TagRepository, UserRepository
from schemas.dto.requests.scan import RecordScanRequest
from schemas.dto.responses.tag import (
    FinderViewResponse,
    ItemDetailResponse,
    ItemResponse,
    RecordScanResponse,
    TagResponse,
)
from schemas.models.item import OWNER_NAME_DETAIL
from schemas.models.scan import ScanDoc
from schemas.models.tag import TagDoc
from services.notification_service import NotificationService
from shared.logging import get_logger, should_sample

log = get_logger(__name__)

TAG_NOT_FOUND_MESSAGE = "QR code not found"
DEFAULT_ITEM_NAME = "Item"


def display_owner_name(
    details: list[ItemDetailResponse], owner_first_name: Optional[str]
) -> str:
    """Item owner name detail first, then the owner's first name, then "Owner"."""
    for detail in details:
        if detail.type == OWNER_NAME_DETAIL and detail.value:
            return detail.value.split(" ")[0]
    if owner_first_name:
        return owner_first_name
    return "Owner"


class TagService:
    def __init__(
        self,
        tags: TagRepository,
        items: ItemRepository,
        users: UserRepository,
        scans: ScanRepository,
        notifications: NotificationService,
    ) -> None:
        self._tags = tags
        self._items = items
        self._users = users
        self._scans = scans
        self._notifications = notifications

    async def _require_tag(self, loqatr_id: str) -> TagDoc:
        tag = await self._tags.get_by_loqatr_id(loqatr_id)
        if tag is None:
            raise NotFoundError(TAG_NOT_FOUND_MESSAGE)
        return tag

    async def get_finder_view(self, loqatr_id: str) -> FinderViewResponse:
        tag = await self._require_tag(loqatr_id)
        if should_sample("tag_view"):
            log.info("tag_view", loqatr_id=loqatr_id, is_public=tag.is_public)

        tag_out = TagResponse(
            id=tag.id,
            loqatr_id=tag.loqatr_id,
            is_public=tag.is_public,
            status=tag.status,
            claimed=tag.is_claimed,
        )
        # Unclaimed tags go to the claim flow; nothing about them is shown
        if not tag.is_claimed:
            return FinderViewResponse(tag=tag_out)

        item_out = None
        details: list[ItemDetailResponse] = []
        if tag.item_id is not None:
            item = await self._items.get(tag.item_id)
            if item is not None:
                item_out = ItemResponse(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    icon_name=item.icon_name,
                )
                details = [
                    ItemDetailResponse(type=d.type, value=d.value)
                    for d in await self._items.list_details(tag.item_id)
                ]

        owner_first_name = None
        if tag.is_public:
            owner = await self._users.get(tag.assigned_to)
            if owner is not None:
                owner_first_name = owner.first_name or None

        return FinderViewResponse(
            tag=tag_out,
            item=item_out,
            item_details=details,
            owner_first_name=owner_first_name,
            display_owner_name=display_owner_name(details, owner_first_name),
        )

    async def record_scan(
        self, loqatr_id: str, request: RecordScanRequest
    ) -> RecordScanResponse:
        tag = await self._require_tag(loqatr_id)
        scan = await self._scans.create(
            ScanDoc(
                qr_code_id=tag.id,
                latitude=request.latitude,
                longitude=request.longitude,
                address=request.address,
                is_owner=False,
            )
        )
        log.info("scan_recorded", scan_id=scan.id, qr_code_id=tag.id)

        if tag.is_claimed:
            await self._notifications.notify_tag_scanned(
                tag.assigned_to,
                await self._item_name(tag.item_id),
                tag.id,
                request.address,
            )

        return RecordScanResponse(scan_id=scan.id)

    async def _item_name(self, item_id: Optional[int]) -> str:
        if item_id is None:
            return DEFAULT_ITEM_NAME
        try:
            item = await self._items.get(item_id)
        except Exception as e:
            log.warning("scan_item_lookup_failed", item_id=item_id, error=str(e))
            return DEFAULT_ITEM_NAME
        return item.name if item is not None else DEFAULT_ITEM_NAME
