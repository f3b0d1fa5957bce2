"""
Private-mode path: finders leave a relayed message instead of seeing the
owner's contact details.
"""

from __future__ import annotations

from errors import ValidationError
from repositories.message_repository import FinderMessageRepository
from repositories.tag_repository import ItemRepository
from schemas.dto.requests.finder_message import FinderMessageRequest
from schemas.dto.responses.tag import FinderMessageResponse
from schemas.models.finder_message import FinderMessageDoc
from services.notification_service import NotificationService
from shared.logging import get_logger

log = get_logger(__name__)

UNKNOWN_ITEM_NAME = "Unknown Item"


class FinderMessageService:
    def __init__(
        self,
        messages: FinderMessageRepository,
        items: ItemRepository,
        notifications: NotificationService,
    ) -> None:
        self._messages = messages
        self._items = items
        self._notifications = notifications

    async def submit(self, request: FinderMessageRequest) -> FinderMessageResponse:
        if not request.item_id or not request.name:
            raise ValidationError("Name and item_id are required")
        if not request.email and not request.phone:
            raise ValidationError("Email or phone is required")

        saved = await self._messages.create(
            FinderMessageDoc(
                item_id=request.item_id,
                name=request.name,
                email=request.email,
                phone=request.phone,
                message=request.message,
            )
        )
        log.info("finder_message_saved", finder_message_id=saved.id, item_id=saved.item_id)

        if request.owner_id and request.qrcode_id:
            item_name = await self._item_name(request.item_id)
            await self._notifications.notify_message_received(
                request.owner_id,
                item_name,
                request.name,
                request.qrcode_id,
                saved.id,
                request.location_address,
            )

        return FinderMessageResponse(finder_message_id=saved.id)

    async def _item_name(self, item_id: int) -> str:
        try:
            item = await self._items.get(item_id)
        except Exception as e:
            log.warning("finder_message_item_lookup_failed", item_id=item_id, error=str(e))
            return UNKNOWN_ITEM_NAME
        return item.name if item is not None else UNKNOWN_ITEM_NAME
