"""
Owner notifications.

Notifications are a side channel: a failure to write one is logged and
never fails the request that triggered it.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from repositories.message_repository import NotificationRepository
from schemas.models.notification import NotificationDoc, NotificationType
from shared.logging import get_logger

log = get_logger(__name__)


class NotificationService:
    def __init__(
        self,
        notifications: NotificationRepository,
        scan_cooldown: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._notifications = notifications
        self._scan_cooldown = scan_cooldown
        self._clock = clock

    async def create(
        self,
        user_id: int,
        type_: NotificationType,
        title: str,
        message: Optional[str] = None,
        qrcode_id: Optional[int] = None,
        finder_message_id: Optional[int] = None,
        location: Optional[str] = None,
    ) -> Optional[NotificationDoc]:
        try:
            return await self._notifications.create(
                NotificationDoc(
                    user_id=user_id,
                    type=type_,
                    title=title,
                    message=message,
                    qrcode_id=qrcode_id,
                    finder_message_id=finder_message_id,
                    location=location,
                    created_at=self._clock(),
                )
            )
        except Exception as e:
            log.error(
                "notification_create_failed",
                user_id=user_id,
                type=type_.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    async def notify_tag_scanned(
        self,
        owner_id: int,
        item_name: str,
        qrcode_id: int,
        location_address: Optional[str] = None,
    ) -> Optional[NotificationDoc]:
        """Tell the owner their tag was scanned, at most once per cooldown per tag."""
        since = self._clock() - self._scan_cooldown
        try:
            recent = await self._notifications.latest_for_tag(
                qrcode_id, NotificationType.TAG_SCANNED, since
            )
        except Exception as e:
            log.error("notification_lookup_failed", qrcode_id=qrcode_id, error=str(e))
            return None
        if recent is not None:
            log.debug("tag_scanned_notification_skipped", qrcode_id=qrcode_id)
            return None

        location_text = f"\n📍 Location: {location_address}" if location_address else ""
        return await self.create(
            owner_id,
            NotificationType.TAG_SCANNED,
            title=f"Your tag was scanned: {item_name}",
            message=f'Someone scanned the tag on your "{item_name}".{location_text}',
            qrcode_id=qrcode_id,
            location=location_address,
        )

    async def notify_message_received(
        self,
        owner_id: int,
        item_name: str,
        finder_name: str,
        qrcode_id: int,
        finder_message_id: int,
        location_address: Optional[str] = None,
    ) -> Optional[NotificationDoc]:
        location_text = f"\n📍 Location: {location_address}" if location_address else ""
        return await self.create(
            owner_id,
            NotificationType.MESSAGE_RECEIVED,
            title=f"New message about: {item_name}",
            message=(
                f'{finder_name} found your "{item_name}" and sent you a message.'
                f"{location_text}"
            ),
            qrcode_id=qrcode_id,
            finder_message_id=finder_message_id,
            location=location_address,
        )
