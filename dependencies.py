"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Long-lived resources (Mongo client, captcha
provider) live on app.state and are created in the app lifespan;
repositories and services are cheap and built per request on top of them.
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, Request
from pymongo.asynchronous.database import AsyncDatabase

from config import AppSettings
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.reveal.mongo_procedure import MongoRevealProcedure
from infrastructure.reveal.protocol import RevealProcedure
from repositories.message_repository import (
    FinderMessageRepository,
    NotificationRepository,
)
from repositories.scan_repository import ScanRepository
from repositories.tag_repository import ItemRepository, TagRepository, UserRepository
from services.finder_message_service import FinderMessageService
from services.notification_service import NotificationService
from services.reveal_service import RevealService
from services.tag_service import TagService


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_db(request: Request) -> AsyncDatabase:
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


def get_captcha_provider(request: Request) -> CaptchaProvider:
    return request.app.state.captcha


def get_reveal_procedure(
    db: AsyncDatabase = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> RevealProcedure:
    return MongoRevealProcedure(
        TagRepository(db),
        ScanRepository(db),
        UserRepository(db),
        limit_per_window=settings.reveal.reveal_limit_per_hour,
        window=timedelta(seconds=settings.reveal.reveal_window_seconds),
    )


def get_notification_service(
    db: AsyncDatabase = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> NotificationService:
    return NotificationService(
        NotificationRepository(db),
        scan_cooldown=timedelta(
            seconds=settings.reveal.scan_notification_cooldown_seconds
        ),
    )


def get_reveal_service(
    db: AsyncDatabase = Depends(get_db),
    captcha: CaptchaProvider = Depends(get_captcha_provider),
    procedure: RevealProcedure = Depends(get_reveal_procedure),
) -> RevealService:
    return RevealService(captcha, ScanRepository(db), procedure)


def get_tag_service(
    db: AsyncDatabase = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> TagService:
    return TagService(
        TagRepository(db),
        ItemRepository(db),
        UserRepository(db),
        ScanRepository(db),
        notifications,
    )


def get_finder_message_service(
    db: AsyncDatabase = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> FinderMessageService:
    return FinderMessageService(
        FinderMessageRepository(db), ItemRepository(db), notifications
    )
