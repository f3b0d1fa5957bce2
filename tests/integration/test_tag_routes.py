"""Integration tests for the /tags endpoints."""

from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from dependencies import get_tag_service
from errors import register_error_handlers
from routes.tag_routes import router as tag_router
from schemas.models.item import ItemDetailDoc, ItemDoc
from schemas.models.tag import TagDoc
from schemas.models.user import UserDoc
from services.tag_service import TagService

PUBLIC_TAG = TagDoc(
    id=7, loqatr_id="LOQ-A-001", is_public=True, item_id=3, assigned_to=11, status="active"
)


def _build_app(tag=PUBLIC_TAG):
    tags = MagicMock()
    tags.get_by_loqatr_id = AsyncMock(return_value=tag)
    items = MagicMock()
    items.get = AsyncMock(return_value=ItemDoc(id=3, name="Backpack"))
    items.list_details = AsyncMock(
        return_value=[ItemDetailDoc(item_id=3, type="Item owner name", value="Sam Smith")]
    )
    users = MagicMock()
    users.get = AsyncMock(return_value=UserDoc(id=11, name="Jane Doe", email="jane@x.com"))
    scans = MagicMock()
    scans.create = AsyncMock(side_effect=lambda doc: doc.model_copy(update={"id": 42}))
    notifications = MagicMock()
    notifications.notify_tag_scanned = AsyncMock()

    app = FastAPI()
    register_error_handlers(app)
    app.include_router(tag_router)
    app.dependency_overrides[get_tag_service] = lambda: TagService(
        tags, items, users, scans, notifications
    )
    return app, scans


class TestGetTag:
    def test_finder_view(self):
        app, _ = _build_app()
        with TestClient(app) as client:
            resp = client.get("/tags/LOQ-A-001")
        assert resp.status_code == 200
        body = resp.json()
        assert body["tag"]["claimed"] is True
        assert body["item"]["name"] == "Backpack"
        assert body["owner_first_name"] == "Jane"
        assert body["display_owner_name"] == "Sam"

    def test_unknown_tag(self):
        app, _ = _build_app(tag=None)
        with TestClient(app) as client:
            resp = client.get("/tags/LOQ-NOPE")
        assert resp.status_code == 404
        assert resp.json() == {"error": "QR code not found"}


class TestRecordScan:
    def test_records_scan_with_location(self):
        app, scans = _build_app()
        with TestClient(app) as client:
            resp = client.post(
                "/tags/LOQ-A-001/scans",
                json={"latitude": -33.9, "longitude": 18.4, "address": "Main Rd"},
            )
        assert resp.status_code == 201
        assert resp.json() == {"scan_id": 42}
        saved = scans.create.call_args.args[0]
        assert saved.address == "Main Rd"

    def test_body_is_optional(self):
        app, _ = _build_app()
        with TestClient(app) as client:
            resp = client.post("/tags/LOQ-A-001/scans")
        assert resp.status_code == 201

    def test_out_of_range_latitude_rejected(self):
        app, scans = _build_app()
        with TestClient(app) as client:
            resp = client.post("/tags/LOQ-A-001/scans", json={"latitude": 120})
        assert resp.status_code == 422
        scans.create.assert_not_called()
