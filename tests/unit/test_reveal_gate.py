"""Unit tests for the finder-side reveal gate."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from client.api_client import RevealError, RevealFailureKind
from client.reveal_gate import (
    CONTACT_REVEALED,
    RATE_LIMITED,
    REVEAL_FAILED,
    TIMED_OUT,
    VERIFICATION_FAILED,
    VERIFICATION_REQUIRED,
    FinderLocation,
    GateState,
    RevealGate,
)
from schemas.dto.responses.reveal import RevealedContact

JANE = RevealedContact(owner_name="Jane Doe", owner_email="jane@x.com")


def _gate(api=None, scan_id=42, timeout=1.0, **kwargs):
    api = api or MagicMock()
    if not isinstance(getattr(api, "reveal_contact", None), AsyncMock):
        api.reveal_contact = AsyncMock(return_value=JANE)
    revealed = MagicMock()
    notify = MagicMock()
    gate = RevealGate(
        api,
        "LOQ-A-001",
        on_contact_revealed=revealed,
        notify=notify,
        scan_id=scan_id,
        timeout=timeout,
        **kwargs,
    )
    return gate, api, revealed, notify


class TestCaptchaEvents:
    def test_starts_idle(self):
        gate, *_ = _gate()
        assert gate.state is GateState.IDLE
        assert gate.can_reveal is False

    def test_success_enables_reveal(self):
        gate, *_ = _gate()
        gate.on_captcha_success("tok")
        assert gate.state is GateState.VERIFIED
        assert gate.can_reveal is True

    def test_no_scan_id_keeps_reveal_disabled(self):
        gate, *_ = _gate(scan_id=None)
        gate.on_captcha_success("tok")
        assert gate.can_reveal is False

    def test_expire_clears_token(self):
        gate, *_ = _gate()
        gate.on_captcha_success("tok")
        gate.on_captcha_expire()
        assert gate.token is None
        assert gate.state is GateState.IDLE

    def test_error_notifies(self):
        gate, _, _, notify = _gate()
        gate.on_captcha_error()
        assert gate.captcha_error is True
        notify.assert_called_once_with(VERIFICATION_FAILED)

    def test_success_clears_error(self):
        gate, *_ = _gate()
        gate.on_captcha_error()
        gate.on_captcha_success("tok")
        assert gate.captcha_error is False


class TestRequestReveal:
    async def test_without_token_makes_no_call(self):
        gate, api, _, notify = _gate()
        assert await gate.request_reveal() is None
        api.reveal_contact.assert_not_called()
        notify.assert_called_once_with(VERIFICATION_REQUIRED)

    async def test_success(self):
        location = FinderLocation(latitude=-33.9, longitude=18.4, address="Main Rd")
        gate, api, revealed, notify = _gate(tag_id=7, location=location)
        gate.on_captcha_success("tok")
        contact = await gate.request_reveal()
        assert contact == JANE
        assert gate.state is GateState.REVEALED
        revealed.assert_called_once_with(JANE)
        notify.assert_called_once_with(CONTACT_REVEALED)
        api.reveal_contact.assert_awaited_once_with(
            tag_id=7,
            scan_id=42,
            qr_identifier="LOQ-A-001",
            turnstile_token="tok",
            latitude=-33.9,
            longitude=18.4,
            address="Main Rd",
        )

    async def test_after_reveal_returns_contact_without_new_call(self):
        gate, api, *_ = _gate()
        gate.on_captcha_success("tok")
        await gate.request_reveal()
        assert await gate.request_reveal() == JANE
        assert api.reveal_contact.await_count == 1

    async def test_rate_limited_toast_and_token_kept(self):
        api = MagicMock()
        api.reveal_contact = AsyncMock(
            side_effect=RevealError(RevealFailureKind.RATE_LIMITED, "Rate limit exceeded", 429)
        )
        gate, _, revealed, notify = _gate(api=api)
        gate.on_captcha_success("tok")
        assert await gate.request_reveal() is None
        notify.assert_called_once_with(RATE_LIMITED)
        revealed.assert_not_called()
        assert gate.token == "tok"
        assert gate.state is GateState.VERIFIED

    @pytest.mark.parametrize(
        "kind",
        [
            RevealFailureKind.CAPTCHA_FAILED,
            RevealFailureKind.NOT_AVAILABLE,
            RevealFailureKind.FAILED,
        ],
    )
    async def test_other_failures_show_generic_toast(self, kind):
        api = MagicMock()
        api.reveal_contact = AsyncMock(side_effect=RevealError(kind, "nope"))
        gate, _, _, notify = _gate(api=api)
        gate.on_captcha_success("tok")
        await gate.request_reveal()
        notify.assert_called_once_with(REVEAL_FAILED)

    async def test_transport_timeout_kind_shows_timeout_toast(self):
        api = MagicMock()
        api.reveal_contact = AsyncMock(
            side_effect=RevealError(RevealFailureKind.TIMEOUT, "The request timed out")
        )
        gate, _, _, notify = _gate(api=api)
        gate.on_captcha_success("tok")
        await gate.request_reveal()
        notify.assert_called_once_with(TIMED_OUT)

    async def test_unexpected_error_shows_generic_toast(self):
        api = MagicMock()
        api.reveal_contact = AsyncMock(side_effect=RuntimeError("boom"))
        gate, _, _, notify = _gate(api=api)
        gate.on_captcha_success("tok")
        assert await gate.request_reveal() is None
        notify.assert_called_once_with(REVEAL_FAILED)

    async def test_slow_reveal_times_out(self):
        async def slow(**kwargs):
            await asyncio.sleep(5)
            return JANE

        api = MagicMock()
        api.reveal_contact = AsyncMock(side_effect=slow)
        gate, _, revealed, notify = _gate(api=api, timeout=0.01)
        gate.on_captcha_success("tok")
        assert await gate.request_reveal() is None
        notify.assert_called_once_with(TIMED_OUT)
        revealed.assert_not_called()
        assert gate.state is GateState.VERIFIED

    async def test_cancel_returns_to_verified(self):
        started = asyncio.Event()

        async def slow(**kwargs):
            started.set()
            await asyncio.sleep(5)
            return JANE

        api = MagicMock()
        api.reveal_contact = AsyncMock(side_effect=slow)
        gate, _, revealed, notify = _gate(api=api, timeout=10)
        gate.on_captcha_success("tok")

        task = asyncio.ensure_future(gate.request_reveal())
        await started.wait()
        assert gate.state is GateState.REVEALING
        gate.cancel()
        assert await task is None
        assert gate.state is GateState.VERIFIED
        revealed.assert_not_called()
        notify.assert_not_called()

    async def test_cancel_when_idle_is_noop(self):
        gate, *_ = _gate()
        gate.cancel()
        assert gate.state is GateState.IDLE
