"""
Reveal gate: the finder-side half of the contact reveal.

    IDLE ──captcha ok──▶ VERIFIED ──request_reveal()──▶ REVEALING
      ▲                    │  ▲                            │
      └──captcha expired───┘  └────── any failure ─────────┤
                                                           ▼
                                                       REVEALED

The captcha token survives failed reveals so a transient error does not
force the finder to solve the challenge again; only expiry clears it. The
reveal call runs under an explicit timeout and can be cancelled.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from client.api_client import RevealError, RevealFailureKind
from schemas.dto.responses.reveal import RevealedContact
from shared.logging import get_logger

log = get_logger(__name__)

DEFAULT_REVEAL_TIMEOUT_SECONDS = 15.0


class GateState(str, Enum):
    IDLE = "idle"
    VERIFIED = "verified"
    REVEALING = "revealing"
    REVEALED = "revealed"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    destructive: bool = False


VERIFICATION_FAILED = Toast(
    "Verification failed", "Please try the captcha again.", destructive=True
)
VERIFICATION_REQUIRED = Toast(
    "Please complete verification",
    "Complete the captcha to reveal contact information.",
    destructive=True,
)
CONTACT_REVEALED = Toast("Contact revealed", "You can now contact the owner.")
RATE_LIMITED = Toast(
    "Rate limit exceeded",
    "You can only view 12 contacts per hour. Please try again later.",
    destructive=True,
)
TIMED_OUT = Toast(
    "Request timed out",
    "The request took too long. Please check your connection and try again.",
    destructive=True,
)
REVEAL_FAILED = Toast(
    "Error",
    "Failed to reveal contact information. Please try again.",
    destructive=True,
)


class RevealApi(Protocol):
    async def reveal_contact(
        self,
        *,
        scan_id: int,
        qr_identifier: str,
        turnstile_token: str,
        tag_id: Optional[int] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        address: Optional[str] = None,
    ) -> RevealedContact: ...


@dataclass(frozen=True)
class FinderLocation:
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None


class RevealGate:
    def __init__(
        self,
        api: RevealApi,
        qr_identifier: str,
        on_contact_revealed: Callable[[RevealedContact], None],
        notify: Callable[[Toast], None],
        scan_id: Optional[int] = None,
        tag_id: Optional[int] = None,
        location: Optional[FinderLocation] = None,
        timeout: float = DEFAULT_REVEAL_TIMEOUT_SECONDS,
    ) -> None:
        self._api = api
        self.qr_identifier = qr_identifier
        self._on_contact_revealed = on_contact_revealed
        self._notify = notify
        self.scan_id = scan_id
        self.tag_id = tag_id
        self.location = location or FinderLocation()
        self._timeout = timeout

        self.token: Optional[str] = None
        self.captcha_error = False
        self.contact: Optional[RevealedContact] = None
        self._inflight: Optional[asyncio.Task] = None
        self._cancel_requested = False

    @property
    def revealing(self) -> bool:
        return self._inflight is not None

    @property
    def state(self) -> GateState:
        if self.contact is not None:
            return GateState.REVEALED
        if self.revealing:
            return GateState.REVEALING
        if self.token:
            return GateState.VERIFIED
        return GateState.IDLE

    @property
    def can_reveal(self) -> bool:
        """Whether the reveal button is enabled."""
        return self.state is GateState.VERIFIED and self.scan_id is not None

    def on_captcha_success(self, token: str) -> None:
        self.token = token
        self.captcha_error = False

    def on_captcha_error(self) -> None:
        self.captcha_error = True
        self._notify(VERIFICATION_FAILED)

    def on_captcha_expire(self) -> None:
        self.token = None

    def cancel(self) -> None:
        """Abandon an in-flight reveal; the gate returns to VERIFIED."""
        if self._inflight is not None and not self._inflight.done():
            self._cancel_requested = True
            self._inflight.cancel()

    async def request_reveal(self) -> Optional[RevealedContact]:
        if self.state in (GateState.REVEALING, GateState.REVEALED):
            return self.contact
        if not self.token or not self.scan_id:
            self._notify(VERIFICATION_REQUIRED)
            return None

        self._cancel_requested = False
        self._inflight = asyncio.ensure_future(
            self._api.reveal_contact(
                tag_id=self.tag_id,
                scan_id=self.scan_id,
                qr_identifier=self.qr_identifier,
                turnstile_token=self.token,
                latitude=self.location.latitude,
                longitude=self.location.longitude,
                address=self.location.address,
            )
        )
        try:
            contact = await asyncio.wait_for(self._inflight, self._timeout)
        except asyncio.TimeoutError:
            log.warning("reveal_timed_out", scan_id=self.scan_id, timeout=self._timeout)
            self._notify(TIMED_OUT)
            return None
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            log.info("reveal_cancelled", scan_id=self.scan_id)
            return None
        except RevealError as e:
            log.warning("reveal_failed", scan_id=self.scan_id, kind=e.kind.value)
            self._notify(self._toast_for(e.kind))
            return None
        except Exception as e:
            log.error(
                "reveal_failed_unexpectedly",
                scan_id=self.scan_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._notify(REVEAL_FAILED)
            return None
        finally:
            self._inflight = None
            self._cancel_requested = False

        self.contact = contact
        self._on_contact_revealed(contact)
        self._notify(CONTACT_REVEALED)
        return contact

    @staticmethod
    def _toast_for(kind: RevealFailureKind) -> Toast:
        if kind is RevealFailureKind.RATE_LIMITED:
            return RATE_LIMITED
        if kind is RevealFailureKind.TIMEOUT:
            return TIMED_OUT
        return REVEAL_FAILED
