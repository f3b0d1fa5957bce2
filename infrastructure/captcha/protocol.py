"""CaptchaProvider protocol — services depend on this, not the concrete implementation."""

from typing import Protocol


class CaptchaProvider(Protocol):
    @property
    def is_configured(self) -> bool: ...

    async def verify(self, token: str, remote_ip: str) -> bool: ...
