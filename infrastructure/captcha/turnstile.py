"""Cloudflare Turnstile implementation of CaptchaProvider.

The siteverify endpoint takes a form-encoded ``{secret, response, remoteip}``
body and answers ``{"success": bool, "error-codes": [...], ...}``.
Any transport or API error counts as a failed verification.
"""

from config import TURNSTILE_VERIFY_URL
from infrastructure.http_client import HttpClient
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)


class TurnstileProvider:
    def __init__(
        self,
        secret: str,
        http_client: HttpClient,
        verify_url: str = TURNSTILE_VERIFY_URL,
    ) -> None:
        self._secret = secret
        self._http = http_client
        self._verify_url = verify_url

    @property
    def is_configured(self) -> bool:
        return bool(self._secret)

    async def verify(self, token: str, remote_ip: str) -> bool:
        if not self._secret:
            log.warning("turnstile_secret_not_configured")
            return False
        try:
            response = await self._http.post(
                self._verify_url,
                data={
                    "secret": self._secret,
                    "response": token,
                    "remoteip": remote_ip,
                },
            )
            if response.status_code == 200:
                data = response.json()
                success = data.get("success", False)
                if not success:
                    log.warning(
                        "turnstile_verification_failed",
                        ip_hash=hash_ip(remote_ip),
                        error_codes=data.get("error-codes", []),
                    )
                return bool(success)
            log.error(
                "turnstile_api_error",
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            return False
        except Exception as e:
            log.error(
                "turnstile_request_failed", error=str(e), error_type=type(e).__name__
            )
            return False
