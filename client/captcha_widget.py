"""
Adapter around a third-party captcha widget library (Cloudflare Turnstile's
``render`` / ``reset`` / ``remove`` API).

One adapter owns at most one rendered widget in its container. The library
has no way to update callbacks or the site key on a live widget, so
``update()`` removes and renders again. ``remove`` is not idempotent in the
library; errors from it during cleanup are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from client.script_loader import ScriptLoader
from shared.logging import get_logger

log = get_logger(__name__)

SuccessCallback = Callable[[str], None]
SignalCallback = Callable[[], None]


@dataclass(frozen=True)
class WidgetOptions:
    sitekey: str
    callback: SuccessCallback
    error_callback: SignalCallback
    expired_callback: SignalCallback
    theme: str = "auto"


class WidgetLibrary(Protocol):
    def render(self, container: Any, options: WidgetOptions) -> str: ...

    def reset(self, widget_id: str) -> None: ...

    def remove(self, widget_id: str) -> None: ...


def _noop() -> None:
    return None


class CaptchaWidget:
    def __init__(
        self,
        site_key: str,
        container: Any,
        loader: ScriptLoader,
        on_success: SuccessCallback,
        on_error: Optional[SignalCallback] = None,
        on_expire: Optional[SignalCallback] = None,
        theme: str = "auto",
    ) -> None:
        self.site_key = site_key
        self._container = container
        self._loader = loader
        self._on_success = on_success
        self._on_error = on_error or _noop
        self._on_expire = on_expire or _noop
        self._theme = theme
        self._library: Optional[WidgetLibrary] = None
        self._widget_id: Optional[str] = None
        # Bumped by unmount(); a mount started under an older generation is dropped
        self._generation = 0
        self._pending: Optional[int] = None

    @property
    def widget_id(self) -> Optional[str]:
        return self._widget_id

    @property
    def mounted(self) -> bool:
        return self._widget_id is not None

    async def mount(self) -> None:
        """Render the widget once the library is ready; repeated calls are no-ops."""
        if self._widget_id is not None or self._pending == self._generation:
            return
        generation = self._pending = self._generation
        try:
            library = await self._loader.ready()
            # unmount() ran while the library was loading
            if generation != self._generation or self._widget_id is not None:
                return
            self._library = library
            self._widget_id = library.render(
                self._container,
                WidgetOptions(
                    sitekey=self.site_key,
                    callback=self._on_success,
                    error_callback=self._on_error,
                    expired_callback=self._on_expire,
                    theme=self._theme,
                ),
            )
            log.debug("captcha_widget_rendered", widget_id=self._widget_id)
        finally:
            if self._pending == generation:
                self._pending = None

    def unmount(self) -> None:
        self._generation += 1
        widget_id, self._widget_id = self._widget_id, None
        if widget_id is None or self._library is None:
            return
        try:
            self._library.remove(widget_id)
        except Exception as e:
            log.debug("captcha_widget_already_removed", widget_id=widget_id, error=str(e))

    def reset(self) -> None:
        if self._widget_id is not None and self._library is not None:
            self._library.reset(self._widget_id)

    async def update(
        self,
        *,
        site_key: Optional[str] = None,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[SignalCallback] = None,
        on_expire: Optional[SignalCallback] = None,
    ) -> None:
        """Apply new props by removing the widget and rendering a fresh one."""
        if site_key is not None:
            self.site_key = site_key
        if on_success is not None:
            self._on_success = on_success
        if on_error is not None:
            self._on_error = on_error
        if on_expire is not None:
            self._on_expire = on_expire
        # A mount still waiting on the loader counts as mounted
        was_mounted = self.mounted or self._pending is not None
        self.unmount()
        if was_mounted:
            await self.mount()
