"""
Shared loader for the captcha widget library.

Every widget on a page needs the same third-party library. The first call
to ``ready()`` starts the load; every caller, concurrent or later, awaits
the same task and gets the same library object back. A failed load is not
cached, so the next ``ready()`` starts over.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from shared.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

TURNSTILE_SCRIPT_URL = "https://challenges.cloudflare.com/turnstile/v0/api.js"


class ScriptLoader(Generic[T]):
    def __init__(self, load: Callable[[], Awaitable[T]], name: str = "turnstile") -> None:
        self._load = load
        self._name = name
        self._task: Optional[asyncio.Task] = None

    @property
    def loaded(self) -> bool:
        task = self._task
        return task is not None and task.done() and not task.cancelled() and task.exception() is None

    async def ready(self) -> T:
        task = self._task
        if task is None:
            log.debug("widget_script_load_started", script=self._name)
            task = self._task = asyncio.ensure_future(self._load())
        try:
            # A cancelled waiter must not cancel the load the others share
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if self._task is task:
                self._task = None
            log.warning(
                "widget_script_load_failed",
                script=self._name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise


_default_loader: Optional[ScriptLoader] = None


def get_script_loader(load: Optional[Callable[[], Awaitable[T]]] = None) -> ScriptLoader:
    """Return the process-wide loader, creating it from ``load`` on first use."""
    global _default_loader
    if _default_loader is None:
        if load is None:
            raise RuntimeError("No widget script loader configured")
        _default_loader = ScriptLoader(load)
    return _default_loader


def reset_script_loader() -> None:
    global _default_loader
    _default_loader = None
