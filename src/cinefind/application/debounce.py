"""Debounce a fast-changing input value into a stable one.

Every ``push()`` restarts the quiet period; only the most recent value is
emitted, once, after ``delay`` seconds without a newer push.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")

EmitCallback = Callable[[T], Any]

_UNSET: Any = object()


class Debouncer(Generic[T]):
    """Emit the latest pushed value after a quiet period.

    Single event-loop use only; no locking.

    Args:
        on_emit: Callback (sync or async) receiving the stable value.
        delay: Quiet period in seconds (default: 0.5).
    """

    def __init__(self, on_emit: EmitCallback[T], *, delay: float = 0.5) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._on_emit = on_emit
        self._delay = delay
        self._task: asyncio.Task[None] | None = None
        self._pending: Any = _UNSET

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a value is waiting for its quiet period to elapse."""
        return self._pending is not _UNSET

    def push(self, value: T) -> None:
        """Record *value* and restart the quiet period.

        Any previously scheduled emission is cancelled.
        """
        self._cancel_timer()
        self._pending = value
        self._task = asyncio.get_running_loop().create_task(self._wait_and_emit())

    def cancel(self) -> None:
        """Drop the pending value without emitting it."""
        self._cancel_timer()
        self._pending = _UNSET

    async def flush(self) -> None:
        """Emit the pending value immediately (no-op if nothing pending)."""
        self._cancel_timer()
        await self._emit()

    async def aclose(self) -> None:
        task = self._task
        self.cancel()
        if task is not None and not task.done():
            try:
                await task
            except asyncio.CancelledError:
                pass

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _cancel_timer(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    async def _wait_and_emit(self) -> None:
        await asyncio.sleep(self._delay)
        # Past this point the emission is committed; a push() during the
        # callback schedules a fresh timer instead of cancelling this one.
        self._task = None
        await self._emit()

    async def _emit(self) -> None:
        if self._pending is _UNSET:
            return
        value: T = self._pending
        self._pending = _UNSET
        log.debug("debounce_emit", value=value)
        result = self._on_emit(value)
        if inspect.isawaitable(result):
            await result
