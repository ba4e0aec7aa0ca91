from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 10_000

PollCallback = Callable[[], Awaitable[None] | None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything exposing ``call_later`` like an asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


def _validate_interval(interval_ms: int) -> int:
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
        raise ValueError(f"interval_ms must be a positive integer, got {interval_ms!r}")
    return interval_ms


class Poller:
    """Invoke ``callback`` on activation and then every ``interval_ms``.

    Only one timer is armed at a time. Disabling or stopping cancels it.
    Async callbacks run as tasks; while one is still running, due ticks are
    skipped unless ``allow_overlap`` is set. Callback errors are logged and
    never end the loop.
    """

    def __init__(
        self,
        callback: PollCallback,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        enabled: bool = True,
        scheduler: Scheduler | None = None,
        allow_overlap: bool = False,
    ) -> None:
        self._callback = callback
        self._interval_ms = _validate_interval(interval_ms)
        self._enabled = enabled
        self._scheduler = scheduler
        self._allow_overlap = allow_overlap
        self._started = False
        self._timer: TimerHandle | None = None
        self._in_flight: set[asyncio.Future[Any]] = set()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def active(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        if self._enabled:
            self._activate()

    def stop(self) -> None:
        self._started = False
        self._cancel_timer()

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        self._enabled = enabled
        if not self._started:
            return
        if enabled:
            self._activate()
        else:
            self._cancel_timer()
            logger.info("Polling disabled")

    def set_interval(self, interval_ms: int) -> None:
        interval_ms = _validate_interval(interval_ms)
        if interval_ms == self._interval_ms:
            return
        self._interval_ms = interval_ms
        if self._started and self._enabled:
            logger.info("Polling interval changed to %sms", interval_ms)
            self._activate()

    def _resolve_scheduler(self) -> Scheduler:
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop()
        return self._scheduler

    def _activate(self) -> None:
        self._cancel_timer()
        self._arm_timer()
        self._invoke()

    def _arm_timer(self) -> None:
        self._timer = self._resolve_scheduler().call_later(self._interval_ms / 1000, self._on_timer)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        if not (self._started and self._enabled):
            return
        self._arm_timer()
        self._invoke()

    def _invoke(self) -> None:
        if not self._allow_overlap and any(not task.done() for task in self._in_flight):
            logger.debug("Previous poll still running; skipping tick")
            return
        try:
            result = self._callback()
        except Exception:
            logger.exception("Polling callback error")
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._in_flight.add(task)
            task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Future[Any]) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Polling callback error", exc_info=exc)


def start_polling(
    callback: PollCallback,
    *,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    enabled: bool = True,
    scheduler: Scheduler | None = None,
    allow_overlap: bool = False,
) -> Poller:
    poller = Poller(
        callback,
        interval_ms=interval_ms,
        enabled=enabled,
        scheduler=scheduler,
        allow_overlap=allow_overlap,
    )
    poller.start()
    return poller


__all__ = ["DEFAULT_INTERVAL_MS", "Poller", "Scheduler", "start_polling"]
