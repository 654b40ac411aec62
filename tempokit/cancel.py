"""One-shot cancellation signal.

A ``CancelSignal`` starts out live and can be cancelled exactly once,
carrying an arbitrary reason. Interested parties register listeners that run
when that happens; this is how ``tempokit.sleep`` wakes up early.

Example:
    >>> import asyncio
    >>> from tempokit import SECOND, CancelSignal, sleep
    >>>
    >>> signal = CancelSignal()
    >>> task = asyncio.create_task(sleep(10 * SECOND, signal=signal))
    >>> signal.cancel("shutting down")
    >>> await task  # raises CancellationError("shutting down")
"""

import logging
from collections.abc import Callable
from typing import Any

from tempokit.errors import CancellationError

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class CancelSignal:
    """Cancellation state shared between a controller and its workers."""

    def __init__(self) -> None:
        self._cancelled: bool = False
        self._reason: Any = None
        self._listeners: list[Listener] = []

    def __repr__(self) -> str:
        if self._cancelled:
            return f"CancelSignal(cancelled, reason={self._reason!r})"
        return f"CancelSignal(live, listeners={len(self._listeners)})"

    @property
    def cancelled(self) -> bool:
        """True once ``cancel()`` has been called."""
        return self._cancelled

    @property
    def reason(self) -> Any:
        """The value passed to ``cancel()``, or None while still live."""
        return self._reason

    @property
    def listener_count(self) -> int:
        """Number of listeners still waiting for cancellation."""
        return len(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        """Register a callback that runs once, with the reason, on cancel.

        Listeners added after cancellation are never called; check
        ``cancelled`` first.
        """
        if self._cancelled:
            return
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a callback. Unknown callbacks are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def cancel(self, reason: Any = None) -> None:
        """Cancel the signal and notify listeners in registration order.

        Only the first call has any effect; the first reason is kept.
        """
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        listeners, self._listeners = self._listeners, []
        logger.debug(
            "Signal cancelled (reason=%r), notifying %d listeners",
            reason,
            len(listeners),
        )
        for listener in listeners:
            try:
                listener(reason)
            except Exception:
                logger.exception("Cancellation listener %r failed", listener)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancellationError`` carrying the reason if cancelled."""
        if self._cancelled:
            raise CancellationError(self._reason)
