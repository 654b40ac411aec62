"""Cancellable asyncio delay."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar, overload

from tempokit.cancel import CancelSignal
from tempokit.errors import CancellationError
from tempokit.util import SECOND

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SleepAborted(Generic[T]):
    """Returned by ``sleep(..., silent=True)`` when the signal fires first."""

    reason: T


def _aborted(reason: Any, silent: bool) -> SleepAborted[Any]:
    if silent:
        return SleepAborted(reason=reason)
    raise CancellationError(reason)


@overload
async def sleep(
    ms: float, *, signal: CancelSignal | None = None, silent: Literal[True]
) -> SleepAborted[Any] | None: ...


@overload
async def sleep(
    ms: float,
    *,
    signal: CancelSignal | None = None,
    silent: Literal[False] = False,
) -> None: ...


async def sleep(
    ms: float, *, signal: CancelSignal | None = None, silent: bool = False
) -> SleepAborted[Any] | None:
    """Wait ``ms`` milliseconds unless ``signal`` is cancelled first.

    Args:
        ms: Delay in milliseconds. Values <= 0 return without scheduling a timer.
        signal: Optional cancellation signal. If it is already cancelled the
            call completes immediately, even when ``ms`` <= 0.
        silent: Controls how cancellation surfaces. By default it raises
            ``CancellationError``; with ``silent=True`` it returns a
            ``SleepAborted`` holding the reason instead.

    Returns:
        None when the delay elapsed normally (in both modes), or
        ``SleepAborted`` when cancelled in silent mode.

    Raises:
        CancellationError: If cancelled in exception mode. ``reason`` holds
            the signal's reason.

    Example:
        >>> signal = CancelSignal()
        >>> result = await sleep(5 * SECOND, signal=signal, silent=True)
        >>> if result is not None:
        ...     print("stopped early:", result.reason)

    The signal and the timer must belong to the same event loop thread;
    ``CancelSignal.cancel()`` is not safe to call from other threads.
    """
    if signal is not None and signal.cancelled:
        logger.debug("Signal already cancelled, skipping sleep(%s)", ms)
        return _aborted(signal.reason, silent)
    if ms <= 0:
        return None

    loop = asyncio.get_running_loop()
    # Resolves to True when cancelled, False when the timer fired
    waiter: asyncio.Future[bool] = loop.create_future()

    def on_timeout() -> None:
        if signal is not None:
            signal.remove_listener(on_cancel)
        if not waiter.done():
            waiter.set_result(False)

    def on_cancel(reason: Any) -> None:
        timer.cancel()
        if not waiter.done():
            waiter.set_result(True)

    timer = loop.call_later(ms / SECOND, on_timeout)
    if signal is not None:
        signal.add_listener(on_cancel)
    logger.debug("Sleeping for %sms", ms)

    try:
        cancelled = await waiter
    finally:
        # Both calls are no-ops once the winning path has released its side
        timer.cancel()
        if signal is not None:
            signal.remove_listener(on_cancel)

    if cancelled:
        assert signal is not None
        logger.debug("Sleep interrupted (reason=%r)", signal.reason)
        return _aborted(signal.reason, silent)
    return None
