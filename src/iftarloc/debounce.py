"""Cancellable scheduled calls and a single-slot debouncer.

Cancellation only ever prevents a call from being *dispatched*. Once the
delay has elapsed and the callback has started, it runs to completion;
the network request it issues is not interrupted.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

AsyncCallback = Callable[[], Awaitable[None]]


class ScheduledCall:
    """An async callback dispatched after *delay* seconds on the running loop."""

    def __init__(self, delay: float, callback: AsyncCallback) -> None:
        self._delay = max(0.0, delay)
        self._callback = callback
        self._dispatched = False
        self._task: asyncio.Task[None] = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        await asyncio.sleep(self._delay)
        self._dispatched = True
        await self._callback()

    @property
    def dispatched(self) -> bool:
        return self._dispatched

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    def cancel(self) -> bool:
        """Cancel the call if it has not been dispatched yet.

        Returns ``True`` when the call will never run.
        """
        if self._dispatched or self._task.done():
            return False
        self._task.cancel()
        return True

    def exception(self) -> BaseException | None:
        """Exception raised by the callback, once it has finished."""
        if not self._task.done() or self._task.cancelled():
            return None
        return self._task.exception()

    def add_done_callback(self, fn: Callable[[ScheduledCall], None]) -> None:
        self._task.add_done_callback(lambda _task: fn(self))

    async def wait(self) -> None:
        """Wait until the call has finished or been cancelled.

        Exceptions raised by the callback propagate; cancellation does not.
        """
        await asyncio.wait({self._task})
        if not self._task.cancelled():
            self._task.result()


class Debouncer:
    """Holds at most one pending call; scheduling a new one cancels the old.

    Calls that were already dispatched keep running and are tracked so that
    :meth:`wait_idle` can settle everything.
    """

    def __init__(self, delay: float) -> None:
        self._delay = delay
        self._pending: ScheduledCall | None = None
        self._active: set[ScheduledCall] = set()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether a call is scheduled but not yet dispatched."""
        return self._pending is not None and not self._pending.dispatched and not self._pending.done

    def schedule(self, callback: AsyncCallback) -> ScheduledCall:
        """Cancel the pending call, then schedule *callback* after the delay."""
        self.cancel()
        call = ScheduledCall(self._delay, callback)
        self._pending = call
        self._active.add(call)
        call.add_done_callback(self._on_done)
        return call

    def cancel(self) -> bool:
        """Cancel the pending call, if any. In-flight calls are left alone."""
        call = self._pending
        self._pending = None
        if call is None:
            return False
        cancelled = call.cancel()
        if cancelled:
            _logger.debug("Debounced call cancelled before dispatch")
        return cancelled

    def _on_done(self, call: ScheduledCall) -> None:
        self._active.discard(call)
        if self._pending is call:
            self._pending = None
        exc = call.exception()
        if exc is not None:
            _logger.debug("Debounced call failed", exc_info=exc)

    async def wait_idle(self) -> None:
        """Wait for every pending and in-flight call to finish."""
        while True:
            tasks = {call._task for call in self._active if not call.done}
            if not tasks:
                return
            await asyncio.wait(tasks)
