"""
Deferred callbacks for the automated opponent.

The engine arms a callback to apply the opponent's move after a short,
human-perceptible pause. Every armed callback comes back as a handle
that can be cancelled, so a reset can retract a move before it lands.
"""

import heapq
import itertools
import logging
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class ScheduledHandle:
    """A callback waiting to run once."""

    __slots__ = ("callback", "delay_ms", "due_ms", "cancelled", "fired", "token")

    def __init__(self, callback: Callback, delay_ms: int, due_ms: float = 0.0):
        self.callback = callback
        self.delay_ms = delay_ms
        self.due_ms = due_ms
        self.cancelled = False
        self.fired = False
        # Backend-specific id (e.g. the Tk "after" id)
        self.token: Any = None

    @property
    def pending(self) -> bool:
        """True until the callback has fired or been cancelled."""
        return not (self.cancelled or self.fired)

    def _run(self) -> None:
        if not self.pending:
            return
        self.fired = True
        self.callback()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "fired" if self.fired else "pending"
        return f"<ScheduledHandle {state} delay={self.delay_ms}ms>"


class Scheduler:
    """
    Base class for scheduling backends.

    arm() schedules a callback to run once after delay_ms; cancel()
    guarantees it never runs. Cancelling a fired, cancelled or None
    handle does nothing.
    """

    def arm(self, delay_ms: int, callback: Callback) -> ScheduledHandle:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        handle = ScheduledHandle(callback, delay_ms)
        self._schedule(handle)
        logger.debug("Armed %r", handle)
        return handle

    def cancel(self, handle: Optional[ScheduledHandle]) -> None:
        if handle is None or not handle.pending:
            return
        handle.cancelled = True
        self._unschedule(handle)
        logger.debug("Cancelled %r", handle)

    def _schedule(self, handle: ScheduledHandle) -> None:
        raise NotImplementedError

    def _unschedule(self, handle: ScheduledHandle) -> None:
        pass


class ManualScheduler(Scheduler):
    """
    Scheduler driven by a virtual clock.

    Nothing fires until advance() moves the clock past a callback's due
    time. Used by tests and by the terminal driver, which sleeps for real
    and then advances.
    """

    def __init__(self):
        self.now_ms = 0.0
        self._queue: List[Tuple[float, int, ScheduledHandle]] = []
        self._counter = itertools.count()

    def _schedule(self, handle: ScheduledHandle) -> None:
        handle.due_ms = self.now_ms + handle.delay_ms
        heapq.heappush(self._queue, (handle.due_ms, next(self._counter), handle))

    def _unschedule(self, handle: ScheduledHandle) -> None:
        # Entries behind a pending one are skipped later in advance()
        while self._queue and not self._queue[0][2].pending:
            heapq.heappop(self._queue)

    @property
    def queued_count(self) -> int:
        """Entries still held in the queue, cancelled or not."""
        return len(self._queue)

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._queue if handle.pending)

    def next_due_ms(self) -> Optional[float]:
        """Virtual time of the next pending callback, or None."""
        for due, _, handle in sorted(self._queue):
            if handle.pending:
                return due
        return None

    def advance(self, ms: float) -> int:
        """
        Move the clock forward and fire everything that falls due.

        Callbacks fire in due order; ties fire in arming order. A callback
        armed while advancing fires in the same call if it falls due.

        Returns:
            Number of callbacks fired.
        """
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards ({ms}ms)")
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.pending:
                continue
            self.now_ms = due
            handle._run()
            fired += 1
        self.now_ms = target
        return fired

    def run_all(self) -> int:
        """Advance until nothing is pending."""
        fired = 0
        while True:
            due = self.next_due_ms()
            if due is None:
                return fired
            fired += self.advance(max(0.0, due - self.now_ms))


class TkScheduler(Scheduler):
    """
    Scheduler backed by a Tk widget's event loop.

    Args:
        widget: Any object with Tk's after(ms, func) and after_cancel(id).
    """

    def __init__(self, widget):
        self.widget = widget

    def _schedule(self, handle: ScheduledHandle) -> None:
        handle.token = self.widget.after(handle.delay_ms, handle._run)

    def _unschedule(self, handle: ScheduledHandle) -> None:
        if handle.token is not None:
            self.widget.after_cancel(handle.token)
            handle.token = None
