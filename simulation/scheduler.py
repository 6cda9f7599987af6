"""simulation/scheduler.py — Keyed millisecond timer queue.

The session's deferred work (hiding a feedback line, repeating a held
move) is posted here instead of living on the snapshot.  Timers are
ordered by due time; one key owns at most one live timer, so posting
under a key replaces whatever was pending there.

    timers = TimerQueue()
    timers.post_delay(now, 3000, "hide:narrative", hide, {"seq": 7})
    ...
    timers.pump(now_ms())
"""

from __future__ import annotations
import heapq
from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(order=True)
class Timer:
    """A single pending callback.  Ordered by ``due_ms`` then post order."""
    due_ms: int
    # heapq tiebreaker (insertion order)
    _seq: int = field(compare=True, repr=False)
    key: str = field(compare=False, default="")
    callback: Callable[[dict[str, Any]], None] | None = field(compare=False, default=None)
    data: dict[str, Any] = field(compare=False, default_factory=dict)
    cancelled: bool = field(compare=False, default=False)


class TimerQueue:
    """Priority queue of keyed timers, driven by an external clock."""

    def __init__(self) -> None:
        self._queue: list[Timer] = []
        self._seq: int = 0
        self._by_key: dict[str, Timer] = {}

    # ── Posting ──────────────────────────────────────────────────────

    def post(self, due_ms: int, key: str,
             callback: Callable[[dict[str, Any]], None],
             data: dict[str, Any] | None = None) -> Timer:
        """Schedule *callback* at ``due_ms``, replacing any timer under *key*."""
        self.cancel(key)
        self._seq += 1
        timer = Timer(due_ms=due_ms, _seq=self._seq, key=key,
                      callback=callback, data=data or {})
        heapq.heappush(self._queue, timer)
        self._by_key[key] = timer
        return timer

    def post_delay(self, now: int, delay_ms: int, key: str,
                   callback: Callable[[dict[str, Any]], None],
                   data: dict[str, Any] | None = None) -> Timer:
        return self.post(now + delay_ms, key, callback, data)

    # ── Cancellation ─────────────────────────────────────────────────

    def cancel(self, key: str) -> bool:
        """Cancel the live timer under *key*.  Returns True if one existed."""
        timer = self._by_key.pop(key, None)
        if timer is None or timer.cancelled:
            return False
        timer.cancelled = True
        return True

    def clear(self) -> None:
        for timer in self._queue:
            timer.cancelled = True
        self._queue.clear()
        self._by_key.clear()

    # ── Pump ─────────────────────────────────────────────────────────

    def peek_time(self) -> float:
        """Due time of the next live timer, or inf if empty."""
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)
        if self._queue:
            return self._queue[0].due_ms
        return float("inf")

    def pump(self, now: int) -> int:
        """Fire every live timer due at or before *now*.  Returns the count.

        A callback may post new timers; ones due by *now* fire in the
        same pump.
        """
        count = 0
        while self._queue:
            if self._queue[0].cancelled:
                heapq.heappop(self._queue)
                continue
            if self._queue[0].due_ms > now:
                break
            timer = heapq.heappop(self._queue)
            if self._by_key.get(timer.key) is timer:
                del self._by_key[timer.key]
            if timer.callback is not None:
                timer.callback(timer.data)
            count += 1
        return count

    # ── Queries ──────────────────────────────────────────────────────

    def pending_count(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def has_pending(self, key: str) -> bool:
        timer = self._by_key.get(key)
        return timer is not None and not timer.cancelled

    def debug_dump(self) -> list[str]:
        return [f"{t.due_ms}ms {t.key}" for t in sorted(self._queue)
                if not t.cancelled]
