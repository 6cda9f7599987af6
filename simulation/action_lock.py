"""simulation/action_lock.py — Anti-flicker lock for the context buttons.

The resolver can flip between triples from one tick to the next as
pedestrians walk in and out of reach.  The lock keeps a *visible*
triple: a new triple only replaces it once the previous one has been
on screen for ``duration_ms``.  Presses always run the visible triple.
"""

from __future__ import annotations

from components import ResolvedButtons
from core.constants import RESOLVER_LOCK_MS


class ActionLock:

    def __init__(self, duration_ms: int = RESOLVER_LOCK_MS) -> None:
        self.duration_ms = duration_ms
        self.visible: ResolvedButtons = ResolvedButtons()
        self._locked_at: int | None = None

    def is_locked(self, now: int) -> bool:
        return self._locked_at is not None and now - self._locked_at < self.duration_ms

    def offer(self, resolved: ResolvedButtons, now: int) -> bool:
        """Show *resolved* unless the lock is still holding.  True if swapped."""
        if resolved == self.visible or self.is_locked(now):
            return False
        self.visible = resolved
        self._locked_at = now
        return True

    def reset(self) -> None:
        self.visible = ResolvedButtons()
        self._locked_at = None
