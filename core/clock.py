"""core/clock.py — Wall-clock source for session timers.

Display timers (narrative text, transaction toast, move repeat) and
the resolver lock are scheduled in milliseconds.  Gameplay code asks
``now_ms()`` instead of calling pygame directly so tests and headless
runs can pin the clock with ``set_now_ms``.
"""

from __future__ import annotations

import pygame

_FIXED_NOW_MS: int | None = None


def set_now_ms(now_ms: int | None) -> None:
    """Pin the clock to *now_ms*; ``None`` returns to pygame ticks."""
    global _FIXED_NOW_MS
    _FIXED_NOW_MS = None if now_ms is None else int(now_ms)


def advance_ms(delta_ms: int) -> int:
    """Move a pinned clock forward and return the new time."""
    global _FIXED_NOW_MS
    _FIXED_NOW_MS = (_FIXED_NOW_MS or 0) + int(delta_ms)
    return _FIXED_NOW_MS


def now_ms() -> int:
    if _FIXED_NOW_MS is not None:
        return _FIXED_NOW_MS
    return int(pygame.time.get_ticks())
