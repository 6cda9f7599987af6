"""testkit.py — Shared harness and snapshot builders for the root tests.

Each ``test_*.py`` runs standalone (``python test_resolver.py``) with a
PASS/FAIL line per check and a summary, or under pytest, where a
failed ``check`` raises.

Builders return a PLAYING snapshot at the fixed start (Kings Cross,
offset 0, x 50, in front of Harry's Cafe) with overrides applied.
"""
from __future__ import annotations
import random
import sys
import traceback

from components import (
    Archetype, Pedestrian, Screen, WorldState, Zone, initial_state,
)
from logic.availability import refresh_availability
from logic.effects import (
    add_pedestrian, spawn_id, with_flags, with_stats, with_world,
)
from logic.movement import refresh_location


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0


def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)


def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise AssertionError(f"{label}: {detail}" if detail else label)


def run_sections(title: str, sections) -> int:
    """Run ``(name, fn)`` sections, print the summary, return an exit code."""
    global _failed
    for name, fn in sections:
        print(f"\n── {name} ──")
        try:
            fn()
        except AssertionError:
            pass            # already counted by check()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  {title}: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    return 1 if _failed else 0


def main(title: str, sections):
    sys.exit(run_sections(title, sections))


# ── Scripted RNGs ────────────────────────────────────────────────────

class FixedRandom(random.Random):
    """``random()`` always returns *value*; integer draws stay seeded."""

    # Keep randint/choice on getrandbits so they never consume random().
    _randbelow = random.Random._randbelow_with_getrandbits

    def __init__(self, value: float, seed: int = 0):
        super().__init__(seed)
        self.value = value

    def random(self):
        return self.value


class SequenceRandom(random.Random):
    """``random()`` walks *values* in order, then repeats the last one."""

    _randbelow = random.Random._randbelow_with_getrandbits

    def __init__(self, values, seed: int = 0):
        super().__init__(seed)
        self.values = list(values)
        self.calls = 0

    def random(self):
        i = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[i]


class FakeClock:
    """Pinned millisecond clock for ``GameSession(clock=...)``."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


# ── Snapshot builders ────────────────────────────────────────────────

def playing(**stats) -> WorldState:
    """Start-of-run snapshot with *stats* overridden."""
    state = refresh_location(initial_state(Screen.PLAYING))
    if stats:
        state = with_stats(state, **stats)
    return state


def at_zone(state: WorldState, zone: Zone | None,
            venue_name: str = "TEST VENUE") -> WorldState:
    """Pretend the player stands in front of *zone*."""
    return with_world(state, zone=zone, venue_name=venue_name)


def with_pedestrian(state: WorldState, archetype: Archetype,
                    dx: float = 1.0, stealable: bool = True,
                    refresh: bool = True) -> tuple[WorldState, int]:
    """Add a stationary pedestrian *dx* from the player; returns its id."""
    state, pid = spawn_id(state)
    state = add_pedestrian(state, Pedestrian(
        id=pid, x=state.player.x + dx, speed=0.0, direction=1,
        archetype=archetype, stealable=stealable,
        lurk_ticks=40 if archetype is Archetype.DEALER else 0,
    ))
    if refresh:
        state = refresh_availability(state)
    return state, pid


def frozen(state: WorldState, ticks: int = 3) -> WorldState:
    return with_flags(state, freeze_ticks=ticks)


STAT_NAMES = ("hunger", "warmth", "hope", "stimulant")


def stats_in_bounds(state: WorldState) -> bool:
    s = state.stats
    return (all(0.0 <= getattr(s, n) <= 100.0 for n in STAT_NAMES)
            and s.money >= 0 and s.lsd_charges >= 0)
