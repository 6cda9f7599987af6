"""test_tick.py — World tick pipeline: ordering, invariants, determinism.

Run:  python test_tick.py
"""
from __future__ import annotations
import random
from dataclasses import replace

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import GameOverCause, PoliceOfficer, Screen, Zone
from logic.effects import with_entities, with_flags, with_stats
from logic.tick import enforce_invariants, tick_cooldowns, world_tick
from testkit import FixedRandom, at_zone, check, main, playing, stats_in_bounds


def _run(seed: int, ticks: int):
    rng = random.Random(seed)
    s = playing()
    for _ in range(ticks):
        s = world_tick(s, rng)
        if s.is_over:
            break
    return s


def test_long_run():
    rng = random.Random(1991)
    s = playing()
    for t in range(1, 301):
        before = s.stats.elapsed_seconds
        s = world_tick(s, rng)
        if s.is_over:
            break
        if s.stats.elapsed_seconds != before + 1:
            check(False, "one tick is one second", f"tick {t}")
        if not stats_in_bounds(s):
            check(False, "stats stay in bounds", f"tick {t}: {s.stats}")
        target = s.flags.steal_target
        if target is not None and s.entities.pedestrian(target) is None:
            check(False, "the target always exists", f"tick {t}")
        if s.flags.car_encounter_active and not any(
                c.is_encounter for c in s.entities.vehicles):
            check(False, "an active encounter has its car", f"tick {t}")
    check(stats_in_bounds(s), "stats stay in bounds over a long run")
    check(s.stats.elapsed_seconds > 0, "time passed")


def test_determinism():
    a = _run(77, 200)
    b = _run(77, 200)
    check(a == b, "same seed, same run")
    c = _run(78, 200)
    check(c.entities != a.entities or c.stats != a.stats, "different seed, different run")


def test_not_running():
    paused = with_flags(playing(), is_paused=True)
    check(world_tick(paused, random.Random(1)) is paused, "a paused game doesn't tick")
    title = replace(playing(), screen=Screen.TITLE)
    check(world_tick(title, random.Random(1)) is title, "the title screen doesn't tick")


def test_cooldowns():
    s = with_flags(playing(), recent_theft_ticks=5, recent_violence_ticks=1,
                   recent_car_ticks=0, freeze_ticks=3)
    s = tick_cooldowns(s)
    f = s.flags
    check((f.recent_theft_ticks, f.recent_violence_ticks, f.recent_car_ticks,
           f.freeze_ticks) == (4, 0, 0, 2), "cool-downs count down to zero")

    dangling = with_flags(playing(), steal_target=999, dealer_nearby=True)
    fixed = enforce_invariants(dangling)
    check(fixed.flags.steal_target is None and not fixed.flags.dealer_nearby,
          "a dangling target is dropped")

    broken = with_stats(playing(), lsd_charges=-2, money=-7, hope=140.0)
    clamped = enforce_invariants(broken).stats
    check((clamped.lsd_charges, clamped.money, clamped.hope) == (0, 0, 100.0),
          "one clamp covers charges, money and percentages")

    frozen = with_flags(playing(), freeze_ticks=3)
    for _ in range(3):
        frozen = world_tick(frozen, random.Random(2))
    check(frozen.flags.freeze_ticks == 0, "the freeze lifts after three ticks")


def test_pipeline_stops():
    s = at_zone(playing(), Zone.SLEEP)
    s = with_entities(s, police=PoliceOfficer(x=52.0, active=True, direction=-1))
    s = with_flags(s, recent_car_ticks=5)
    s = world_tick(s, FixedRandom(0.0))
    check(s.flags.game_over_cause is GameOverCause.ARRESTED, "arrested mid-tick")
    check(s.flags.recent_car_ticks == 5, "later systems never see a finished game")


if __name__ == "__main__":
    main("Tick Tests", [
        ("Long Run", test_long_run),
        ("Determinism", test_determinism),
        ("Not Running", test_not_running),
        ("Cool-downs", test_cooldowns),
        ("Pipeline Stops", test_pipeline_stops),
    ])
