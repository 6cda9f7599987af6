"""test_needs.py — Survival stats, intoxication bands, companion, clock.

Run:  python test_needs.py
"""
from __future__ import annotations
import random

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import GameOverCause, TimeOfDay
from logic.effects import adjust, with_companion, with_flags, with_world
from logic.needs import (
    advance_clock, apply_needs, check_game_over, tick_companion,
)
from logic.tick import world_tick
from testkit import FixedRandom, check, main, playing, stats_in_bounds

QUIET = FixedRandom(0.99)       # every chance() roll fails


def test_base_decay():
    s = apply_needs(playing(), QUIET)
    check(s.stats.elapsed_seconds == 1, "elapsed advances by one")
    check(abs(s.stats.hunger - 68.5) < 1e-9, "hunger decays 1.5", str(s.stats.hunger))
    check(abs(s.stats.hope - 59.7) < 1e-9, "hope decays 0.3", str(s.stats.hope))
    check(abs(s.stats.warmth - 69.4) < 1e-9, "daytime warmth decays 0.6", str(s.stats.warmth))

    wet = with_world(playing(), time_of_day=TimeOfDay.NIGHT, is_raining=True)
    wet = apply_needs(wet, QUIET)
    check(abs(wet.stats.warmth - 67.7) < 1e-9, "night rain decays 2.3", str(wet.stats.warmth))

    scarred = apply_needs(playing(permanent_hope_loss=1.0), QUIET)
    check(abs(scarred.stats.hope - 59.4) < 1e-9, "hope-loss doubles hope decay",
          str(scarred.stats.hope))


def test_clamps():
    s = adjust(playing(), hunger=-500, warmth=500, hope=-1, money=-99, lsd=-3)
    check(s.stats.hunger == 0.0 and s.stats.warmth == 100.0, "percentages clamp to 0..100")
    check(s.stats.money == 0 and s.stats.lsd_charges == 0, "money and tabs floor at 0")

    loss = adjust(playing(permanent_hope_loss=0.4), hope_loss=-1.0)
    check(loss.stats.permanent_hope_loss == 0.4, "hope-loss never shrinks")

    s = playing(hunger=0.5)
    for _ in range(5):
        s = apply_needs(s, QUIET)
    check(stats_in_bounds(s), "repeated decay stays in bounds")


def test_stimulant_bands():
    high = apply_needs(playing(stimulant=31.0, hope=50.0), QUIET)
    check(abs(high.stats.stimulant - 30.5) < 1e-9, "stimulant decays 0.5")
    check(abs(high.stats.hope - 50.5) < 1e-9, "above 30 the high lifts hope",
          str(high.stats.hope))
    check(abs(high.stats.hunger - 68.0) < 1e-9, "the high burns extra hunger")

    crash = apply_needs(playing(stimulant=30.2, hope=60.0), QUIET)
    check(abs(crash.stats.hope - 49.7) < 1e-9, "crossing 30 crashes hope by 10",
          str(crash.stats.hope))
    check("crash" in crash.narrative.text, "crash is narrated", crash.narrative.text)
    after = apply_needs(crash, QUIET)
    check(abs(after.stats.hope - 49.4) < 1e-9, "crash applies once", str(after.stats.hope))

    sick = apply_needs(playing(stimulant=10.5, hope=60.0), FixedRandom(0.0))
    check(abs(sick.stats.hope - 55.7) < 1e-9, "withdrawal hallucination costs hope",
          str(sick.stats.hope))

    paranoid = apply_needs(playing(stimulant=60.0), FixedRandom(0.0))
    check(paranoid.stats.permanent_hope_loss > 0, "paranoia adds permanent hope-loss")
    check(paranoid.entities.police.active, "paranoia can bring the police")


def test_trip():
    s = with_flags(playing(), trip_ticks=1)
    s = apply_needs(s, QUIET)
    check(not s.flags.trip_active, "trip ends when the countdown expires")
    check("colours" in s.narrative.text, "comedown is narrated", s.narrative.text)

    tripping = apply_needs(with_flags(playing(), trip_ticks=20), QUIET)
    check(abs(tripping.stats.warmth - (70.0 - 0.15 + 0.2)) < 1e-9,
          "warmth decay is quartered while tripping", str(tripping.stats.warmth))


def test_companion():
    s = tick_companion(playing(hope=50.0))
    check(abs(s.stats.hope - 50.2) < 1e-9, "a healthy dog lifts hope")

    s = with_companion(playing(hunger=10.0, hope=50.0), dog_health=0.5)
    s = tick_companion(s)
    check(not s.companion.has_dog, "dog dies at zero health")
    check(abs(s.stats.hope - 30.0) < 1e-9, "loss costs 20 hope", str(s.stats.hope))
    check(s.stats.permanent_hope_loss == 0.5, "loss adds 0.5 hope-loss")
    again = tick_companion(s)
    check(again is s, "the loss penalty applies once")

    s = with_companion(playing(hunger=10.0), low_hunger_ticks=20)
    s = tick_companion(s)
    check(s.companion.dog_sick, "a long hungry stretch makes the dog sick")

    fed = tick_companion(with_companion(playing(hunger=80.0), dog_health=60.0,
                                        low_hunger_ticks=5))
    check(fed.companion.dog_health == 60.5 and fed.companion.low_hunger_ticks == 0,
          "fed dog recovers")


def test_clock():
    s = advance_clock(playing(elapsed_seconds=30), QUIET)
    check(s.world.time_of_day is TimeOfDay.DUSK, "day → dusk after 30 ticks")
    check(s.world.shelter_open and not s.world.services_open,
          "dusk: shelter open, services shut")

    s = advance_clock(with_world(playing(elapsed_seconds=60),
                                 time_of_day=TimeOfDay.DUSK), FixedRandom(0.0))
    check(s.world.time_of_day is TimeOfDay.NIGHT, "dusk → night")
    check(s.world.is_raining, "weather roll on a 20-tick boundary")

    s = advance_clock(with_world(playing(elapsed_seconds=45), bins_restocked=False), QUIET)
    check(s.world.bins_restocked, "bins restock every 45 ticks")

    s = advance_clock(playing(elapsed_seconds=31), QUIET)
    check(s.world.time_of_day is TimeOfDay.DAY, "no change off the boundary")


def test_game_over():
    cases = [
        ({"hunger": 0.0}, GameOverCause.STARVED),
        ({"warmth": 0.0}, GameOverCause.FROZE),
        ({"hope": 0.0}, GameOverCause.HOPELESS),
        ({"stimulant": 100.0}, GameOverCause.OVERDOSE),
        ({"hunger": 0.0, "warmth": 0.0}, GameOverCause.STARVED),
    ]
    for stats, cause in cases:
        s = check_game_over(playing(**stats))
        check(s.flags.is_game_over and s.flags.game_over_cause is cause,
              f"{stats} → {cause.value}")

    over = check_game_over(playing(hunger=0.0))
    check(check_game_over(over) is over, "a finished game is left alone")
    check(world_tick(over, random.Random(1)) is over, "ticks never touch a finished game")
    check(not over.is_running, "a finished game is not running")
    check(check_game_over(playing()) == playing(), "a healthy player is fine")


if __name__ == "__main__":
    main("Needs Tests", [
        ("Base Decay", test_base_decay),
        ("Clamps", test_clamps),
        ("Stimulant Bands", test_stimulant_bands),
        ("Trip", test_trip),
        ("Companion", test_companion),
        ("Clock", test_clock),
        ("Game Over", test_game_over),
    ])
