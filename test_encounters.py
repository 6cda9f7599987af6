"""test_encounters.py — Kerbside car encounters and the beat cop.

Run:  python test_encounters.py
"""
from __future__ import annotations

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import GameOverCause, PoliceOfficer, Vehicle, Zone
from logic.effects import with_entities, with_flags
from logic.encounters import (
    EARLY, LATE, MID, approach, encounter_chance, encounter_phase, ignore,
    maybe_start_encounter, outcome_table, tick_encounter,
)
from logic.police import police_tick, sweep_interval
from testkit import FixedRandom, SequenceRandom, at_zone, check, main, playing


def _stopped_car(state, **flags):
    car = Vehicle(id=99, x=state.player.x, speed=0.0, stopped=True, is_encounter=True)
    state = with_entities(state, vehicles=(car,))
    return with_flags(state, **{"car_encounter_active": True, "encounter_ticks": 15, **flags})


def _cop(state, x: float, direction: int = -1):
    return with_entities(state, police=PoliceOfficer(x=x, active=True, direction=direction))


# ── Car encounters ───────────────────────────────────────────────────

def test_phases():
    check(encounter_phase(0, 0) == EARLY, "fresh run is early")
    check(encounter_phase(179, 1) == EARLY, "still early before three minutes")
    check(encounter_phase(180, 0) == MID, "three minutes in is mid")
    check(encounter_phase(10, 2) == MID, "two encounters end the early phase")
    check(encounter_phase(600, 0) == LATE, "ten minutes in is late")
    check(encounter_phase(100, 5) == LATE, "five encounters is late")
    for phase in (EARLY, MID, LATE):
        check(sum(outcome_table(phase)) <= 1.0, f"{phase} table sums to at most 1")
    check(outcome_table(LATE)[0] > outcome_table(EARLY)[0], "late is deadlier than early")


def test_start():
    s = playing()
    car = Vehicle(id=5, x=s.player.x + 2.0, speed=6.0)
    s = with_entities(s, vehicles=(car,))
    started = maybe_start_encounter(s, FixedRandom(0.0))
    check(started.flags.car_encounter_active, "a car in reach can pull over")
    check(started.entities.vehicles[0].is_encounter, "that car becomes the encounter car")
    check(started.flags.encounter_ticks == 15, "the offer times out in 15 ticks")

    cooling = with_flags(s, recent_car_ticks=5)
    check(maybe_start_encounter(cooling, FixedRandom(0.0)) is cooling,
          "no encounter during the cool-down")

    base = encounter_chance(s)
    later = encounter_chance(with_flags(s, car_encounter_count=2))
    check(abs(later - base * 0.49) < 1e-9, "odds decay by 0.7 per encounter")


def test_resolution():
    fatal = approach(_stopped_car(playing()), FixedRandom(0.0))
    check(fatal.flags.game_over_cause is GameOverCause.DISAPPEARED, "fatal outcome")
    check(not fatal.entities.vehicles, "encounter car is gone")

    paid = approach(_stopped_car(playing(money=5)), FixedRandom(0.5))
    check(25 <= paid.stats.money <= 65, "reward outcome pays 20..60", str(paid.stats.money))
    check(paid.flags.car_encounter_count == 1, "approach counts as an encounter")
    check(paid.flags.recent_car_ticks == 20, "approach starts the car cool-down")
    check(not paid.flags.car_encounter_active, "encounter cleared")

    nothing = approach(_stopped_car(playing()), FixedRandom(0.95))
    check(not nothing.is_over and nothing.stats.money == 5, "past the table: nothing happens")

    idle = playing()
    check(approach(idle, FixedRandom(0.0)) is idle, "no car, nothing to approach")

    waved = ignore(_stopped_car(playing()))
    check(not waved.flags.car_encounter_active and waved.flags.car_encounter_count == 1,
          "ignoring clears and counts")
    check(waved.stats == playing().stats, "ignoring has no stat effect")

    stale = tick_encounter(_stopped_car(playing(), encounter_ticks=1), FixedRandom(0.9))
    check(not stale.flags.car_encounter_active, "the car pulls away at timeout")
    check("pulls away" in stale.narrative.text, "timeout is narrated")


# ── Police ───────────────────────────────────────────────────────────

def test_sweep():
    check(sweep_interval(0.0) == 60, "no cops: one sweep a minute")
    check(sweep_interval(1.0) == 30, "full cops: twice a minute")
    check(sweep_interval(0.7) == 39, "Kings Cross interval")

    due = police_tick(playing(elapsed_seconds=39), FixedRandom(0.0))
    check(due.entities.police.active, "a due sweep activates the officer")
    early = playing(elapsed_seconds=40)
    check(police_tick(early, FixedRandom(0.0)) is early, "off-schedule ticks do nothing")

    s = police_tick(_cop(playing(), 104.0, direction=1), FixedRandom(0.0))
    check(not s.entities.police.active, "the officer goes off duty past the edge")


def test_catch():
    sleeping = at_zone(playing(hope=60.0), Zone.SLEEP)
    moved = police_tick(_cop(sleeping, 52.0), SequenceRandom([0.0, 0.99]))
    check(not moved.is_over, "caught sleeping rough, not arrested")
    check(moved.player.x == 50.0, "pushed back to the centre")
    check(abs(moved.stats.hope - 50.0) < 1e-9, "push-back costs hope", str(moved.stats.hope))
    check(not moved.entities.police.active, "officer leaves after a catch")

    nicked = police_tick(_cop(sleeping, 52.0), FixedRandom(0.0))
    check(nicked.flags.game_over_cause is GameOverCause.ARRESTED, "arrest is game over")

    clean = police_tick(_cop(playing(), 52.0), FixedRandom(0.0))
    check(not clean.is_over and clean.stats.hope == 60.0,
          "an innocent player is left alone")
    check(clean.entities.police.x == 50.0, "the officer keeps walking")

    guilty = with_flags(playing(), recent_theft_ticks=5)
    caught = police_tick(_cop(guilty, 52.0), FixedRandom(0.0))
    check(caught.flags.game_over_cause is GameOverCause.ARRESTED,
          "a recent theft makes the catch count")

    kerb = with_flags(playing(), recent_car_ticks=5)
    check(kerb.flags.recent_illicit, "a recent car counts as illicit")
    booked = police_tick(_cop(kerb, 52.0), FixedRandom(0.0))
    check(booked.flags.game_over_cause is GameOverCause.ARRESTED,
          "seen getting out of a car off the sleep spot")


if __name__ == "__main__":
    main("Encounter Tests", [
        ("Phases", test_phases),
        ("Start", test_start),
        ("Resolution", test_resolution),
        ("Police Sweep", test_sweep),
        ("Police Catch", test_catch),
    ])
