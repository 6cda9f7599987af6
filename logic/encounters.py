"""logic/encounters.py — Kerbside car encounters.

A passing car may pull over next to the player.  At most one
encounter car exists at a time; the odds scale with the district's
sex-trade bias and decay by 0.7 for every previous encounter this run.

``approach`` rolls a phase-dependent outcome table:

    phase   fatal  injurious  neutral  reward   (rest: nothing)
    early   .02    .08        .25      .45
    mid     .05    .15        .25      .35
    late    .12    .25        .20      .25

Early is the first three minutes with fewer than two encounters; late
is ten minutes or five encounters.  ``ignore`` only narrates.  Both,
and the 15-tick timeout, clear every encounter car and count as one
encounter.
"""

from __future__ import annotations
import random
from dataclasses import replace

from components import GameOverCause, ModifierKey, WorldState
from core.determinism import chance
from core.tuning import get as _tun
from logic.effects import (
    adjust, end_game, narrate, pay, with_entities, with_flags,
)
from logic.modifiers import effective_modifier

EARLY, MID, LATE = "early", "mid", "late"

OUTCOMES = ("fatal", "injurious", "neutral", "reward")

_DEFAULT_TABLES = {
    EARLY: (0.02, 0.08, 0.25, 0.45),
    MID: (0.05, 0.15, 0.25, 0.35),
    LATE: (0.12, 0.25, 0.20, 0.25),
}


def encounter_phase(elapsed: int, count: int) -> str:
    if elapsed < _tun("encounters", "early_until", 180) and count < 2:
        return EARLY
    if elapsed >= _tun("encounters", "late_from", 600) or count >= 5:
        return LATE
    return MID


def outcome_table(phase: str) -> tuple[float, ...]:
    defaults = _DEFAULT_TABLES[phase]
    return tuple(_tun(f"encounters.{phase}", name, d)
                 for name, d in zip(OUTCOMES, defaults))


def roll_outcome(phase: str, rng: random.Random) -> str:
    r = rng.random()
    acc = 0.0
    for name, p in zip(OUTCOMES, outcome_table(phase)):
        acc += p
        if r < acc:
            return name
    return "nothing"


# ── Transition into an encounter ─────────────────────────────────────

def encounter_chance(state: WorldState) -> float:
    sex = effective_modifier(state.world.district, ModifierKey.SEX_TRADE,
                             state.world.time_of_day)
    return (_tun("encounters", "base_chance", 0.05) * sex
            * 0.7 ** state.flags.car_encounter_count)


def maybe_start_encounter(state: WorldState, rng: random.Random) -> WorldState:
    f = state.flags
    if f.car_encounter_active or f.recent_car_ticks > 0:
        return state
    reach = _tun("encounters", "reach", 8.0)
    for i, car in enumerate(state.entities.vehicles):
        if car.stopped or abs(car.x - state.player.x) > reach:
            continue
        if not chance(rng, encounter_chance(state)):
            return state
        cars = list(state.entities.vehicles)
        cars[i] = replace(car, stopped=True, is_encounter=True)
        state = with_entities(state, vehicles=tuple(cars))
        state = with_flags(state, car_encounter_active=True,
                           encounter_ticks=_tun("encounters", "timeout_ticks", 15))
        return narrate(state, "A car slows beside you. The window winds down.")
    return state


def tick_encounter(state: WorldState, rng: random.Random) -> WorldState:
    """Expire a stale encounter, otherwise maybe start a new one."""
    f = state.flags
    if f.car_encounter_active:
        if not any(c.is_encounter for c in state.entities.vehicles):
            return _clear(state)
        left = f.encounter_ticks - 1
        if left <= 0:
            return narrate(_clear(state), "The car pulls away.")
        return with_flags(state, encounter_ticks=left)
    return maybe_start_encounter(state, rng)


# ── Resolution ───────────────────────────────────────────────────────

def _clear(state: WorldState) -> WorldState:
    cars = tuple(c for c in state.entities.vehicles if not c.is_encounter)
    state = with_entities(state, vehicles=cars)
    return with_flags(state, car_encounter_active=False, encounter_ticks=0,
                      car_encounter_count=state.flags.car_encounter_count + 1,
                      recent_car_ticks=_tun("cooldowns", "recent_car", 20))


def approach(state: WorldState, rng: random.Random) -> WorldState:
    if not state.is_running or not state.flags.car_encounter_active:
        return state
    phase = encounter_phase(state.stats.elapsed_seconds,
                            state.flags.car_encounter_count)
    outcome = roll_outcome(phase, rng)
    state = _clear(state)

    if outcome == "fatal":
        return end_game(state, GameOverCause.DISAPPEARED)
    if outcome == "injurious":
        state = adjust(state, hope=-15, warmth=-5)
        return narrate(state, "He grabbed your arm. You wrenched free and ran.")
    if outcome == "neutral":
        state = adjust(state, hope=-3)
        return narrate(state, "Wrong person. The car drove off.")
    if outcome == "reward":
        lo = _tun("encounters", "reward_min", 20)
        hi = _tun("encounters", "reward_max", 60)
        state = pay(state, rng.randint(lo, hi), "car")
        state = adjust(state, hope=-5)
        return narrate(state, "You came back with cash. You don't talk about it.")
    return narrate(state, "He changed his mind and drove off.")


def ignore(state: WorldState) -> WorldState:
    if not state.is_running or not state.flags.car_encounter_active:
        return state
    return narrate(_clear(state), "You look away. The car pulls off.")
