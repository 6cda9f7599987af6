"""logic/tick.py — One-second world tick orchestration.

Runs the per-tick systems in a fixed order on an immutable snapshot
and returns the next one::

    needs → clock/weather → companion → entities → car encounter →
    police → wildlife → purse window → narrative events → cool-downs →
    availability → clamp

A system that ends the game stops the pipeline; the remaining systems
never see a finished game.

Usage::

    from logic.tick import world_tick
    state = world_tick(state, rng)
"""

from __future__ import annotations
import random

from components import WorldState
from logic.availability import refresh_availability
from logic.crime import update_steal_window
from logic.effects import adjust, with_flags
from logic.encounters import tick_encounter
from logic.narrative import roll_events
from logic.needs import advance_clock, apply_needs, tick_companion
from logic.police import police_tick
from logic.spawner import advance_entities, update_wildlife

_PIPELINE = (
    ("needs", apply_needs),
    ("clock", advance_clock),
    ("companion", lambda s, _rng: tick_companion(s)),
    ("entities", advance_entities),
    ("encounter", tick_encounter),
    ("police", police_tick),
    ("wildlife", update_wildlife),
    ("purse", update_steal_window),
    ("events", roll_events),
)


def world_tick(state: WorldState, rng: random.Random) -> WorldState:
    if not state.is_running:
        return state
    for _name, system in _PIPELINE:
        state = system(state, rng)
        if state.is_over:
            return state
    state = tick_cooldowns(state)
    state = refresh_availability(state)
    return enforce_invariants(state)


def tick_cooldowns(state: WorldState) -> WorldState:
    f = state.flags
    return with_flags(
        state,
        recent_theft_ticks=max(0, f.recent_theft_ticks - 1),
        recent_violence_ticks=max(0, f.recent_violence_ticks - 1),
        recent_car_ticks=max(0, f.recent_car_ticks - 1),
        freeze_ticks=max(0, f.freeze_ticks - 1),
    )


def enforce_invariants(state: WorldState) -> WorldState:
    """Re-clamp stats and drop references to entities that are gone."""
    state = adjust(state)
    target = state.flags.steal_target
    if target is not None and state.entities.pedestrian(target) is None:
        state = with_flags(state, steal_target=None, dealer_nearby=False,
                           pedestrian_actions=())
    return state
