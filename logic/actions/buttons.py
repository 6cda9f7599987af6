"""logic/actions/buttons.py — Execute a context button.

The session passes the *visible* (locked) button, not a fresh resolve,
so the player always gets what the button said.  Every handler
re-checks its own preconditions; a stale button is a no-op.
"""

from __future__ import annotations
import random

from components import (
    ActionKind, ButtonAction, Desperation, PedAction, WorldState, Zone,
)
from logic import crime, desperation, encounters
from logic.dealers import buy_from_dealer, take_lsd
from logic.zones import zone_action

_PEDESTRIAN = {
    PedAction.STEAL: crime.steal,
    PedAction.PITCH: crime.pitch,
    PedAction.TRADE: crime.trade,
    PedAction.CONFRONT: crime.confront,
}


def perform_button(state: WorldState, button: ButtonAction,
                   rng: random.Random) -> WorldState:
    kind = button.kind
    if kind is ActionKind.NONE or not state.is_running:
        return state
    if kind is ActionKind.CAR_ENCOUNTER:
        return encounters.approach(state, rng)
    if kind is ActionKind.DEALER:
        return buy_from_dealer(state, rng)
    if kind is ActionKind.LSD:
        return take_lsd(state)
    if kind is ActionKind.PEDESTRIAN:
        action = PedAction(button.action)
        if state.flags.freeze_ticks > 0 or action not in state.flags.pedestrian_actions:
            return state
        return _PEDESTRIAN[action](state, rng)
    if kind is ActionKind.PURSE:
        return crime.grab_purse(state, rng)
    if kind is ActionKind.DESPERATION:
        return desperation.perform(state, Desperation(button.action), rng)
    if kind is ActionKind.ZONE:
        return zone_action(state, Zone(button.action), rng)
    raise ValueError(f"unknown button kind {kind!r}")
