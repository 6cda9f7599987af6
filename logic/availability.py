"""logic/availability.py — Derived availability sets on the snapshot.

Recomputed after every tick and every player command so the resolver
only ever reads fields, never geometry:

* ``steal_target`` / ``dealer_nearby`` — nearest pedestrian in reach
* ``pedestrian_actions``               — what can be done to them
* ``desperation_available``            — fallback actions on offer
"""

from __future__ import annotations

from components import Archetype, WorldState
from core.tuning import get as _tun
from logic.crime import nearest_pedestrian, pedestrian_actions
from logic.desperation import available_actions
from logic.effects import with_flags


def refresh_availability(state: WorldState) -> WorldState:
    if not state.is_running:
        if state.flags.pedestrian_actions or state.flags.desperation_available:
            return with_flags(state, pedestrian_actions=(), desperation_available=())
        return state
    ped = nearest_pedestrian(state, _tun("crime", "reach", 6.0))
    if ped is None:
        target, dealer, actions = None, False, ()
    else:
        target = ped.id
        dealer = ped.archetype is Archetype.DEALER
        actions = pedestrian_actions(state, ped)
    desperation = available_actions(state)
    f = state.flags
    if (f.steal_target, f.dealer_nearby, f.pedestrian_actions,
            f.desperation_available) == (target, dealer, actions, desperation):
        return state
    return with_flags(state, steal_target=target, dealer_nearby=dealer,
                      pedestrian_actions=actions,
                      desperation_available=desperation)
