"""logic/actions/interact.py — The E key.

Inside a shop zone the interior opens; anywhere else E does the same
thing as the zone's slot-A action.  Out of zone it does nothing.
"""

from __future__ import annotations
import random

from components import WorldState
from logic.zones import SHOP_ZONES, enter_shop, zone_action


def interact(state: WorldState, rng: random.Random) -> WorldState:
    zone = state.world.zone
    if zone is None or not state.is_running or state.flags.shop_open:
        return state
    if zone in SHOP_ZONES:
        return enter_shop(state)
    return zone_action(state, zone, rng)
