"""logic/movement.py — Walking, ducking and location refresh.

Walking moves the player a little along the screen and scrolls the
street belt under them, so holding a direction carries the player
through districts.  After every move the derived location fields
(district, blend, venue, zone) are recomputed from the offset.
"""

from __future__ import annotations

from components import Facing, Locomotion, WorldState
from core.constants import PLAYER_MAX_X, PLAYER_MIN_X
from core.tuning import get as _tun
from logic.effects import clamp, with_player, with_world
from logic.geometry import district_blend, venue_at


def refresh_location(state: WorldState) -> WorldState:
    """Recompute district / blend / venue / zone from offset and x."""
    offset = state.world.scroll_offset
    current, nxt, blend = district_blend(offset)
    hit = venue_at(offset, state.player.x)
    return with_world(state, district=current, next_district=nxt,
                      blend=blend, zone=hit.zone, venue_name=hit.venue.name)


def can_move(state: WorldState) -> bool:
    return (state.is_running
            and state.flags.freeze_ticks == 0
            and not state.flags.shop_open
            and state.player.locomotion is not Locomotion.COLLAPSED)


def move(state: WorldState, facing: Facing) -> WorldState:
    """One movement step in *facing*'s direction."""
    if not can_move(state):
        return state
    step = _tun("movement", "step", 0.5)
    scroll = _tun("movement", "scroll_step", 4.0)
    x = clamp(state.player.x + facing.value * step, PLAYER_MIN_X, PLAYER_MAX_X)
    state = with_player(state, x=x, facing=facing,
                        locomotion=Locomotion.WALKING)
    state = with_world(state, scroll_offset=state.world.scroll_offset
                       + facing.value * scroll)
    return refresh_location(state)


def stop(state: WorldState) -> WorldState:
    """Stop walking.  Idempotent: a second stop changes nothing."""
    if state.player.locomotion is not Locomotion.WALKING:
        return state
    return with_player(state, locomotion=Locomotion.IDLE)


def duck(state: WorldState, down: bool) -> WorldState:
    if not state.is_running or state.player.locomotion is Locomotion.COLLAPSED:
        return state
    if down:
        if state.player.locomotion is Locomotion.DUCKING:
            return state
        return with_player(state, locomotion=Locomotion.DUCKING)
    if state.player.locomotion is not Locomotion.DUCKING:
        return state
    return with_player(state, locomotion=Locomotion.IDLE)
