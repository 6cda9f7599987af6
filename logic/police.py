"""logic/police.py — The single beat officer: sweeps and catches.

The officer is dormant until a sweep fires.  The sweep interval is
shortened by the district's cop bias and each due sweep is gated by a
probability roll.  Once active the officer walks the strip at a fixed
speed and goes off duty on leaving either edge or after a catch.

A catch is only rolled when the officer is close and the player is
either sleeping rough (SLEEP zone) or has a recent illicit action on
record.  It ends in arrest (game over) or a push-back to the centre.
"""

from __future__ import annotations
import random

from components import (
    GameOverCause, Locomotion, ModifierKey, PoliceOfficer, WorldState, Zone,
)
from core.constants import PLAYER_CENTRE_X, VISIBLE_MAX, VISIBLE_MIN
from core.determinism import chance
from core.tuning import get as _tun
from logic.effects import (
    adjust, end_game, narrate, with_entities, with_player,
)
from logic.modifiers import base_modifier, effective_modifier
from logic.movement import refresh_location


def sweep_interval(cops_base: float) -> int:
    base = _tun("police", "sweep_interval", 60)
    floor = _tun("police", "min_interval", 20)
    return max(floor, round(base * (1.0 - 0.5 * cops_base)))


def summon_police(state: WorldState, rng: random.Random) -> WorldState:
    """Put the officer on the strip now (alarm, paranoia, security)."""
    if state.entities.police.active:
        return state
    direction = rng.choice((1, -1))
    x = VISIBLE_MIN if direction == 1 else VISIBLE_MAX
    return with_entities(state, police=PoliceOfficer(x=x, active=True,
                                                     direction=direction))


def _off_duty(state: WorldState) -> WorldState:
    cop = state.entities.police
    return with_entities(state, police=PoliceOfficer(x=cop.x, active=False,
                                                     direction=cop.direction))


def police_tick(state: WorldState, rng: random.Random) -> WorldState:
    """Activate on a due sweep, walk the officer, roll a catch."""
    district = state.world.district
    cops_eff = effective_modifier(district, ModifierKey.COPS, state.world.time_of_day)
    cop = state.entities.police

    if not cop.active:
        interval = sweep_interval(base_modifier(district, ModifierKey.COPS))
        elapsed = state.stats.elapsed_seconds
        if elapsed > 0 and elapsed % interval == 0:
            if chance(rng, _tun("police", "activation", 0.6) * (0.5 + cops_eff)):
                state = summon_police(state, rng)
                state = narrate(state, "A patrol car pulls up. A cop starts walking the strip.")
        return state

    x = cop.x + cop.direction * _tun("police", "speed", 2.0)
    if x < VISIBLE_MIN or x > VISIBLE_MAX:
        return _off_duty(state)
    state = with_entities(state, police=PoliceOfficer(x=x, active=True,
                                                      direction=cop.direction))
    return _catch(state, rng, cops_eff)


def _catch(state: WorldState, rng: random.Random, cops_eff: float) -> WorldState:
    cop = state.entities.police
    if abs(cop.x - state.player.x) > _tun("police", "catch_range", 10.0):
        return state
    illicit = state.flags.recent_illicit
    if not (state.world.zone is Zone.SLEEP or illicit):
        return state

    p = _tun("police", "catch_base", 0.25) * (0.5 + cops_eff)
    if state.player.locomotion is Locomotion.DUCKING:
        p *= _tun("police", "duck_factor", 0.5)
    if not chance(rng, p):
        return state

    arrest = _tun("police", "arrest_illicit", 0.4) if illicit else _tun("police", "arrest_clean", 0.1)
    if chance(rng, arrest):
        return end_game(_off_duty(state), GameOverCause.ARRESTED)

    state = _off_duty(state)
    state = with_player(state, x=PLAYER_CENTRE_X)
    state = adjust(state, hope=_tun("police", "pushback_hope", -10))
    state = refresh_location(state)
    return narrate(state, "Police moved you along. Keep walking.")
