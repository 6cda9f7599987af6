"""logic/desperation.py — Fallback actions when things get bad.

Offered only while hunger < 25, warmth < 25 or money has run out, in
this fixed order (which is also the order they claim button slots):

    theft          at the bins or services counter
    sell           at services or the pawn, while money < 50
    dog_sacrifice  companion owned, hunger and warmth both < 15
    buy_stimulant  in the alley with at least $10
    purse_steal    while the purse-grab window is open
"""

from __future__ import annotations
import random

from components import Desperation, GameOverCause, WorldState, Zone
from core.determinism import chance
from core.tuning import get as _tun
from logic.crime import grab_purse
from logic.dealers import alley_buy
from logic.effects import (
    adjust, end_game, narrate, pay, with_companion, with_flags,
)


def is_desperate(state: WorldState) -> bool:
    s = state.stats
    line = _tun("desperation", "threshold", 25)
    return s.hunger < line or s.warmth < line or s.money <= 0


def available_actions(state: WorldState) -> tuple[Desperation, ...]:
    if not is_desperate(state):
        return ()
    s, zone = state.stats, state.world.zone
    out: list[Desperation] = []
    if zone in (Zone.BINS, Zone.SERVICES):
        out.append(Desperation.THEFT)
    if zone in (Zone.SERVICES, Zone.PAWN) and s.money < _tun("desperation", "sell_below", 50):
        out.append(Desperation.SELL)
    line = _tun("desperation", "sacrifice_below", 15)
    if state.companion.has_dog and s.hunger < line and s.warmth < line:
        out.append(Desperation.DOG_SACRIFICE)
    if zone is Zone.ALLEY and s.money >= _tun("dealers.alley", "price_min", 10):
        out.append(Desperation.BUY_STIMULANT)
    if state.flags.steal_window_ticks > 0:
        out.append(Desperation.PURSE_STEAL)
    return tuple(out)


# ── Actions ──────────────────────────────────────────────────────────

def theft(state: WorldState, rng: random.Random) -> WorldState:
    if chance(rng, _tun("desperation", "theft_success", 0.3)):
        state = pay(state, rng.randint(5, 14), "nicked")
        state = adjust(state, hope=-10)
        state = with_flags(state, recent_theft_ticks=_tun("cooldowns", "recent_theft", 20))
        return narrate(state, "You got away with it. You don't feel like it.")
    return end_game(state, GameOverCause.ARRESTED)


def sell(state: WorldState) -> WorldState:
    state = pay(state, _tun("desperation", "sell_value", 15), "belongings")
    state = adjust(state, hope=-8)
    return narrate(state, "Your good jacket, a paperback, your mum's ring.")


def dog_sacrifice(state: WorldState) -> WorldState:
    state = adjust(state, hunger=60, warmth=40, hope=-50,
                   hope_loss=_tun("penalties", "sacrifice", 0.3))
    state = with_companion(state, has_dog=False, dog_health=0.0, dog_sick=False)
    state = with_flags(state, freeze_ticks=_tun("desperation", "sacrifice_freeze", 3))
    return narrate(state, "...")


def perform(state: WorldState, action: Desperation,
            rng: random.Random) -> WorldState:
    """Run *action* if it is currently on offer."""
    if (not state.is_running or state.flags.freeze_ticks > 0
            or action not in available_actions(state)):
        return state
    if action is Desperation.THEFT:
        return theft(state, rng)
    if action is Desperation.SELL:
        return sell(state)
    if action is Desperation.DOG_SACRIFICE:
        return dog_sacrifice(state)
    if action is Desperation.BUY_STIMULANT:
        return alley_buy(state, rng)
    return grab_purse(state, rng)
