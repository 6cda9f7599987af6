"""logic/dealers.py — Buying and selling on the street.

* ``buy_from_dealer`` — the lurking dealer sells stimulant (70%) or a
  hallucinogen tab; price is rolled, the dealer leaves after a sale.
* ``sell_drugs``      — sell a tab to the pedestrian in reach; each
  archetype has a willingness rate and a cop is always a trap.
* ``alley_buy``       — no dealer needed, cheaper and riskier, only
  where the district's drug bias supports it.
* ``take_lsd``        — drop a tab in the alley to start a trip.

Too little money means the snapshot comes back unchanged.
"""

from __future__ import annotations
import random

from components import Archetype, GameOverCause, ModifierKey, WorldState, Zone
from core.tuning import get as _tun
from logic.crime import archetype_bias
from logic.effects import (
    adjust, end_game, narrate, pay, retire_pedestrian, with_flags,
)
from logic.modifiers import base_modifier


def _can_act(state: WorldState) -> bool:
    return state.is_running and state.flags.freeze_ticks == 0


# ── Dealer pedestrian ────────────────────────────────────────────────

def buy_from_dealer(state: WorldState, rng: random.Random) -> WorldState:
    dealer = state.steal_target
    if not _can_act(state) or dealer is None or dealer.archetype is not Archetype.DEALER:
        return state

    if rng.random() < _tun("dealers", "stimulant_share", 0.7):
        price = rng.randint(_tun("dealers", "stimulant_min", 20),
                            _tun("dealers", "stimulant_max", 40))
        if state.stats.money < price:
            return state
        state = pay(state, -price, "gear")
        state = adjust(state, stimulant=_tun("dealers", "stimulant_dose", 25), hope=3)
        state = narrate(state, "Folded paper, quick handshake. Your heart is already racing.")
    else:
        price = rng.randint(_tun("dealers", "lsd_min", 10),
                            _tun("dealers", "lsd_max", 25))
        if state.stats.money < price:
            return state
        state = pay(state, -price, "tab")
        state = adjust(state, lsd=1)
        state = narrate(state, "A square of blotter with a cartoon on it.")
    state = with_flags(state, recent_theft_ticks=_tun("cooldowns", "recent_theft", 20))
    return retire_pedestrian(state, dealer.id)


def sell_drugs(state: WorldState, rng: random.Random) -> WorldState:
    """Sell one tab to the pedestrian in reach."""
    buyer = state.steal_target
    if (not _can_act(state) or buyer is None or state.stats.lsd_charges <= 0
            or buyer.archetype is Archetype.DEALER):
        return state
    if buyer.archetype is Archetype.COP:
        state = retire_pedestrian(adjust(state, lsd=-1), buyer.id)
        return end_game(state, GameOverCause.ARRESTED)

    if rng.random() < archetype_bias(buyer.archetype).drug_willing:
        state = adjust(state, lsd=-1)
        state = pay(state, rng.randint(_tun("dealers", "sell_min", 15),
                                       _tun("dealers", "sell_max", 30)), "sold")
        state = narrate(state, "Cash for a tab. Now you're a dealer too.")
    else:
        state = adjust(state, hope=-3)
        state = narrate(state, "They backed away from you.")
    state = with_flags(state, recent_theft_ticks=_tun("cooldowns", "recent_theft", 20))
    return retire_pedestrian(state, buyer.id)


# ── Alley ────────────────────────────────────────────────────────────

def alley_buy(state: WorldState, rng: random.Random) -> WorldState:
    """Scam 15% / bad batch 10% / mugged 5% / clean otherwise."""
    if not _can_act(state) or state.world.zone is not Zone.ALLEY:
        return state
    lo = _tun("dealers.alley", "price_min", 10)
    if state.stats.money < lo:
        return state
    if base_modifier(state.world.district, ModifierKey.DRUGS) < _tun("dealers.alley", "min_drugs", 0.3):
        return narrate(state, "Nobody's selling back here.")

    price = min(state.stats.money, rng.randint(lo, _tun("dealers.alley", "price_max", 20)))
    r = rng.random()
    scam = _tun("dealers.alley", "scam", 0.15)
    bad = scam + _tun("dealers.alley", "bad_batch", 0.10)
    mugged = bad + _tun("dealers.alley", "mugged", 0.05)
    if r < scam:
        state = pay(state, -price, "scammed")
        state = narrate(state, "Crushed aspirin. You got done.")
    elif r < bad:
        state = pay(state, -price, "gear")
        state = adjust(state, stimulant=15, hope=-10, hunger=-5)
        state = narrate(state, "Something's wrong with this batch. Your jaw won't stop.")
    elif r < mugged:
        state = pay(state, -state.stats.money, "mugged")
        state = adjust(state, hope=-10, warmth=-5)
        state = narrate(state, "Two of them. They took everything.")
    else:
        state = pay(state, -price, "gear")
        state = adjust(state, stimulant=_tun("dealers.alley", "dose", 20), hope=2)
        state = narrate(state, "Quick swap in the dark. Done.")
    return with_flags(state, recent_theft_ticks=_tun("cooldowns", "recent_theft", 20))


def take_lsd(state: WorldState) -> WorldState:
    if (not _can_act(state) or state.stats.lsd_charges <= 0
            or state.flags.trip_active or state.world.zone is not Zone.ALLEY):
        return state
    state = adjust(state, lsd=-1, hope=5)
    state = with_flags(state, trip_ticks=_tun("needs.trip", "duration", 45))
    return narrate(state, "You put the tab on your tongue and wait.")
