"""logic/narrative.py — Low-probability street events rolled every tick.

Three independent rolls, all additive with everything else the tick
does:

* ambient   — 2%: a coffee from a stranger, a night attack (fatal),
              or a cold sickness when warmth is already low
* dealer    — 1% x drug bias: free sample, scam, credit trap, pushy
* tab offer — 0.5% x drug bias: someone hands you a hallucinogen tab

The credit trap adds to the hidden hope-loss accumulator.  There is no
repayment path: the penalty lasts the rest of the run.
"""

from __future__ import annotations
import random

from components import GameOverCause, ModifierKey, TimeOfDay, WorldState
from core.determinism import chance
from core.tuning import get as _tun
from logic.effects import adjust, end_game, narrate, pay
from logic.modifiers import effective_modifier


def ambient_event(state: WorldState, rng: random.Random) -> WorldState:
    if not chance(rng, _tun("narrative", "ambient_chance", 0.02)):
        return state
    r = rng.random()
    if r < 0.3:
        state = adjust(state, hope=5, hunger=5)
        return narrate(state, "A stranger handed you a coffee. Still warm.")
    if r < 0.4:
        if state.world.time_of_day is TimeOfDay.NIGHT:
            return end_game(state, GameOverCause.VIOLENCE)
        return state
    if r < 0.5 and state.stats.warmth < 30:
        state = adjust(state, hunger=-20)
        return narrate(state, "The cold got into your chest. You can't keep food down.")
    return state


def dealer_approach(state: WorldState, rng: random.Random) -> WorldState:
    drugs = effective_modifier(state.world.district, ModifierKey.DRUGS,
                               state.world.time_of_day)
    if not chance(rng, _tun("narrative", "dealer_chance", 0.01) * drugs):
        return state
    r = rng.random()
    if r < 0.3:
        state = adjust(state, stimulant=15)
        return narrate(state, "'First one's free, mate.'")
    if r < 0.55:
        if state.stats.money <= 0:
            return narrate(state, "He sized you up, saw nothing worth taking.")
        lost = min(state.stats.money, rng.randint(3, 10))
        state = pay(state, -lost, "scammed")
        return narrate(state, "He took your money and never came back.")
    if r < 0.75:
        state = adjust(state, stimulant=20, hope=-5,
                       hope_loss=_tun("penalties", "credit_trap", 0.25))
        return narrate(state, "'Pay me later,' he says. You'll be paying forever.")
    state = adjust(state, hope=-3)
    return narrate(state, "He followed you half a block, pushing.")


def tab_offer(state: WorldState, rng: random.Random) -> WorldState:
    drugs = effective_modifier(state.world.district, ModifierKey.DRUGS,
                               state.world.time_of_day)
    if not chance(rng, _tun("narrative", "lsd_chance", 0.005) * drugs):
        return state
    state = adjust(state, lsd=1)
    return narrate(state, "A raver pressed a tab into your palm. 'Have a good night.'")


def roll_events(state: WorldState, rng: random.Random) -> WorldState:
    for step in (ambient_event, dealer_approach, tab_offer):
        state = step(state, rng)
        if state.is_over:
            break
    return state
