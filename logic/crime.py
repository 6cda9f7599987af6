"""logic/crime.py — Pedestrian actions: steal, pitch, trade, confront.

Every archetype carries two bias records:

* **steal**  — money range, shout chance, kindness chance
* **social** — pitch success, trade willingness, retaliation rate
  (plus ``drug_willing`` used by ``logic/dealers.sell_drugs``)

Rolls are scaled by the district's effective modifiers and resolved
into disjoint branches.  Acting on a target always retires that
pedestrian, whatever the outcome.

The shipped records live in ``ARCHETYPE_BIAS``; any field can be
overridden from ``[archetypes.<name>]`` in ``data/tuning.toml``.

Public API
----------
``archetype_bias``       — merged bias record for an archetype
``nearest_pedestrian``   — closest pedestrian within reach
``pedestrian_actions``   — which of steal/pitch/trade/confront apply
``steal`` ``pitch`` ``trade`` ``confront`` — resolve an action
``update_steal_window``  — open/close the legacy purse-grab window
``grab_purse``           — act inside the window
"""

from __future__ import annotations
import random
from dataclasses import dataclass, fields, replace

from components import (
    Archetype, ModifierKey, PedAction, Pedestrian, TimeOfDay, WorldState,
)
from core.determinism import chance
from core.tuning import get as _tun, section as _tun_section
from logic.effects import (
    adjust, narrate, pay, retire_pedestrian, with_flags,
)
from logic.modifiers import effective_modifier
from logic.police import summon_police


# ── Bias records ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ArchetypeBias:
    money_min: int = 1
    money_max: int = 10
    shout: float = 0.3
    kindness: float = 0.1
    pitch_success: float = 0.1
    trade_willing: float = 0.0
    retaliation: float = 0.3
    drug_willing: float = 0.1


_B = ArchetypeBias

ARCHETYPE_BIAS: dict[Archetype, ArchetypeBias] = {
    Archetype.BACKPACKER:    _B(2, 15, 0.25, 0.20, 0.05, 0.10, 0.15, 0.35),
    Archetype.SEXWORKER:     _B(5, 30, 0.50, 0.15, 0.02, 0.00, 0.40, 0.30),
    Archetype.DEALER:        _B(20, 80, 0.10, 0.00, 0.00, 0.00, 0.80, 0.00),
    Archetype.CLUBBER:       _B(5, 25, 0.30, 0.15, 0.05, 0.20, 0.25, 0.55),
    Archetype.COP:           _B(0, 5, 1.00, 0.02, 0.00, 0.00, 0.90, 0.00),
    Archetype.JUNKIE:        _B(0, 4, 0.15, 0.05, 0.00, 0.05, 0.45, 0.70),
    Archetype.TOURIST:       _B(10, 40, 0.45, 0.25, 0.08, 0.10, 0.10, 0.15),
    Archetype.HOON:          _B(2, 20, 0.30, 0.05, 0.01, 0.05, 0.70, 0.40),
    Archetype.SECURITY:      _B(2, 15, 0.90, 0.05, 0.01, 0.00, 0.80, 0.02),
    Archetype.BUSKER:        _B(1, 12, 0.20, 0.35, 0.03, 0.05, 0.10, 0.25),
    Archetype.STUDENT:       _B(1, 10, 0.30, 0.25, 0.10, 0.10, 0.15, 0.40),
    Archetype.QUEER_ELDER:   _B(5, 25, 0.35, 0.40, 0.08, 0.15, 0.15, 0.15),
    Archetype.OFFICE_WORKER: _B(10, 35, 0.50, 0.15, 0.15, 0.08, 0.20, 0.10),
    Archetype.BUSINESSMAN:   _B(20, 60, 0.60, 0.10, 0.25, 0.20, 0.25, 0.08),
    Archetype.PENSIONER:     _B(3, 20, 0.70, 0.35, 0.02, 0.00, 0.05, 0.02),
    Archetype.VC:            _B(30, 90, 0.70, 0.05, 0.45, 0.05, 0.20, 0.10),
    Archetype.FOUNDER:       _B(5, 30, 0.40, 0.30, 0.30, 0.05, 0.15, 0.30),
    Archetype.AUNTIE:        _B(5, 25, 0.80, 0.45, 0.03, 0.00, 0.10, 0.02),
    Archetype.UNCLE:         _B(5, 30, 0.60, 0.30, 0.05, 0.02, 0.25, 0.05),
}


def archetype_bias(archetype: Archetype) -> ArchetypeBias:
    """Shipped record for *archetype* with tuning overrides applied."""
    bias = ARCHETYPE_BIAS[archetype]
    overrides = _tun_section(f"archetypes.{archetype.value}")
    if not overrides:
        return bias
    known = {f.name for f in fields(ArchetypeBias)}
    return replace(bias, **{k: v for k, v in overrides.items() if k in known})


def _eff(state: WorldState, key: ModifierKey) -> float:
    return effective_modifier(state.world.district, key, state.world.time_of_day)


# ── Availability ─────────────────────────────────────────────────────

def nearest_pedestrian(state: WorldState, reach: float) -> Pedestrian | None:
    px = state.player.x
    best: Pedestrian | None = None
    for ped in state.entities.pedestrians:
        d = abs(ped.x - px)
        if d <= reach and (best is None or d < abs(best.x - px)):
            best = ped
    return best


def pedestrian_actions(state: WorldState, ped: Pedestrian) -> tuple[PedAction, ...]:
    """Actions the player may take on *ped* (never on a dealer)."""
    if ped.archetype is Archetype.DEALER:
        return ()
    bias = archetype_bias(ped.archetype)
    actions = [PedAction.PITCH]
    if ped.stealable:
        actions.insert(0, PedAction.STEAL)
    min_trade = _tun("crime.trade", "min_sex_trade", 0.1)
    if bias.trade_willing > 0 and _eff(state, ModifierKey.SEX_TRADE) >= min_trade:
        actions.append(PedAction.TRADE)
    actions.append(PedAction.CONFRONT)
    return tuple(actions)


def _target(state: WorldState, action: PedAction) -> Pedestrian | None:
    if not state.is_running or state.flags.freeze_ticks > 0:
        return None
    if action not in state.flags.pedestrian_actions:
        return None
    return state.steal_target


def _mark_theft(state: WorldState) -> WorldState:
    return with_flags(state, recent_theft_ticks=_tun("cooldowns", "recent_theft", 20))


def _mark_violence(state: WorldState) -> WorldState:
    return with_flags(state, recent_violence_ticks=_tun("cooldowns", "recent_violence", 20))


# ── Steal ────────────────────────────────────────────────────────────

def steal(state: WorldState, rng: random.Random) -> WorldState:
    """Kindness twist → shout alarm → panic → clean success."""
    ped = _target(state, PedAction.STEAL)
    if ped is None:
        return state
    bias = archetype_bias(ped.archetype)
    theft = _eff(state, ModifierKey.THEFT)
    kindness = _eff(state, ModifierKey.KINDNESS)

    if chance(rng, bias.kindness * (0.5 + kindness)):
        gift = rng.randint(2, 8)
        state = pay(state, gift, "kindness")
        state = adjust(state, hope=8)
        state = narrate(state, "They caught your hand... then pressed a few dollars into it.")
    elif chance(rng, bias.shout * (1.5 - theft)):
        state = adjust(state, hope=-5)
        state = _mark_theft(state)
        state = summon_police(state, rng)
        state = narrate(state, "They shouted for police!")
    elif chance(rng, _tun("crime.steal", "panic", 0.2)):
        state = adjust(state, hope=-3)
        state = _mark_theft(state)
        state = narrate(state, "You panicked and fumbled it. Nothing.")
    else:
        take = rng.randint(bias.money_min, max(bias.money_min, bias.money_max))
        state = pay(state, take, "lifted")
        state = adjust(state, hope=-4)
        state = _mark_theft(state)
        state = narrate(state, "Clean lift. Your hands are shaking.")
    return retire_pedestrian(state, ped.id)


# ── Pitch ────────────────────────────────────────────────────────────

def pitch(state: WorldState, rng: random.Random) -> WorldState:
    """Success → ignored → rejected → security alerted.  Costs nothing."""
    ped = _target(state, PedAction.PITCH)
    if ped is None:
        return state
    bias = archetype_bias(ped.archetype)
    p = bias.pitch_success * (0.5 + _eff(state, ModifierKey.PITCH))

    if rng.random() < p:
        lo = _tun("crime.pitch", "reward_min", 10)
        hi = _tun("crime.pitch", "reward_max", 40)
        state = pay(state, rng.randint(lo, hi), "angel cheque")
        state = adjust(state, hope=6)
        state = narrate(state, "They actually listened. They wrote you a cheque.")
    else:
        r = rng.random()
        if r < _tun("crime.pitch", "ignored", 0.5):
            state = adjust(state, hope=-2)
            state = narrate(state, "They walked straight past your pitch.")
        elif r < _tun("crime.pitch", "ignored", 0.5) + _tun("crime.pitch", "rejected", 0.35):
            state = adjust(state, hope=-4)
            state = narrate(state, "'Get a job.' They didn't slow down.")
        else:
            state = adjust(state, hope=-3)
            state = summon_police(state, rng)
            state = narrate(state, "They waved security over.")
    return retire_pedestrian(state, ped.id)


# ── Trade ────────────────────────────────────────────────────────────

def trade(state: WorldState, rng: random.Random) -> WorldState:
    """Accepted (maybe with a meal) → disgusted → ignored."""
    ped = _target(state, PedAction.TRADE)
    if ped is None:
        return state
    bias = archetype_bias(ped.archetype)
    willing = bias.trade_willing * (0.5 + _eff(state, ModifierKey.SEX_TRADE))
    r = rng.random()
    if r < willing:
        lo = _tun("crime.trade", "reward_min", 20)
        hi = _tun("crime.trade", "reward_max", 50)
        state = pay(state, rng.randint(lo, hi), "trade")
        state = adjust(state, hope=-6)
        if chance(rng, _tun("crime.trade", "meal_chance", 0.3)):
            state = adjust(state, hunger=15)
            state = narrate(state, "They paid, and bought you a feed after.")
        else:
            state = narrate(state, "They paid. You don't think about it.")
    elif r < willing + _tun("crime.trade", "disgusted", 0.3):
        state = adjust(state, hope=-8)
        state = narrate(state, "They looked at you like you were something on their shoe.")
    else:
        state = adjust(state, hope=-2)
        state = narrate(state, "They pretended not to hear.")
    return retire_pedestrian(state, ped.id)


# ── Confront ─────────────────────────────────────────────────────────

def confront(state: WorldState, rng: random.Random) -> WorldState:
    """Retaliation → police called → knockdown loot → they flee."""
    ped = _target(state, PedAction.CONFRONT)
    if ped is None:
        return state
    bias = archetype_bias(ped.archetype)
    p_ret = bias.retaliation * (0.5 + _eff(state, ModifierKey.VIOLENCE))
    p_cops = _tun("crime.confront", "police_called", 0.15) * (0.5 + _eff(state, ModifierKey.COPS))
    p_loot = _tun("crime.confront", "knockdown", 0.45)
    r = rng.random()
    if r < p_ret:
        state = adjust(state, hope=-10, warmth=-5, hunger=-5)
        state = _mark_violence(state)
        state = narrate(state, "They hit back. Hard.")
    elif r < p_ret + p_cops:
        state = adjust(state, hope=-5)
        state = _mark_violence(state)
        state = summon_police(state, rng)
        state = narrate(state, "Someone's calling the cops.")
    elif r < p_ret + p_cops + p_loot:
        take = rng.randint(bias.money_min, max(bias.money_min, bias.money_max))
        state = pay(state, take, "taken")
        state = adjust(state, hope=-6)
        state = _mark_violence(state)
        state = narrate(state, "They went down. You took what fell out.")
    else:
        state = adjust(state, hope=-2)
        state = narrate(state, "They ran.")
    return retire_pedestrian(state, ped.id)


# ── Legacy purse window ──────────────────────────────────────────────

def update_steal_window(state: WorldState, rng: random.Random) -> WorldState:
    """Tick the purse-grab window; open it when a mark brushes past."""
    f = state.flags
    if f.steal_window_ticks > 0:
        return with_flags(state, steal_window_ticks=f.steal_window_ticks - 1)
    reach = _tun("crime.purse", "reach", 4.0)
    near = any(p.stealable and abs(p.x - state.player.x) <= reach
               and p.archetype is not Archetype.DEALER
               for p in state.entities.pedestrians)
    if near and chance(rng, _tun("crime.purse", "open_chance", 0.3)):
        return with_flags(state, steal_window_ticks=_tun("crime.purse", "window_ticks", 3))
    return state


def grab_purse(state: WorldState, rng: random.Random) -> WorldState:
    if not state.is_running or state.flags.steal_window_ticks <= 0:
        return state
    p = _tun("crime.purse", "success", 0.5) * (0.5 + _eff(state, ModifierKey.THEFT))
    if state.world.time_of_day is TimeOfDay.NIGHT:
        p += _tun("crime.purse", "night_bonus", 0.1)
    if chance(rng, p):
        state = pay(state, rng.randint(5, 20), "purse")
        state = narrate(state, "You snatched the purse and kept walking.")
    else:
        state = narrate(state, "They clutched the bag and yelled.")
    state = adjust(state, hope=-5)
    state = _mark_theft(state)
    return with_flags(state, steal_window_ticks=0)
