"""logic/effects.py — Copy-on-write helpers shared by every transition.

All stat writes go through ``adjust`` so clamping lives in one place:
percentages stay in 0..100, money and hallucinogen charges never go
negative, and the hidden hope-loss accumulator only grows.
"""

from __future__ import annotations
from dataclasses import replace

from components import (
    Feedback, GameOverCause, Locomotion, Pedestrian, WorldState,
)
from core.constants import STAT_MAX, STAT_MIN


def clamp(value: float, lo: float = STAT_MIN, hi: float = STAT_MAX) -> float:
    return max(lo, min(hi, value))


# ── Stats ────────────────────────────────────────────────────────────

def adjust(state: WorldState, *, hunger: float = 0.0, warmth: float = 0.0,
           hope: float = 0.0, stimulant: float = 0.0, money: int = 0,
           lsd: int = 0, hope_loss: float = 0.0) -> WorldState:
    """Return *state* with the given stat deltas applied and clamped."""
    s = state.stats
    stats = replace(
        s,
        hunger=clamp(s.hunger + hunger),
        warmth=clamp(s.warmth + warmth),
        hope=clamp(s.hope + hope),
        stimulant=clamp(s.stimulant + stimulant),
        money=max(0, s.money + int(money)),
        lsd_charges=max(0, s.lsd_charges + int(lsd)),
        permanent_hope_loss=s.permanent_hope_loss + max(0.0, hope_loss),
    )
    return replace(state, stats=stats)


def with_stats(state: WorldState, **changes) -> WorldState:
    return replace(state, stats=replace(state.stats, **changes))


def with_flags(state: WorldState, **changes) -> WorldState:
    return replace(state, flags=replace(state.flags, **changes))


def with_world(state: WorldState, **changes) -> WorldState:
    return replace(state, world=replace(state.world, **changes))


def with_player(state: WorldState, **changes) -> WorldState:
    return replace(state, player=replace(state.player, **changes))


def with_entities(state: WorldState, **changes) -> WorldState:
    return replace(state, entities=replace(state.entities, **changes))


def with_companion(state: WorldState, **changes) -> WorldState:
    return replace(state, companion=replace(state.companion, **changes))


# ── Feedback lines ───────────────────────────────────────────────────

def narrate(state: WorldState, text: str) -> WorldState:
    """Show a narrative line; a newer line always replaces an older one."""
    fb = Feedback(text=text, visible=True, seq=state.narrative.seq + 1)
    return replace(state, narrative=fb)


def transact(state: WorldState, amount: int, label: str = "") -> WorldState:
    """Flash a money toast (``+$12`` / ``-$40``)."""
    if amount == 0:
        return state
    sign = "+" if amount > 0 else "-"
    text = f"{sign}${abs(amount)}" + (f" {label}" if label else "")
    fb = Feedback(text=text, visible=True, seq=state.transaction.seq + 1,
                  kind="gain" if amount > 0 else "loss")
    return replace(state, transaction=fb)


def pay(state: WorldState, amount: int, label: str = "") -> WorldState:
    """Move *amount* dollars (negative = spend) and flash the toast."""
    before = state.stats.money
    state = adjust(state, money=amount)
    return transact(state, state.stats.money - before, label)


def hide_feedback(state: WorldState, channel: str, seq: int) -> WorldState:
    """Clear a display flag if *seq* still owns the line."""
    fb: Feedback = getattr(state, channel)
    if fb.seq != seq or not fb.visible:
        return state
    return replace(state, **{channel: replace(fb, visible=False)})


# ── Terminal states ──────────────────────────────────────────────────

def end_game(state: WorldState, cause: GameOverCause) -> WorldState:
    """Set game over once.  A finished game (lost or won) never changes."""
    if state.is_over:
        return state
    state = with_flags(state, is_game_over=True, game_over_cause=cause,
                       shop_open=False, shop_zone=None)
    state = with_player(state, locomotion=Locomotion.COLLAPSED)
    return narrate(state, cause.message)


# ── Entities ─────────────────────────────────────────────────────────

def retire_pedestrian(state: WorldState, pid: int | None) -> WorldState:
    """Remove pedestrian *pid* and drop every reference to it."""
    if pid is None:
        return state
    peds = tuple(p for p in state.entities.pedestrians if p.id != pid)
    state = with_entities(state, pedestrians=peds)
    if state.flags.steal_target == pid:
        state = with_flags(state, steal_target=None, dealer_nearby=False,
                           pedestrian_actions=())
    return state


def spawn_id(state: WorldState) -> tuple[WorldState, int]:
    """Claim the next entity id (ids only ever increase)."""
    eid = state.entities.next_id
    return with_entities(state, next_id=eid + 1), eid


def add_pedestrian(state: WorldState, ped: Pedestrian) -> WorldState:
    return with_entities(state, pedestrians=state.entities.pedestrians + (ped,))
