"""logic/needs.py — Survival stats, intoxication, companion, clock.

Runs once per tick, in this order:

1. hunger and hope decay (hope scaled by the hidden hope-loss penalty)
2. stimulant decay, then the three intoxication bands:
       high        stimulant > 30   hope up, hunger down, warmth up,
                                    3% paranoia (may call the police)
       crash       crossing down through 30, applied once
       withdrawing 0 < stimulant <= 20   5% hallucination
3. warmth decay by time of day and weather, quartered while tripping
4. an active trip: small boosts, a flavour roll every 5 ticks, and a
   fixed comedown when the countdown expires

``tick_companion`` and ``advance_clock`` follow in the orchestrator.

Game over is *not* decided here: ``check_game_over`` is run by the
session after every committed change.
"""

from __future__ import annotations
import random

from components import GameOverCause, Screen, TimeOfDay, WorldState
from core.determinism import chance
from core.tuning import get as _tun
from logic.effects import (
    adjust, end_game, narrate, pay, with_companion, with_flags, with_stats,
    with_world,
)
from logic.police import summon_police

HIGH_THRESHOLD = 30.0
WITHDRAWAL_THRESHOLD = 20.0

_WARMTH_DECAY = {
    TimeOfDay.DAWN: 1.0,
    TimeOfDay.DAY: 0.6,
    TimeOfDay.DUSK: 0.9,
    TimeOfDay.NIGHT: 1.5,
}


# ── Stat tick ────────────────────────────────────────────────────────

def apply_needs(state: WorldState, rng: random.Random) -> WorldState:
    s = state.stats
    state = with_stats(state, elapsed_seconds=s.elapsed_seconds + 1)

    # ── Base decay ───────────────────────────────────────────────────
    hope_decay = _tun("needs", "hope_decay", 0.3) * (1.0 + s.permanent_hope_loss)
    state = adjust(state, hunger=-_tun("needs", "hunger_decay", 1.5),
                   hope=-hope_decay)

    # ── Stimulant ────────────────────────────────────────────────────
    before = s.stimulant
    state = adjust(state, stimulant=-_tun("needs", "stimulant_decay", 0.5))
    after = state.stats.stimulant

    if before > HIGH_THRESHOLD >= after:
        state = adjust(state, hope=_tun("needs.crash", "hope", -10),
                       hunger=_tun("needs.crash", "hunger", -5))
        state = narrate(state, "The crash hits. Everything is grey.")
    elif after > HIGH_THRESHOLD:
        state = adjust(state, hope=_tun("needs.high", "hope", 0.8),
                       hunger=_tun("needs.high", "hunger", -0.5),
                       warmth=_tun("needs.high", "warmth", 0.3))
        if chance(rng, _tun("needs.high", "paranoia", 0.03)):
            state = adjust(state, hope=-3,
                           hope_loss=_tun("penalties", "paranoia", 0.05))
            state = narrate(state, "Everyone is looking at you. Everyone knows.")
            if chance(rng, _tun("needs.high", "paranoia_police", 0.5)):
                state = summon_police(state, rng)
    elif 0 < after <= WITHDRAWAL_THRESHOLD:
        if chance(rng, _tun("needs.withdrawal", "hallucination", 0.05)):
            state = adjust(state, hope=_tun("needs.withdrawal", "hope", -4),
                           hunger=_tun("needs.withdrawal", "hunger", -2))
            state = narrate(state, "Insects under the skin. They aren't real. Probably.")

    # ── Warmth ───────────────────────────────────────────────────────
    decay = _tun("needs.warmth", state.world.time_of_day.value,
                 _WARMTH_DECAY[state.world.time_of_day])
    if state.world.is_raining:
        decay += _tun("needs.warmth", "rain", 0.8)
    if state.flags.trip_active:
        decay *= 0.25
    state = adjust(state, warmth=-decay)

    return _tick_trip(state, rng)


def _tick_trip(state: WorldState, rng: random.Random) -> WorldState:
    left = state.flags.trip_ticks
    if left <= 0:
        return state
    state = adjust(state, hope=0.5, hunger=0.2, warmth=0.2)
    left -= 1
    state = with_flags(state, trip_ticks=left)
    if left == 0:
        state = adjust(state, hope=_tun("needs.trip", "comedown_hope", -10),
                       hunger=_tun("needs.trip", "comedown_hunger", -8))
        return narrate(state, "The colours drain out of the world.")
    if left % _tun("needs.trip", "flavor_every", 5) == 0:
        r = rng.random()
        if r < 0.4:
            state = narrate(state, "The neon signs are breathing.")
        elif r < 0.7:
            state = adjust(state, hope=2)
            state = narrate(state, "An ibis tells you your idea is good. You believe it.")
        elif state.stats.money > 0:
            lost = min(state.stats.money, rng.randint(1, 5))
            state = pay(state, -lost, "given away")
            state = narrate(state, "You gave your money to a man made of light.")
    return state


# ── Companion ────────────────────────────────────────────────────────

def tick_companion(state: WorldState) -> WorldState:
    c = state.companion
    if not c.has_dog:
        return state
    if c.dog_health > 50 and not c.dog_sick:
        state = adjust(state, hope=0.2, warmth=0.1)

    low = _tun("companion", "low_hunger", 30)
    if state.stats.hunger < low:
        drain = 2.0 if c.dog_sick else 1.0
        ticks = c.low_hunger_ticks + 1
        state = with_companion(
            state, dog_health=max(0.0, c.dog_health - drain),
            low_hunger_ticks=ticks,
            dog_sick=c.dog_sick or ticks > _tun("companion", "sick_after", 20))
    else:
        state = with_companion(state, low_hunger_ticks=0,
                               dog_health=min(100.0, c.dog_health + 0.5))

    if state.companion.dog_health <= 0:
        state = with_companion(state, has_dog=False, dog_health=0.0,
                               dog_sick=False)
        state = adjust(state, hope=_tun("companion", "loss_hope", -20),
                       hope_loss=_tun("penalties", "dog_death", 0.5))
        state = narrate(state, "Your dog lay down and didn't get up.")
    return state


# ── Clock and weather ────────────────────────────────────────────────

def advance_clock(state: WorldState, rng: random.Random) -> WorldState:
    """Time of day, rain rolls and bin restocks on fixed periods."""
    t = state.stats.elapsed_seconds
    w = state.world
    if t % _tun("clock", "time_of_day_ticks", 30) == 0:
        tod = w.time_of_day.next()
        state = with_world(
            state, time_of_day=tod,
            services_open=tod in (TimeOfDay.DAWN, TimeOfDay.DAY),
            shelter_open=tod in (TimeOfDay.DUSK, TimeOfDay.NIGHT))
    if t % _tun("clock", "weather_ticks", 20) == 0:
        state = with_world(state, is_raining=chance(rng, _tun("clock", "rain_chance", 0.3)))
    if t % _tun("clock", "bins_ticks", 45) == 0:
        state = with_world(state, bins_restocked=True)
    return state


# ── Game over ────────────────────────────────────────────────────────

def check_game_over(state: WorldState) -> WorldState:
    """Set the first matching cause; a finished game is left alone."""
    if state.is_over or state.screen is not Screen.PLAYING:
        return state
    s = state.stats
    if s.hunger <= 0:
        return end_game(state, GameOverCause.STARVED)
    if s.warmth <= 0:
        return end_game(state, GameOverCause.FROZE)
    if s.hope <= 0:
        return end_game(state, GameOverCause.HOPELESS)
    if s.stimulant >= 100:
        return end_game(state, GameOverCause.OVERDOSE)
    return state
