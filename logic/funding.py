"""logic/funding.py — The pitch ladder from bootstrap to IPO.

    bootstrap → pre_seed → seed → series_a → series_b → ipo (terminal)

Each non-terminal stage has a reward, a success probability, an
energy cost paid in hunger and a hope penalty on failure (tuning
section ``funding.stages.<stage>``).  A pitch only happens at a VC
firm.  Success advances exactly one stage; reaching IPO wins the game
and pauses the simulation.  Stages never skip and never regress.
"""

from __future__ import annotations
import random
from dataclasses import dataclass

from components import FundingStage, WorldState, Zone
from core.tuning import get as _tun
from logic.effects import adjust, narrate, pay, with_flags, with_stats

PITCH_DECK = "pitch_deck"


@dataclass(frozen=True, slots=True)
class StageTerms:
    reward: int
    success: float
    energy_cost: float
    hope_penalty: float


_DEFAULT_TERMS: dict[FundingStage, StageTerms] = {
    FundingStage.BOOTSTRAP: StageTerms(100, 0.45, 10, 8),
    FundingStage.PRE_SEED: StageTerms(500, 0.35, 15, 12),
    FundingStage.SEED: StageTerms(2000, 0.25, 20, 15),
    FundingStage.SERIES_A: StageTerms(10000, 0.18, 25, 20),
    FundingStage.SERIES_B: StageTerms(50000, 0.12, 30, 25),
}


def stage_terms(stage: FundingStage) -> StageTerms:
    """Terms for a non-terminal *stage*; IPO has none (``KeyError``)."""
    d = _DEFAULT_TERMS[stage]
    sec = f"funding.stages.{stage.value}"
    return StageTerms(
        reward=int(_tun(sec, "reward", d.reward)),
        success=float(_tun(sec, "success", d.success)),
        energy_cost=float(_tun(sec, "energy_cost", d.energy_cost)),
        hope_penalty=float(_tun(sec, "hope_penalty", d.hope_penalty)),
    )


def success_chance(state: WorldState) -> float:
    p = stage_terms(state.stats.funding_stage).success
    if PITCH_DECK in state.stats.found_items:
        p += _tun("funding", "deck_bonus", 0.1)
    return min(p, 1.0)


def pitch_investor(state: WorldState, rng: random.Random) -> WorldState:
    """Pitch the VC in front of you."""
    stage = state.stats.funding_stage
    if (not state.is_running or stage.is_terminal
            or state.world.zone is not Zone.VC_FIRM
            or state.flags.freeze_ticks > 0):
        return state
    terms = stage_terms(stage)
    if state.stats.hunger < terms.energy_cost:
        return narrate(state, "You're too hungry to pitch. They can see it on you.")

    state = adjust(state, hunger=-terms.energy_cost)
    if rng.random() < success_chance(state):
        nxt = stage.next()
        state = with_stats(state, funding_stage=nxt)
        state = pay(state, terms.reward, nxt.value.replace("_", "-"))
        state = adjust(state, hope=_tun("funding", "success_hope", 15))
        if nxt.is_terminal:
            state = with_flags(state, is_victory=True, is_paused=True,
                               shop_open=False, shop_zone=None)
            return narrate(state, "The bell rings on the ASX floor. You made it.")
        return narrate(state, f"They're in. You closed your {nxt.value.replace('_', ' ')} round.")

    state = adjust(state, hope=-terms.hope_penalty)
    return narrate(state, "'Not for us. Come back with traction.'")
