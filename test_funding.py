"""test_funding.py — The pitch ladder from bootstrap to IPO.

Run:  python test_funding.py
"""
from __future__ import annotations
import random

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import FundingStage, Zone
from logic.effects import with_stats
from logic.funding import (
    PITCH_DECK, pitch_investor, stage_terms, success_chance,
)
from testkit import FixedRandom, at_zone, check, main, playing


def _at_vc(**stats):
    return at_zone(playing(**stats), Zone.VC_FIRM, "ALLEN & BUCKERIDGE")


def test_terms():
    t = stage_terms(FundingStage.BOOTSTRAP)
    check((t.reward, t.energy_cost) == (100, 10.0), "bootstrap terms")
    t = stage_terms(FundingStage.SERIES_B)
    check((t.reward, t.success, t.energy_cost) == (50000, 0.12, 30.0), "series B terms")
    try:
        stage_terms(FundingStage.IPO)
    except KeyError:
        check(True, "IPO has no terms")
    else:
        check(False, "IPO has no terms")

    s = _at_vc()
    decked = with_stats(s, found_items=frozenset({PITCH_DECK}))
    check(abs(success_chance(decked) - success_chance(s) - 0.1) < 1e-9,
          "a pitch deck adds 10%")


def test_pitch():
    s = _at_vc(hunger=80.0, hope=50.0, money=5)
    yes = pitch_investor(s, FixedRandom(0.0))
    check(yes.stats.funding_stage is FundingStage.PRE_SEED, "success advances one stage")
    check(yes.stats.money == 105, "and pays the stage reward", str(yes.stats.money))
    check(yes.stats.hunger == 70.0, "pitching costs energy")
    check(yes.stats.hope == 65.0, "a yes lifts hope")

    no = pitch_investor(s, FixedRandom(0.99))
    check(no.stats.funding_stage is FundingStage.BOOTSTRAP, "failure keeps the stage")
    check(no.stats.hope == 42.0, "and costs the stage hope penalty")

    hungry = _at_vc(hunger=5.0)
    weak = pitch_investor(hungry, FixedRandom(0.0))
    check(weak.stats == hungry.stats, "too hungry to pitch")
    check("hungry" in weak.narrative.text, "and told so")

    street = playing(hunger=80.0)
    check(pitch_investor(street, FixedRandom(0.0)) is street, "only at a VC firm")


def test_ipo():
    s = _at_vc(hunger=100.0, funding_stage=FundingStage.SERIES_B)
    won = pitch_investor(s, FixedRandom(0.0))
    check(won.stats.funding_stage is FundingStage.IPO, "series B → IPO")
    check(won.flags.is_victory, "IPO wins the game")
    check(won.flags.is_paused, "and pauses the simulation")
    check(won.stats.money == 50005, "with the series B money")
    again = pitch_investor(won, FixedRandom(0.0))
    check(again is won, "nothing after the IPO")


def test_monotonic():
    rng = random.Random(42)
    s = _at_vc(funding_stage=FundingStage.BOOTSTRAP)
    last = s.stats.funding_stage.index
    for _ in range(300):
        s = with_stats(s, hunger=100.0, hope=100.0)
        s = pitch_investor(s, rng)
        idx = s.stats.funding_stage.index
        if idx < last or idx > last + 1:
            check(False, "stages never skip or regress", f"{last} → {idx}")
        last = idx
        if s.is_over:
            break
    check(True, "stages never skip or regress")
    check(s.stats.funding_stage is FundingStage.IPO, "300 pitches reach an IPO",
          s.stats.funding_stage.value)


if __name__ == "__main__":
    main("Funding Tests", [
        ("Terms", test_terms),
        ("Pitch", test_pitch),
        ("IPO", test_ipo),
        ("Monotonic Ladder", test_monotonic),
    ])
