"""test_narrative.py — Street events rolled every tick, and trip visions.

Each event rolls ``chance`` first, then one branch roll, so a
``SequenceRandom([0.0, r])`` forces the event and picks branch *r*.

Run:  python test_narrative.py
"""
from __future__ import annotations

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import GameOverCause, TimeOfDay
from logic.effects import adjust, with_flags, with_world
from logic.narrative import ambient_event, dealer_approach, roll_events, tab_offer
from logic.needs import apply_needs
from testkit import FixedRandom, SequenceRandom, check, main, playing

QUIET = FixedRandom(0.99)


def _forced(branch: float) -> SequenceRandom:
    return SequenceRandom([0.0, branch])


# ── Ambient ──────────────────────────────────────────────────────────

def test_ambient():
    day = with_world(playing(hunger=50.0, hope=50.0), time_of_day=TimeOfDay.DAY)
    check(ambient_event(day, QUIET) is day, "most ticks nothing happens")

    coffee = ambient_event(day, _forced(0.1))
    check((coffee.stats.hope, coffee.stats.hunger) == (55.0, 55.0), "a coffee from a stranger")
    check("coffee" in coffee.narrative.text, "the gift is narrated")

    check(ambient_event(day, _forced(0.35)) == day, "an attack roll by day does nothing")
    night = with_world(day, time_of_day=TimeOfDay.NIGHT)
    dead = ambient_event(night, _forced(0.35))
    check(dead.flags.game_over_cause is GameOverCause.VIOLENCE, "the same roll at night kills")


def test_cold_sickness():
    cold = with_world(playing(hunger=70.0, warmth=20.0), time_of_day=TimeOfDay.DAY)
    sick = ambient_event(cold, _forced(0.45))
    check(sick.stats.hunger == 50.0, "cold sickness costs 20 hunger", str(sick.stats.hunger))
    warm = with_world(playing(warmth=70.0), time_of_day=TimeOfDay.DAY)
    check(ambient_event(warm, _forced(0.45)) == warm, "only when already cold")


# ── Dealers ──────────────────────────────────────────────────────────

def test_dealer_branches():
    s = with_world(playing(money=5, hope=50.0), time_of_day=TimeOfDay.DAY)
    check(dealer_approach(s, QUIET) is s, "no approach most ticks")

    sample = dealer_approach(s, _forced(0.1))
    check(sample.stats.stimulant == 15.0, "a free sample")

    scammed = dealer_approach(s, _forced(0.4))
    check(0 <= scammed.stats.money <= 2, "the scam takes 3-10 dollars", str(scammed.stats.money))
    broke = with_world(playing(money=0), time_of_day=TimeOfDay.DAY)
    passed = dealer_approach(broke, _forced(0.4))
    check(passed.stats == broke.stats and "nothing worth" in passed.narrative.text,
          "nothing to take from the broke")

    pushy = dealer_approach(s, _forced(0.9))
    check(pushy.stats.hope == 47.0, "a pushy dealer costs hope")


def test_credit_trap():
    s = with_world(playing(hope=50.0), time_of_day=TimeOfDay.DAY)
    trapped = dealer_approach(s, _forced(0.6))
    check(trapped.stats.permanent_hope_loss == 0.25, "the credit trap adds hidden hope loss")
    check(trapped.stats.stimulant == 20.0 and trapped.stats.hope == 45.0,
          "with a hit on credit")
    later = adjust(trapped, hope_loss=-1.0)
    check(later.stats.permanent_hope_loss == 0.25, "the hidden loss never goes down")
    again = dealer_approach(trapped, _forced(0.6))
    check(again.stats.permanent_hope_loss == 0.5, "and stacks")


# ── Tabs ─────────────────────────────────────────────────────────────

def test_tab_offer():
    s = with_world(playing(), time_of_day=TimeOfDay.DAY)
    check(tab_offer(s, QUIET) is s, "no tab most ticks")
    check(tab_offer(s, FixedRandom(0.0)).stats.lsd_charges == 1, "a tab pressed into your palm")


def test_roll_order():
    night = with_world(playing(), time_of_day=TimeOfDay.NIGHT)
    dead = roll_events(night, SequenceRandom([0.0, 0.35, 0.0, 0.1, 0.0]))
    check(dead.flags.game_over_cause is GameOverCause.VIOLENCE, "killed by the ambient roll")
    check(dead.stats.stimulant == 0.0 and dead.stats.lsd_charges == 0,
          "no dealer after the game ends")


# ── Trip visions ─────────────────────────────────────────────────────

def test_trip_give_away():
    # Six ticks left → five after this one, a vision tick.
    tripping = with_flags(playing(money=10), trip_ticks=6)
    s = apply_needs(tripping, FixedRandom(0.9))
    check(5 <= s.stats.money <= 9, "the man made of light takes 1-5 dollars", str(s.stats.money))
    check(s.flags.trip_ticks == 5, "the trip counts down")

    poor = with_flags(playing(money=2), trip_ticks=6)
    gave = apply_needs(poor, FixedRandom(0.9))
    check(0 <= gave.stats.money <= 1, "never below zero", str(gave.stats.money))
    broke = with_flags(playing(money=0), trip_ticks=6)
    check(apply_needs(broke, FixedRandom(0.9)).stats.money == 0, "nothing to give")

    ibis = apply_needs(with_flags(playing(money=10, hope=50.0), trip_ticks=6), FixedRandom(0.5))
    check(ibis.stats.money == 10 and "ibis" in ibis.narrative.text, "the talking ibis")


if __name__ == "__main__":
    main("Narrative Tests", [
        ("Ambient", test_ambient),
        ("Cold Sickness", test_cold_sickness),
        ("Dealer Branches", test_dealer_branches),
        ("Credit Trap", test_credit_trap),
        ("Tab Offer", test_tab_offer),
        ("Roll Order", test_roll_order),
        ("Trip Give-away", test_trip_give_away),
    ])
