"""test_desperation.py — Fallback actions when things get bad.

Run:  python test_desperation.py
"""
from __future__ import annotations

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import Desperation, GameOverCause, Zone
from logic.desperation import available_actions, is_desperate, perform
from logic.effects import with_flags
from testkit import FixedRandom, at_zone, check, frozen, main, playing


def test_offers():
    check(not is_desperate(playing()), "a fed, warm player with cash is fine")
    check(available_actions(at_zone(playing(), Zone.BINS)) == (),
          "nothing on offer while not desperate")
    check(is_desperate(playing(money=0)), "no money is desperate")
    check(is_desperate(playing(warmth=20.0)), "cold is desperate")

    bins = at_zone(playing(hunger=10.0), Zone.BINS)
    check(available_actions(bins) == (Desperation.THEFT,), "bins: shoplift")

    services = at_zone(playing(hunger=10.0), Zone.SERVICES)
    check(available_actions(services) == (Desperation.THEFT, Desperation.SELL),
          "services: shoplift, then sell")
    rich = at_zone(playing(hunger=10.0, money=80), Zone.SERVICES)
    check(available_actions(rich) == (Desperation.THEFT,), "no selling with $50+")

    starving = at_zone(playing(hunger=10.0, warmth=10.0), Zone.PAWN)
    check(available_actions(starving) == (Desperation.SELL, Desperation.DOG_SACRIFICE),
          "pawn at rock bottom: sell, then the dog")

    alley = at_zone(playing(hunger=10.0, money=20), Zone.ALLEY)
    check(available_actions(alley) == (Desperation.BUY_STIMULANT,), "alley: score")

    window = with_flags(playing(money=0), steal_window_ticks=2)
    check(available_actions(window) == (Desperation.PURSE_STEAL,), "purse window")


def test_theft_and_sell():
    bins = at_zone(playing(hunger=10.0, money=5), Zone.BINS)
    got = perform(bins, Desperation.THEFT, FixedRandom(0.0))
    check(10 <= got.stats.money <= 19, "shoplifting pays 5..14", str(got.stats.money))
    check(got.stats.hope == 50.0, "and costs 10 hope")
    caught = perform(bins, Desperation.THEFT, FixedRandom(0.99))
    check(caught.flags.game_over_cause is GameOverCause.ARRESTED, "caught shoplifting")

    services = at_zone(playing(hunger=10.0, money=5), Zone.SERVICES)
    sold = perform(services, Desperation.SELL, FixedRandom(0.5))
    check(sold.stats.money == 20 and sold.stats.hope == 52.0, "sold belongings for $15")

    check(perform(bins, Desperation.SELL, FixedRandom(0.5)) is bins,
          "an action not on offer does nothing")


def test_dog_sacrifice():
    s = at_zone(playing(hunger=10.0, warmth=10.0, hope=60.0), Zone.SLEEP)
    after = perform(s, Desperation.DOG_SACRIFICE, FixedRandom(0.5))
    check(after.stats.hunger == 70.0 and after.stats.warmth == 50.0,
          "the sacrifice feeds and warms")
    check(after.stats.hope == 10.0, "and costs 50 hope", str(after.stats.hope))
    check(abs(after.stats.permanent_hope_loss - 0.3) < 1e-9, "permanently")
    check(not after.companion.has_dog, "the dog is gone")
    check(after.flags.freeze_ticks == 3, "three ticks of silence")
    check(after.narrative.text == "...", "nothing to say")

    check(perform(after, Desperation.DOG_SACRIFICE, FixedRandom(0.5)) is after,
          "there is no second dog")
    stuck = frozen(at_zone(playing(hunger=10.0), Zone.BINS))
    check(perform(stuck, Desperation.THEFT, FixedRandom(0.0)) is stuck,
          "nothing happens while frozen")


if __name__ == "__main__":
    main("Desperation Tests", [
        ("Offers", test_offers),
        ("Theft and Sell", test_theft_and_sell),
        ("Dog Sacrifice", test_dog_sacrifice),
    ])
