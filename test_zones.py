"""test_zones.py — Street zones and shop interiors.

Run:  python test_zones.py
"""
from __future__ import annotations

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import FundingStage, TimeOfDay, Zone
from logic.actions import choose_shop_option, exit_shop, interact
from logic.effects import with_world
from logic.funding import PITCH_DECK
from logic.movement import can_move
from logic.zones import find_option, shop_options, zone_action
from testkit import FixedRandom, at_zone, check, main, playing

QUIET = FixedRandom(0.99)


def _inside(zone: Zone, venue: str = "TEST VENUE", **stats):
    s = at_zone(playing(**stats), zone, venue)
    return interact(s, QUIET)


# ── Shops ────────────────────────────────────────────────────────────

def test_shop_interiors():
    s = interact(playing(), QUIET)
    check(s.flags.shop_open and s.flags.shop_zone is Zone.FOOD_VENDOR,
          "E at Harry's opens the food counter")
    check("Harrys Cafe" in s.narrative.text, "entering is narrated", s.narrative.text)
    check(not can_move(s), "no walking while inside")
    check(interact(s, QUIET) is s, "E inside does nothing")

    check(choose_shop_option(s, "takeaway", QUIET) is s, "$5 doesn't buy a takeaway")
    check(choose_shop_option(s, "caviar", QUIET) is s, "unknown options are ignored")

    rich = _inside(Zone.FOOD_VENDOR, money=100)
    fed = choose_shop_option(rich, "takeaway", QUIET)
    check(fed.stats.money == 75 and fed.stats.hunger == 95.0, "takeaway: -$25, +25 hunger")
    check(fed.transaction.visible and fed.transaction.text.startswith("-$25"),
          "spending flashes the toast", fed.transaction.text)

    out = exit_shop(fed)
    check(not out.flags.shop_open and out.flags.shop_zone is None, "Esc leaves")
    check(exit_shop(out) is out, "leaving twice is a no-op")
    check(choose_shop_option(out, "takeaway", QUIET) is out, "no buying from the street")


def test_shop_tables():
    for zone in (Zone.BAR, Zone.CAFE, Zone.FOOD_VENDOR, Zone.VC_FIRM,
                 Zone.STRIP_CLUB, Zone.PAWN, Zone.ALLEY):
        check(len(shop_options(zone)) >= 2, f"{zone.value} has a menu")
    check(find_option(Zone.PAWN, "laptop").value == 800, "the laptop pawns for $800")
    check(find_option(Zone.BAR, "nope") is None, "missing option → None")


def test_pawn():
    s = _inside(Zone.PAWN, money=5)
    s = choose_shop_option(s, "anything", QUIET)
    check(not s.stats.has_watch and s.stats.money == 305, "the watch goes first")
    s = choose_shop_option(s, "anything", QUIET)
    check(not s.stats.has_phone and s.stats.money == 705, "then the phone")
    check(choose_shop_option(s, "watch", QUIET) is s, "the watch is already gone")
    s = choose_shop_option(s, "laptop", QUIET)
    check(not s.stats.has_laptop and s.stats.money == 1505, "the laptop by name")
    empty = choose_shop_option(s, "anything", QUIET)
    check(empty.stats.money == 1505 and "nothing left" in empty.narrative.text,
          "nothing left to pawn")


def test_vc_shop():
    s = _inside(Zone.VC_FIRM, hunger=80.0)
    won = choose_shop_option(s, "pitch", FixedRandom(0.0))
    check(won.stats.funding_stage is FundingStage.PRE_SEED, "pitching from the lobby")


# ── Street zones ─────────────────────────────────────────────────────

def test_bins():
    s = at_zone(playing(hunger=50.0), Zone.BINS)
    found = zone_action(s, Zone.BINS, FixedRandom(0.0))
    check(found.stats.hunger == 65.0, "half a kebab")
    check(PITCH_DECK in found.stats.found_items, "and, once, a pitch deck")
    check(not found.world.bins_restocked, "the bins are picked clean")
    again = zone_action(found, Zone.BINS, FixedRandom(0.0))
    check(again.stats == found.stats and "picked clean" in again.narrative.text,
          "nothing until the restock")


def test_services_and_shelter():
    s = at_zone(playing(hunger=50.0, warmth=50.0, hope=50.0), Zone.SERVICES)
    helped = zone_action(s, Zone.SERVICES, FixedRandom(0.0))
    check((helped.stats.hunger, helped.stats.warmth, helped.stats.hope) == (75.0, 60.0, 60.0),
          "a hot meal and a caseworker")
    shut = with_world(s, services_open=False)
    closed = zone_action(shut, Zone.SERVICES, FixedRandom(0.0))
    check(closed.stats == shut.stats and "Closed" in closed.narrative.text,
          "services shut outside the day")

    day = at_zone(playing(warmth=50.0), Zone.SHELTER)
    check(zone_action(day, Zone.SHELTER, FixedRandom(0.0)).stats == day.stats,
          "shelter doors shut in the day")
    dusk = with_world(day, shelter_open=True)
    bed = zone_action(dusk, Zone.SHELTER, FixedRandom(0.0))
    check(bed.stats.warmth == 80.0, "a bed for the night")
    full = zone_action(dusk, Zone.SHELTER, FixedRandom(0.9))
    check(full.stats.warmth == 50.0 and full.stats.hope == 52.0, "full tonight")


def test_sleep_and_ask():
    s = at_zone(playing(), Zone.SLEEP)
    slept = zone_action(s, Zone.SLEEP, QUIET)
    check(slept.stats.warmth == 55.0 and slept.stats.hunger == 60.0, "a bad sleep")
    night = with_world(s, time_of_day=TimeOfDay.NIGHT)
    check(zone_action(night, Zone.SLEEP, QUIET).stats.warmth == 45.0, "worse at night")

    ask = at_zone(playing(money=5, hope=50.0), Zone.ASK_HELP)
    coins = zone_action(ask, Zone.ASK_HELP, FixedRandom(0.0))
    check(6 <= coins.stats.money <= 8 and coins.stats.hope == 55.0, "spare change")
    snub = zone_action(ask, Zone.ASK_HELP, FixedRandom(0.99))
    check(snub.stats.hope == 48.0, "nobody looks at you")

    check(zone_action(s, Zone.BINS, QUIET) is s, "a zone you're not in does nothing")
    nowhere = at_zone(playing(), None)
    check(interact(nowhere, QUIET) is nowhere, "E out of zone does nothing")


if __name__ == "__main__":
    main("Zone Tests", [
        ("Shop Interiors", test_shop_interiors),
        ("Shop Tables", test_shop_tables),
        ("Pawn", test_pawn),
        ("VC Shop", test_vc_shop),
        ("Bins", test_bins),
        ("Services and Shelter", test_services_and_shelter),
        ("Sleep and Ask", test_sleep_and_ask),
    ])
