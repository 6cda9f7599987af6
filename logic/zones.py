"""logic/zones.py — Hotspot zone actions and shop interiors.

Street zones (ask for help, bins, services, shelter, sleep) resolve
immediately.  Shop zones (bar, cafe, food vendor, VC firm, strip club,
pawn, alley) open an interior with a short option list; options come
from ``[[shops.<zone>]]`` in ``data/tuning.toml``.

Option records::

    {id, label, cost, hunger, warmth, hope, stimulant, effect, item, value}

``effect`` names a special handler (``pitch``, ``sell_asset``,
``alley_buy``); otherwise the stat deltas are applied after paying.
"""

from __future__ import annotations
import random
from dataclasses import dataclass

from components import ModifierKey, TimeOfDay, WorldState, Zone
from core.determinism import chance
from core.tuning import get as _tun
from logic.dealers import alley_buy
from logic.effects import adjust, narrate, pay, with_flags, with_stats, with_world
from logic.funding import PITCH_DECK, pitch_investor
from logic.modifiers import base_modifier

SHOP_ZONES = frozenset({
    Zone.BAR, Zone.CAFE, Zone.FOOD_VENDOR, Zone.VC_FIRM, Zone.STRIP_CLUB,
    Zone.PAWN, Zone.ALLEY,
})

ZONE_LABELS: dict[Zone, str] = {
    Zone.ASK_HELP: "ASK FOR HELP",
    Zone.BINS: "SEARCH BINS",
    Zone.SERVICES: "SERVICES",
    Zone.SHELTER: "SHELTER",
    Zone.SLEEP: "SLEEP",
    Zone.BAR: "ENTER BAR",
    Zone.CAFE: "ENTER CAFE",
    Zone.FOOD_VENDOR: "ENTER",
    Zone.VC_FIRM: "ENTER VC",
    Zone.STRIP_CLUB: "ENTER CLUB",
    Zone.PAWN: "PAWN SHOP",
    Zone.ALLEY: "ALLEY",
}
if set(ZONE_LABELS) != set(Zone):
    raise RuntimeError("zone without a label")

# Pawnable assets, in the order "anything" picks them.
PAWN_VALUES: dict[str, int] = {"watch": 300, "phone": 400, "laptop": 800}
PAWN_ORDER = tuple(PAWN_VALUES)


# ── Shop options ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ShopOption:
    id: str
    label: str
    cost: int = 0
    hunger: float = 0.0
    warmth: float = 0.0
    hope: float = 0.0
    stimulant: float = 0.0
    effect: str = ""
    item: str = ""
    value: int = 0


def _o(oid: str, label: str, cost: int = 0, **kw) -> dict:
    return {"id": oid, "label": label, "cost": cost, **kw}


DEFAULT_SHOPS: dict[Zone, list[dict]] = {
    Zone.BAR: [
        _o("beer", "Schooner of New", 12, hope=5, warmth=3),
        _o("whiskey", "Whiskey", 25, hope=10, warmth=8, hunger=-3),
        _o("round", "Shout the bar", 80, hope=20),
    ],
    Zone.CAFE: [
        _o("coffee", "Flat white", 6, warmth=8, hope=3),
        _o("meeting", "Coffee meeting", 15, hope=6, hunger=5),
        _o("cowork", "Camp at a table all day", 35, warmth=15, hope=10),
    ],
    Zone.FOOD_VENDOR: [
        _o("takeaway", "Takeaway", 25, hunger=25),
        _o("lunch", "Business lunch", 85, hunger=50, hope=5),
        _o("dinner", "Dinner", 250, hunger=80, hope=15, warmth=10),
    ],
    Zone.VC_FIRM: [
        _o("pitch", "Pitch the partners", effect="pitch"),
        _o("network", "Work the lobby", 20, hope=8),
    ],
    Zone.STRIP_CLUB: [
        _o("drinks", "Drinks", 100, hope=10),
        _o("massage", "Massage", 200, warmth=20, hope=15),
        _o("private", "Private room", 500, hope=30),
    ],
    Zone.PAWN: [
        _o("anything", "Pawn whatever you've got", effect="sell_asset"),
        _o("watch", "Pawn the watch", effect="sell_asset", item="watch", value=300),
        _o("phone", "Pawn the phone", effect="sell_asset", item="phone", value=400),
        _o("laptop", "Pawn the laptop", effect="sell_asset", item="laptop", value=800),
    ],
    Zone.ALLEY: [
        _o("score", "Score", effect="alley_buy"),
        _o("party", "Party", 400, stimulant=40, hope=20, hunger=-10),
    ],
}


def shop_options(zone: Zone) -> tuple[ShopOption, ...]:
    raw = _tun("shops", zone.value, DEFAULT_SHOPS.get(zone, []))
    return tuple(ShopOption(**entry) for entry in raw)


def find_option(zone: Zone, option_id: str) -> ShopOption | None:
    for opt in shop_options(zone):
        if opt.id == option_id:
            return opt
    return None


def enter_shop(state: WorldState) -> WorldState:
    zone = state.world.zone
    if not state.is_running or zone not in SHOP_ZONES or state.flags.shop_open:
        return state
    state = with_flags(state, shop_open=True, shop_zone=zone)
    return narrate(state, f"You step into {state.world.venue_name.title()}.")


def exit_shop(state: WorldState) -> WorldState:
    if not state.flags.shop_open:
        return state
    return with_flags(state, shop_open=False, shop_zone=None)


def choose_shop_option(state: WorldState, option_id: str,
                       rng: random.Random) -> WorldState:
    """Buy / do *option_id* inside the open shop."""
    zone = state.flags.shop_zone
    if not state.is_running or not state.flags.shop_open or zone is None:
        return state
    opt = find_option(zone, option_id)
    if opt is None:
        return state

    if opt.effect == "pitch":
        return pitch_investor(state, rng)
    if opt.effect == "alley_buy":
        return alley_buy(state, rng)
    if opt.effect == "sell_asset":
        return _sell_asset(state, opt)

    if state.stats.money < opt.cost:
        return state
    state = pay(state, -opt.cost, opt.id)
    state = adjust(state, hunger=opt.hunger, warmth=opt.warmth, hope=opt.hope,
                   stimulant=opt.stimulant)
    return narrate(state, f"{opt.label}. Worth every cent.")


def _sell_asset(state: WorldState, opt: ShopOption) -> WorldState:
    """Pawn *opt.item*, or the first asset still held when it names none."""
    item, value = opt.item, opt.value
    if not item:
        held = [a for a in PAWN_ORDER if getattr(state.stats, f"has_{a}")]
        if not held:
            return narrate(state, "You've got nothing left worth a ticket.")
        item = held[0]
        listed = find_option(Zone.PAWN, item)
        value = listed.value if listed is not None else PAWN_VALUES[item]
    flag = f"has_{item}"
    if not getattr(state.stats, flag, False):
        return state
    state = with_stats(state, **{flag: False})
    state = pay(state, value, item)
    state = adjust(state, hope=-5)
    return narrate(state, f"The {item} goes behind the glass. Ticket in your pocket.")


# ── Street zones ─────────────────────────────────────────────────────

def _ask_help(state: WorldState, rng: random.Random) -> WorldState:
    kindness = base_modifier(state.world.district, ModifierKey.KINDNESS)
    r = rng.random()
    give = _tun("zones.ask_help", "give", 0.3) * (0.5 + kindness)
    if r < give:
        state = pay(state, rng.randint(1, 3), "spare change")
        state = adjust(state, hope=5)
        return narrate(state, "Someone dropped coins in your cup.")
    if r < give + _tun("zones.ask_help", "kind_word", 0.2):
        state = adjust(state, hope=3)
        return narrate(state, "No money, but they asked your name.")
    state = adjust(state, hope=-2)
    return narrate(state, "Nobody looks at you.")


def _bins(state: WorldState, rng: random.Random) -> WorldState:
    if not state.world.bins_restocked:
        return narrate(state, "Already picked clean.")
    r = rng.random()
    if r < 0.4:
        state = adjust(state, hunger=15)
        state = narrate(state, "Half a kebab, barely touched.")
    elif r < 0.7:
        state = adjust(state, hunger=8)
        state = narrate(state, "Cold chips. It'll do.")
    else:
        state = narrate(state, "Nothing but wet cardboard.")
    found = state.stats.found_items
    if PITCH_DECK not in found and chance(rng, _tun("zones.bins", "deck_chance", 0.05)):
        state = with_stats(state, found_items=found | {PITCH_DECK})
        state = narrate(state, "A binder of overhead transparencies. A pitch deck! Still good.")
    return with_world(state, bins_restocked=False)


def _services(state: WorldState, rng: random.Random) -> WorldState:
    if not state.world.services_open:
        return narrate(state, "Closed. Come back in daylight.")
    r = rng.random()
    if r < 0.4:
        state = adjust(state, hunger=25, warmth=10, hope=10)
        return narrate(state, "Hot meal, a blanket, a caseworker who listened.")
    if r < 0.7:
        state = adjust(state, warmth=15)
        return narrate(state, "They found you a jumper.")
    state = adjust(state, hope=-5)
    return narrate(state, "Queue's too long. Forms you can't fill in.")


def _shelter(state: WorldState, rng: random.Random) -> WorldState:
    if not state.world.shelter_open:
        return narrate(state, "Doors don't open till dusk.")
    if rng.random() < _tun("zones.shelter", "bed_chance", 0.5):
        state = adjust(state, warmth=30, hope=5)
        return narrate(state, "A bed. Real sheets.")
    state = adjust(state, hope=-8)
    return narrate(state, "Full tonight.")


def _sleep(state: WorldState, rng: random.Random) -> WorldState:
    warmth = -15.0
    if state.world.time_of_day is TimeOfDay.NIGHT:
        warmth -= 10.0
    state = adjust(state, warmth=warmth, hunger=-10)
    return narrate(state, "You curled up in the doorway and slept badly.")


_STREET_ACTIONS = {
    Zone.ASK_HELP: _ask_help,
    Zone.BINS: _bins,
    Zone.SERVICES: _services,
    Zone.SHELTER: _shelter,
    Zone.SLEEP: _sleep,
}


def zone_action(state: WorldState, zone: Zone, rng: random.Random) -> WorldState:
    """Default action for *zone* (slot A when nothing else claims it)."""
    if not state.is_running or state.flags.freeze_ticks > 0:
        return state
    if zone is not state.world.zone:
        return state
    if zone in SHOP_ZONES:
        return enter_shop(state)
    return _STREET_ACTIONS[zone](state, rng)
