"""logic/modifiers.py — District and time-of-day modifier tables.

Static lookup data loaded from ``data/districts.toml``:

* district → economic biases (food, sex_trade, theft, drugs, cops,
  kindness, shelter, violence, gambling, pitch, wildlife), each 0..1
* district → ordered archetype spawn table (weights need not sum to 1)
* district → pedestrian density and venue strip
* time of day → crime multiplier, crowd density, service availability,
  neon intensity

Two pure queries sit on top: ``effective_modifier`` and
``weighted_draw``.  The tables are loaded strictly on first use; a
district or key missing from the file raises ``KeyError``.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, TypeVar

from components import Archetype, District, ModifierKey, TimeOfDay, VenueType
from core.tuning import read_table

T = TypeVar("T")


# ── Table records ────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TimeModifiers:
    crime_multiplier: float
    crowd_density: float
    service_available: bool
    neon_intensity: float


@dataclass(frozen=True, slots=True)
class Venue:
    type: VenueType
    name: str


@dataclass(frozen=True)
class DistrictTables:
    order: tuple[District, ...]
    names: dict[District, str]
    density: dict[District, float]
    modifiers: dict[District, dict[ModifierKey, float]]
    spawn: dict[District, tuple[tuple[Archetype, float], ...]]
    time: dict[TimeOfDay, TimeModifiers]
    venues: dict[District, tuple[Venue, ...]]


def parse_tables(raw: dict) -> DistrictTables:
    """Build ``DistrictTables`` from a parsed districts TOML document."""
    order = tuple(District(name) for name in raw["order"])
    missing = set(District) - set(order)
    if missing:
        raise KeyError(f"districts missing from order: {sorted(d.value for d in missing)}")

    modifiers: dict[District, dict[ModifierKey, float]] = {}
    for d in order:
        row = raw["modifiers"][d.value]
        # every key must be present: no silent defaults
        modifiers[d] = {key: float(row[key.value]) for key in ModifierKey}

    spawn = {
        d: tuple((Archetype(name), float(w)) for name, w in raw["spawn"][d.value])
        for d in order
    }
    time = {
        t: TimeModifiers(
            crime_multiplier=float(raw["time"][t.value]["crime_multiplier"]),
            crowd_density=float(raw["time"][t.value]["crowd_density"]),
            service_available=bool(raw["time"][t.value]["service_available"]),
            neon_intensity=float(raw["time"][t.value]["neon_intensity"]),
        )
        for t in TimeOfDay
    }
    venues = {
        d: tuple(Venue(VenueType(kind), name) for kind, name in raw["venues"][d.value])
        for d in order
    }
    for d, strip in venues.items():
        if not strip:
            raise KeyError(f"district {d.value} has an empty venue strip")

    return DistrictTables(
        order=order,
        names={d: str(raw["names"][d.value]) for d in order},
        density={d: float(raw["density"][d.value]) for d in order},
        modifiers=modifiers,
        spawn=spawn,
        time=time,
        venues=venues,
    )


_tables: DistrictTables | None = None


def load_tables(directory: str | Path | None = None) -> DistrictTables:
    """(Re)load ``districts.toml`` and make it the active table set."""
    global _tables
    _tables = parse_tables(read_table("districts", directory))
    return _tables


def tables() -> DistrictTables:
    if _tables is None:
        return load_tables()
    return _tables


# ── Lookups ──────────────────────────────────────────────────────────

def base_modifier(district: District, key: ModifierKey) -> float:
    return tables().modifiers[district][key]


def time_modifiers(time: TimeOfDay) -> TimeModifiers:
    return tables().time[time]


def spawn_table(district: District) -> tuple[tuple[Archetype, float], ...]:
    return tables().spawn[district]


def density(district: District) -> float:
    return tables().density[district]


def district_name(district: District) -> str:
    return tables().names[district]


def venues(district: District) -> tuple[Venue, ...]:
    return tables().venues[district]


# ── effective_modifier ───────────────────────────────────────────────

_CRIME = "crime"
_SERVICE = "service"
_PLAIN = "plain"

# Exhaustive: a key added to ModifierKey without a class here fails at import.
_KEY_CLASS: dict[ModifierKey, str] = {
    ModifierKey.THEFT: _CRIME,
    ModifierKey.VIOLENCE: _CRIME,
    ModifierKey.DRUGS: _CRIME,
    ModifierKey.SEX_TRADE: _CRIME,
    ModifierKey.SHELTER: _SERVICE,
    ModifierKey.PITCH: _SERVICE,
    ModifierKey.FOOD: _PLAIN,
    ModifierKey.COPS: _PLAIN,
    ModifierKey.KINDNESS: _PLAIN,
    ModifierKey.GAMBLING: _PLAIN,
    ModifierKey.WILDLIFE: _PLAIN,
}
if set(_KEY_CLASS) != set(ModifierKey):
    raise RuntimeError("unclassified modifier key")

_CLOSED_SERVICE_FACTOR = 0.3


def effective_modifier(district: District, key: ModifierKey | str,
                       time: TimeOfDay) -> float:
    """District bias for *key*, scaled by the time of day.

    Crime keys scale by ``crime_multiplier``; shelter and pitch drop to
    30% while services are closed; everything else is the base value.
    An unknown key raises ``KeyError``.
    """
    if not isinstance(key, ModifierKey):
        try:
            key = ModifierKey(key)
        except ValueError:
            raise KeyError(f"unknown modifier key {key!r}") from None
    kind = _KEY_CLASS[key]
    base = base_modifier(district, key)
    tm = time_modifiers(time)
    if kind == _CRIME:
        return base * tm.crime_multiplier
    if kind == _SERVICE:
        return base * (1.0 if tm.service_available else _CLOSED_SERVICE_FACTOR)
    return base


# ── weighted_draw ────────────────────────────────────────────────────

def weighted_draw(table: Sequence[tuple[T, float]],
                  rng: random.Random) -> T | None:
    """Pick an entry by weight using exactly one ``rng.random()`` value.

    Walks the entries subtracting weights from ``r * total`` and returns
    the first entry where the remainder goes non-positive.  Falls back
    to the first entry when the walk runs out, when *r* is 1.0, or when
    the total weight is 0.  An empty table returns ``None``.
    """
    if not table:
        return None
    r = rng.random()
    total = sum(w for _, w in table)
    if r >= 1.0 or total <= 0:
        return table[0][0]
    roll = r * total
    for item, weight in table:
        roll -= weight
        if roll <= 0:
            return item
    return table[0][0]
