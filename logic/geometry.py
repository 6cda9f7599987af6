"""logic/geometry.py — Scroll offset → district, blend and venue.

The street is a belt of fixed-width district segments.  Offsets are
unbounded in both directions and wrap with floor-modulo, so walking
left from Kings Cross reaches Mount Druitt.

Everything here is a pure projection of (offset, lateral position):
the same inputs always give the same district and venue.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from components import District, VenueType, Zone
from core.constants import (
    DISTRICT_WIDTH, SCREEN_BLOCKS, VENUE_BLOCK_WIDTH, VENUE_PARALLAX,
)
from logic.modifiers import Venue, tables, venues


# ── Districts ────────────────────────────────────────────────────────

def cycle_length() -> float:
    return DISTRICT_WIDTH * len(tables().order)


def _normalise(offset: float) -> float:
    # Python's % on floats is floor-modulo: -1 % 4500 == 4499
    return offset % cycle_length()


def district_index(offset: float) -> int:
    order = tables().order
    return int(math.floor(_normalise(offset) / DISTRICT_WIDTH)) % len(order)


def district_at(offset: float) -> District:
    return tables().order[district_index(offset)]


def district_blend(offset: float) -> tuple[District, District, float]:
    """Return (current, next, blend) with blend ∈ [0, 1) toward *next*."""
    order = tables().order
    idx = district_index(offset)
    within = _normalise(offset) - idx * DISTRICT_WIDTH
    blend = min(max(within / DISTRICT_WIDTH, 0.0), math.nextafter(1.0, 0.0))
    return order[idx], order[(idx + 1) % len(order)], blend


# ── Venues ───────────────────────────────────────────────────────────

# Exhaustive over VenueType; None marks decorative venues.
VENUE_ZONES: dict[VenueType, Zone | None] = {
    VenueType.BAR: Zone.BAR,
    VenueType.FOOD: Zone.FOOD_VENDOR,
    VenueType.CAFE: Zone.CAFE,
    VenueType.VC: Zone.VC_FIRM,
    VenueType.HUB: Zone.SERVICES,
    VenueType.CLUB: Zone.STRIP_CLUB,
    VenueType.PAWN: Zone.PAWN,
    VenueType.SHELTER: Zone.SHELTER,
    VenueType.HOSTEL: Zone.SHELTER,
    VenueType.ALLEY: Zone.ALLEY,
    VenueType.SHOP: Zone.BINS,
    VenueType.DERELICT: Zone.SLEEP,
    VenueType.CORNER: Zone.ASK_HELP,
    VenueType.LANDMARK: None,
}
if set(VENUE_ZONES) != set(VenueType):
    raise RuntimeError("venue type without a zone mapping")


@dataclass(frozen=True, slots=True)
class VenueHit:
    venue: Venue
    zone: Zone | None
    index: int


def venue_index(offset: float, x: float, count: int) -> int:
    strip = VENUE_BLOCK_WIDTH * count
    parallax = (offset * VENUE_PARALLAX) % strip
    screen_pos = (x / 100.0) * VENUE_BLOCK_WIDTH * SCREEN_BLOCKS
    return int(math.floor((parallax + screen_pos) / VENUE_BLOCK_WIDTH)) % count


def venue_at(offset: float, x: float) -> VenueHit:
    """The venue in front of a player at lateral *x* and its hotspot zone."""
    strip = venues(district_at(offset))
    idx = venue_index(offset, x, len(strip))
    venue = strip[idx]
    return VenueHit(venue=venue, zone=VENUE_ZONES[venue.type], index=idx)
