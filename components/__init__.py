"""components — Snapshot dataclasses and vocabularies, organised by domain.

Submodules
----------
enums      District, Archetype, Zone, FundingStage, GameOverCause, ...
state      WorldState and its frozen parts (Stats, Entities, Flags, ...)
actions    ButtonAction, ResolvedButtons
dev_log    DevLog ring buffer

All public names are re-exported here so code can do
``from components import WorldState``.
"""

# ── Vocabularies ─────────────────────────────────────────────────────
from components.enums import (
    Screen, District, ModifierKey, TimeOfDay, Archetype, VenueType, Zone,
    FundingStage, GameOverCause, Facing, Locomotion, PedAction,
    Desperation, ActionKind, Slot,
)

# ── Snapshot ─────────────────────────────────────────────────────────
from components.state import (
    Stats, Companion, PlayerState, WorldInfo, Pedestrian, Vehicle,
    PoliceOfficer, Wildlife, Entities, Feedback, Flags, WorldState,
    initial_state,
)

# ── Resolver output ──────────────────────────────────────────────────
from components.actions import ButtonAction, ResolvedButtons, NO_ACTION

# ── Session resources ────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # enums
    "Screen", "District", "ModifierKey", "TimeOfDay", "Archetype",
    "VenueType", "Zone", "FundingStage", "GameOverCause", "Facing",
    "Locomotion", "PedAction", "Desperation", "ActionKind", "Slot",
    # state
    "Stats", "Companion", "PlayerState", "WorldInfo", "Pedestrian",
    "Vehicle", "PoliceOfficer", "Wildlife", "Entities", "Feedback",
    "Flags", "WorldState", "initial_state",
    # actions
    "ButtonAction", "ResolvedButtons", "NO_ACTION",
    # resources
    "DevLog",
]
