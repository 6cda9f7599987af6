"""components.state — The immutable world snapshot.

``WorldState`` is the single root aggregate.  Every tick and every
player action returns a *new* snapshot built with
``dataclasses.replace``; nothing here is ever mutated in place, so
collections are tuples and frozensets.

Countdown fields (``trip_ticks``, ``freeze_ticks``, the ``recent_*``
cool-downs) are decremented by the tick, never by wall-clock timers,
which keeps a run replayable from its seed.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from components.enums import (
    Archetype, District, Facing, FundingStage, GameOverCause, Locomotion,
    PedAction, Desperation, Screen, TimeOfDay, Zone,
)
from core.constants import PLAYER_START_X


# ── Player resources ─────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Stats:
    hunger: float = 70.0
    warmth: float = 70.0
    hope: float = 60.0
    stimulant: float = 0.0
    lsd_charges: int = 0
    money: int = 5
    elapsed_seconds: int = 0
    has_watch: bool = True
    has_laptop: bool = True
    has_phone: bool = True
    funding_stage: FundingStage = FundingStage.BOOTSTRAP
    found_items: frozenset[str] = frozenset()
    # Hidden, only ever grows: scales hope decay for the rest of the run.
    permanent_hope_loss: float = 0.0


@dataclass(frozen=True, slots=True)
class Companion:
    has_dog: bool = True
    dog_health: float = 100.0
    dog_sick: bool = False
    low_hunger_ticks: int = 0


@dataclass(frozen=True, slots=True)
class PlayerState:
    x: float = PLAYER_START_X
    facing: Facing = Facing.RIGHT
    locomotion: Locomotion = Locomotion.IDLE


@dataclass(frozen=True, slots=True)
class WorldInfo:
    scroll_offset: float = 0.0
    district: District = District.CROSS
    next_district: District = District.OXFORD
    blend: float = 0.0
    time_of_day: TimeOfDay = TimeOfDay.DAY
    is_raining: bool = False
    bins_restocked: bool = True
    services_open: bool = True
    shelter_open: bool = False
    zone: Zone | None = None
    venue_name: str = ""


# ── Entities ─────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Pedestrian:
    id: int
    x: float
    speed: float
    direction: int                      # +1 walking right, -1 left
    archetype: Archetype
    stealable: bool = True
    lurk_ticks: int = 0                 # > 0 while a dealer holds position


@dataclass(frozen=True, slots=True)
class Vehicle:
    id: int
    x: float
    speed: float
    stopped: bool = False
    is_encounter: bool = False
    variant: int = 0


@dataclass(frozen=True, slots=True)
class PoliceOfficer:
    x: float = 105.0
    active: bool = False
    direction: int = -1


@dataclass(frozen=True, slots=True)
class Wildlife:
    x: float = 0.0
    active: bool = False


@dataclass(frozen=True, slots=True)
class Entities:
    pedestrians: tuple[Pedestrian, ...] = ()
    vehicles: tuple[Vehicle, ...] = ()
    police: PoliceOfficer = field(default_factory=PoliceOfficer)
    wildlife: Wildlife = field(default_factory=Wildlife)
    next_id: int = 1

    def pedestrian(self, pid: int | None) -> Pedestrian | None:
        if pid is None:
            return None
        for ped in self.pedestrians:
            if ped.id == pid:
                return ped
        return None


# ── Flags, timers, feedback ──────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Feedback:
    """A display line (narrative or transaction toast).

    ``seq`` increases with every new line so a pending hide timer can
    tell whether it still owns the text it was scheduled for.
    """
    text: str = ""
    visible: bool = False
    seq: int = 0
    kind: str = ""                      # transaction: "gain" / "loss"


@dataclass(frozen=True, slots=True)
class Flags:
    is_paused: bool = False
    is_game_over: bool = False
    game_over_cause: GameOverCause | None = None
    is_victory: bool = False
    trip_ticks: int = 0
    recent_theft_ticks: int = 0
    recent_violence_ticks: int = 0
    recent_car_ticks: int = 0
    car_encounter_active: bool = False
    car_encounter_count: int = 0
    encounter_ticks: int = 0
    steal_window_ticks: int = 0
    steal_target: int | None = None
    dealer_nearby: bool = False
    pedestrian_actions: tuple[PedAction, ...] = ()
    desperation_available: tuple[Desperation, ...] = ()
    shop_open: bool = False
    shop_zone: Zone | None = None
    freeze_ticks: int = 0

    @property
    def trip_active(self) -> bool:
        return self.trip_ticks > 0

    @property
    def recent_illicit(self) -> bool:
        return (self.recent_theft_ticks > 0 or self.recent_violence_ticks > 0
                or self.recent_car_ticks > 0)


# ── Root aggregate ───────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class WorldState:
    screen: Screen = Screen.TITLE
    stats: Stats = field(default_factory=Stats)
    companion: Companion = field(default_factory=Companion)
    player: PlayerState = field(default_factory=PlayerState)
    world: WorldInfo = field(default_factory=WorldInfo)
    entities: Entities = field(default_factory=Entities)
    flags: Flags = field(default_factory=Flags)
    narrative: Feedback = field(default_factory=Feedback)
    transaction: Feedback = field(default_factory=Feedback)

    @property
    def is_over(self) -> bool:
        """Game over or won: only restart is accepted."""
        return self.flags.is_game_over or self.flags.is_victory

    @property
    def is_running(self) -> bool:
        """True when ticks and gameplay actions may change the snapshot."""
        return (self.screen is Screen.PLAYING
                and not self.flags.is_paused
                and not self.is_over)

    @property
    def steal_target(self) -> Pedestrian | None:
        return self.entities.pedestrian(self.flags.steal_target)


def initial_state(screen: Screen = Screen.TITLE) -> WorldState:
    """The fixed starting snapshot (location fields not yet derived)."""
    return WorldState(screen=screen)
