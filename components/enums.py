"""components.enums — Closed vocabularies of the street simulation.

String-valued so TOML tables and log lines can name members directly
(``District("surry_hills")``, ``Archetype("cop")``).  An unknown name
raises ``ValueError``.
"""

from __future__ import annotations
from enum import Enum


class Screen(Enum):
    TITLE = "title"
    PLAYING = "playing"


class District(Enum):
    """The nine street segments, in belt order."""
    CROSS = "cross"
    OXFORD = "oxford"
    CBD = "cbd"
    CHINATOWN = "chinatown"
    CENTRAL = "central"
    SURRY_HILLS = "surry_hills"
    CABRAMATTA = "cabramatta"
    PARRAMATTA = "parramatta"
    MOUNT_DRUITT = "mount_druitt"


class ModifierKey(Enum):
    FOOD = "food"
    SEX_TRADE = "sex_trade"
    THEFT = "theft"
    DRUGS = "drugs"
    COPS = "cops"
    KINDNESS = "kindness"
    SHELTER = "shelter"
    VIOLENCE = "violence"
    GAMBLING = "gambling"
    PITCH = "pitch"
    WILDLIFE = "wildlife"


class TimeOfDay(Enum):
    DAWN = "dawn"
    DAY = "day"
    DUSK = "dusk"
    NIGHT = "night"

    def next(self) -> TimeOfDay:
        order = list(TimeOfDay)
        return order[(order.index(self) + 1) % len(order)]


class Archetype(Enum):
    BACKPACKER = "backpacker"
    SEXWORKER = "sexworker"
    DEALER = "dealer"
    CLUBBER = "clubber"
    COP = "cop"
    JUNKIE = "junkie"
    TOURIST = "tourist"
    HOON = "hoon"
    SECURITY = "security"
    BUSKER = "busker"
    STUDENT = "student"
    QUEER_ELDER = "queer_elder"
    OFFICE_WORKER = "office_worker"
    BUSINESSMAN = "businessman"
    PENSIONER = "pensioner"
    VC = "vc"
    FOUNDER = "founder"
    AUNTIE = "auntie"
    UNCLE = "uncle"


class VenueType(Enum):
    BAR = "bar"
    FOOD = "food"
    CAFE = "cafe"
    VC = "vc"
    HUB = "hub"
    CLUB = "club"
    PAWN = "pawn"
    SHELTER = "shelter"
    ALLEY = "alley"
    HOSTEL = "hostel"
    SHOP = "shop"
    DERELICT = "derelict"
    CORNER = "corner"
    LANDMARK = "landmark"


class Zone(Enum):
    """Hotspot zone a venue activates under the player."""
    ASK_HELP = "ask_help"
    BINS = "bins"
    SERVICES = "services"
    SHELTER = "shelter"
    SLEEP = "sleep"
    BAR = "bar"
    CAFE = "cafe"
    FOOD_VENDOR = "food_vendor"
    VC_FIRM = "vc_firm"
    STRIP_CLUB = "strip_club"
    PAWN = "pawn"
    ALLEY = "alley"


class FundingStage(Enum):
    BOOTSTRAP = "bootstrap"
    PRE_SEED = "pre_seed"
    SEED = "seed"
    SERIES_A = "series_a"
    SERIES_B = "series_b"
    IPO = "ipo"

    @property
    def index(self) -> int:
        return list(FundingStage).index(self)

    @property
    def is_terminal(self) -> bool:
        return self is FundingStage.IPO

    def next(self) -> FundingStage:
        order = list(FundingStage)
        return order[min(self.index + 1, len(order) - 1)]


class GameOverCause(Enum):
    STARVED = "starved"
    FROZE = "froze"
    HOPELESS = "hopeless"
    OVERDOSE = "overdose"
    ARRESTED = "arrested"
    VIOLENCE = "violence"
    DISAPPEARED = "disappeared"

    @property
    def message(self) -> str:
        return _CAUSE_MESSAGES[self]


_CAUSE_MESSAGES = {
    GameOverCause.STARVED: "You starved.",
    GameOverCause.FROZE: "You froze.",
    GameOverCause.HOPELESS: "You stopped trying.",
    GameOverCause.OVERDOSE: "Your heart couldn't keep up.",
    GameOverCause.ARRESTED: "You were taken off the street.",
    GameOverCause.VIOLENCE: "You picked the wrong fight.",
    GameOverCause.DISAPPEARED: "You didn't come back.",
}


class Facing(Enum):
    LEFT = -1
    RIGHT = 1


class Locomotion(Enum):
    IDLE = "idle"
    WALKING = "walking"
    DUCKING = "ducking"
    COLLAPSED = "collapsed"


class PedAction(Enum):
    STEAL = "steal"
    PITCH = "pitch"
    TRADE = "trade"
    CONFRONT = "confront"


class Desperation(Enum):
    """Fallback actions, in the order they claim button slots."""
    THEFT = "theft"
    SELL = "sell"
    DOG_SACRIFICE = "dog_sacrifice"
    BUY_STIMULANT = "buy_stimulant"
    PURSE_STEAL = "purse_steal"


class ActionKind(Enum):
    NONE = "none"
    CAR_ENCOUNTER = "car_encounter"
    DEALER = "dealer"
    LSD = "lsd"
    PEDESTRIAN = "pedestrian"
    PURSE = "purse"
    DESPERATION = "desperation"
    ZONE = "zone"


class Slot(Enum):
    A = "a"
    B = "b"
    C = "c"
