"""ui.commands — Command objects emitted by the input layer.

Scenes never touch the snapshot directly: key presses become one of
these and go through ``GameSession.dispatch``, which serializes them
with the one-second tick.

Add new command types here whenever a control needs to reach the
session.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from components import Facing, Slot


@dataclass(frozen=True, slots=True)
class StartGame:
    """Leave the title screen."""


@dataclass(frozen=True, slots=True)
class Restart:
    """Fresh run from the initial snapshot."""


@dataclass(frozen=True, slots=True)
class MoveStart:
    """Start walking; repeats every 50 ms until ``MoveStop``."""
    direction: Facing


@dataclass(frozen=True, slots=True)
class MoveStop:
    pass


@dataclass(frozen=True, slots=True)
class Duck:
    down: bool = True


@dataclass(frozen=True, slots=True)
class Interact:
    pass


@dataclass(frozen=True, slots=True)
class PressButton:
    """Run the visible context button in *slot*."""
    slot: Slot


@dataclass(frozen=True, slots=True)
class SellDrugs:
    pass


@dataclass(frozen=True, slots=True)
class ChooseShopOption:
    option_id: str


@dataclass(frozen=True, slots=True)
class ExitShop:
    pass


@dataclass(frozen=True, slots=True)
class Pause:
    """Toggle pause."""


@dataclass(frozen=True, slots=True)
class IgnoreCar:
    pass


# Union of every command type — extend as new commands are added.
Command = Union[
    StartGame, Restart, MoveStart, MoveStop, Duck, Interact, PressButton,
    SellDrugs, ChooseShopOption, ExitShop, Pause, IgnoreCar,
]
