"""ui — Input commands and the text HUD.

``commands`` holds the frozen command objects scenes send to the
session; ``hud`` draws the stat panel, buttons and feedback lines.
"""

from ui.commands import (
    ChooseShopOption, Command, Duck, ExitShop, IgnoreCar, Interact,
    MoveStart, MoveStop, Pause, PressButton, Restart, SellDrugs, StartGame,
)

__all__ = [
    "ChooseShopOption", "Command", "Duck", "ExitShop", "IgnoreCar",
    "Interact", "MoveStart", "MoveStop", "Pause", "PressButton", "Restart",
    "SellDrugs", "StartGame",
]
