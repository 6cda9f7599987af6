"""logic/resolver.py — What the three context buttons do right now.

``resolve(state)`` is pure: same snapshot, same triple.  Rules run in
strict priority and each only fills slots still empty:

1. car encounter active            → A approach
2. dealer in reach                 → A buy
3. tab held, in the alley, sober   → A take
4. pedestrian actions              → A steal, B pitch, C trade else confront
5. purse window, no pedestrian     → any empty B/C grab
6. desperation actions             → each fills the first empty slot, in order
7. current zone                    → A zone action

The display lock lives in ``simulation/action_lock.py``.
"""

from __future__ import annotations

from components import (
    ActionKind, ButtonAction, Desperation, NO_ACTION, PedAction,
    ResolvedButtons, WorldState, Zone,
)
from logic.zones import ZONE_LABELS

DESPERATION_LABELS: dict[Desperation, str] = {
    Desperation.THEFT: "SHOPLIFT",
    Desperation.SELL: "SELL STUFF",
    Desperation.DOG_SACRIFICE: "THE DOG",
    Desperation.BUY_STIMULANT: "SCORE",
    Desperation.PURSE_STEAL: "GRAB PURSE",
}

PEDESTRIAN_LABELS: dict[PedAction, str] = {
    PedAction.STEAL: "STEAL",
    PedAction.PITCH: "PITCH",
    PedAction.TRADE: "TRADE",
    PedAction.CONFRONT: "CONFRONT",
}

APPROACH = ButtonAction(ActionKind.CAR_ENCOUNTER, "approach", "APPROACH CAR")
BUY = ButtonAction(ActionKind.DEALER, "buy", "BUY")
TAKE = ButtonAction(ActionKind.LSD, "take", "DROP A TAB")
GRAB = ButtonAction(ActionKind.PURSE, "purse", "GRAB")


def pedestrian_button(action: PedAction) -> ButtonAction:
    return ButtonAction(ActionKind.PEDESTRIAN, action.value,
                        PEDESTRIAN_LABELS[action])


def desperation_button(action: Desperation) -> ButtonAction:
    return ButtonAction(ActionKind.DESPERATION, action.value,
                        DESPERATION_LABELS[action])


def zone_button(zone: Zone) -> ButtonAction:
    return ButtonAction(ActionKind.ZONE, zone.value, ZONE_LABELS[zone])


def resolve(state: WorldState) -> ResolvedButtons:
    f = state.flags
    slots = [NO_ACTION, NO_ACTION, NO_ACTION]

    def fill(i: int, button: ButtonAction) -> None:
        if slots[i].is_none:
            slots[i] = button

    # 1. car encounter
    if f.car_encounter_active:
        fill(0, APPROACH)

    # 2. dealer
    if f.dealer_nearby:
        fill(0, BUY)

    # 3. tab in the alley
    if (state.stats.lsd_charges > 0 and state.world.zone is Zone.ALLEY
            and not f.trip_active):
        fill(0, TAKE)

    # 4. pedestrian
    peds = f.pedestrian_actions
    if peds:
        if PedAction.STEAL in peds:
            fill(0, pedestrian_button(PedAction.STEAL))
        if PedAction.PITCH in peds:
            fill(1, pedestrian_button(PedAction.PITCH))
        if PedAction.TRADE in peds:
            fill(2, pedestrian_button(PedAction.TRADE))
        elif PedAction.CONFRONT in peds:
            fill(2, pedestrian_button(PedAction.CONFRONT))

    # 5. legacy purse window
    if f.steal_window_ticks > 0 and not peds and not f.dealer_nearby:
        fill(1, GRAB)
        fill(2, GRAB)

    # 6. desperation
    for action in f.desperation_available:
        for i in range(3):
            if slots[i].is_none:
                slots[i] = desperation_button(action)
                break

    # 7. zone
    if state.world.zone is not None:
        fill(0, zone_button(state.world.zone))

    return ResolvedButtons(*slots)
