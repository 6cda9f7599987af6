"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and session commands.  The scene feeds
in raw events; the manager maps them to *intents* based on the current
**input context** (title, street, shop), then ``commands()`` turns this
frame's intents into ``ui.commands`` objects for ``GameSession``.

Usage (in street_scene):

    self.input = InputManager()
    # each frame:
    self.input.begin_frame()
    for event in events:
        self.input.feed(event)
    self.input.end_frame()          # captures held-key state

    for cmd in self.input.commands():
        session.dispatch(cmd)
"""

from __future__ import annotations
from enum import Enum, auto
import pygame

from components import Facing, Slot
from ui.commands import (
    ChooseShopOption, Duck, ExitShop, IgnoreCar, Interact, MoveStart,
    MoveStop, Pause, PressButton, Restart, SellDrugs, StartGame,
)


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Determines which key-bindings are active."""
    TITLE  = auto()   # title card
    STREET = auto()   # walking the strip
    SHOP   = auto()   # inside a venue's option list


# ── Intent names (strings for flexibility, not an enum) ─────────────
# Title:   start
# Street:  move_left  move_right  duck  interact
#          action_a  action_b  action_c  sell  ignore
#          pause  restart  toggle_debug  reload_tuning
# Shop:    option_1 .. option_9  exit  pause  toggle_debug


# ── Default key bindings ────────────────────────────────────────────

# Each binding is  (pygame key constant, modifier mask or 0)
# For mouse buttons we use negative constants: -1 = LMB, -3 = RMB

_TITLE_BINDS: dict[str, list[tuple[int, int]]] = {
    "start":        [(pygame.K_RETURN, 0), (pygame.K_SPACE, 0), (-1, 0)],
}

_STREET_BINDS: dict[str, list[tuple[int, int]]] = {
    # Movement  (held — continuous)
    "move_left":    [(pygame.K_a, 0), (pygame.K_LEFT, 0)],
    "move_right":   [(pygame.K_d, 0), (pygame.K_RIGHT, 0)],
    "duck":         [(pygame.K_s, 0), (pygame.K_DOWN, 0)],
    # Actions  (press — discrete)
    "interact":     [(pygame.K_e, 0), (-3, 0)],
    "action_a":     [(pygame.K_j, 0), (pygame.K_1, 0)],
    "action_b":     [(pygame.K_k, 0), (pygame.K_2, 0)],
    "action_c":     [(pygame.K_l, 0), (pygame.K_3, 0)],
    "sell":         [(pygame.K_x, 0)],
    "ignore":       [(pygame.K_q, 0)],
    "pause":        [(pygame.K_p, 0), (pygame.K_ESCAPE, 0)],
    "restart":      [(pygame.K_r, pygame.KMOD_SHIFT)],
    # Debug / toggles
    "toggle_debug": [(pygame.K_TAB, 0)],
    "reload_tuning":[(pygame.K_F5, 0)],
}

_SHOP_BINDS: dict[str, list[tuple[int, int]]] = {
    **{f"option_{n}": [(getattr(pygame, f"K_{n}"), 0)] for n in range(1, 10)},
    "exit":         [(pygame.K_ESCAPE, 0), (pygame.K_e, 0)],
    "pause":        [(pygame.K_p, 0)],
    "toggle_debug": [(pygame.K_TAB, 0)],
}

_SLOTS = {"action_a": Slot.A, "action_b": Slot.B, "action_c": Slot.C}


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Context-aware input mapper.

    Call ``begin_frame()`` before processing events,
    ``feed(event)`` for each pygame event,
    ``end_frame()`` after all events.

    Then use ``just(intent)`` for discrete presses,
    ``held(intent)`` for continuous holds, or ``commands()``.
    """

    def __init__(self):
        self.context: InputContext = InputContext.TITLE
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Intents currently held (key is down right now)
        self._held: set[str] = set()
        # Direction we last told the session to walk in
        self._walking: Facing | None = None
        self._ducking: bool = False
        # Stash for unhandled raw events the scene still needs (e.g. QUIT)
        self.raw_events: list[pygame.event.Event] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self.raw_events.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event.  Maps it to intents based on context."""
        if event.type == pygame.QUIT:
            self.raw_events.append(event)
            return

        # KEYDOWN → discrete intent
        if event.type == pygame.KEYDOWN:
            binds = self._active_binds()
            mods = pygame.key.get_mods()
            for intent, key_list in binds.items():
                for key, req_mod in key_list:
                    if key < 0:
                        continue  # mouse binding — handled in MOUSEBUTTONDOWN
                    if event.key == key:
                        if req_mod == 0 or (mods & req_mod):
                            self._pressed.add(intent)
                            break

        # MOUSEBUTTONDOWN → discrete intent
        elif event.type == pygame.MOUSEBUTTONDOWN:
            binds = self._active_binds()
            neg_button = -event.button  # -1 for LMB, -3 for RMB
            for intent, key_list in binds.items():
                for key, _mod in key_list:
                    if key == neg_button:
                        self._pressed.add(intent)
                        break

        else:
            self.raw_events.append(event)

    def end_frame(self):
        """Snapshot held-key state for continuous intents (walk, duck)."""
        self._held.clear()
        keys = pygame.key.get_pressed()
        mods = pygame.key.get_mods()
        for intent, key_list in self._active_binds().items():
            for key, req_mod in key_list:
                if key < 0:
                    continue
                if keys[key]:
                    if req_mod == 0 or (mods & req_mod):
                        self._held.add(intent)
                        break

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame (rising edge)."""
        return intent in self._pressed

    def held(self, intent: str) -> bool:
        """True if the intent is continuously held down."""
        return intent in self._held

    def direction(self) -> Facing | None:
        """Held walking direction; both or neither held means none."""
        left, right = self.held("move_left"), self.held("move_right")
        if left == right:
            return None
        return Facing.LEFT if left else Facing.RIGHT

    def any_pressed(self) -> set[str]:
        """Return all intents pressed this frame."""
        return set(self._pressed)

    # ── commands ────────────────────────────────────────────────

    def commands(self, shop_ids: tuple[str, ...] = ()) -> list:
        """This frame's session commands, in a stable order.

        *shop_ids* are the option ids of the open shop, in menu order.
        """
        out: list = []
        if self.context == InputContext.TITLE:
            if self.just("start"):
                out.append(StartGame())
            return out

        if self.context == InputContext.SHOP:
            self._release(out)
            for n, option_id in enumerate(shop_ids[:9], start=1):
                if self.just(f"option_{n}"):
                    out.append(ChooseShopOption(option_id))
            if self.just("exit"):
                out.append(ExitShop())
            if self.just("pause"):
                out.append(Pause())
            return out

        # Street: edge-detect held walk / duck into start / stop pairs
        want = self.direction()
        if want is not self._walking:
            if want is None:
                out.append(MoveStop())
            else:
                if self._walking is not None:
                    out.append(MoveStop())
                out.append(MoveStart(want))
            self._walking = want
        ducking = self.held("duck")
        if ducking != self._ducking:
            out.append(Duck(ducking))
            self._ducking = ducking

        if self.just("interact"):
            out.append(Interact())
        for intent, slot in _SLOTS.items():
            if self.just(intent):
                out.append(PressButton(slot))
        if self.just("sell"):
            out.append(SellDrugs())
        if self.just("ignore"):
            out.append(IgnoreCar())
        if self.just("pause"):
            out.append(Pause())
        if self.just("restart"):
            out.append(Restart())
        return out

    def _release(self, out: list) -> None:
        if self._walking is not None:
            out.append(MoveStop())
            self._walking = None
        if self._ducking:
            out.append(Duck(False))
            self._ducking = False

    # ── internal ────────────────────────────────────────────────

    def _active_binds(self) -> dict[str, list[tuple[int, int]]]:
        if self.context == InputContext.TITLE:
            return _TITLE_BINDS
        elif self.context == InputContext.STREET:
            return _STREET_BINDS
        elif self.context == InputContext.SHOP:
            return _SHOP_BINDS
        return {}
