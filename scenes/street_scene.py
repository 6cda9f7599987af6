"""
scenes/street_scene.py — The strip

Draws the current snapshot as a side-on street: the venue belt
scrolling behind the player, pedestrians, cars, the beat cop and the
odd ibis, plus the text HUD.  Input goes through ``InputManager`` and
out as session commands; the app turns frame time into the
one-second world tick while this scene is on top.

Controls:
  A/D or arrows = walk         S / Down = duck
  E             = enter / zone action
  J K L / 1 2 3 = context buttons
  X = sell a tab   Q = ignore car   P / Esc = pause   Shift+R = restart
  TAB = dev log overlay          F5 = reload tuning
"""

from __future__ import annotations
import pygame

from components import Archetype, Locomotion, WorldState
from core import tuning
from core.app import App
from core.constants import (
    SCREEN_BLOCKS, VENUE_BLOCK_WIDTH, VENUE_PARALLAX,
)
from core.scene import Scene
from logic.input_manager import InputContext, InputManager
from logic.modifiers import venues
from logic.zones import shop_options
from ui import hud

# ── UI constants ─────────────────────────────────────────────────────
_SKY = {
    "dawn": (60, 50, 80),
    "day": (90, 120, 150),
    "dusk": (70, 40, 70),
    "night": (14, 12, 24),
}
_KERB = (50, 50, 56)
_ROAD = (30, 30, 34)
_VENUE = (38, 34, 46)
_VENUE_EDGE = (255, 60, 170)
_PLAYER = (240, 220, 160)
_PED = (160, 160, 170)
_DEALER = (200, 80, 200)
_COP = (70, 110, 255)
_CAR = (180, 60, 60)
_IBIS = (240, 240, 240)
_DIM = (90, 90, 90)
_TEXT = (200, 200, 200)

_CAT_COLORS: dict[str, tuple[int, int, int]] = {
    "action":      (255, 220, 100),
    "narrative":   (200, 200, 200),
    "transaction": (120, 230, 120),
    "lock":        (120, 200, 255),
    "game":        (255, 80, 80),
    "funding":     (0, 255, 200),
    "session":     (180, 180, 180),
    "shop":        (255, 160, 80),
}

_STREET_Y = 360


def _sx(x: float, width: int) -> int:
    """Percent-of-screen x → pixels."""
    return int(x / 100.0 * width)


class StreetScene(Scene):
    ticking = True

    def __init__(self):
        self.input = InputManager()
        self.input.context = InputContext.STREET
        self.show_log = False

    # ── Input / update ───────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        self.input.feed(event)

    def update(self, dt: float, app: App):
        session = app.session
        state = session.state
        self.input.context = (InputContext.SHOP if state.flags.shop_open
                              else InputContext.STREET)
        self.input.end_frame()

        if self.input.just("toggle_debug"):
            self.show_log = not self.show_log
        if self.input.just("reload_tuning"):
            tuning.reload()

        shop_ids: tuple[str, ...] = ()
        if state.flags.shop_zone is not None:
            shop_ids = tuple(o.id for o in shop_options(state.flags.shop_zone))
        for cmd in self.input.commands(shop_ids):
            session.dispatch(cmd)
        self.input.begin_frame()

    # ── Draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        state = app.session.state
        w, h = surface.get_size()
        surface.fill(_SKY[state.world.time_of_day.value])
        self._draw_venues(surface, app, state)
        pygame.draw.rect(surface, _KERB, (0, _STREET_Y, w, 16))
        pygame.draw.rect(surface, _ROAD, (0, _STREET_Y + 16, w, h - _STREET_Y - 16))
        self._draw_entities(surface, state)
        self._draw_player(surface, state)

        hud.draw_stats(surface, app, state)
        hud.draw_location(surface, app, state)
        hud.draw_feedback(surface, app, state)
        hud.draw_buttons(surface, app, app.session.buttons())

        if state.flags.shop_open and state.flags.shop_zone is not None:
            hud.draw_shop(surface, app, state.world.venue_name,
                          shop_options(state.flags.shop_zone), state.stats.money)
        if state.flags.is_paused and not state.is_over:
            hud.draw_overlay(surface, 120)
            app.draw_text(surface, "PAUSED", w // 2 - 30, h // 2 - 10, _TEXT, font=app.font_lg)
        if state.is_over:
            self._draw_ending(surface, app, state)
        if self.show_log:
            self._draw_log(surface, app)

    def _draw_venues(self, surface: pygame.Surface, app: App, state: WorldState):
        w = surface.get_width()
        block = w / SCREEN_BLOCKS
        offset = state.world.scroll_offset * VENUE_PARALLAX
        strip = venues(state.world.district)
        first = int(offset // VENUE_BLOCK_WIDTH * SCREEN_BLOCKS) - 1
        shift = (offset / VENUE_BLOCK_WIDTH * SCREEN_BLOCKS) % 1.0
        for i in range(SCREEN_BLOCKS + 2):
            venue = strip[(first + i) % len(strip)]
            x = int((i - 1 - shift) * block)
            pygame.draw.rect(surface, _VENUE, (x + 2, _STREET_Y - 120, int(block) - 4, 120))
            pygame.draw.rect(surface, _VENUE_EDGE, (x + 2, _STREET_Y - 120, int(block) - 4, 120), 1)
            app.draw_text(surface, venue.name[:12], x + 6, _STREET_Y - 114, _DIM, font=app.font_sm)

    def _draw_entities(self, surface: pygame.Surface, state: WorldState):
        w = surface.get_width()
        for ped in state.entities.pedestrians:
            color = _DEALER if ped.archetype is Archetype.DEALER else _PED
            if ped.id == state.flags.steal_target:
                pygame.draw.rect(surface, (255, 255, 0), (_sx(ped.x, w) - 7, _STREET_Y - 47, 14, 46), 1)
            pygame.draw.rect(surface, color, (_sx(ped.x, w) - 5, _STREET_Y - 44, 10, 44))
        for car in state.entities.vehicles:
            pygame.draw.rect(surface, _CAR, (_sx(car.x, w) - 30, _STREET_Y + 24, 60, 26))
        cop = state.entities.police
        if cop.active:
            pygame.draw.rect(surface, _COP, (_sx(cop.x, w) - 6, _STREET_Y - 48, 12, 48))
        ibis = state.entities.wildlife
        if ibis.active:
            pygame.draw.ellipse(surface, _IBIS, (_sx(ibis.x, w) - 8, _STREET_Y - 14, 16, 12))

    def _draw_player(self, surface: pygame.Surface, state: WorldState):
        x = _sx(state.player.x, surface.get_width())
        low = state.player.locomotion in (Locomotion.DUCKING, Locomotion.COLLAPSED)
        height = 24 if low else 48
        pygame.draw.rect(surface, _PLAYER, (x - 6, _STREET_Y - height, 12, height))
        if state.companion.has_dog:
            dx = -18 * state.player.facing.value
            pygame.draw.rect(surface, (150, 110, 70), (x + dx - 8, _STREET_Y - 12, 16, 12))

    def _draw_ending(self, surface: pygame.Surface, app: App, state: WorldState):
        w, h = surface.get_size()
        hud.draw_overlay(surface, 180)
        if state.flags.is_victory:
            title = "IPO"
            line = f"You listed with ${state.stats.money} after {state.stats.elapsed_seconds}s."
        else:
            cause = state.flags.game_over_cause
            title = cause.value.upper() if cause else "GAME OVER"
            line = cause.message if cause else ""
        app.draw_text(surface, title, w // 2 - 40, h // 2 - 40, _VENUE_EDGE, font=app.font_lg)
        app.draw_text(surface, line, w // 2 - 4 * len(line), h // 2, _TEXT)
        app.draw_text(surface, "Shift+R to try again", w // 2 - 80, h // 2 + 30, _DIM)

    def _draw_log(self, surface: pygame.Surface, app: App):
        w, h = surface.get_size()
        panel = pygame.Surface((w // 2, h), pygame.SRCALPHA)
        panel.fill((16, 20, 24, 220))
        surface.blit(panel, (w // 2, 0))
        app.draw_text(surface, "DEV LOG", w // 2 + 8, 6, (0, 255, 200))
        for i, entry in enumerate(app.session.log.recent(28)):
            color = _CAT_COLORS.get(entry["cat"], _TEXT)
            text = f"{entry['tick']:>4} {entry['cat'][:6]:<6} {entry['msg']}"
            app.draw_text(surface, text[:70], w // 2 + 8, 26 + i * 18, color, font=app.font_sm)
        timers = app.session.timers.debug_dump()
        app.draw_text(surface, "timers: " + ", ".join(timers[:4]), w // 2 + 8, h - 20,
                      _DIM, font=app.font_sm)
