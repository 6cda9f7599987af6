"""ui.hud — Text HUD for the street scene.

Plain rectangles and monospace text: stat bars, the three context
buttons, the narrative line, the money toast and the shop panel.
Everything reads the snapshot; nothing here writes it.
"""

from __future__ import annotations
import pygame

from components import ButtonAction, ResolvedButtons, WorldState
from logic.modifiers import district_name
from logic.zones import ShopOption

_BAR_BG = (40, 40, 48)
_TEXT = (220, 220, 220)
_DIM = (110, 110, 120)
_GAIN = (120, 230, 120)
_LOSS = (240, 110, 110)

_STAT_COLORS = {
    "hunger": (230, 170, 60),
    "warmth": (240, 100, 80),
    "hope": (110, 180, 255),
    "stimulant": (220, 90, 220),
}

BAR_W = 140
BAR_H = 10


def draw_overlay(surface: pygame.Surface, alpha: int = 200) -> None:
    """Full-screen semi-transparent dark overlay."""
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    surface.blit(overlay, (0, 0))


def draw_title_bar(surface: pygame.Surface, app,
                   x: int, y: int, w: int, text: str) -> None:
    """Draw a 30 px title bar at the top of a panel."""
    pygame.draw.rect(surface, (50, 50, 75), (x, y, w, 30))
    app.draw_text(surface, text, x + 12, y + 7,
                  (200, 200, 255), font=app.font_lg)


def draw_stat_bar(surface: pygame.Surface, app, x: int, y: int,
                  name: str, value: float) -> None:
    app.draw_text(surface, f"{name[:4].upper():<5}", x, y - 3, _TEXT, font=app.font_sm)
    pygame.draw.rect(surface, _BAR_BG, (x + 40, y, BAR_W, BAR_H))
    fill = int(BAR_W * max(0.0, min(100.0, value)) / 100.0)
    pygame.draw.rect(surface, _STAT_COLORS[name], (x + 40, y, fill, BAR_H))


def draw_stats(surface: pygame.Surface, app, state: WorldState,
               x: int = 12, y: int = 12) -> None:
    s = state.stats
    for i, name in enumerate(("hunger", "warmth", "hope", "stimulant")):
        draw_stat_bar(surface, app, x, y + i * 16, name, getattr(s, name))
    info = (f"${s.money}   {s.funding_stage.value.replace('_', ' ').upper()}"
            f"   {s.elapsed_seconds}s")
    app.draw_text(surface, info, x, y + 70, _TEXT)
    extras = []
    if s.lsd_charges:
        extras.append(f"tabs x{s.lsd_charges}")
    if state.companion.has_dog:
        sick = " (sick)" if state.companion.dog_sick else ""
        extras.append(f"dog {state.companion.dog_health:.0f}%{sick}")
    if state.flags.trip_active:
        extras.append("TRIPPING")
    if extras:
        app.draw_text(surface, "  ".join(extras), x, y + 88, _DIM, font=app.font_sm)


def draw_location(surface: pygame.Surface, app, state: WorldState) -> None:
    w = state.world
    where = district_name(w.district)
    line = f"{where}  {w.time_of_day.value}{'  rain' if w.is_raining else ''}"
    app.draw_text(surface, line, surface.get_width() - 12 - 9 * len(line), 12, _TEXT)
    if w.venue_name:
        app.draw_text(surface, w.venue_name, surface.get_width() - 12 - 7 * len(w.venue_name),
                      30, _DIM, font=app.font_sm)


def draw_button(surface: pygame.Surface, app, x: int, y: int,
                key: str, button: ButtonAction) -> None:
    color = _DIM if button.is_none else _TEXT
    pygame.draw.rect(surface, (30, 30, 40), (x, y, 180, 28))
    pygame.draw.rect(surface, color, (x, y, 180, 28), 1)
    app.draw_text(surface, f"[{key}] {button.label or '-'}", x + 8, y + 6, color)


def draw_buttons(surface: pygame.Surface, app, buttons: ResolvedButtons) -> None:
    y = surface.get_height() - 44
    for i, (key, button) in enumerate(zip("JKL", (buttons.a, buttons.b, buttons.c))):
        draw_button(surface, app, 12 + i * 192, y, key, button)


def draw_feedback(surface: pygame.Surface, app, state: WorldState) -> None:
    if state.narrative.visible:
        app.draw_text_bg(surface, state.narrative.text, 12,
                         surface.get_height() - 80, _TEXT)
    if state.transaction.visible:
        color = _GAIN if state.transaction.kind == "gain" else _LOSS
        app.draw_text_bg(surface, state.transaction.text, 12, 120, color,
                         font=app.font_lg)


def draw_shop(surface: pygame.Surface, app, title: str,
              options: tuple[ShopOption, ...], money: int) -> None:
    w, h = 420, 60 + 24 * len(options)
    x = (surface.get_width() - w) // 2
    y = (surface.get_height() - h) // 2
    draw_overlay(surface, 140)
    pygame.draw.rect(surface, (24, 28, 34), (x, y, w, h))
    draw_title_bar(surface, app, x, y, w, title)
    for i, opt in enumerate(options[:9]):
        price = f"${opt.cost}" if opt.cost else ""
        color = _DIM if opt.cost > money else _TEXT
        app.draw_text(surface, f"{i + 1}. {opt.label}", x + 16, y + 40 + i * 24, color)
        app.draw_text(surface, price, x + w - 70, y + 40 + i * 24, color)
    app.draw_text(surface, "[Esc] leave", x + 16, y + h - 18, _DIM, font=app.font_sm)
