"""
scenes/title_scene.py — Title card

Shows the premise and waits for Enter / Space / click, then starts
the session and swaps in the street.
"""

from __future__ import annotations
import pygame

from core.app import App
from core.scene import Scene
from logic.input_manager import InputContext, InputManager

_BG = (12, 10, 18)
_NEON = (255, 60, 170)
_TEXT = (200, 200, 200)
_DIM = (110, 110, 120)

_BLURB = (
    "Sydney, 1991.  You had a company.  Now you have a dog,",
    "a laptop you haven't pawned yet, and a pitch.",
    "",
    "Eat.  Stay warm.  Don't lose hope.  Raise your round.",
)

_CONTROLS = (
    "A/D walk   S duck   E enter / use   J K L context buttons",
    "X sell a tab   Q wave off a car   P pause   Shift+R restart",
    "TAB dev log   F5 reload tuning   F11 fullscreen",
)


class TitleScene(Scene):
    def __init__(self):
        self.input = InputManager()
        self.input.context = InputContext.TITLE

    def handle_event(self, event: pygame.event.Event, app: App):
        self.input.feed(event)

    def update(self, dt: float, app: App):
        self.input.end_frame()
        commands = self.input.commands()
        self.input.begin_frame()
        if not commands:
            return
        for cmd in commands:
            app.session.dispatch(cmd)
        from scenes.street_scene import StreetScene
        app.replace_scene(StreetScene())

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill(_BG)
        w = surface.get_width()
        app.draw_text(surface, "K E R B S I D E", w // 2 - 80, 120, _NEON, font=app.font_lg)
        for i, line in enumerate(_BLURB):
            app.draw_text(surface, line, 120, 190 + i * 20, _TEXT)
        for i, line in enumerate(_CONTROLS):
            app.draw_text(surface, line, 120, 320 + i * 18, _DIM, font=app.font_sm)
        app.draw_text(surface, "[Enter] start", w // 2 - 60, 420, _NEON)
