"""
core/scene.py — Scene interface

A scene is one screen of the game: the title card or the street.
The app keeps a stack and drives only the top one.  Scenes never
touch the snapshot directly; they read ``app.session.state`` and send
commands through ``app.session.dispatch``.

``ticking`` tells the app whether wall time should advance the world
while this scene is on top (the street does, the title doesn't).
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    ticking = False

    def on_enter(self, app: App):
        pass

    def on_exit(self, app: App):
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        """Feed one pygame event to the scene's input layer."""

    def update(self, dt: float, app: App):
        """Turn this frame's intents into session commands."""

    def draw(self, surface: pygame.Surface, app: App):
        pass
