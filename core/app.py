"""
core/app.py — Pygame application shell

Owns the window, the scene stack and the heartbeat.  The running game
lives on ``app.session`` (a ``GameSession``) and is shared by every
scene; scenes only read its snapshot and dispatch commands to it.

Each frame:

1. pygame events go to the top scene (F11 and resizes are handled here)
2. the top scene updates (turns intents into session commands)
3. if the scene is ``ticking``, whole seconds of frame time become
   ``session.tick()`` calls; the session timers are pumped every frame
4. the scene draws to a fixed-size surface scaled to the window

    app = App(session, title="Kerbside", width=960, height=540)
    app.push_scene(TitleScene())
    app.run()
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import pygame
from core.constants import FPS, SCREEN_H, SCREEN_W, TICK_MS
from core.scene import Scene

if TYPE_CHECKING:
    from simulation.session import GameSession


class App:
    def __init__(self, session: GameSession, title: str = "Kerbside",
                 width: int = SCREEN_W, height: int = SCREEN_H):
        pygame.init()
        self._windowed_size = (width, height)
        # Everything is drawn at the design size and scaled on flip.
        self._render_surface = pygame.Surface((width, height))
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fullscreen = False
        self.fps = FPS
        self.dt = 0.0

        self.session = session
        self._tick_seconds = TICK_MS / 1000.0
        self._tick_acc = 0.0

        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18)

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self._scenes:
            self._scenes[-1].on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def replace_scene(self, scene: Scene):
        """Swap the top scene (title → street)."""
        if self._scenes:
            self._scenes.pop().on_exit(self)
        self._tick_acc = 0.0
        self._scenes.append(scene)
        scene.on_enter(self)

    # -- Heartbeat --

    def _heartbeat(self, dt: float) -> None:
        """Turn frame time into one-second session ticks."""
        scene = self.scene
        if scene is not None and scene.ticking:
            self._tick_acc += dt
            while self._tick_acc >= self._tick_seconds:
                self._tick_acc -= self._tick_seconds
                self.session.tick()
        self.session.pump()

    # -- Main loop --

    def run(self):
        print(f"[APP] Running at {self.fps} fps, tick every {TICK_MS} ms")
        while self.running:
            self.dt = self.clock.tick(self.fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    self.toggle_fullscreen()
                elif event.type == pygame.VIDEORESIZE and not self.fullscreen:
                    self._windowed_size = (event.w, event.h)
                    self.screen = pygame.display.set_mode(
                        (event.w, event.h), pygame.RESIZABLE)
                elif self.scene:
                    self.scene.handle_event(event, self)

            if self.scene:
                self.scene.update(self.dt, self)
            self._heartbeat(self.dt)

            if self.scene:
                self.scene.draw(self._render_surface, self)
            pygame.transform.scale(self._render_surface,
                                   self.screen.get_size(), self.screen)
            pygame.display.flip()

        s = self.session.state
        print(f"[APP] Quit after {s.stats.elapsed_seconds}s of play")
        pygame.quit()

    def toggle_fullscreen(self):
        """Switch between windowed and fullscreen (F11)."""
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(
                self._windowed_size, pygame.RESIZABLE)

    # -- Text --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Blit one line of text.  Returns its rect."""
        img = (font or self.font).render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2):
        """Blit text over a translucent box (feedback lines)."""
        img = (font or self.font).render(text, True, color)
        w, h = img.get_size()
        box = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        box.fill(bg)
        surface.blit(box, (x - pad, y - pad))
        return surface.blit(img, (x, y))
