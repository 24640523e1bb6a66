#!/usr/bin/env python3
"""
Light Cycle application entry point and renderer.

What this module does
- Opens a Pygame window and runs one single-threaded loop: input handling,
  fixed-rate simulation ticks, drawing.
- Forwards key presses and releases to GameState by their pygame key names;
  GameState decides what they mean in the current mode.
- Draws whatever GameState.snapshot() returns: menu, arena with trails and
  cycles, cosmetic effects, HUD, pause overlay and game-over screen.

Timing model
- The simulation advances in fixed ticks of TICK_DT seconds. Real elapsed time
  is accumulated and drained one tick at a time (capped per frame so a long
  stall does not trigger a burst of catch-up ticks).
- Rendering runs at the configured frame rate and never mutates the world.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python light_cycle.py [--difficulty hard] [--settings path]`

Controls
- Menu: 1 single player, 2 two players, D cycle AI difficulty, Esc quit.
- Player 1: WASD + Left Shift (boost). Player 2: arrows + Right Shift.
- P pause/resume, Esc back to menu.
"""

import argparse
import logging
import random
import sys
import time
from typing import Optional, Tuple

import numpy as np
import pygame
from pygame import gfxdraw

from lightcycle.camera import Camera2D
from lightcycle.constants import (
    BACKGROUND_COLOR,
    BORDER_COLOR,
    CELL_SIZE,
    CYAN,
    CYCLE_HEIGHT,
    CYCLE_WIDTH,
    DIFFICULTY_COLORS,
    GRID_COLOR,
    GRID_HEIGHT,
    GRID_WIDTH,
    HUD_COLOR,
    MAX_BOOST_ENERGY,
    MAX_TICKS_PER_FRAME,
    PAUSED_BORDER_COLOR,
    TICK_DT,
)
from lightcycle.data_models import AIDifficulty, CycleView, Direction, PlayerType, WorldSnapshot
from lightcycle.game_state import GameState
from lightcycle.modes import GameOver, Menu, Paused, Playing
from lightcycle.settings_loader import GameSettings, load_settings

logger = logging.getLogger("light_cycle")

GRID_SPACING = 50.0
SAFE_COORD_LIMIT = 30000


def _scaled(color: Tuple[int, int, int], k: float) -> Tuple[int, int, int]:
    return tuple(max(0, min(255, int(c * k))) for c in color)


def _with_alpha(color: Tuple[int, int, int], alpha: float) -> Tuple[int, int, int, int]:
    return (color[0], color[1], color[2], max(0, min(255, int(alpha * 255))))


# ============================================================
# Pygame Renderer
# ============================================================

class PygameRenderer:
    """
    Pygame loop: feeds keys to GameState, ticks it, draws its snapshot.
    """
    def __init__(self, state: GameState, settings: GameSettings):
        self.state = state
        self.settings = settings
        self.camera = Camera2D((settings.window_width, settings.window_height))
        self.surface = None
        self.clock = None
        self.running = True
        self._accumulator = 0.0
        self._shake_rng = random.Random()

    def run(self):
        pygame.init()
        pygame.display.set_caption("Light Cycle")
        size = (self.settings.window_width, self.settings.window_height)
        self.surface = pygame.display.set_mode(size, pygame.RESIZABLE)
        self.camera.set_viewport_size(*size)
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()
            self.step(real_dt)
            self.draw()

            self.clock.tick(self.settings.fps)

        pygame.quit()

    def step(self, real_dt: float):
        """Drain accumulated real time in fixed simulation ticks."""
        if not isinstance(self.state.mode, Playing):
            self._accumulator = 0.0
            return
        self._accumulator += real_dt
        ticks = 0
        while self._accumulator >= TICK_DT and ticks < MAX_TICKS_PER_FRAME:
            self.state.tick(TICK_DT)
            self._accumulator -= TICK_DT
            ticks += 1
        if ticks == MAX_TICKS_PER_FRAME:
            self._accumulator = 0.0

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                key = pygame.key.name(event.key)
                if key == "escape" and isinstance(self.state.mode, Menu):
                    self.running = False
                else:
                    self.state.key_down(key)

            elif event.type == pygame.KEYUP:
                self.state.key_up(pygame.key.name(event.key))

    # ------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        snap = self.state.snapshot()
        mode = snap.mode

        if isinstance(mode, Menu):
            self.draw_menu(surf, snap)
        elif isinstance(mode, Playing):
            offset = self.shake_offset(snap.screen_shake)
            self.draw_arena(surf, offset, BORDER_COLOR, grid=True)
            for cycle in snap.cycles:
                self.draw_trail(surf, cycle, offset)
            self.draw_sparks(surf, offset)
            for cycle in snap.cycles:
                if cycle.alive:
                    self.draw_cycle(surf, cycle, offset)
            self.draw_explosions(surf, offset)
            self.draw_hud(surf, snap)
        elif isinstance(mode, Paused):
            self.draw_arena(surf, (0.0, 0.0), PAUSED_BORDER_COLOR, grid=False)
            for cycle in snap.cycles:
                self.draw_trail(surf, cycle, (0.0, 0.0), dimmed=True)
            self.draw_overlay(surf, (0, 0, 0, 180))
            self.draw_centered(surf, "PAUSED", 0.35, (255, 255, 255), size=48)
            self.draw_centered(surf, "Press P to resume | ESC for menu", 0.45, HUD_COLOR)
        elif isinstance(mode, GameOver):
            self.draw_centered(surf, "GAME OVER", 0.35, (255, 0, 0), size=56)
            self.draw_centered(surf, mode.result.label, 0.45, (0, 255, 0), size=32)
            self.draw_centered(surf, "Press ESC to return to menu", 0.55, (255, 255, 255))

        pygame.display.flip()

    def shake_offset(self, shake: float) -> Tuple[float, float]:
        if shake <= 0.0 or not self.settings.screen_shake:
            return (0.0, 0.0)
        rng = self._shake_rng
        return (rng.uniform(-shake, shake), rng.uniform(-shake, shake))

    def draw_menu(self, surf, snap: WorldSnapshot):
        self.draw_centered(surf, "LIGHT CYCLE", 0.30, CYAN, size=64)
        self.draw_centered(surf, "Press 1 for Single Player", 0.42, (255, 255, 255))
        self.draw_centered(surf, "Press 2 for Two Players", 0.46, (255, 255, 255))
        diff: AIDifficulty = snap.difficulty
        self.draw_centered(surf, f"AI Difficulty: {diff.value} (Press D to change)", 0.52,
                           DIFFICULTY_COLORS[diff.value])
        self.draw_centered(surf, "P1: WASD + LShift (boost) | P2: Arrows + RShift (boost)", 0.60,
                           (128, 128, 128))

    def draw_arena(self, surf, offset, border_color, grid: bool):
        cam = self.camera
        if grid:
            x = GRID_SPACING
            while x < GRID_WIDTH:
                pygame.draw.line(surf, GRID_COLOR, cam.world_to_screen((x, 0.0), offset),
                                 cam.world_to_screen((x, GRID_HEIGHT), offset), 1)
                x += GRID_SPACING
            y = GRID_SPACING
            while y < GRID_HEIGHT:
                pygame.draw.line(surf, GRID_COLOR, cam.world_to_screen((0.0, y), offset),
                                 cam.world_to_screen((GRID_WIDTH, y), offset), 1)
                y += GRID_SPACING
        left, top = cam.world_to_screen((0.0, 0.0), offset)
        right, bottom = cam.world_to_screen((GRID_WIDTH, GRID_HEIGHT), offset)
        pygame.draw.rect(surf, border_color, pygame.Rect(left, top, right - left, bottom - top), 3)

    def draw_trail(self, surf, cycle: CycleView, offset, dimmed: bool = False):
        if len(cycle.trail) < 2:
            return
        cam = self.camera
        screen = cam.world_to_screen_many(cycle.trail, offset)
        pts = screen[np.all(np.abs(screen) <= SAFE_COORD_LIMIT, axis=1)].tolist()
        if len(pts) < 2:
            return
        if dimmed:
            pygame.draw.lines(surf, _scaled(cycle.color, 0.3), False, pts, cam.scale_length(CELL_SIZE))
            return
        pygame.draw.lines(surf, _scaled(cycle.color, 0.3), False, pts, cam.scale_length(CELL_SIZE * 2.5))
        pygame.draw.lines(surf, cycle.color, False, pts, cam.scale_length(CELL_SIZE))
        pygame.draw.lines(surf, _scaled(cycle.color, 1.2), False, pts, cam.scale_length(CELL_SIZE * 0.5))

    def draw_cycle(self, surf, cycle: CycleView, offset):
        cam = self.camera
        if cycle.direction in (Direction.UP, Direction.DOWN):
            body_w, body_h = CYCLE_WIDTH, CYCLE_HEIGHT
        else:
            body_w, body_h = CYCLE_HEIGHT, CYCLE_WIDTH
        center = _safe_point(cam.world_to_screen(cycle.position, offset))
        if center is None:
            return

        glow = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
        if cycle.is_boosting:
            pygame.draw.circle(glow, (255, 204, 51, 128), center, cam.scale_length(body_w * 2.5))
        intensity = 0.6 if cycle.is_boosting else 0.4
        glow_size = 2.0 if cycle.is_boosting else 1.5
        pygame.draw.circle(glow, _with_alpha(_scaled(cycle.color, intensity), 0.2), center,
                           cam.scale_length(body_w * glow_size))
        surf.blit(glow, (0, 0))

        w, h = cam.scale_length(body_w), cam.scale_length(body_h)
        body = pygame.Rect(0, 0, w, h)
        body.center = center
        pygame.draw.rect(surf, cycle.color, body)
        pygame.draw.rect(surf, _scaled(cycle.color, 1.3), body, 2)
        core = pygame.Rect(0, 0, cam.scale_length(8.0), cam.scale_length(8.0))
        core.center = center
        pygame.draw.rect(surf, (255, 255, 255), core)

    def draw_sparks(self, surf, offset):
        overlay = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
        for spark in self.state.effects.sparks:
            sp = _safe_point(self.camera.world_to_screen(spark.position, offset))
            if sp:
                radius = self.camera.scale_length(6.0 * spark.lifetime)
                pygame.draw.circle(overlay, _with_alpha(spark.color, spark.alpha), sp, radius)
        surf.blit(overlay, (0, 0))

    def draw_explosions(self, surf, offset):
        for explosion in self.state.effects.explosions:
            for particle in explosion.particles:
                sp = _safe_point(self.camera.world_to_screen(particle.position, offset))
                if sp is None:
                    continue
                alpha = particle.alpha * min(particle.lifetime / 1.5, 1.0)
                try:
                    gfxdraw.box(surf, pygame.Rect(sp[0] - 2, sp[1] - 2, 4, 4),
                                _with_alpha(particle.color, alpha))
                except (ValueError, pygame.error):
                    pass

    def draw_hud(self, surf, snap: WorldSnapshot):
        draw_text(surf, "Press P to Pause | Press ESC for Menu", 10, 10, HUD_COLOR)
        if self.state.last_event_msg:
            draw_text(surf, self.state.last_event_msg, 10, surf.get_height() - 26, HUD_COLOR)
        width = surf.get_width()
        for cycle in snap.cycles:
            if not cycle.alive or cycle.player_type is not PlayerType.HUMAN:
                continue
            bar_x = 10 if cycle.index == 0 else width - 210
            bar_y = 50
            pygame.draw.rect(surf, (50, 50, 50), pygame.Rect(bar_x, bar_y, 200, 20), 2)
            energy_w = int(cycle.boost_energy / MAX_BOOST_ENERGY * 196)
            if cycle.is_boosting:
                color = (255, 255, 100)
            elif cycle.boost_energy > 50.0:
                color = (0, 255, 100)
            elif cycle.boost_energy > 20.0:
                color = (255, 200, 0)
            else:
                color = (255, 50, 50)
            if energy_w > 0:
                pygame.draw.rect(surf, color, pygame.Rect(bar_x + 2, bar_y + 2, energy_w, 16))
            short = "P1" if cycle.index == 0 else "P2"
            draw_text(surf, f"{short} Boost", bar_x, bar_y - 18, cycle.color)

    def draw_overlay(self, surf, rgba):
        overlay = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
        overlay.fill(rgba)
        surf.blit(overlay, (0, 0))

    def draw_centered(self, surf, text, y_frac, color, size=20):
        img = _font(size).render(text, True, color)
        x = (surf.get_width() - img.get_width()) // 2
        y = int(surf.get_height() * y_frac)
        surf.blit(img, (x, y))


_cached_fonts = {}


def _font(size: int):
    font = _cached_fonts.get(size)
    if font is None:
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            font = pygame.font.SysFont("consolas", size)
        except (OSError, pygame.error):
            font = pygame.font.Font(None, size)
        _cached_fonts[size] = font
    return font


def draw_text(surface, text, x, y, color):
    img = _font(16).render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Light cycle arena game.")
    parser.add_argument("--settings", default=None, help="path to a settings JSON file")
    parser.add_argument("--difficulty", choices=[d.value.lower() for d in AIDifficulty], default=None,
                        help="AI tier preselected in the menu")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = load_settings(args.settings)
    difficulty = AIDifficulty.from_name(args.difficulty) if args.difficulty else settings.default_difficulty

    state = GameState(
        ai_difficulty=difficulty,
        player1_binding=settings.player1_keys,
        player2_binding=settings.player2_keys,
    )
    renderer = PygameRenderer(state, settings)
    logger.info("Starting Light Cycle (%dx%d @ %d fps)", settings.window_width,
                settings.window_height, settings.fps)
    renderer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
