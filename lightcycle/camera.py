#!/usr/bin/env python3
"""
Camera utilities for 2D arena-to-screen transforms.
"""
from typing import Tuple

import numpy as np

from .constants import GRID_HEIGHT, GRID_WIDTH, VIEW_HEIGHT, VIEW_WIDTH

ARENA_MARGIN_PX = 10


class Camera2D:
    """
    Fixed camera that fits the whole arena into the window, letterboxed.

    ``upp`` is arena units (pixels) per screen pixel; the arena is never
    scrolled, only scaled and centered.
    """

    def __init__(self, viewport_size: Tuple[int, int] = (VIEW_WIDTH, VIEW_HEIGHT)):
        self.center = [GRID_WIDTH / 2, GRID_HEIGHT / 2]
        self.upp = 1.0
        self.viewport_size = viewport_size
        self.fit_arena()

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (max(w, 1), max(h, 1))
        self.fit_arena()

    def fit_arena(self) -> None:
        w, h = self.viewport_size
        usable_w = max(w - 2 * ARENA_MARGIN_PX, 1)
        usable_h = max(h - 2 * ARENA_MARGIN_PX, 1)
        self.upp = max(GRID_WIDTH / usable_w, GRID_HEIGHT / usable_h)

    def world_to_screen(self, pos: Tuple[float, float],
                        offset: Tuple[float, float] = (0.0, 0.0)) -> Tuple[int, int]:
        """Convert an arena point to pixels; ``offset`` is in arena units (screen shake)."""
        cx, cy = self.center
        px = (pos[0] + offset[0] - cx) / self.upp + self.viewport_size[0] / 2
        py = (pos[1] + offset[1] - cy) / self.upp + self.viewport_size[1] / 2
        return (int(px), int(py))

    def world_to_screen_many(self, points: np.ndarray,
                             offset: Tuple[float, float] = (0.0, 0.0)) -> np.ndarray:
        """Vectorised world_to_screen for an (n, 2) array; returns an (n, 2) int array."""
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        half = np.array(self.viewport_size, dtype=float) / 2
        return ((pts + np.array(offset) - np.array(self.center)) / self.upp + half).astype(int)

    def scale_length(self, length: float) -> int:
        """Arena length in whole screen pixels, never below 1."""
        return max(1, int(round(length / self.upp)))
