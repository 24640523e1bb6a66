#!/usr/bin/env python3
"""
Data models for Light Cycle.

This module defines the small value types shared between the simulation core
and the viewer: headings, controller kinds, AI tiers, key bindings and the
read-only world snapshot handed to the renderer each frame.

Units and usage
- positions are arena pixels with y growing downward (screen convention).
- key names are the lower-case names produced by ``pygame.key.name`` so the
  core never has to import pygame.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .modes import Mode


class Direction(Enum):
    """Axis-aligned heading. The value is the unit movement vector."""
    UP = (0.0, -1.0)
    DOWN = (0.0, 1.0)
    LEFT = (-1.0, 0.0)
    RIGHT = (1.0, 0.0)

    def velocity(self, speed: float) -> Tuple[float, float]:
        """Movement vector for one tick at ``speed`` px per tick."""
        return (self.value[0] * speed, self.value[1] * speed)

    def is_opposite(self, other: "Direction") -> bool:
        return self.value[0] + other.value[0] == 0 and self.value[1] + other.value[1] == 0

    def perpendiculars(self) -> Tuple["Direction", "Direction"]:
        if self in (Direction.UP, Direction.DOWN):
            return (Direction.LEFT, Direction.RIGHT)
        return (Direction.UP, Direction.DOWN)


class PlayerType(Enum):
    HUMAN = "Human"
    COMPUTER = "Computer"


class AIDifficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    def next(self) -> "AIDifficulty":
        """Menu cycling order: Easy -> Medium -> Hard -> Easy."""
        order = list(AIDifficulty)
        return order[(order.index(self) + 1) % len(order)]

    @classmethod
    def from_name(cls, name: str) -> "AIDifficulty":
        """Case-insensitive lookup by tier name; raises ValueError if unknown."""
        for tier in cls:
            if tier.value.lower() == str(name).strip().lower():
                return tier
        raise ValueError(f"Unknown AI difficulty: {name!r}")


@dataclass(frozen=True)
class ControlBinding:
    """Four directional key names plus one boost key name."""
    up: str
    down: str
    left: str
    right: str
    boost: str

    def direction_for(self, key: str) -> Optional[Direction]:
        if key == self.up:
            return Direction.UP
        if key == self.down:
            return Direction.DOWN
        if key == self.left:
            return Direction.LEFT
        if key == self.right:
            return Direction.RIGHT
        return None


PLAYER1_BINDING = ControlBinding(up="w", down="s", left="a", right="d", boost="left shift")
PLAYER2_BINDING = ControlBinding(up="up", down="down", left="left", right="right", boost="right shift")


@dataclass(frozen=True)
class CycleView:
    """
    Render-facing view of one light cycle.

    Fields:
    - index: roster slot (0 or 1)
    - label: "Player 1", "Player 2" or "Computer"
    - trail: read-only (n, 2) array of trail points, oldest first
    - color: RGB tuple identifying the cycle
    """
    index: int
    label: str
    alive: bool
    position: Tuple[float, float]
    direction: Direction
    trail: np.ndarray = field(compare=False)
    boost_energy: float
    is_boosting: bool
    player_type: PlayerType
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class WorldSnapshot:
    """Everything the renderer needs for one frame."""
    mode: Mode
    difficulty: AIDifficulty
    single_player: bool
    cycles: Tuple[CycleView, ...]
    screen_shake: float = 0.0
