#!/usr/bin/env python3
"""
The LightCycle entity.

A cycle owns its position, heading, bounded trail and boost tank, and exposes
three entry points used by GameState once per tick:

- ai_update: computer cycles pick a heading and boost state
- update: energy, motion, trail growth, then wall and trail collision
- handle_input: human cycles react to key presses and releases

Both ai_update and update read a trail snapshot built before the pass
started (see collisions.snapshot_trails); the only trail a cycle writes is
its own, and only inside its own update.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from . import ai
from .collisions import TrailBuffer, out_of_bounds, trail_collision
from .constants import MAX_BOOST_ENERGY, HUMAN_BOOST_MIN_ENERGY
from .data_models import AIDifficulty, ControlBinding, CycleView, Direction, PlayerType
from .physics import integrate, interpolate_trail, step_boost_energy, tick_speed

logger = logging.getLogger(__name__)


@dataclass
class LightCycle:
    """
    One vehicle in the arena.

    Fields:
    - position: (x, y) in arena pixels
    - direction: current heading
    - color: RGB identity used by the renderer
    - player_type: Human or Computer
    - binding: key names for Human cycles, None for Computer cycles
    - difficulty: AI tier (only read for Computer cycles)
    - label: display name used in round results
    - trail: FIFO-bounded TrailBuffer of visited points, oldest first
    - death_cause: "wall" or "trail" once the cycle has crashed
    """
    position: Tuple[float, float]
    direction: Direction
    color: Tuple[int, int, int]
    player_type: PlayerType = PlayerType.HUMAN
    binding: Optional[ControlBinding] = None
    difficulty: AIDifficulty = AIDifficulty.MEDIUM
    label: str = "Player"
    trail: TrailBuffer = field(default_factory=TrailBuffer)
    alive: bool = True
    boost_energy: float = MAX_BOOST_ENERGY
    is_boosting: bool = False
    death_cause: Optional[str] = None

    def __post_init__(self) -> None:
        if self.player_type is PlayerType.HUMAN and self.binding is None:
            raise ValueError("Human light cycles need a control binding")
        self.position = (float(self.position[0]), float(self.position[1]))

    @property
    def is_computer(self) -> bool:
        return self.player_type is PlayerType.COMPUTER

    def update(self, dt: float, trails: Sequence[np.ndarray], own_index: int) -> None:
        """
        Advance this cycle by one tick.

        Args:
            dt: Tick duration in seconds (only scales boost energy)
            trails: Pre-tick snapshot of every cycle's trail
            own_index: Position of this cycle's trail inside ``trails``
        """
        if not self.alive:
            return

        self.boost_energy, self.is_boosting = step_boost_energy(self.boost_energy, self.is_boosting, dt)

        old_pos = self.position
        self.position = integrate(old_pos, self.direction, tick_speed(self.is_boosting))
        self.trail.extend(interpolate_trail(old_pos, self.position))

        if out_of_bounds(self.position):
            self._crash("wall")
            return

        hit = trail_collision(self.position, trails, own_index)
        if hit is not None:
            self._crash("trail", hit)

    def ai_update(self, trails: Sequence[np.ndarray], own_index: int, rng=random) -> None:
        """Let the autopilot steer and boost. No-op for human or dead cycles."""
        if not self.is_computer or not self.alive:
            return
        decision = ai.decide(self.position, self.direction, self.boost_energy, self.difficulty, trails, rng)
        self.direction = decision.direction
        self.is_boosting = decision.boosting

    def handle_input(self, key: str, pressed: bool) -> None:
        """
        React to a key press or release.

        The boost key is level-triggered: boosting stays on while it is held
        and enough energy remains. Direction keys act on press only and never
        reverse the cycle onto its own trail.
        """
        if not self.alive or self.player_type is not PlayerType.HUMAN:
            return

        if key == self.binding.boost:
            self.is_boosting = pressed and self.boost_energy > HUMAN_BOOST_MIN_ENERGY

        if pressed:
            new_direction = self.binding.direction_for(key)
            if new_direction is not None and not new_direction.is_opposite(self.direction):
                self.direction = new_direction

    def view(self, index: int) -> CycleView:
        return CycleView(
            index=index,
            label=self.label,
            alive=self.alive,
            position=self.position,
            direction=self.direction,
            trail=self.trail.frozen(),
            boost_energy=self.boost_energy,
            is_boosting=self.is_boosting,
            player_type=self.player_type,
            color=self.color,
        )

    def _crash(self, cause: str, trail_index: Optional[int] = None) -> None:
        self.alive = False
        self.death_cause = cause
        if trail_index is None:
            logger.debug("%s hit the wall at (%.1f, %.1f)", self.label, *self.position)
        else:
            logger.debug("%s hit trail %d at (%.1f, %.1f)", self.label, trail_index, *self.position)
