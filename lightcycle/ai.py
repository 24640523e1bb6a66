#!/usr/bin/env python3
"""
Rule-based autopilot for computer-controlled light cycles.

One decision procedure is shared by every tier; the tiers only differ in the
parameters of their AIProfile:

- look_ahead_ticks: how far ahead (in ticks of cruise travel) the cycle probes
- reaction_radius: how close a probe may come to any trail before it counts
  as danger
- turn_chance: probability per safe tick of a spontaneous perpendicular jink
- boost_threshold: energy the cycle keeps in reserve before it will boost
- boost_chance: baseline boost probability per safe tick; ten times this when
  escaping danger

Decision outline
1) Probe straight ahead. Danger if the probe is near a wall or a trail.
2) In danger: probe every non-reversing heading and keep the safe ones. Hard
   picks the safe heading with the most open space before the wall; other
   tiers pick at random. With no safe heading the cycle holds its course.
3) Out of danger: occasionally jink to a perpendicular heading.
4) Boost is re-rolled every tick, independently of steering.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from .collisions import is_hazard, out_of_bounds
from .constants import AI_WALL_MARGIN, CELL_SIZE, CYCLE_SPEED, OPEN_SPACE_PROBES, OPEN_SPACE_STEP
from .data_models import AIDifficulty, Direction
from .physics import integrate
from .vector_utils import Point


@dataclass(frozen=True)
class AIProfile:
    look_ahead_ticks: float
    reaction_radius: float
    turn_chance: float
    boost_threshold: float
    boost_chance: float

    @property
    def look_ahead(self) -> float:
        """Probe distance in pixels."""
        return self.look_ahead_ticks * CYCLE_SPEED


AI_PROFILES: Dict[AIDifficulty, AIProfile] = {
    AIDifficulty.EASY: AIProfile(20.0, CELL_SIZE * 3.0, 0.05, 30.0, 0.01),
    AIDifficulty.MEDIUM: AIProfile(40.0, CELL_SIZE * 5.0, 0.02, 50.0, 0.03),
    AIDifficulty.HARD: AIProfile(60.0, CELL_SIZE * 8.0, 0.01, 70.0, 0.05),
}

DANGER_BOOST_FACTOR = 10.0


@dataclass(frozen=True)
class AIDecision:
    direction: Direction
    boosting: bool
    in_danger: bool


def probe_is_hazard(position: Point, direction: Direction, profile: AIProfile,
                    trails: Sequence[np.ndarray]) -> bool:
    probe = integrate(position, direction, profile.look_ahead)
    return is_hazard(probe, trails, profile.reaction_radius, AI_WALL_MARGIN)


def safe_directions(position: Point, current: Direction, profile: AIProfile,
                    trails: Sequence[np.ndarray]) -> List[Direction]:
    """Non-reversing headings whose look-ahead probe is clear, in Direction order."""
    return [
        d for d in Direction
        if not d.is_opposite(current) and not probe_is_hazard(position, d, profile, trails)
    ]


def open_space(position: Point, direction: Direction) -> int:
    """
    Count fixed-size probes along direction that stay inside the arena.

    Counting stops at the first probe that leaves the arena; trails are
    ignored.
    """
    space = 0
    for k in range(1, OPEN_SPACE_PROBES + 1):
        probe = integrate(position, direction, CYCLE_SPEED * OPEN_SPACE_STEP * k)
        if out_of_bounds(probe):
            break
        space += 1
    return space


def decide(position: Point, direction: Direction, energy: float, difficulty: AIDifficulty,
           trails: Sequence[np.ndarray], rng) -> AIDecision:
    """
    Pick next tick's heading and boost state.

    Args:
        position: Current cycle position
        direction: Current heading
        energy: Current boost energy
        difficulty: Tier selecting the AIProfile
        trails: Pre-tick trail snapshot, own trail included
        rng: random.Random-compatible source (random, choice)

    Returns:
        AIDecision; its direction is never the opposite of ``direction``.
    """
    profile = AI_PROFILES[difficulty]
    in_danger = probe_is_hazard(position, direction, profile, trails)
    new_direction = direction

    if in_danger:
        safe = safe_directions(position, direction, profile, trails)
        if safe:
            if difficulty is AIDifficulty.HARD and len(safe) > 1:
                # max() keeps the first of equal scores
                new_direction = max(safe, key=lambda d: open_space(position, d))
            else:
                new_direction = rng.choice(safe)
    elif rng.random() < profile.turn_chance:
        new_direction = rng.choice(direction.perpendiculars())

    boosting = False
    if energy > profile.boost_threshold:
        if in_danger:
            boosting = rng.random() < profile.boost_chance * DANGER_BOOST_FACTOR
        else:
            boosting = rng.random() < profile.boost_chance

    return AIDecision(new_direction, boosting, in_danger)
