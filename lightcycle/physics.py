#!/usr/bin/env python3
"""
Motion rules for Light Cycle.

Responsibilities
- Drain or recharge boost energy for one tick.
- Pick the tick speed (cruise or boost).
- Advance a position by one explicit Euler step along a heading.
- Densify the segment just travelled into evenly spaced trail samples.

Units and conventions
- Speeds are pixels per tick; the tick duration only scales energy rates.
- Energy is a plain float in [0, MAX_BOOST_ENERGY].

Numerical notes
- Drain per tick is BOOST_DRAIN_RATE * dt, which is not exactly representable
  for dt = 1/60. Values within ENERGY_EPSILON of zero are snapped to 0.0 so a
  full tank empties on exactly the tick the arithmetic says it should.
- Trail sampling spacing must stay below the collision radius, otherwise a
  fast cycle would leave gaps another cycle could slip through.
"""

import math
from typing import List, Tuple

from .constants import (
    BOOST_DRAIN_RATE,
    BOOST_RECHARGE_RATE,
    BOOST_SPEED,
    CYCLE_SPEED,
    ENERGY_EPSILON,
    MAX_BOOST_ENERGY,
    TRAIL_SAMPLE_STEP,
)
from .data_models import Direction
from .vector_utils import Point, clamp, distance, vec_add, vec_lerp


def step_boost_energy(energy: float, boosting: bool, dt: float) -> Tuple[float, bool]:
    """
    Advance the boost resource by one tick.

    Args:
        energy: Current energy in [0, MAX_BOOST_ENERGY]
        boosting: Whether boost is requested this tick
        dt: Tick duration in seconds

    Returns:
        (new_energy, still_boosting). Boosting switches itself off on the
        tick the tank reaches zero, and a boost request on an empty tank is
        dropped.
    """
    if boosting and energy > 0.0:
        energy = clamp(energy - BOOST_DRAIN_RATE * dt, 0.0, MAX_BOOST_ENERGY)
        if energy <= ENERGY_EPSILON:
            energy = 0.0
        return energy, energy > 0.0
    if energy < MAX_BOOST_ENERGY:
        energy = clamp(energy + BOOST_RECHARGE_RATE * dt, 0.0, MAX_BOOST_ENERGY)
    return energy, False


def tick_speed(boosting: bool) -> float:
    return BOOST_SPEED if boosting else CYCLE_SPEED


def integrate(position: Point, direction: Direction, speed: float) -> Point:
    """One Euler step: position + unit(direction) * speed."""
    return vec_add(position, direction.velocity(speed))


def interpolate_trail(start: Point, end: Point, step: float = TRAIL_SAMPLE_STEP) -> List[Point]:
    """
    Sample the segment start -> end every ``step`` pixels.

    Both endpoints are included, so the list always holds at least two
    points. Samples are evenly spaced and never further apart than ``step``.
    """
    steps = max(1, int(math.ceil(distance(start, end) / step)))
    return [vec_lerp(start, end, i / steps) for i in range(steps + 1)]
