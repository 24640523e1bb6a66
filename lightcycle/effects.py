#!/usr/bin/env python3
"""
Cosmetic effects: crash explosions, boost sparks and screen shake.

GameState tells the layer when a cycle crashes or boosts and advances it once
per tick; the viewer only reads it. Nothing here feeds back into the
simulation.
"""
import math
import random
from dataclasses import dataclass, field
from typing import List, Tuple

from .constants import CYCLE_SPEED
from .data_models import Direction
from .vector_utils import vec_add, vec_scale

EXPLOSION_PARTICLES = 50
EXPLOSION_DAMPING = 0.98
SPARK_DAMPING = 0.95
SPARK_CHANCE = 0.3
SPARK_JITTER = 10.0
CRASH_SHAKE = 20.0
SHAKE_DECAY = 50.0  # per second


@dataclass
class Particle:
    position: Tuple[float, float]
    velocity: Tuple[float, float]  # px per second
    lifetime: float  # seconds left
    color: Tuple[int, int, int]
    alpha: float

    def update(self, dt: float, damping: float) -> None:
        self.position = vec_add(self.position, vec_scale(self.velocity, dt))
        self.lifetime -= dt
        self.velocity = vec_scale(self.velocity, damping)


@dataclass
class Explosion:
    particles: List[Particle] = field(default_factory=list)
    time: float = 0.0

    def update(self, dt: float) -> None:
        self.time += dt
        for p in self.particles:
            p.update(dt, EXPLOSION_DAMPING)
        self.particles = [p for p in self.particles if p.lifetime > 0.0]

    @property
    def finished(self) -> bool:
        return not self.particles


class EffectsLayer:
    """Explosions, sparks and shake for the current round."""

    def __init__(self, rng=random):
        self.rng = rng
        self.explosions: List[Explosion] = []
        self.sparks: List[Particle] = []
        self.screen_shake = 0.0

    def clear(self) -> None:
        self.explosions.clear()
        self.sparks.clear()
        self.screen_shake = 0.0

    def on_crash(self, position: Tuple[float, float], color: Tuple[int, int, int]) -> None:
        rng = self.rng
        particles = []
        for _ in range(EXPLOSION_PARTICLES):
            angle = rng.uniform(0.0, math.tau)
            speed = rng.uniform(50.0, 200.0)
            particles.append(Particle(
                position=position,
                velocity=(math.cos(angle) * speed, math.sin(angle) * speed),
                lifetime=rng.uniform(0.5, 1.5),
                color=color,
                alpha=rng.uniform(0.5, 1.0),
            ))
        self.explosions.append(Explosion(particles))
        self.screen_shake = CRASH_SHAKE

    def on_boost(self, position: Tuple[float, float], direction: Direction,
                 color: Tuple[int, int, int]) -> None:
        rng = self.rng
        if rng.random() >= SPARK_CHANCE:
            return
        vx, vy = vec_scale(direction.velocity(CYCLE_SPEED), -0.5)
        self.sparks.append(Particle(
            position=position,
            velocity=(vx + rng.uniform(-SPARK_JITTER, SPARK_JITTER),
                      vy + rng.uniform(-SPARK_JITTER, SPARK_JITTER)),
            lifetime=rng.uniform(0.2, 0.5),
            color=color,
            alpha=rng.uniform(0.3, 0.7),
        ))

    def update(self, dt: float) -> None:
        for explosion in self.explosions:
            explosion.update(dt)
        self.explosions = [e for e in self.explosions if not e.finished]

        for spark in self.sparks:
            spark.update(dt, SPARK_DAMPING)
        self.sparks = [s for s in self.sparks if s.lifetime > 0.0]

        if self.screen_shake > 0.0:
            self.screen_shake = max(self.screen_shake - dt * SHAKE_DECAY, 0.0)
