#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the package.
Points are plain (x, y) tuples in arena pixels.
"""
import math
from typing import Tuple

Point = Tuple[float, float]


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Point, s: float) -> Point:
    return (a[0] * s, a[1] * s)


def vec_len(a: Point) -> float:
    return math.hypot(a[0], a[1])


def vec_lerp(a: Point, b: Point, t: float) -> Point:
    """Point a fraction t of the way from a to b."""
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def distance(a: Point, b: Point) -> float:
    return vec_len(vec_sub(a, b))
