#!/usr/bin/env python3
"""
Collision handling for Light Cycle.

Supports three checks:
- Wall: a point outside the arena rectangle [0, W) x [0, H), optionally
  shrunk by a safety margin (used by the AI look-ahead).
- Trail: a point strictly closer than a radius to any stored trail point.
  For a cycle's own trail the newest points are skipped, because the head
  always sits within the radius of the samples it just laid down.
- Hazard: wall-with-margin or trail proximity, used by the AI to judge
  whether a probe point is safe.

Trails are checked against a snapshot: a tuple of read-only numpy arrays,
one (n, 2) array per cycle, taken at the start of a simulation pass, so no
check ever observes a trail that is growing in the same pass.

Trail storage
- TrailBuffer keeps the newest ``maxlen`` points in a numpy array with room
  for twice that many. Appends write past the current end; when the room
  runs out the retained points move to a freshly allocated array.
- A snapshot of a TrailBuffer is a read-only view, not a copy. Rows a view
  covers are never written again, so the view stays valid after later
  appends and costs nothing to take.
"""
from typing import Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from .constants import CELL_SIZE, GRID_HEIGHT, GRID_WIDTH, SELF_TRAIL_GRACE_POINTS, TRAIL_MAX_LENGTH
from .vector_utils import Point

TrailSnapshot = Tuple[np.ndarray, ...]


class TrailBuffer:
    """
    FIFO-bounded trail of (x, y) points, oldest first.

    Holds at most ``maxlen`` points; extending past that silently drops the
    oldest ones. Indexing and iteration yield plain (x, y) float tuples.
    """

    def __init__(self, maxlen: int = TRAIL_MAX_LENGTH):
        if maxlen <= 0:
            raise ValueError("trail maxlen must be positive")
        self.maxlen = maxlen
        self._data = np.empty((2 * maxlen, 2), dtype=float)
        self._start = 0
        self._end = 0

    def __len__(self) -> int:
        return self._end - self._start

    def __iter__(self) -> Iterator[Point]:
        for x, y in self._data[self._start:self._end].tolist():
            yield (x, y)

    def __getitem__(self, index: int) -> Point:
        row = self._data[self._start + range(len(self))[index]]
        return (float(row[0]), float(row[1]))

    def extend(self, points: Iterable[Point]) -> None:
        new = np.array(list(points), dtype=float).reshape(-1, 2)
        n = len(new)
        if n == 0:
            return
        if n >= self.maxlen:
            self._data = np.empty_like(self._data)
            self._data[:self.maxlen] = new[-self.maxlen:]
            self._start, self._end = 0, self.maxlen
            return
        if self._end + n > len(self._data):
            keep = min(len(self), self.maxlen - n)
            fresh = np.empty_like(self._data)
            fresh[:keep] = self._data[self._end - keep:self._end]
            self._data = fresh
            self._start, self._end = 0, keep
        self._data[self._end:self._end + n] = new
        self._end += n
        self._start = max(self._start, self._end - self.maxlen)

    def frozen(self) -> np.ndarray:
        """Read-only (n, 2) view of the current points."""
        view = self._data[self._start:self._end]
        view.flags.writeable = False
        return view


def freeze_trail(points: Iterable[Point]) -> np.ndarray:
    """Read-only (n, 2) float array of trail points; copies unless given a TrailBuffer."""
    if isinstance(points, TrailBuffer):
        return points.frozen()
    arr = np.array(list(points), dtype=float).reshape(-1, 2)
    arr.flags.writeable = False
    return arr


def snapshot_trails(trails: Iterable[Iterable[Point]]) -> TrailSnapshot:
    return tuple(freeze_trail(t) for t in trails)


def out_of_bounds(point: Point, margin: float = 0.0) -> bool:
    """True if point lies outside [margin, W - margin) x [margin, H - margin)."""
    x, y = point
    return x < margin or x >= GRID_WIDTH - margin or y < margin or y >= GRID_HEIGHT - margin


def near_trail(point: Point, trail: np.ndarray, radius: float) -> bool:
    """True if any trail point is strictly closer than radius to point."""
    if len(trail) == 0:
        return False
    d = np.hypot(trail[:, 0] - point[0], trail[:, 1] - point[1])
    return bool(np.any(d < radius))


def trail_collision(
    point: Point,
    trails: Sequence[np.ndarray],
    own_index: int,
    radius: float = CELL_SIZE,
    grace_points: int = SELF_TRAIL_GRACE_POINTS,
) -> Optional[int]:
    """
    Find a trail that point collides with.

    Returns the index of the first trail hit, or None. The newest
    ``grace_points`` samples of trail ``own_index`` are not tested.
    """
    for i, trail in enumerate(trails):
        if i == own_index:
            trail = trail[: max(len(trail) - grace_points, 0)]
        if near_trail(point, trail, radius):
            return i
    return None


def is_hazard(point: Point, trails: Sequence[np.ndarray], radius: float, margin: float) -> bool:
    """Look-ahead test: near a wall (inside margin) or within radius of any trail."""
    if out_of_bounds(point, margin):
        return True
    return any(near_trail(point, trail, radius) for trail in trails)
