#!/usr/bin/env python3
"""
Shared constants for Light Cycle (pixels and seconds unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
simulation core and the viewer, and makes tuning easier.
"""

# Arena
GRID_WIDTH = 1600.0
GRID_HEIGHT = 1000.0
CELL_SIZE = 8.0  # px; collision radius around every trail point

# Motion (px per tick, not scaled by dt)
CYCLE_SPEED = 3.0
BOOST_SPEED = 6.0
TICK_DT = 1 / 60.0  # seconds per simulation tick

# Trails
TRAIL_MAX_LENGTH = 15000  # points retained per cycle, oldest evicted first
TRAIL_SAMPLE_STEP = 2.0  # px between interpolated trail samples
SELF_TRAIL_GRACE_POINTS = 10  # newest own points ignored by the collision test

# Boost
MAX_BOOST_ENERGY = 100.0
BOOST_DRAIN_RATE = 40.0  # energy per second
BOOST_RECHARGE_RATE = 15.0  # energy per second
HUMAN_BOOST_MIN_ENERGY = 10.0
ENERGY_EPSILON = 1e-9

# AI
AI_WALL_MARGIN = 10.0
OPEN_SPACE_STEP = 10  # ticks of cruise travel per open-space probe
OPEN_SPACE_PROBES = 9

# Round setup
START_OFFSET_X = 200.0

# Cycle body (rendering only)
CYCLE_WIDTH = 16.0
CYCLE_HEIGHT = 24.0

# Colors
CYAN = (0, 255, 255)
ORANGE = (255, 165, 0)
BACKGROUND_COLOR = (0, 0, 0)
BORDER_COLOR = (0, 100, 200)
PAUSED_BORDER_COLOR = (0, 50, 100)
GRID_COLOR = (20, 40, 60)
HUD_COLOR = (200, 200, 200)
DIFFICULTY_COLORS = {
    "Easy": (100, 255, 100),
    "Medium": (255, 255, 100),
    "Hard": (255, 100, 100),
}

# Viewer defaults
VIEW_WIDTH = 1200
VIEW_HEIGHT = 750
DEFAULT_FPS = 60
MAX_TICKS_PER_FRAME = 5
