#!/usr/bin/env python3
"""
Settings JSON loading utilities.

The viewer reads an optional settings file at start-up and merges it over the
built-in defaults. Every field is optional; a missing file is normal and an
unreadable file or a bad field only logs a warning.

Schema (settings.json):
{
  "default_difficulty": "Medium",       # Easy | Medium | Hard
  "window_width": 1200,
  "window_height": 750,
  "fps": 60,
  "screen_shake": true,
  "player1_keys": {"up": "w", "down": "s", "left": "a", "right": "d", "boost": "left shift"},
  "player2_keys": {"up": "up", "down": "down", "left": "left", "right": "right", "boost": "right shift"}
}

Key names are the lower-case names reported by ``pygame.key.name``.
"""
import json
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .constants import DEFAULT_FPS, VIEW_HEIGHT, VIEW_WIDTH
from .data_models import PLAYER1_BINDING, PLAYER2_BINDING, AIDifficulty, ControlBinding

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "settings.json")
BINDING_FIELDS = ("up", "down", "left", "right", "boost")


@dataclass(frozen=True)
class GameSettings:
    default_difficulty: AIDifficulty = AIDifficulty.MEDIUM
    window_width: int = VIEW_WIDTH
    window_height: int = VIEW_HEIGHT
    fps: int = DEFAULT_FPS
    screen_shake: bool = True
    player1_keys: ControlBinding = field(default=PLAYER1_BINDING)
    player2_keys: ControlBinding = field(default=PLAYER2_BINDING)


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("No settings file at %s, using defaults", path)
        return None
    except (OSError, ValueError) as exc:
        logger.warning("Could not read settings %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Settings %s must hold a JSON object, using defaults", path)
        return None
    return data


def _coerce_positive_int(value: Any, default: int, name: str) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring setting %s=%r: not an integer", name, value)
        return default
    if v <= 0:
        logger.warning("Ignoring setting %s=%r: must be positive", name, value)
        return default
    return v


def _coerce_binding(value: Any, default: ControlBinding, name: str) -> ControlBinding:
    if not isinstance(value, dict):
        logger.warning("Ignoring setting %s: expected an object", name)
        return default
    keys: Dict[str, str] = {}
    for fld in BINDING_FIELDS:
        key = value.get(fld, getattr(default, fld))
        if not isinstance(key, str) or not key.strip():
            logger.warning("Ignoring setting %s.%s=%r: expected a key name", name, fld, key)
            key = getattr(default, fld)
        keys[fld] = key.strip().lower()
    return ControlBinding(**keys)


def settings_from_dict(data: Dict[str, Any], base: GameSettings = GameSettings()) -> GameSettings:
    """Merge a parsed settings object over ``base``; invalid fields keep base values."""
    updates: Dict[str, Any] = {}
    if "default_difficulty" in data:
        try:
            updates["default_difficulty"] = AIDifficulty.from_name(data["default_difficulty"])
        except ValueError as exc:
            logger.warning("Ignoring setting default_difficulty: %s", exc)
    for name in ("window_width", "window_height", "fps"):
        if name in data:
            updates[name] = _coerce_positive_int(data[name], getattr(base, name), name)
    if "screen_shake" in data:
        value = data["screen_shake"]
        if isinstance(value, bool):
            updates["screen_shake"] = value
        else:
            logger.warning("Ignoring setting screen_shake=%r: expected true or false", value)
    for name in ("player1_keys", "player2_keys"):
        if name in data:
            updates[name] = _coerce_binding(data[name], getattr(base, name), name)
    return replace(base, **updates)


def load_settings(path: Optional[str] = None) -> GameSettings:
    """Load settings from ``path`` (default: settings.json beside the package)."""
    path = path or SETTINGS_PATH
    data = _read_json(path)
    if data is None:
        return GameSettings()
    settings = settings_from_dict(data)
    logger.info("Loaded settings from %s", path)
    return settings
