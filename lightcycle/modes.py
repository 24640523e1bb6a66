#!/usr/bin/env python3
"""
Game mode state machine.

Modes form a closed set: Menu, Playing, Paused and GameOver. Only GameOver
carries data (the RoundResult). All transitions live in ``transition``,
keyed on (current mode, event); an event that means nothing in the current
mode returns None and the caller keeps its mode.

    Menu --START_ROUND--> Playing <--TOGGLE_PAUSE--> Paused
    Playing/Paused --CANCEL--> Menu
    Playing --ROUND_OVER--> GameOver --CANCEL--> Menu
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


@dataclass(frozen=True)
class RoundResult:
    """Outcome of a round: winning roster slot (None for a draw) and its label."""
    winner_index: Optional[int]
    label: str

    @property
    def is_draw(self) -> bool:
        return self.winner_index is None


@dataclass(frozen=True)
class Menu:
    name = "Menu"


@dataclass(frozen=True)
class Playing:
    name = "Playing"


@dataclass(frozen=True)
class Paused:
    name = "Paused"


@dataclass(frozen=True)
class GameOver:
    result: RoundResult
    name = "GameOver"


Mode = Union[Menu, Playing, Paused, GameOver]


class ModeEvent(Enum):
    START_ROUND = auto()
    TOGGLE_PAUSE = auto()
    CANCEL = auto()
    ROUND_OVER = auto()


def transition(mode: Mode, event: ModeEvent, result: Optional[RoundResult] = None) -> Optional[Mode]:
    """
    Return the mode that follows ``mode`` on ``event``, or None if ignored.

    ROUND_OVER requires ``result``; raises ValueError without one.
    """
    if isinstance(mode, Menu):
        if event is ModeEvent.START_ROUND:
            return Playing()
    elif isinstance(mode, Playing):
        if event is ModeEvent.TOGGLE_PAUSE:
            return Paused()
        if event is ModeEvent.CANCEL:
            return Menu()
        if event is ModeEvent.ROUND_OVER:
            if result is None:
                raise ValueError("ROUND_OVER needs a RoundResult")
            return GameOver(result)
    elif isinstance(mode, Paused):
        if event is ModeEvent.TOGGLE_PAUSE:
            return Playing()
        if event is ModeEvent.CANCEL:
            return Menu()
    elif isinstance(mode, GameOver):
        if event is ModeEvent.CANCEL:
            return Menu()
    return None
