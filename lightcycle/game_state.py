#!/usr/bin/env python3
"""
Session orchestrator for Light Cycle.

GameState owns the roster, the current mode and the effects layer, and is
the only object the viewer talks to. It is driven by an external fixed-rate
tick and by key events; it never blocks, sleeps or renders.

Tick order while Playing
1) Snapshot every trail and let each computer cycle decide (ai_update).
2) Snapshot again and advance every cycle (update) against that snapshot.
3) Newly crashed cycles spawn an explosion and shake; boosting survivors may
   spawn sparks. The effects layer is advanced.
4) With one or no cycle left alive the round ends (GameOver).

Both snapshots are read-only views taken before anyone moves, so no cycle
ever sees another cycle's trail growing mid-pass and the outcome does not
depend on roster order. Taking one is O(1) (see collisions.TrailBuffer).
"""
import logging
import random
from typing import List, Optional

from .collisions import TrailSnapshot, snapshot_trails
from .constants import CYAN, GRID_HEIGHT, GRID_WIDTH, ORANGE, START_OFFSET_X
from .cycle import LightCycle
from .data_models import (
    PLAYER1_BINDING,
    PLAYER2_BINDING,
    AIDifficulty,
    ControlBinding,
    Direction,
    PlayerType,
    WorldSnapshot,
)
from .effects import EffectsLayer
from .modes import GameOver, Menu, Mode, ModeEvent, Paused, Playing, RoundResult, transition

logger = logging.getLogger(__name__)

KEY_SOLO = "1"
KEY_DUO = "2"
KEY_DIFFICULTY = "d"
KEY_PAUSE = "p"
KEY_CANCEL = "escape"


class GameState:
    """
    Roster, mode and round parameters for one program run.

    Attributes:
        cycles: roster; exactly two cycles after a round start, empty in Menu.
        mode: current Mode (Menu, Playing, Paused or GameOver).
        single_player: True for a human-vs-computer round.
        ai_difficulty: tier used for the computer cycle of the next solo round.
        effects: cosmetic effects of the current round.
        last_event_msg: latest human-readable event, for the HUD.
    """

    def __init__(self, rng=None, ai_difficulty: AIDifficulty = AIDifficulty.MEDIUM,
                 player1_binding: ControlBinding = PLAYER1_BINDING,
                 player2_binding: ControlBinding = PLAYER2_BINDING):
        self.rng = rng if rng is not None else random.Random()
        self.cycles: List[LightCycle] = []
        self.mode: Mode = Menu()
        self.single_player = True
        self.ai_difficulty = ai_difficulty
        self.player1_binding = player1_binding
        self.player2_binding = player2_binding
        self.effects = EffectsLayer(self.rng)
        self.tick_count = 0
        self.last_event_msg: Optional[str] = None

    # ------------------------------------------------------------
    # Mode transitions
    # ------------------------------------------------------------

    def _apply(self, event: ModeEvent, result: Optional[RoundResult] = None) -> bool:
        new_mode = transition(self.mode, event, result)
        if new_mode is None:
            return False
        logger.info("Mode %s -> %s", self.mode.name, new_mode.name)
        self.mode = new_mode
        if isinstance(new_mode, Menu):
            self.cycles.clear()
            self.effects.clear()
            self.last_event_msg = None
        return True

    def start_round(self, single_player: bool, difficulty: Optional[AIDifficulty] = None) -> bool:
        """
        Build a fresh two-cycle roster and enter Playing. Only valid from Menu.

        Returns False (and changes nothing) in any other mode.
        """
        if not isinstance(self.mode, Menu):
            return False
        if difficulty is not None:
            self.ai_difficulty = difficulty
        self.single_player = single_player
        self.effects.clear()
        self.tick_count = 0

        mid_y = GRID_HEIGHT / 2.0
        player1 = LightCycle(
            position=(START_OFFSET_X, mid_y),
            direction=Direction.RIGHT,
            color=CYAN,
            player_type=PlayerType.HUMAN,
            binding=self.player1_binding,
            label="Player 1",
        )
        if single_player:
            player2 = LightCycle(
                position=(GRID_WIDTH - START_OFFSET_X, mid_y),
                direction=Direction.LEFT,
                color=ORANGE,
                player_type=PlayerType.COMPUTER,
                difficulty=self.ai_difficulty,
                label="Computer",
            )
        else:
            player2 = LightCycle(
                position=(GRID_WIDTH - START_OFFSET_X, mid_y),
                direction=Direction.LEFT,
                color=ORANGE,
                player_type=PlayerType.HUMAN,
                binding=self.player2_binding,
                label="Player 2",
            )
        self.cycles = [player1, player2]
        self._apply(ModeEvent.START_ROUND)
        self.last_event_msg = f"Solo vs {self.ai_difficulty.value} AI" if single_player else "Two players"
        logger.info("Round started: %s", self.last_event_msg)
        return True

    def cycle_difficulty(self) -> AIDifficulty:
        """Advance the menu's AI tier selection (Menu only)."""
        if isinstance(self.mode, Menu):
            self.ai_difficulty = self.ai_difficulty.next()
            logger.info("AI difficulty set to %s", self.ai_difficulty.value)
        return self.ai_difficulty

    def toggle_pause(self) -> bool:
        return self._apply(ModeEvent.TOGGLE_PAUSE)

    def cancel(self) -> bool:
        return self._apply(ModeEvent.CANCEL)

    # ------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------

    def trail_snapshot(self) -> TrailSnapshot:
        return snapshot_trails(c.trail for c in self.cycles)

    def tick(self, dt: float) -> None:
        """Advance the world by one tick. Does nothing outside Playing."""
        if dt <= 0:
            raise ValueError("tick duration must be positive")
        if not isinstance(self.mode, Playing):
            return

        trails = self.trail_snapshot()
        for i, cycle in enumerate(self.cycles):
            cycle.ai_update(trails, i, self.rng)

        trails = self.trail_snapshot()
        for i, cycle in enumerate(self.cycles):
            was_alive = cycle.alive
            cycle.update(dt, trails, i)
            if was_alive and not cycle.alive:
                self.effects.on_crash(cycle.position, cycle.color)
                self.last_event_msg = f"{cycle.label} crashed into the {cycle.death_cause}"
            if cycle.alive and cycle.is_boosting:
                self.effects.on_boost(cycle.position, cycle.direction, cycle.color)

        self.effects.update(dt)
        self.tick_count += 1
        self.check_game_over()

    def check_game_over(self) -> Optional[RoundResult]:
        """End the round once one or no cycle is left alive."""
        if not isinstance(self.mode, Playing):
            return None
        survivors = [i for i, c in enumerate(self.cycles) if c.alive]
        if len(survivors) > 1:
            return None
        if survivors:
            winner = survivors[0]
            result = RoundResult(winner, f"{self.cycles[winner].label} Wins!")
        else:
            result = RoundResult(None, "Draw!")
        self._apply(ModeEvent.ROUND_OVER, result)
        logger.info("Round over after %d ticks: %s", self.tick_count, result.label)
        return result

    # ------------------------------------------------------------
    # Input routing
    # ------------------------------------------------------------

    def key_down(self, key: str) -> None:
        mode = self.mode
        if isinstance(mode, Menu):
            if key == KEY_SOLO:
                self.start_round(True)
            elif key == KEY_DUO:
                self.start_round(False)
            elif key == KEY_DIFFICULTY:
                self.cycle_difficulty()
        elif isinstance(mode, Playing):
            if key == KEY_PAUSE:
                self.toggle_pause()
            elif key == KEY_CANCEL:
                self.cancel()
            else:
                for cycle in self.cycles:
                    cycle.handle_input(key, True)
        elif isinstance(mode, Paused):
            if key == KEY_PAUSE:
                self.toggle_pause()
            elif key == KEY_CANCEL:
                self.cancel()
        elif isinstance(mode, GameOver):
            if key == KEY_CANCEL:
                self.cancel()

    def key_up(self, key: str) -> None:
        if isinstance(self.mode, Playing):
            for cycle in self.cycles:
                cycle.handle_input(key, False)

    # ------------------------------------------------------------
    # Output
    # ------------------------------------------------------------

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            mode=self.mode,
            difficulty=self.ai_difficulty,
            single_player=self.single_player,
            cycles=tuple(c.view(i) for i, c in enumerate(self.cycles)),
            screen_shake=self.effects.screen_shake,
        )
