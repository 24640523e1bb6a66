"""
Unit and end-to-end tests for the GameState orchestrator: round lifecycle,
tick order, win detection, key routing and world snapshots.
"""

import random
import time

import numpy as np
import pytest

from lightcycle.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_BOOST_ENERGY,
    START_OFFSET_X,
    TICK_DT,
    TRAIL_MAX_LENGTH,
)
from lightcycle.data_models import AIDifficulty, Direction, PlayerType
from lightcycle.game_state import GameState
from lightcycle.modes import GameOver, Menu, Paused, Playing
from tests.conftest import PinnedRandom


def run_until_over(state: GameState, max_ticks: int = 1000) -> int:
    """Tick until the round ends; returns the number of ticks run"""
    for n in range(1, max_ticks + 1):
        state.tick(TICK_DT)
        if isinstance(state.mode, GameOver):
            return n
    raise AssertionError("round did not end")


class TestRoundStart:
    """Test suite for start_round"""

    @pytest.fixture
    def state(self) -> GameState:
        return GameState(rng=random.Random(0))

    def test_new_state_is_menu(self, state: GameState) -> None:
        assert isinstance(state.mode, Menu)
        assert state.cycles == []
        assert state.ai_difficulty is AIDifficulty.MEDIUM

    @pytest.mark.parametrize("single_player", [True, False])
    def test_two_mirrored_cycles(self, state: GameState, single_player: bool) -> None:
        assert state.start_round(single_player)

        assert isinstance(state.mode, Playing)
        assert len(state.cycles) == 2
        a, b = state.cycles
        assert a.position == (START_OFFSET_X, GRID_HEIGHT / 2)
        assert b.position == (GRID_WIDTH - START_OFFSET_X, GRID_HEIGHT / 2)
        assert a.direction is Direction.RIGHT
        assert b.direction is Direction.LEFT
        assert a.direction.is_opposite(b.direction)
        for cycle in state.cycles:
            assert cycle.alive
            assert cycle.boost_energy == MAX_BOOST_ENERGY
            assert len(cycle.trail) == 0

    def test_solo_round_has_computer_opponent(self, state: GameState) -> None:
        state.start_round(True, AIDifficulty.HARD)

        assert state.cycles[0].player_type is PlayerType.HUMAN
        assert state.cycles[1].player_type is PlayerType.COMPUTER
        assert state.cycles[1].difficulty is AIDifficulty.HARD
        assert state.ai_difficulty is AIDifficulty.HARD

    def test_duo_round_has_two_humans(self, state: GameState) -> None:
        state.start_round(False)

        assert [c.player_type for c in state.cycles] == [PlayerType.HUMAN, PlayerType.HUMAN]
        assert state.cycles[1].binding.boost == "right shift"

    def test_start_only_from_menu(self, state: GameState) -> None:
        state.start_round(True)
        cycles = list(state.cycles)

        assert not state.start_round(False)
        assert state.cycles == cycles
        assert state.single_player


class TestModeControl:
    """Test suite for pause, cancel and difficulty selection"""

    @pytest.fixture
    def state(self) -> GameState:
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        return state

    def test_pause_freezes_world(self, state: GameState) -> None:
        state.tick(TICK_DT)
        assert state.toggle_pause()
        positions = [c.position for c in state.cycles]
        trails = [len(c.trail) for c in state.cycles]

        for _ in range(10):
            state.tick(TICK_DT)

        assert isinstance(state.mode, Paused)
        assert [c.position for c in state.cycles] == positions
        assert [len(c.trail) for c in state.cycles] == trails

    def test_resume(self, state: GameState) -> None:
        state.toggle_pause()
        state.toggle_pause()
        x = state.cycles[0].position[0]
        state.tick(TICK_DT)

        assert isinstance(state.mode, Playing)
        assert state.cycles[0].position[0] > x

    @pytest.mark.parametrize("pause_first", [False, True])
    def test_cancel_returns_to_menu(self, state: GameState, pause_first: bool) -> None:
        if pause_first:
            state.toggle_pause()
        assert state.cancel()

        assert isinstance(state.mode, Menu)
        assert state.cycles == []

    def test_cycle_difficulty_only_in_menu(self, state: GameState) -> None:
        assert state.cycle_difficulty() is AIDifficulty.MEDIUM

        state.cancel()
        assert state.cycle_difficulty() is AIDifficulty.HARD
        assert state.cycle_difficulty() is AIDifficulty.EASY

    def test_tick_rejects_non_positive_dt(self, state: GameState) -> None:
        with pytest.raises(ValueError):
            state.tick(0.0)

    def test_tick_in_menu_is_noop(self) -> None:
        state = GameState()
        state.tick(TICK_DT)

        assert isinstance(state.mode, Menu)
        assert state.tick_count == 0


class TestWinCondition:
    """Test suite for check_game_over"""

    def test_player_one_wins(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        state.cycles[1].alive = False
        result = state.check_game_over()

        assert isinstance(state.mode, GameOver)
        assert result.winner_index == 0
        assert result.label == "Player 1 Wins!"

    @pytest.mark.parametrize("single_player, label", [(True, "Computer Wins!"), (False, "Player 2 Wins!")])
    def test_second_slot_label_follows_controller(self, single_player: bool, label: str) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(single_player)
        state.cycles[0].alive = False
        result = state.check_game_over()

        assert result.winner_index == 1
        assert state.mode.result.label == label

    def test_no_result_while_both_alive(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(False)

        assert state.check_game_over() is None
        assert isinstance(state.mode, Playing)

    def test_game_over_back_to_menu(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        state.cycles[0].alive = False
        state.check_game_over()
        state.tick(TICK_DT)

        assert isinstance(state.mode, GameOver)
        assert state.cancel()
        assert isinstance(state.mode, Menu)


class TestTick:
    """Test suite for the per-tick pipeline"""

    def test_crash_triggers_effects(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        state.cycles[0].position = (GRID_WIDTH - 1.0, 100.0)
        state.tick(TICK_DT)

        assert not state.cycles[0].alive
        assert state.cycles[0].death_cause == "wall"
        assert state.effects.explosions
        assert state.effects.screen_shake > 0.0
        assert "Player 1" in state.last_event_msg

    def test_snapshot_is_isolated_from_later_ticks(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        state.tick(TICK_DT)
        trails = state.trail_snapshot()
        lengths = [len(t) for t in trails]
        state.tick(TICK_DT)

        assert [len(t) for t in trails] == lengths
        assert all(not t.flags.writeable for t in trails)

    def test_world_snapshot(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(True, AIDifficulty.EASY)
        state.tick(TICK_DT)
        snap = state.snapshot()

        assert isinstance(snap.mode, Playing)
        assert snap.single_player
        assert snap.difficulty is AIDifficulty.EASY
        assert [c.label for c in snap.cycles] == ["Player 1", "Computer"]
        assert all(len(c.trail) > 0 for c in snap.cycles)
        assert snap.cycles[0].color != snap.cycles[1].color


class TestKeyRouting:
    """Test suite for key_down / key_up"""

    def test_menu_keys(self) -> None:
        state = GameState(rng=random.Random(0))
        state.key_down("d")
        assert state.ai_difficulty is AIDifficulty.HARD

        state.key_down("1")
        assert isinstance(state.mode, Playing)
        assert state.single_player
        assert state.cycles[1].difficulty is AIDifficulty.HARD

    def test_duo_key(self) -> None:
        state = GameState(rng=random.Random(0))
        state.key_down("2")

        assert not state.single_player

    def test_playing_keys_reach_cycles(self) -> None:
        state = GameState(rng=random.Random(0))
        state.key_down("2")
        state.key_down("w")
        state.key_down("down")
        state.key_down("left shift")

        assert state.cycles[0].direction is Direction.UP
        assert state.cycles[1].direction is Direction.DOWN
        assert state.cycles[0].is_boosting

        state.key_up("left shift")
        assert not state.cycles[0].is_boosting

    def test_pause_and_cancel_keys(self) -> None:
        state = GameState(rng=random.Random(0))
        state.key_down("2")
        state.key_down("p")
        assert isinstance(state.mode, Paused)

        state.key_down("w")
        assert state.cycles[0].direction is Direction.RIGHT

        state.key_down("p")
        assert isinstance(state.mode, Playing)

        state.key_down("escape")
        assert isinstance(state.mode, Menu)

    def test_menu_ignores_difficulty_key_during_play(self) -> None:
        state = GameState(rng=random.Random(0))
        state.key_down("2")
        state.key_down("d")

        assert state.ai_difficulty is AIDifficulty.MEDIUM


class TestScenarios:
    """End-to-end rounds"""

    def test_head_on_collision_is_a_draw(self) -> None:
        """Test that two idle humans driving at each other die on the same tick"""
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        ticks = run_until_over(state)

        assert ticks == 200
        assert not any(c.alive for c in state.cycles)
        assert all(c.death_cause == "trail" for c in state.cycles)
        assert state.mode.result.is_draw
        assert state.mode.result.label == "Draw!"
        assert state.cycles[0].position == state.cycles[1].position

    def test_easy_ai_holds_course_on_open_road(self) -> None:
        """Test that the Easy computer drives straight while its dice stay quiet"""
        state = GameState(rng=PinnedRandom(0.99))
        state.start_round(True, AIDifficulty.EASY)
        for _ in range(60):
            state.tick(TICK_DT)

        computer = state.cycles[1]
        assert computer.alive
        assert computer.direction is Direction.LEFT
        assert computer.position[1] == GRID_HEIGHT / 2

    def test_solo_round_ends_with_a_consistent_result(self) -> None:
        """Test that a round against the Hard computer always reaches GameOver"""
        state = GameState(rng=random.Random(3))
        state.start_round(True, AIDifficulty.HARD)
        run_until_over(state, max_ticks=5000)

        result = state.mode.result
        alive = [i for i, c in enumerate(state.cycles) if c.alive]
        if result.is_draw:
            assert alive == []
        else:
            assert alive == [result.winner_index]
            assert result.label in ("Player 1 Wins!", "Computer Wins!")


def far_trail(y_low: float, y_high: float) -> np.ndarray:
    """A full-cap trail laid in horizontal rows well away from the start lane"""
    rows = TRAIL_MAX_LENGTH // 1500
    xs = np.tile(np.linspace(20.0, GRID_WIDTH - 20.0, 1500), rows)
    ys = np.repeat(np.linspace(y_low, y_high, rows), 1500)
    return np.column_stack([xs, ys])


class TestTickCost:
    """Per-tick cost with trails at their length cap"""

    def test_full_trails_stay_within_tick_budget(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        state.cycles[0].trail.extend(far_trail(20.0, 110.0))
        state.cycles[1].trail.extend(far_trail(890.0, 980.0))
        assert all(len(c.trail) == TRAIL_MAX_LENGTH for c in state.cycles)

        ticks = 60
        started = time.perf_counter()
        for _ in range(ticks):
            state.tick(TICK_DT)
        per_tick = (time.perf_counter() - started) / ticks

        assert isinstance(state.mode, Playing)
        assert all(c.alive for c in state.cycles)
        assert all(len(c.trail) == TRAIL_MAX_LENGTH for c in state.cycles)
        assert per_tick < TICK_DT

    def test_trail_snapshot_does_not_copy(self) -> None:
        state = GameState(rng=random.Random(0))
        state.start_round(False)
        state.cycles[0].trail.extend(far_trail(20.0, 110.0))
        first, _ = state.trail_snapshot()
        second, _ = state.trail_snapshot()

        assert np.shares_memory(first, second)
