"""
Unit tests for the mode state machine.
"""

import pytest

from lightcycle.modes import GameOver, Menu, ModeEvent, Paused, Playing, RoundResult, transition

RESULT = RoundResult(0, "Player 1 Wins!")


class TestTransitions:
    """Test suite for transition()"""

    @pytest.mark.parametrize(
        "mode, event, expected",
        [
            (Menu(), ModeEvent.START_ROUND, Playing()),
            (Playing(), ModeEvent.TOGGLE_PAUSE, Paused()),
            (Paused(), ModeEvent.TOGGLE_PAUSE, Playing()),
            (Playing(), ModeEvent.CANCEL, Menu()),
            (Paused(), ModeEvent.CANCEL, Menu()),
            (GameOver(RESULT), ModeEvent.CANCEL, Menu()),
        ],
    )
    def test_valid_transitions(self, mode, event, expected) -> None:
        assert transition(mode, event) == expected

    def test_round_over_carries_result(self) -> None:
        new_mode = transition(Playing(), ModeEvent.ROUND_OVER, RESULT)

        assert isinstance(new_mode, GameOver)
        assert new_mode.result == RESULT

    def test_round_over_needs_result(self) -> None:
        with pytest.raises(ValueError):
            transition(Playing(), ModeEvent.ROUND_OVER)

    @pytest.mark.parametrize(
        "mode, event",
        [
            (Menu(), ModeEvent.TOGGLE_PAUSE),
            (Menu(), ModeEvent.CANCEL),
            (Playing(), ModeEvent.START_ROUND),
            (Paused(), ModeEvent.START_ROUND),
            (Paused(), ModeEvent.ROUND_OVER),
            (GameOver(RESULT), ModeEvent.TOGGLE_PAUSE),
            (GameOver(RESULT), ModeEvent.START_ROUND),
        ],
    )
    def test_meaningless_events_are_ignored(self, mode, event) -> None:
        assert transition(mode, event, RESULT) is None


class TestRoundResult:
    """Test suite for RoundResult"""

    def test_draw(self) -> None:
        assert RoundResult(None, "Draw!").is_draw
        assert not RESULT.is_draw

    def test_mode_names(self) -> None:
        assert Menu().name == "Menu"
        assert GameOver(RESULT).name == "GameOver"
