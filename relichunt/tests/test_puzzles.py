"""
Tests for the static catalogs: puzzles, final reward and events.
"""

import pytest

from ..engine_core.state import EventType, PuzzleRef, PuzzleType
from ..games.treasure_hunt.events import EMPTY_ROOM_MESSAGES, EVENT_TABLE, get_event
from ..games.treasure_hunt.puzzles import (
    BONUS_PUZZLE,
    CATALOG_PUZZLES,
    FINAL_PUZZLE,
    FINAL_REWARD,
    get_puzzle,
    normalize_answer,
)
from ..games.treasure_hunt.rules import relic_experience, relic_gold


class TestAnswerMatching:
    """Tests for answer normalization."""

    @pytest.mark.parametrize("text", ["echo", "ECHO", "  Echo  ", "\techo\n"])
    def test_case_and_whitespace_ignored(self, text):
        assert CATALOG_PUZZLES[1].is_correct(text)

    @pytest.mark.parametrize("text", ["", "   ", None, "echoes", "e cho"])
    def test_wrong_or_empty_rejected(self, text):
        assert not CATALOG_PUZZLES[1].is_correct(text)

    def test_normalize(self):
        assert normalize_answer("  MaRs ") == "mars"
        assert normalize_answer(None) == ""


class TestCatalog:
    """Tests for the puzzle catalog."""

    def test_one_puzzle_per_type(self):
        types = {puzzle.puzzle_type for puzzle in CATALOG_PUZZLES.values()}
        assert types == set(PuzzleType)
        assert sorted(CATALOG_PUZZLES) == [1, 2, 3]

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            CATALOG_PUZZLES[4] = FINAL_PUZZLE

    def test_quiz_answer_is_an_option(self):
        quiz = CATALOG_PUZZLES[3]
        assert quiz.options
        assert any(quiz.is_correct(option) for option in quiz.options)
        assert any(FINAL_PUZZLE.is_correct(option) for option in FINAL_PUZZLE.options)

    def test_every_puzzle_has_a_hint(self):
        for puzzle in [*CATALOG_PUZZLES.values(), FINAL_PUZZLE, BONUS_PUZZLE]:
            assert puzzle.hint

    def test_get_puzzle_by_reference(self):
        assert get_puzzle(PuzzleRef.catalog(2)) is CATALOG_PUZZLES[2]
        assert get_puzzle(PuzzleRef.final()) is FINAL_PUZZLE
        assert get_puzzle(PuzzleRef.bonus()) is BONUS_PUZZLE

    def test_unknown_relic_raises(self):
        with pytest.raises(KeyError):
            get_puzzle(PuzzleRef.catalog(9))

    def test_scripted_puzzles_outside_catalog(self):
        """Final and bonus puzzles are not catalog entries, even by content."""
        assert FINAL_PUZZLE not in CATALOG_PUZZLES.values()
        assert BONUS_PUZZLE not in CATALOG_PUZZLES.values()
        assert PuzzleRef.final() != PuzzleRef.bonus()


class TestRewards:
    """Tests for reward scaling."""

    def test_relic_rewards_scale_with_relic(self):
        assert [relic_gold(i) for i in (1, 2, 3)] == [150, 200, 250]
        assert [relic_experience(i) for i in (1, 2, 3)] == [75, 100, 125]

    def test_final_reward(self):
        assert FINAL_REWARD.gold == 1000
        assert FINAL_REWARD.experience == 500
        assert FINAL_REWARD.title == "Legendary Treasure Hunter"


class TestEvents:
    """Tests for the event table."""

    def test_one_event_per_type(self):
        assert {event.event_type for event in EVENT_TABLE} == set(EventType)

    def test_magnitudes(self):
        assert get_event(EventType.HEAL).value == 20
        assert get_event(EventType.DAMAGE).value == 10
        assert get_event(EventType.NOTHING).value == 0
        assert get_event(EventType.HINT).value == 0

    def test_flavor_messages(self):
        assert len(EMPTY_ROOM_MESSAGES) == 4
        assert all(EMPTY_ROOM_MESSAGES)
