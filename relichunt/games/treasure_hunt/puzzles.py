"""
Treasure Hunt Puzzles - Catalog, scripted end-game puzzles and the final reward.

The catalog holds one puzzle per type, keyed by the relic it gates.
The final and bonus puzzles are scripted separately and are only
reachable through the final room.

Answers are matched after trimming and case folding.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType

from ...engine_core.state import PuzzleKind, PuzzleRef, PuzzleType, Reward


def normalize_answer(text: str | None) -> str:
    """Trim and case-fold an answer for comparison."""
    return (text or "").strip().casefold()


@dataclass(frozen=True)
class Puzzle:
    """
    A puzzle definition.

    options is only used by quiz puzzles. Quiz options are answered by
    picking one; the picked option is submitted as text.
    """
    puzzle_type: PuzzleType
    question: str
    answer: str
    options: tuple[str, ...] = ()
    hint: str | None = None

    def is_correct(self, text: str | None) -> bool:
        return normalize_answer(text) == normalize_answer(self.answer)


# ============================================================================
# Catalog puzzles (one per relic)
# ============================================================================

ECHO_RIDDLE = Puzzle(
    puzzle_type=PuzzleType.RIDDLE,
    question=(
        "I speak without a mouth and hear without ears. I have no body, "
        "but come alive with wind. What am I?"
    ),
    answer="echo",
    hint="Sound that bounces back...",
)

DRAGON_SCRAMBLE = Puzzle(
    puzzle_type=PuzzleType.SCRAMBLE,
    question="Unscramble this word: DARGNO",
    answer="dragon",
    hint="A mythical fire-breathing creature",
)

RED_PLANET_QUIZ = Puzzle(
    puzzle_type=PuzzleType.QUIZ,
    question="Which planet is known as the Red Planet?",
    answer="mars",
    options=("Venus", "Mars", "Jupiter", "Saturn"),
    hint="Named after the Roman god of war",
)

# relic_id -> puzzle
CATALOG_PUZZLES = MappingProxyType({
    1: ECHO_RIDDLE,
    2: DRAGON_SCRAMBLE,
    3: RED_PLANET_QUIZ,
})


# ============================================================================
# Scripted end-game
# ============================================================================

FINAL_PUZZLE = Puzzle(
    puzzle_type=PuzzleType.QUIZ,
    question=(
        "ULTIMATE CHALLENGE: In this treasure hunt, what was the total "
        "number of rooms you could explore?"
    ),
    answer="25",
    options=("20", "25", "30", "16"),
    hint="Think about the grid size... 5 x 5 = ?",
)

BONUS_PUZZLE = Puzzle(
    puzzle_type=PuzzleType.RIDDLE,
    question=(
        "BONUS RIDDLE: I have cities, but no houses. I have mountains, but "
        "no trees. I have water, but no fish. What am I?"
    ),
    answer="map",
    hint="You've been using one throughout this adventure...",
)

FINAL_REWARD = Reward(
    gold=1000,
    experience=500,
    title="Legendary Treasure Hunter",
)


def get_puzzle(ref: PuzzleRef) -> Puzzle:
    """Resolve a puzzle reference to its definition."""
    if ref.kind == PuzzleKind.FINAL:
        return FINAL_PUZZLE
    if ref.kind == PuzzleKind.BONUS:
        return BONUS_PUZZLE
    if ref.relic_id not in CATALOG_PUZZLES:
        raise KeyError(f"No catalog puzzle for relic {ref.relic_id}")
    return CATALOG_PUZZLES[ref.relic_id]
