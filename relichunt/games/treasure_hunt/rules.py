"""
Treasure Hunt Rules - Fixed constants of the reference configuration.

Grid size and difficulty are not configurable. Everything the engine
needs to know about layout, damage and rewards lives here.
"""

from types import MappingProxyType

from ...engine_core.state import Position

GRID_SIZE = 5
MAX_HEALTH = 100

START_POSITION = Position(2, 2)
FINAL_POSITION = Position(4, 4)

# relic_id -> fixed chest position
RELIC_POSITIONS = MappingProxyType({
    1: Position(0, 0),
    2: Position(4, 0),
    3: Position(0, 4),
})
RELICS_REQUIRED = len(RELIC_POSITIONS)

TRAP_COUNT = 4
TRAP_DAMAGE = 20
TRAP_DAMAGE_SPREAD = 10  # extra damage is randrange(TRAP_DAMAGE_SPREAD)

EVENT_CHANCE = 0.3

# Puzzle outcomes
RELIC_HEAL = 15
WRONG_ANSWER_PENALTY = 10
WRONG_ANSWER_LOSS_THRESHOLD = 10  # health at or below this after a wrong answer loses

STARTING_TITLE = "Novice Explorer"


def relic_gold(relic_id: int) -> int:
    """Gold for claiming a relic. Scales with the relic, not solve order."""
    return 100 + 50 * relic_id


def relic_experience(relic_id: int) -> int:
    """Experience for claiming a relic."""
    return 50 + 25 * relic_id
