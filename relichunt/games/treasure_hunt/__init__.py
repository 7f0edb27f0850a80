"""
Treasure Hunt - The reference game

A single-player dungeon crawl on a 5x5 grid.
Key mechanics:
- Rooms are hidden until entered
- Three relic chests, each sealed by a puzzle
- Traps and ambient events change health
- The final chest opens only with all three relics

This module contains:
- Rule constants
- Puzzle catalog and scripted end-game puzzles
- Event table and narrative text
- Grid generator and game setup
"""

from .puzzles import (
    Puzzle,
    CATALOG_PUZZLES,
    FINAL_PUZZLE,
    BONUS_PUZZLE,
    FINAL_REWARD,
    get_puzzle,
    normalize_answer,
)
from .events import AmbientEvent, EVENT_TABLE, EMPTY_ROOM_MESSAGES, get_event
from .grid import generate_grid
from .setup import setup_treasure_hunt, create_player

__all__ = [
    "Puzzle",
    "CATALOG_PUZZLES",
    "FINAL_PUZZLE",
    "BONUS_PUZZLE",
    "FINAL_REWARD",
    "get_puzzle",
    "normalize_answer",
    "AmbientEvent",
    "EVENT_TABLE",
    "EMPTY_ROOM_MESSAGES",
    "get_event",
    "generate_grid",
    "setup_treasure_hunt",
    "create_player",
]
