"""
Treasure Hunt Setup - Creates initial game state.

This module handles:
- Generating the grid
- Creating the player at the start room with full health
- Choosing the opening narrative

Grid and player are always created together so nothing from a
previous game survives.
"""

from __future__ import annotations
import random
import uuid

from ...engine_core.state import GameState, PlayerState
from . import narrative
from .grid import generate_grid
from .rules import MAX_HEALTH, START_POSITION, STARTING_TITLE


def setup_treasure_hunt(
    rng: random.Random,
    random_seed: int | None = None,
    returning: bool = False,
) -> GameState:
    """
    Set up a new treasure hunt.

    Args:
        rng: Random source for grid generation
        random_seed: Seed rng was created from, recorded on the state
        returning: Use the "welcome back" story (for resets)

    Returns:
        Initial GameState ready for play
    """
    grid = generate_grid(rng)
    player = create_player(narrative.WELCOME_BACK if returning else narrative.WELCOME)

    return GameState(
        game_id=f"hunt_{uuid.uuid4().hex[:12]}",
        grid=grid,
        player=player,
        random_seed=random_seed,
    )


def create_player(story: str = narrative.WELCOME) -> PlayerState:
    """Create a player at the start room."""
    return PlayerState(
        position=START_POSITION,
        health=MAX_HEALTH,
        max_health=MAX_HEALTH,
        title=STARTING_TITLE,
        story=story,
    )
