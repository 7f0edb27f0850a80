"""
Relic Hunt - Grid Exploration Game Engine

A deterministic, seedable engine for a single-player treasure hunt.
The player explores a 5x5 grid of hidden rooms, solves puzzles to claim
three relics, survives traps and opens the final treasure chest.
The engine provides:
- Grid generation
- Room discovery resolution
- Puzzle progression
- Reward and failure accounting
"""

__version__ = "0.1.0"
