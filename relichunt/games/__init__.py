"""
Games module - Game-specific data and setup.

Each game has its own subpackage with:
- Rule constants
- Static catalogs (puzzles, events, narrative)
- Grid generation and initial state setup
"""
