"""
Relic Hunt CLI - Command-line interface for the engine.

Usage:
    relichunt play [--seed N]                  Play in the terminal
    relichunt serve [--host H] [--port P]      Run the REST API
"""

import argparse
import logging
import os
import sys

from .engine_core.state import RoomKind
from .games.treasure_hunt.rules import RELICS_REQUIRED

ROOM_SYMBOLS = {
    RoomKind.EMPTY: ".",
    RoomKind.RELIC: "R",
    RoomKind.TRAP: "X",
    RoomKind.FINAL: "F",
    RoomKind.START: "S",
}

MOVE_KEYS = {
    "w": "up", "up": "up",
    "s": "down", "down": "down",
    "a": "left", "left": "left",
    "d": "right", "right": "right",
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Relic Hunt - Grid exploration game",
        prog="relichunt",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("RELICHUNT_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING or $RELICHUNT_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible grid")

    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, input_func=input, output=print):
    """Interactive terminal game."""
    from .engine_core.engine import GameEngine

    engine = GameEngine(random_seed=args.seed)
    output(render(engine))

    while True:
        try:
            line = input_func("> ").strip()
        except EOFError:
            break
        if not line:
            continue

        command, _, rest = line.partition(" ")
        command = command.lower()

        if command in ("q", "quit"):
            break
        elif command in MOVE_KEYS:
            engine.move(MOVE_KEYS[command])
        elif command in ("answer", "ans"):
            engine.submit_answer(rest)
        elif command == "option" and rest.strip().isdigit():
            engine.select_option(int(rest) - 1)
            if not engine.last_result.success:
                output(f"{engine.last_result.error}. Pick one of the numbered options.")
                continue
            engine.submit_answer()
        elif command == "skip":
            engine.dismiss_puzzle()
        elif command == "reset":
            engine.reset()
        elif engine.player.puzzle_active:
            # Anything else while a puzzle is open is an answer
            engine.submit_answer(line)
        else:
            output("Commands: w/a/s/d, answer <text>, option <n>, skip, reset, quit")
            continue

        if engine.player.show_rewards:
            output(render(engine))
            engine.dismiss_rewards()
            continue
        output(render(engine))


def cmd_serve(args):
    """Run the REST API under uvicorn."""
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def render(engine) -> str:
    """Render the grid, status line, story and open puzzle as text."""
    player = engine.player
    lines = []

    for y, row in enumerate(engine.grid.rooms):
        cells = []
        for x, room in enumerate(row):
            if player.position.x == x and player.position.y == y:
                cells.append("@")
            elif not room.discovered:
                cells.append("#")
            elif room.kind == RoomKind.RELIC and player.has_claimed(room.relic_id):
                cells.append("r")
            else:
                cells.append(ROOM_SYMBOLS[room.kind])
        lines.append(" ".join(cells))

    lines.append("")
    lines.append(
        f"{player.title} | HP {player.health}/{player.max_health} | "
        f"Relics {player.relics_collected}/{RELICS_REQUIRED} | Gold {player.gold} | XP {player.experience}"
    )
    lines.append(player.story)

    puzzle = engine.current_puzzle
    if puzzle:
        lines.append("")
        lines.append(puzzle.question)
        for i, option in enumerate(puzzle.options, start=1):
            lines.append(f"  {i}. {option}")
        if puzzle.hint:
            lines.append(f"Hint: {puzzle.hint}")

    if player.show_rewards and player.final_reward:
        reward = player.final_reward
        lines.append("")
        lines.append(
            f"VICTORY REWARDS: +{reward.gold} gold, +{reward.experience} XP, "
            f"title {reward.title}"
        )

    if player.is_terminal:
        lines.append("Type 'reset' to play again or 'quit' to leave.")

    return "\n".join(lines)


if __name__ == "__main__":
    main()
