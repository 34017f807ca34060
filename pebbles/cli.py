"""
Pebbles CLI - Command-line interface for the engine.

Usage:
    pebbles play [--difficulty hard] [--pebbles 15] [--max 3]   Play in the terminal
    pebbles serve [--host 127.0.0.1] [--port 8000]               Run the REST API
"""

import argparse
import logging
import sys

from .engine_core import (
    DifficultyLevel,
    EventType,
    GameConfig,
    MalformedInputError,
    Player,
    PebblesError,
)
from .session import GameSession
from .bots import SeededEntropy, SystemEntropy


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pebbles - remove pebbles against an automated opponent",
        prog="pebbles",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument(
        "--difficulty", choices=[d.value for d in DifficultyLevel], default="easy",
        help="Opponent difficulty",
    )
    play_parser.add_argument("--pebbles", type=int, default=15, help="Pile size")
    play_parser.add_argument("--max", dest="max_per_turn", type=int, default=3,
                             help="Most pebbles removable per turn")
    play_parser.add_argument("--seed", type=int, help="Seed for a reproducible game")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, input_fn=input):
    """Interactive game on stdin/stdout."""
    entropy = SeededEntropy(args.seed) if args.seed is not None else SystemEntropy()
    session = GameSession(entropy=entropy)
    config = GameConfig(
        difficulty=DifficultyLevel(args.difficulty),
        total_pebbles=args.pebbles,
        max_per_turn=args.max_per_turn,
    )

    try:
        state = session.start(config)
    except PebblesError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    print(f"Pile: {config.total_pebbles} pebbles, take 1-{config.max_per_turn} per turn.")
    if state.first_player is Player.AUTOMATED:
        removed = config.total_pebbles - state.remaining
        print(f"Opponent goes first and removes {removed}.")
    else:
        print("You go first.")

    while not state.is_over:
        print(f"\n{state.remaining} pebbles left.")
        try:
            raw = input_fn("Remove how many? (q to give up) ").strip()
        except EOFError:
            raw = "q"

        if raw.lower() in {"q", "quit"}:
            try:
                session.give_up()
            except PebblesError as e:
                print(f"Error: {e.message}")
                sys.exit(1)
            state = session.query()
            break

        try:
            pebbles = int(raw)
        except ValueError:
            print("Enter a number.")
            continue

        try:
            event = session.apply_turn(pebbles)
        except MalformedInputError as e:
            print(f"Invalid move: {e.message}")
            continue
        except PebblesError as e:
            print(f"Error: {e.message}")
            sys.exit(1)

        state = session.query()
        if event is not None and event.event_type is EventType.COUNTER_TURN:
            print(f"Opponent removes {event.amount}.")

    if state.winner is Player.HUMAN:
        print("\nYou win!")
    else:
        print("\nThe opponent wins.")


def cmd_serve(args):
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run(
        "pebbles.api.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
