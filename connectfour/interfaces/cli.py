"""
cli.py - Command-line interface for the Connect Four engine

The terminal plays the part of the controller and the renderer: it reads a
fresh snapshot before every frame, and turns typed commands into engine calls.
Columns are typed as 1-7 and converted to the engine's 0-6.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional, Tuple

from connectfour.debug import debug, DebugLevel
from connectfour.game.engine import GameEngine, Snapshot
from connectfour.utils import COLS, Player

QUIT = 'quit'
UNDO = 'undo'
RESTART = 'restart'
DROP = 'drop'

Command = Tuple[str, Optional[int]]


def parse_command(text: str) -> Optional[Command]:
    """
    Translate one line of user input into a command.

    Numbers are passed through as columns even when out of range, so the
    engine is the one that rejects them.

    Returns:
        (command, column) or None if the input is not understood
    """
    text = text.strip().lower()
    if text in ('q', 'quit', 'exit'):
        return QUIT, None
    if text in ('u', 'undo'):
        return UNDO, None
    if text in ('r', 'restart'):
        return RESTART, None

    try:
        return DROP, int(text) - 1
    except ValueError:
        return None


def render_snapshot(snapshot: Snapshot) -> str:
    """Draw a full frame: board, status banner and error banner."""
    return snapshot.render()


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, engine: Optional[GameEngine] = None,
                 input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        self.engine = engine if engine is not None else GameEngine()
        self.input = input_func
        self.output = output_func
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four CLI')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug mode (equivalent to --debug_level debug)')
        parser.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Set debug level: none (silent) through trace (most verbose)')
        parser.add_argument('--log_file', type=str, default=None,
                            help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')
        subparsers.add_parser('play', help='Play a two-player game in the terminal')
        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark engine performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of random games to play')
        benchmark_parser.add_argument('--seed', type=int, default=None,
                                      help='Random seed for reproducible runs')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and apply logging options."""
        self.args = self.build_parser().parse_args(argv)
        configure_logging(self.args)
        return self.args

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI. Returns a process exit code."""
        if argv is not None or self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'benchmark':
            self.benchmark(self.args.iterations, self.args.seed)
        else:
            self.output("Please specify a command. Use --help for options.")
            return 1
        return 0

    def redraw(self) -> None:
        self.output(render_snapshot(self.engine.snapshot()))

    def play_game(self) -> None:
        """Play an interactive hot-seat game until the user quits."""
        self.output("Starting a new Connect Four game!")
        self.output(f"Enter a column (1-{COLS}) to drop a piece. "
                    "Other commands: 'u' undo, 'r' restart, 'q' quit.")
        self.redraw()

        while True:
            try:
                text = self.input("> ")
            except EOFError:
                self.output("")
                break

            command = parse_command(text)
            if command is None:
                self.output(f"Unrecognized input '{text.strip()}'. "
                            f"Enter 1-{COLS}, u, r or q.")
                continue

            action, column = command
            if action == QUIT:
                break

            debug.debug(f"Command {action} {'' if column is None else column}", "cli")
            if action == UNDO:
                self.engine.undo()
            elif action == RESTART:
                self.engine.restart()
            else:
                self.engine.drop(column)

            self.redraw()

        self.output("Goodbye.")

    def benchmark(self, iterations: int, seed: Optional[int] = None) -> dict:
        """
        Time random games played through the engine.

        Returns:
            Totals for games, moves, undos and elapsed seconds
        """
        rng = random.Random(seed)
        self.output(f"Running benchmark with {iterations} games...")

        results = {'games': 0, 'moves': 0, 'undos': 0, 'red_wins': 0,
                   'yellow_wins': 0, 'draws': 0}
        engine = GameEngine()

        debug.start_timer("benchmark_games")
        for _ in range(iterations):
            engine.restart()
            while not engine.status.is_game_over():
                engine.drop(rng.choice(engine.valid_moves()))
                results['moves'] += 1
            winner = engine.status.winner()
            if winner == Player.RED:
                results['red_wins'] += 1
            elif winner == Player.YELLOW:
                results['yellow_wins'] += 1
            else:
                results['draws'] += 1
            results['games'] += 1

            # Unwind the whole game to exercise undo as well
            while engine.undo():
                results['undos'] += 1
        elapsed = debug.end_timer("benchmark_games", "cli") or 0.0
        results['seconds'] = elapsed

        if results['moves']:
            self.output(f"Played {results['games']} games, {results['moves']} moves, "
                        f"{results['undos']} undos in {elapsed:.4f} seconds "
                        f"({elapsed / (results['moves'] + results['undos']) * 1000:.4f} ms per command)")
        self.output(f"Red wins: {results['red_wins']}, Yellow wins: {results['yellow_wins']}, "
                    f"Draws: {results['draws']}")
        return results


def configure_logging(args: argparse.Namespace) -> None:
    """Apply --debug, --debug_level and --log_file."""
    if getattr(args, 'debug', False):
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(getattr(args, 'debug_level', 'warning'))

    log_file = getattr(args, 'log_file', None)
    if log_file:
        debug.configure(log_file=log_file)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
