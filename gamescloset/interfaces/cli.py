"""
cli.py - Command-line interface for the Game Closet Connect Four engine

This module provides a text front end over the session interface: play a game
with 0, 1 or 2 human seats, analyze a position by listing the AI's win
probability for every legal column, and benchmark AI-vs-AI games.
"""

import argparse
import sys
from typing import Callable, List, Optional

from gamescloset.ai.player import AIPlayer
from gamescloset.debug import debug, DebugLevel
from gamescloset.exceptions import GameError, IllegalMove
from gamescloset.game.board import Board
from gamescloset.game.session import (GameSession, Lifecycle, Role, SessionConfig,
                                      current_state, reset, start_session, submit_move, to_menu)
from gamescloset.utils import ROWS, COLS, Outcome, Team

QUIT = "q"
RESET = "r"
MENU = "m"


def parse_moves(text: str) -> List[int]:
    """Parse a comma-separated list of columns such as "3,3,4"."""
    text = text.strip()
    if not text:
        return []
    return [int(part) for part in text.split(',')]


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, args: argparse.Namespace,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        """
        Initialize the CLI.

        Args:
            args: Parsed command-line arguments
            input_fn: Source of player input
            output_fn: Sink for everything the CLI prints
        """
        self.args = args
        self.input = input_fn
        self.output = output_fn
        self.ai_player = AIPlayer()

    def run(self) -> int:
        """Run the command named in the arguments; returns an exit code."""
        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        self.output("Please specify a command. Use --help for options.")
        return 1

    def _config(self, human_seats: int) -> SessionConfig:
        return SessionConfig(human_seats=human_seats, width=self.args.width, height=self.args.height)

    def play_game(self) -> int:
        """Play a Connect Four game interactively."""
        session = start_session(self._config(self.args.humans), self.ai_player)
        self.output("Starting a new Connect Four game!")
        self.output(f"Enter a column (0-{self.args.width - 1}) to move; "
                    f"'{QUIT}' quits, '{RESET}' restarts, '{MENU}' returns to the menu.")

        while True:
            state = current_state(session)
            self.output(state.board.render())

            if state.lifecycle == Lifecycle.FINISHED:
                self._announce(session)
                command = self._prompt(f"Play again? ({RESET} to restart, anything else quits): ")
                if command != RESET:
                    return 0
                reset(session)
                continue

            command = self._prompt(f"{state.active_team.name} ({state.active_team}) to move: ")
            if command == QUIT:
                self.output("Quitting game.")
                return 0
            if command == MENU:
                to_menu(session)
                self.output("Back at the main menu.")
                return 0
            if command == RESET:
                reset(session)
                self.output("Game restarted.")
                continue

            try:
                column = int(command)
            except ValueError:
                self.output("Invalid input. Please enter a column number or a command.")
                continue

            try:
                submit_move(session, column)
            except IllegalMove as e:
                self.output(f"Move rejected: {e.reason}")

    def _prompt(self, message: str) -> str:
        try:
            return self.input(message).strip().lower()
        except EOFError:
            return QUIT

    def _announce(self, session: GameSession):
        result = session.result
        self.output("Game over!")
        if result.outcome == Outcome.DRAW:
            self.output("It's a draw!")
            return

        role = session.roles[result.winner]
        who = "AI" if role == Role.AI else "Human"
        line = " ".join(f"({c},{r})" for c, r in result.line)
        self.output(f"{result.winner.name} ({who}) wins with {line}")

    def analyze(self) -> int:
        """Replay a move list and print the AI's probability for each legal column."""
        try:
            moves = parse_moves(self.args.moves)
        except ValueError as e:
            self.output(f"Error parsing moves: {e}")
            return 2

        board = Board(self.args.width, self.args.height)
        for column in moves:
            if board.check_terminal().is_game_over():
                self.output(f"Game already over before column {column}")
                return 2
            try:
                board.drop(column)
            except GameError as e:
                self.output(f"Cannot play column {column}: {e}")
                return 2

        snapshot = board.snapshot()
        self.output(snapshot.render())
        terminal = snapshot.check_terminal()
        if terminal.is_game_over():
            self.output(f"Result: {terminal}")
            return 0

        team = snapshot.current_team
        evaluator = self.ai_player.evaluator
        self.output(f"{team.name} to move, position value {evaluator.evaluate(snapshot, team):.3f}")
        for column, probability in self.ai_player.rank_moves(snapshot, team):
            self.output(f"  column {column}: {probability:.3f}")
        self.output(f"AI would play column {self.ai_player.choose_move(snapshot, team)}")
        return 0

    def benchmark(self) -> int:
        """Play AI-vs-AI games and report timing and results."""
        games = self.args.games
        tally = {Team.A: 0, Team.B: 0, None: 0}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(games):
            session = start_session(self._config(0), self.ai_player)
            result = session.result
            tally[result.winner if result.outcome == Outcome.WIN else None] += 1
            total_moves += len(session.board.moves)
        elapsed = debug.end_timer("benchmark", "cli") or 0.0

        self.output(f"Played {games} games with {total_moves} total moves in {elapsed:.3f} seconds")
        if total_moves:
            self.output(f"{elapsed / total_moves * 1000:.3f} ms per move")
        self.output(f"A wins: {tally[Team.A]}, B wins: {tally[Team.B]}, draws: {tally[None]}")
        return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser shared by the CLI and run.py."""
    parser = argparse.ArgumentParser(description='Game Closet: Connect Four')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
                        choices=[level.name.lower() for level in DebugLevel],
                        default='warning',
                        help='Set debug level: none (silent) up to trace (most verbose)')
    parser.add_argument('--log_file', type=str, default=None, help='Also write logs to this file')
    parser.add_argument('--components', type=str, default=None,
                        help='Comma-separated components to log for, e.g. "session,ai" (default: all)')
    parser.add_argument('--width', type=int, default=COLS, help='Board width (default: 7)')
    parser.add_argument('--height', type=int, default=ROWS, help='Board height (default: 6)')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--humans', type=int, choices=[0, 1, 2], default=1,
                             help='Number of human seats; the rest are played by the AI')

    analyze_parser = subparsers.add_parser('analyze', help='Show AI evaluation of a position')
    analyze_parser.add_argument('--moves', type=str, default='',
                                help='Comma-separated columns played so far, e.g. "3,3,4"')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark AI-vs-AI games')
    benchmark_parser.add_argument('--games', type=int, default=20, help='Number of games to play')

    return parser


def configure_debug(args: argparse.Namespace):
    """Configure logging from --debug / --debug_level / --log_file / --components."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)
    if args.components:
        debug.configure(components=[c.strip() for c in args.components.split(',') if c.strip()])


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    configure_debug(args)
    return SimpleCLI(args).run()


if __name__ == "__main__":
    sys.exit(main())
