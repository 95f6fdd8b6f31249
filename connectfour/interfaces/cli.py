"""
cli.py - Command-line interface for Connect Four

This module provides a CLI for playing against the computer, inspecting
board positions, and benchmarking the board model and search engine.
"""

import argparse
import random
import sys
import time
from typing import List, Optional, Union

from connectfour.ai.evaluator import evaluate
from connectfour.ai.minimax import MinimaxPlayer
from connectfour.ai.random_player import RandomPlayer
from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.game.rules import GameSession, Screen
from connectfour.utils import (ROWS, COLS, COMPUTER_THINK_DELAY, SEARCH_DEPTH, Cell,
                               ConnectFourError, InvalidTransitionError)

# Commands accepted at the move prompt
QUIT, UNDO, RESTART, BACK = "q", "u", "r", "b"


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self):
        """Initialize the CLI."""
        self.args = None
        self.session: Optional[GameSession] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four CLI')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game against the computer')
        play_parser.add_argument('--ai', choices=['minimax', 'random'], default='minimax',
                                 help='Computer opponent type')
        play_parser.add_argument('--depth', type=int, default=SEARCH_DEPTH,
                                 help='Search depth in plies for the minimax opponent')
        play_parser.add_argument('--seed', type=int, default=None,
                                 help='Seed for the tie-break random source')
        play_parser.add_argument('--delay', type=float, default=COMPUTER_THINK_DELAY,
                                 help='Pause before the computer moves, in seconds')
        play_parser.add_argument('--first', choices=['player', 'computer'], default='player',
                                 help='Which side moves first')

        test_parser = subparsers.add_parser('test', help='Inspect a board position')
        test_parser.add_argument('--position', type=str,
                                 help=f'{ROWS * COLS} comma-separated cell values, top row first')
        test_parser.add_argument('--depth', type=int, default=SEARCH_DEPTH,
                                 help='Search depth for the suggested computer move')
        test_parser.add_argument('--seed', type=int, default=None,
                                 help='Seed for the tie-break random source')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for board benchmarks')
        benchmark_parser.add_argument('--depth', type=int, default=SEARCH_DEPTH,
                                      help='Search depth for search benchmarks')

        for sub in (play_parser, test_parser, benchmark_parser):
            sub.add_argument('--debug', action='store_true', help='Enable debug logging')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            sys.exit(1)

    def create_opponent(self):
        """Build the computer player selected on the command line."""
        seed = getattr(self.args, 'seed', None)
        rng = random.Random(seed) if seed is not None else None

        if getattr(self.args, 'ai', 'minimax') == 'random':
            return RandomPlayer(rng=rng)
        return MinimaxPlayer(depth=getattr(self.args, 'depth', SEARCH_DEPTH), rng=rng)

    @staticmethod
    def prompt(message: str) -> str:
        """Read a line of input; end of input counts as quitting."""
        try:
            return input(message).strip().lower()
        except EOFError:
            return QUIT

    # Interactive play

    def play_game(self) -> None:
        """Run a play session: login, mode menu, games, game-over menu."""
        first = Cell.COMPUTER if self.args.first == 'computer' else Cell.PLAYER
        self.session = GameSession(opponent_factory=self.create_opponent, first=first)

        print("Welcome to Connect Four!")
        self.session.login(self.prompt("Username: "))
        print(f"Hello, {self.session.username}.")

        while True:
            if self.session.screen == Screen.MODE_SELECT:
                if not self.mode_menu():
                    return
            elif self.session.screen == Screen.PLAYING:
                if not self.play_turn():
                    return
            elif self.session.screen == Screen.GAME_OVER:
                if not self.game_over_menu():
                    return

    def mode_menu(self) -> bool:
        """Handle the mode select screen. Returns False to quit."""
        choice = self.prompt("1) Play against computer  2) Play online (coming soon)  q) Quit: ")
        if choice == '1':
            self.session.play_computer()
            print("Enter column number (0-6) to make a move.")
            print("Other commands: 'q' quit, 'u' undo, 'r' restart, 'b' back to menu.")
            print(self.session.game.render())
        elif choice == '2':
            try:
                self.session.play_online()
            except InvalidTransitionError as e:
                print(e)
        elif choice == QUIT:
            print("Goodbye.")
            return False
        else:
            print("Please choose 1, 2 or q.")
        return True

    def play_turn(self) -> bool:
        """Play one turn of the current game. Returns False to quit."""
        session = self.session

        if session.is_computer_turn:
            print("Computer is thinking...")
            time.sleep(max(0.0, self.args.delay))  # pacing only
            column = session.computer_move()
            print(f"Computer plays column {column}")
            print(session.game.render())
            return True

        move = self.get_human_move()
        if move is None:
            return True
        if move == QUIT:
            print("Quitting game.")
            return False
        if move == BACK:
            session.back()
        elif move == UNDO:
            if session.game.undo():
                print("Move undone.")
                print(session.game.render())
            else:
                print("No moves to undo.")
        elif move == RESTART:
            session.game.reset()
            print("Game restarted.")
            print(session.game.render())
        else:
            try:
                session.human_move(move)
            except ConnectFourError as e:
                print(f"Invalid move: {e}")
                return True
            print(session.game.render())
        return True

    def game_over_menu(self) -> bool:
        """Handle the game over screen. Returns False to quit."""
        game = self.session.game
        print(self.session.result_message)
        line = game.board.winning_line()
        if line:
            print(f"Winning line: {line}")

        while True:
            choice = self.prompt("p) Play again  m) Menu  q) Quit: ")
            if choice == 'p':
                self.session.play_again()
                print(self.session.game.render())
                return True
            if choice == 'm':
                self.session.back_to_menu()
                return True
            if choice == QUIT:
                print("Goodbye.")
                return False
            print("Please choose p, m or q.")

    def get_human_move(self) -> Union[int, str, None]:
        """
        Get a move from human player input.

        Returns:
            Column index, a command letter, or None if the input was invalid
        """
        user_input = self.prompt(f"Your move (columns 0-{COLS - 1}, q/u/r/b): ")

        if user_input in (QUIT, UNDO, RESTART, BACK):
            return user_input

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

        if 0 <= move < COLS:
            return move
        print(f"Column must be between 0 and {COLS - 1}.")
        return None

    # Position inspection

    def test_position(self) -> None:
        """Load a position and report its state and the computer's choice."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return

        try:
            board = Board.from_position(self.args.position)
        except ConnectFourError as e:
            print(f"Error parsing position: {e}")
            return

        print("Loaded position:")
        print(board.render())

        winner = board.winner()
        if winner is not None:
            print(f"Win for {winner.name} at {board.winning_line()}")
        else:
            print("No win detected for any player")

        if board.is_full():
            print("Board is full")
        else:
            print(f"Empty spaces: {board.count(Cell.EMPTY)}")

        print(f"Terminal: {board.is_terminal()}")
        print(f"Valid moves: {board.valid_columns()}")
        print(f"Evaluation: {evaluate(board)}")

        if not board.is_terminal():
            player = MinimaxPlayer(depth=self.args.depth,
                                   rng=random.Random(self.args.seed) if self.args.seed is not None else None)
            result = player.search(board)
            print(f"Computer would play column {result.column} "
                  f"(score {result.score}, {player.nodes_evaluated} nodes, "
                  f"{player.last_search_time:.3f}s)")

    # Benchmarking

    def benchmark(self) -> None:
        """Benchmark the board model, the evaluator and the search."""
        iterations = self.args.iterations
        rng = random.Random(0)
        print(f"Running benchmark with {iterations} iterations...")

        positions = []
        for _ in range(iterations):
            board = Board()
            for _ in range(rng.randint(0, 20)):
                columns = board.valid_columns()
                if board.is_terminal() or not columns:
                    break
                player = Cell.PLAYER if board.count(Cell.EMPTY) % 2 == 0 else Cell.COMPUTER
                board = board.drop(rng.choice(columns), player)
            positions.append(board)

        with debug.timer("drops", "cli") as timing:
            board = Board()
            drops = 0
            for i in range(iterations):
                if board.is_full():
                    board = Board()
                board = board.drop(rng.choice(board.valid_columns()),
                                   Cell.PLAYER if i % 2 == 0 else Cell.COMPUTER)
                drops += 1
        print(f"Drops: {timing['elapsed']:.6f} seconds total, "
              f"{timing['elapsed'] / drops * 1000:.6f} ms per drop")

        with debug.timer("win_check", "cli") as timing:
            for board in positions:
                board.is_terminal()
        print(f"Terminal checks: {timing['elapsed']:.6f} seconds total, "
              f"{timing['elapsed'] / len(positions) * 1000:.6f} ms per check")

        with debug.timer("evaluate", "cli") as timing:
            for board in positions:
                evaluate(board)
        print(f"Evaluations: {timing['elapsed']:.6f} seconds total, "
              f"{timing['elapsed'] / len(positions) * 1000:.6f} ms per evaluation")

        searches = [b for b in positions if not b.is_terminal()][:max(1, iterations // 100)]
        if not searches:
            print("No non-terminal positions to search")
            return
        player = MinimaxPlayer(depth=self.args.depth, rng=random.Random(0))
        total_nodes = 0
        with debug.timer("search", "cli") as timing:
            for board in searches:
                player.search(board)
                total_nodes += player.nodes_evaluated
        print(f"Depth {self.args.depth} searches: {len(searches)} in {timing['elapsed']:.3f} seconds, "
              f"{timing['elapsed'] / len(searches) * 1000:.1f} ms per search, "
              f"{total_nodes / len(searches):.0f} nodes per search")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run(argv)


if __name__ == "__main__":
    main()
