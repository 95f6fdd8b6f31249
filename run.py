#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four against the computer
"""

import argparse
import os
import sys

from connectfour.debug import debug, DebugLevel

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectfour.interfaces.cli import SimpleCLI  # noqa: E402
from connectfour.utils import COMPUTER_THINK_DELAY, SEARCH_DEPTH  # noqa: E402

# --- Utility Functions ---

def configure_debug(args):
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.configure(level=DebugLevel[args.debug_level.upper()])
    if args.log_file:
        debug.configure(log_file=args.log_file)


def build_cli_argv(args):
    """Translate the top-level arguments into SimpleCLI arguments."""
    argv = [args.command]

    if args.command == 'play':
        argv.extend(['--ai', args.ai, '--depth', str(args.depth),
                     '--delay', str(args.delay), '--first', args.first])
        if args.seed is not None:
            argv.extend(['--seed', str(args.seed)])
    elif args.command == 'test':
        if args.position:
            argv.extend(['--position', args.position])
        argv.extend(['--depth', str(args.depth)])
        if args.seed is not None:
            argv.extend(['--seed', str(args.seed)])
    elif args.command == 'benchmark':
        argv.extend(['--iterations', str(args.iterations), '--depth', str(args.depth)])

    return argv

# --- Game Command Handler ---

def handle_game_command(args):
    """Handle the 'game' component commands."""
    configure_debug(args)
    cli = SimpleCLI()
    cli.parse_args(build_cli_argv(args))
    cli.run()

# --- Main Entry Point ---

def build_parser():
    parser = argparse.ArgumentParser(
        description='Connect Four against a minimax computer opponent',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play against the computer (search depth 5)
    python run.py game play

    # Play against a weaker computer that moves first
    python run.py game play --depth 3 --first computer

    # Play against a random opponent with a fixed seed
    python run.py game play --ai random --seed 42

    # Inspect a position (42 values, top row first: 0 empty, 1 player, 2 computer)
    python run.py game test --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,2,2,2,0,0,0,0

    # Benchmark board operations and depth 4 searches
    python run.py game benchmark --iterations 2000 --depth 4
    """
    )

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    game_parser = subparsers.add_parser('game',
        help='Run the Connect Four game',
        description='Play Connect Four, inspect positions or run benchmarks')
    game_parser.add_argument('command',
        choices=['play', 'test', 'benchmark'],
        help='Game command: play (interactive game), test (inspect a position), '
             'benchmark (performance testing)')
    game_parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    game_parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='error',
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    game_parser.add_argument('--log_file',
        type=str,
        default=None,
        help='Also write log messages to this file')

    ai_group = game_parser.add_argument_group('Opponent options')
    ai_group.add_argument('--ai',
        choices=['minimax', 'random'],
        default='minimax',
        help='Computer opponent type')
    ai_group.add_argument('--depth',
        type=int,
        default=SEARCH_DEPTH,
        help=f'Search depth in plies (default: {SEARCH_DEPTH})')
    ai_group.add_argument('--seed',
        type=int,
        default=None,
        help='Seed for the tie-break random source (default: clock)')
    ai_group.add_argument('--delay',
        type=float,
        default=COMPUTER_THINK_DELAY,
        help=f'Pause before the computer moves, in seconds (default: {COMPUTER_THINK_DELAY})')
    ai_group.add_argument('--first',
        choices=['player', 'computer'],
        default='player',
        help='Which side moves first')

    other_group = game_parser.add_argument_group('Test and benchmark options')
    other_group.add_argument('--position',
        type=str,
        help='Board position to test (comma-separated values for test command)')
    other_group.add_argument('--iterations',
        type=int,
        default=1000,
        help='Number of iterations for benchmarking')

    return parser


def main(argv=None):
    """Main entry point for Connect Four."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.component == 'game':
        handle_game_command(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
