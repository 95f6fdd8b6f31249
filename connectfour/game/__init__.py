"""
connectfour.game - Core game mechanics for Connect Four

This package contains the immutable board model and the game flow
(turn handling and the session screen state machine).
"""

from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame, Event, GameSession, Screen

__all__ = ['Board', 'ConnectFourGame', 'Event', 'GameSession', 'Screen']
