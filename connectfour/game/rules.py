"""
rules.py - Game flow for a human playing Connect Four against the computer

This module provides:
1. ConnectFourGame, which owns the current board, whose turn it is and the
   move history, validates human moves and asks the opponent for replies
2. GameSession, an explicit screen state machine (login, mode select,
   playing, game over) driven by events from a user interface
"""

from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import (COLS, Cell, GameResult, InvalidMoveError,
                               InvalidTransitionError)


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    The human plays Cell.PLAYER and the opponent plays Cell.COMPUTER. The
    opponent is any object with a get_move(board) method; a MinimaxPlayer
    at the default depth is used when none is given.
    """

    def __init__(self, opponent=None, first: Cell = Cell.PLAYER):
        """
        Initialize a new game.

        Args:
            opponent: The computer player
            first: The side that moves first
        """
        if opponent is None:
            from connectfour.ai.minimax import MinimaxPlayer
            opponent = MinimaxPlayer()
        self.opponent = opponent
        self.first = Cell(first)
        self.reset()

    def reset(self) -> None:
        """Reset the game to an empty board."""
        debug.debug("Resetting game", "game")
        self.board = Board()
        self.current_player = self.first
        self.result = GameResult.IN_PROGRESS
        # (board before the move, column, side that moved)
        self.history: List[Tuple[Board, int, Cell]] = []

    @property
    def moves(self) -> List[int]:
        return [column for _, column, _ in self.history]

    def _apply(self, column: int, player: Cell) -> None:
        before = self.board
        self.board = before.drop(column, player)
        self.history.append((before, column, player))
        self.result = self.board.result()

        if self.result.is_game_over():
            debug.info(f"Game over after {len(self.history)} moves: {self.result.name}", "game")
        else:
            self.current_player = player.other()

    def _check_turn(self, player: Cell) -> None:
        if self.is_game_over():
            raise InvalidMoveError("The game is over")
        if self.current_player != player:
            raise InvalidMoveError(f"It is not {player.name}'s turn")

    def play_human(self, column: int) -> None:
        """
        Apply the human's move.

        Raises:
            InvalidMoveError: If the game is over, it is the computer's turn,
                or the column is out of range or full
        """
        self._check_turn(Cell.PLAYER)

        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            raise InvalidMoveError(f"Column must be an integer, got {column!r}")
        if not 0 <= column < COLS:
            raise InvalidMoveError(f"Column must be between 0 and {COLS - 1}")
        if not self.board.is_valid_move(column):
            raise InvalidMoveError(f"Column {column} is full")

        debug.debug(f"Player plays column {column}", "game")
        self._apply(int(column), Cell.PLAYER)

    def play_computer(self) -> int:
        """
        Ask the opponent for a move and apply it.

        Returns:
            The column the computer played
        """
        self._check_turn(Cell.COMPUTER)

        column = self.opponent.get_move(self.board)
        debug.debug(f"Computer plays column {column}", "game")
        self._apply(column, Cell.COMPUTER)
        return column

    def undo(self) -> bool:
        """
        Take back the human's last move, along with any computer reply.

        Returns:
            True if a move was undone, False if the human has not moved yet
        """
        if not any(player == Cell.PLAYER for _, _, player in self.history):
            debug.debug("No moves to undo", "game")
            return False

        while self.history:
            board, column, player = self.history.pop()
            self.board = board
            if player == Cell.PLAYER:
                break

        self.current_player = Cell.PLAYER
        self.result = self.board.result()
        debug.debug(f"Undo: {len(self.history)} moves remain", "game")
        return True

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def get_result(self) -> GameResult:
        return self.result

    def get_winner(self) -> Optional[Cell]:
        """
        Get the winner of the game.

        Returns:
            The winning side, or None if no winner yet or draw
        """
        if self.result == GameResult.PLAYER_WIN:
            return Cell.PLAYER
        elif self.result == GameResult.COMPUTER_WIN:
            return Cell.COMPUTER
        return None

    def get_valid_moves(self) -> List[int]:
        return self.board.valid_columns()

    def render(self) -> str:
        return self.board.render()


class Screen(Enum):
    """Screens a session moves through."""
    LOGIN = auto()
    MODE_SELECT = auto()
    PLAYING = auto()
    GAME_OVER = auto()


class Event(Enum):
    """User actions that drive screen transitions."""
    LOGIN = auto()
    PLAY_COMPUTER = auto()
    PLAY_ONLINE = auto()
    HUMAN_MOVE = auto()
    COMPUTER_MOVE = auto()
    BACK = auto()
    PLAY_AGAIN = auto()
    BACK_TO_MENU = auto()


RESULT_MESSAGES = {
    GameResult.PLAYER_WIN: "You Won!",
    GameResult.COMPUTER_WIN: "Computer Won!",
    GameResult.DRAW: "It's a Tie!",
}

DEFAULT_USERNAME = "Player"


class GameSession:
    """
    Screen state machine for a play session.

        LOGIN --login--> MODE_SELECT --play vs computer--> PLAYING
        PLAYING --back--> MODE_SELECT
        PLAYING --game ends--> GAME_OVER
        GAME_OVER --play again--> PLAYING
        GAME_OVER --back to menu--> MODE_SELECT

    Events that are not valid on the current screen raise
    InvalidTransitionError and leave the session unchanged.
    """

    def __init__(self, opponent_factory: Optional[Callable[[], object]] = None,
                 first: Cell = Cell.PLAYER):
        """
        Args:
            opponent_factory: Callable returning the computer player, called once
            first: The side that moves first in each game
        """
        self.screen = Screen.LOGIN
        self.username: Optional[str] = None
        self.first = Cell(first)
        self.game: Optional[ConnectFourGame] = None
        self.result_message = ""
        self.opponent = opponent_factory() if opponent_factory is not None else None

        self._handlers: Dict[Event, Callable] = {
            Event.LOGIN: self.login,
            Event.PLAY_COMPUTER: self.play_computer,
            Event.PLAY_ONLINE: self.play_online,
            Event.HUMAN_MOVE: self.human_move,
            Event.COMPUTER_MOVE: self.computer_move,
            Event.BACK: self.back,
            Event.PLAY_AGAIN: self.play_again,
            Event.BACK_TO_MENU: self.back_to_menu,
        }

    def _require(self, screen: Screen, action: str) -> None:
        if self.screen != screen:
            debug.debug(f"Rejected '{action}' on screen {self.screen.name}", "session")
            raise InvalidTransitionError(
                f"Cannot {action} from the {self.screen.name} screen")

    def _goto(self, screen: Screen) -> None:
        debug.debug(f"Screen {self.screen.name} -> {screen.name}", "session")
        self.screen = screen

    def _start_game(self) -> None:
        self.game = ConnectFourGame(opponent=self.opponent, first=self.first)
        self.opponent = self.game.opponent
        self.result_message = ""
        self._goto(Screen.PLAYING)

    def _after_move(self) -> None:
        if self.game.is_game_over():
            self.result_message = RESULT_MESSAGES[self.game.get_result()]
            debug.info(f"{self.username}: {self.result_message}", "session")
            self._goto(Screen.GAME_OVER)

    @property
    def is_computer_turn(self) -> bool:
        return (self.screen == Screen.PLAYING
                and self.game.current_player == Cell.COMPUTER)

    def login(self, username: str = "") -> None:
        self._require(Screen.LOGIN, "log in")
        self.username = username.strip() or DEFAULT_USERNAME
        debug.info(f"Logged in as {self.username}", "session")
        self._goto(Screen.MODE_SELECT)

    def play_computer(self) -> None:
        self._require(Screen.MODE_SELECT, "start a game")
        self._start_game()

    def play_online(self) -> None:
        self._require(Screen.MODE_SELECT, "start a game")
        raise InvalidTransitionError("Online play is not available")

    def human_move(self, column: int) -> None:
        self._require(Screen.PLAYING, "play a move")
        self.game.play_human(column)
        self._after_move()

    def computer_move(self) -> int:
        self._require(Screen.PLAYING, "play a move")
        column = self.game.play_computer()
        self._after_move()
        return column

    def back(self) -> None:
        self._require(Screen.PLAYING, "leave the game")
        self.game = None
        self._goto(Screen.MODE_SELECT)

    def play_again(self) -> None:
        self._require(Screen.GAME_OVER, "play again")
        self._start_game()

    def back_to_menu(self) -> None:
        self._require(Screen.GAME_OVER, "return to the menu")
        self.game = None
        self._goto(Screen.MODE_SELECT)

    def dispatch(self, event: Event, *args):
        """Route an event to its transition."""
        return self._handlers[Event(event)](*args)
