"""
The GameSession is the entrypoint into the domain layer for the service layer.
It owns the history of board snapshots and the pointer into that history (time-travel), applies moves,
and derives the status of the game (winner, draw, next player) from whatever snapshot the pointer selects.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import (
    CellOccupiedError,
    GameAlreadyDecidedError,
    GameStateError,
    IndexOutOfRangeError,
)
from src.core.models import SessionModel
from src.core.shared_types import Player, Status
from src.ninarow.board import Board
from src.ninarow.config import GameConfig
from src.ninarow.win_detector import WinResult, evaluate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameStatus:
    """Everything the presentation layer needs to know about the selected snapshot. Never stored, always derived."""

    winner: Optional[Player]
    line: tuple[int, ...]
    is_draw: bool
    next_player: Player

    @property
    def state(self) -> Status:
        if self.winner is not None:
            return Status.WON
        if self.is_draw:
            return Status.DRAW
        return Status.IN_PROGRESS

    @property
    def message(self) -> str:
        if self.winner is not None:
            return f"Winner: {self.winner}"
        if self.is_draw:
            return "Draw"
        return f"Next player: {self.next_player}"


def player_to_move(move: int) -> Player:
    """X plays on even plies (the empty board is ply 0), O on odd ones."""
    return Player.X if move % 2 == 0 else Player.O


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE ---

    config: GameConfig
    history: list[Board]
    current_move: int = 0

    @classmethod
    def new_session(cls, config: Optional[GameConfig] = None) -> Self:
        """Start with a single empty board."""
        config = config if config is not None else GameConfig()
        return cls(config=config, history=[Board.empty(config.size)], current_move=0)

    @classmethod
    def from_model(cls, model: SessionModel) -> Self:
        """Define how to construct a GameSession from the information the Service layer actually has"""

        config = GameConfig(
            size=model.size,
            win_length=model.win_length,
            highlight_wins=model.highlight_wins,
            symbol_mode=model.symbol_mode,
            image_x=model.image_x,
            image_o=model.image_o,
        )
        history = [Board.from_notation(notation) for notation in model.history]

        # Validation
        _validate_history(history, config)
        if not 0 <= model.current_move < len(history):
            raise GameStateError(
                f"Current move {model.current_move} is outside of a history with {len(history)} snapshots."
            )

        return cls(config=config, history=history, current_move=model.current_move)

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""

        return SessionModel(
            size=self.config.size,
            win_length=self.config.win_length,
            history=[board.to_notation() for board in self.history],
            current_move=self.current_move,
            highlight_wins=self.config.highlight_wins,
            symbol_mode=self.config.symbol_mode.value,
            image_x=self.config.image_x,
            image_o=self.config.image_o,
        )

    @property
    def current_board(self) -> Board:
        return self.history[self.current_move]

    @property
    def last_index(self) -> int:
        return len(self.history) - 1

    @property
    def next_player(self) -> Player:
        return player_to_move(self.current_move)

    def apply_move(self, index: int) -> None:
        """
        Place the mark of the player to move on the given cell of the selected snapshot.
        -----

        1. the cell must exist
        2. the game on the selected snapshot must not be decided yet
        3. the cell must be empty
        4. everything after the selected snapshot gets discarded, the new snapshot is appended and selected

        Nothing is changed when one of the checks fails.
        """
        board = self.current_board
        if not board.is_valid_index(index):
            logger.debug("Rejected move on cell %s: not on the board", index)
            raise IndexOutOfRangeError(
                f"Cell {index} is not on a {board.size}x{board.size} board."
            )

        result = self._evaluate(board)
        if result.has_winner:
            logger.debug("Rejected move on cell %s: %s already won", index, result.winner)
            raise GameAlreadyDecidedError(
                f"Game is already decided. Winner: {result.winner}"
            )

        if board.is_occupied(index):
            logger.debug("Rejected move on cell %s: occupied", index)
            raise CellOccupiedError(f"Cell {index} is already taken by {board[index]}.")

        player = self.next_player
        next_board = board.place(index, player)
        self._truncate_future()
        self.history.append(next_board)
        self.current_move = self.last_index
        logger.debug("%s played cell %s (move #%s)", player, index, self.current_move)

    def jump_to(self, move: int) -> None:
        """Select an earlier (or later) snapshot. The future is only discarded by the next move, not by jumping."""
        if not 0 <= move <= self.last_index:
            raise IndexOutOfRangeError(
                f"Cannot jump to move {move}. Available moves: 0 to {self.last_index}."
            )
        self.current_move = move
        logger.debug("Jumped to move #%s", move)

    def reset(self) -> None:
        self.history = [Board.empty(self.config.size)]
        self.current_move = 0
        logger.info("Session reset to an empty %sx%s board", self.config.size, self.config.size)

    def resize(self, new_size: int) -> None:
        """Boards of different sizes cannot share a history, so resizing always starts over."""
        self.config.set_size(new_size)
        logger.info(
            "Resized board to %s (win length %s)", self.config.size, self.config.win_length
        )
        self.reset()

    def set_win_length(self, win_length: int) -> None:
        """Unlike resizing, history is kept: the status simply gets re-derived with the new length."""
        self.config.set_win_length(win_length)

    def update_preferences(
        self,
        highlight_wins: Optional[bool] = None,
        symbol_mode: Optional[str] = None,
        image_x: Optional[str] = None,
        image_o: Optional[str] = None,
    ) -> None:
        self.config.update_preferences(
            highlight_wins=highlight_wins,
            symbol_mode=symbol_mode,
            image_x=image_x,
            image_o=image_o,
        )

    def current_status(self) -> GameStatus:
        board = self.current_board
        result = self._evaluate(board)
        return GameStatus(
            winner=result.winner,
            line=result.line,
            is_draw=not result.has_winner and board.is_full(),
            next_player=self.next_player,
        )

    def highlighted_cells(self) -> tuple[int, ...]:
        """The winning line, but only if the player asked for it to be highlighted"""
        if not self.config.highlight_wins:
            return ()
        return self.current_status().line

    def move_list(self) -> list[str]:
        """One label per snapshot, for rendering the list of moves to jump to."""
        return [
            "Go to game start" if move == 0 else f"Go to move #{move}"
            for move in range(len(self.history))
        ]

    # -- PRIVATE HELPERS ---
    def _evaluate(self, board: Board) -> WinResult:
        return evaluate(board, self.config.size, self.config.win_length)

    def _truncate_future(self) -> None:
        """Branching off an earlier snapshot discards everything that came after it"""
        del self.history[self.current_move + 1 :]


def _validate_history(history: list[Board], config: GameConfig) -> None:
    """
    A history is consistent if
    ---

    * it starts with an empty board
    * all boards have the configured size
    * every snapshot fills exactly one empty cell of the previous one, with the mark of the player whose turn it was

    NOTE: a snapshot with a winner may still be followed by moves, since the win length can be lowered after they were played.
    """
    if not history:
        raise GameStateError("History must contain at least the starting board.")

    for move, board in enumerate(history):
        if board.size != config.size:
            raise GameStateError(
                f"Snapshot {move} has size {board.size}, but the session is configured for {config.size}."
            )

    if history[0].occupied_count() != 0:
        raise GameStateError("History must start with an empty board.")

    for move in range(1, len(history)):
        previous, board = history[move - 1], history[move]
        changed = [
            index
            for index, (before, after) in enumerate(zip(previous, board))
            if before != after
        ]
        expected_player = player_to_move(move - 1)
        if (
            len(changed) != 1
            or previous[changed[0]] is not None
            or board[changed[0]] != expected_player
        ):
            raise GameStateError(
                f"Snapshot {move} is not the previous one plus a single move by {expected_player}."
            )
