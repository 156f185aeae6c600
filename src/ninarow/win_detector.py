"""
Win detection for a board of any size and any win length.

Cells are scanned in row-major order. From every occupied cell we only walk in four directions:
east, south, south-east and south-west. The reverse directions are never needed, since the scan
reaches the first cell of every line (in row-major order) before any of its other cells.

The first run that is long enough wins, which fixes the reported line when several winning lines exist.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from src.core.shared_types import Player
from src.ninarow.config import MIN_WIN_LENGTH, clamp

# (row step, column step)
Direction = tuple[int, int]

EAST: Direction = (0, 1)
SOUTH: Direction = (1, 0)
SOUTH_EAST: Direction = (1, 1)
SOUTH_WEST: Direction = (1, -1)

DIRECTIONS: tuple[Direction, ...] = (EAST, SOUTH, SOUTH_EAST, SOUTH_WEST)


@dataclass(frozen=True)
class WinResult:
    winner: Optional[Player]
    line: tuple[int, ...]

    @property
    def has_winner(self) -> bool:
        return self.winner is not None


NO_WINNER = WinResult(winner=None, line=())


def evaluate(
    board: Sequence[Optional[Player]], size: int, win_length: int
) -> WinResult:
    """
    Find the first winning line on the board.

    ---
    NOTE: win_length gets clamped into [3, size] here as well. Callers are not trusted to have done so.
    """
    win_length = clamp(win_length, MIN_WIN_LENGTH, size)

    for row in range(size):
        for col in range(size):
            player = board[row * size + col]
            if player is None:
                continue

            for direction in DIRECTIONS:
                run = _walk(board, size, row, col, direction)
                if len(run) >= win_length:
                    return WinResult(winner=player, line=tuple(run[:win_length]))

    return NO_WINNER


def _walk(
    board: Sequence[Optional[Player]],
    size: int,
    row: int,
    col: int,
    direction: Direction,
) -> list[int]:
    """Indices of the run starting at (row, col), in walking order. Stops at the first mismatch or at the edge."""
    player = board[row * size + col]
    d_row, d_col = direction
    run = [row * size + col]
    r, c = row + d_row, col + d_col
    while 0 <= r < size and 0 <= c < size and board[r * size + c] == player:
        run.append(r * size + c)
        r, c = r + d_row, c + d_col
    return run
