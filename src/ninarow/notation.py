"""
Compact text encoding of a board, used to store history snapshots.

Rows are separated by slashes and read top to bottom, each character is one cell:
'X' and 'O' for the players, '.' for an empty cell.
ex. "XO./.X./..O" is a 3x3 board where X holds the main diagonal except the bottom-right corner.
"""

from typing import Optional

from src.core.shared_types import Player

EMPTY_CHARACTER = "."
ROW_SEPARATOR = "/"

CHARACTER_TO_CELL: dict[str, Optional[Player]] = {
    EMPTY_CHARACTER: None,
    Player.X.value: Player.X,
    Player.O.value: Player.O,
}

CELL_TO_CHARACTER: dict[Optional[Player], str] = {
    value: key for key, value in CHARACTER_TO_CELL.items()
}


def is_valid_notation(notation: str) -> bool:
    """Every row must contain as many cells as there are rows, using known characters only."""
    rows = notation.split(ROW_SEPARATOR)
    size = len(rows)
    for row in rows:
        if len(row) != size:
            return False
        if any(character not in CHARACTER_TO_CELL for character in row):
            return False
    return True
