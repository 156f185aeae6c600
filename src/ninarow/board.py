"""The Board is a single snapshot of the game: a flat, immutable sequence of size * size cells."""

from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.core.exceptions import IndexOutOfRangeError, InvalidBoardError
from src.core.shared_types import Player
from src.ninarow.notation import (
    CELL_TO_CHARACTER,
    CHARACTER_TO_CELL,
    ROW_SEPARATOR,
    is_valid_notation,
)

Cell = Optional[Player]


@dataclass(frozen=True)
class Board:
    size: int
    cells: tuple[Cell, ...]

    def __post_init__(self):
        if self.size < 1:
            raise InvalidBoardError(f"Board size must be positive, got {self.size}.")
        if len(self.cells) != self.size * self.size:
            raise InvalidBoardError(
                f"A board of size {self.size} needs {self.size * self.size} cells, got {len(self.cells)}."
            )

    @classmethod
    def empty(cls, size: int) -> Self:
        return cls(size, (None,) * (size * size))

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its text notation, ex. 'XO./.X./..O'"""
        if not is_valid_notation(notation):
            raise InvalidBoardError(f"Cannot interpret {notation!r} as a square board.")
        rows = notation.split(ROW_SEPARATOR)
        cells = tuple(CHARACTER_TO_CELL[character] for row in rows for character in row)
        return cls(len(rows), cells)

    def to_notation(self) -> str:
        return ROW_SEPARATOR.join(
            "".join(CELL_TO_CHARACTER[cell] for cell in self.row(row))
            for row in range(self.size)
        )

    # --- Sequence protocol, so the win detector can treat a Board like any flat list of cells ---
    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def index(self, row: int, col: int) -> int:
        """Flat index of the cell at (row, col)"""
        if not (self.in_bounds(row) and self.in_bounds(col)):
            raise IndexOutOfRangeError(
                f"({row}, {col}) is not on a {self.size}x{self.size} board."
            )
        return row * self.size + col

    def in_bounds(self, coordinate: int) -> bool:
        return 0 <= coordinate < self.size

    def row(self, row: int) -> tuple[Cell, ...]:
        return self.cells[row * self.size : (row + 1) * self.size]

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self.cells)

    def is_occupied(self, index: int) -> bool:
        return self.cells[index] is not None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def occupied_count(self) -> int:
        return sum(1 for cell in self.cells if cell is not None)

    def place(self, index: int, player: Player) -> Self:
        """Copy-on-write: returns the next snapshot and leaves this one untouched."""
        cells = list(self.cells)
        cells[index] = player
        return type(self)(self.size, tuple(cells))
