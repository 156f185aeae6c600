"""Requests and Response models"""

from typing import Any, Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidConfigError, InvalidRequestError
from src.core.shared_types import Player, Status, SymbolMode
from src.ninarow.config import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_WIN_LENGTH,
    parse_symbol_mode,
)

CellIndex = int
BoardNotation = str


def coerce_int(value: Any) -> int:
    """
    Accept integers and anything that spells one exactly ("5", 5.0).
    Anything else can never become a board size or win length, no matter how it gets clamped afterwards.
    """
    if isinstance(value, bool):
        raise InvalidConfigError(f"Expected a number, got {value!r}.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidConfigError(f"Expected a whole number, got {value!r}.")


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    board_size: int = DEFAULT_BOARD_SIZE
    win_length: int = DEFAULT_WIN_LENGTH
    highlight_wins: bool = True
    symbol_mode: SymbolMode = SymbolMode.TEXT
    image_x: Optional[str] = None
    image_o: Optional[str] = None

    @field_validator("board_size", "win_length", mode="before")
    @classmethod
    def validate_number(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator("symbol_mode", mode="before")
    @classmethod
    def validate_symbol_mode(cls, value: Any) -> SymbolMode:
        return parse_symbol_mode(value)


class GetSessionRequest(BaseModel):
    session_id: UUID


class MoveRequest(BaseModel):
    """A move names its cell either by flat index, or by row and column."""

    session_id: UUID
    cell: Optional[int] = None
    row: Optional[int] = None
    col: Optional[int] = None

    @field_validator("cell", "row", "col")
    @classmethod
    def validate_non_negative(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise InvalidRequestError(f"Cell coordinates cannot be negative: {value}")
        return value

    @model_validator(mode="after")
    def validate_target(self) -> Self:
        if self.cell is not None:
            if self.row is not None or self.col is not None:
                raise InvalidRequestError(
                    "Supply either 'cell' or 'row' and 'col', not both."
                )
        elif self.row is None or self.col is None:
            raise InvalidRequestError(
                "Supply either 'cell' or both 'row' and 'col' to make a move."
            )
        return self


class JumpRequest(BaseModel):
    session_id: UUID
    move: int


class ResetRequest(BaseModel):
    session_id: UUID


class ResizeRequest(BaseModel):
    session_id: UUID
    board_size: int

    @field_validator("board_size", mode="before")
    @classmethod
    def validate_number(cls, value: Any) -> int:
        return coerce_int(value)


class WinLengthRequest(BaseModel):
    session_id: UUID
    win_length: int

    @field_validator("win_length", mode="before")
    @classmethod
    def validate_number(cls, value: Any) -> int:
        return coerce_int(value)


class SettingsRequest(BaseModel):
    """Rendering preferences only. Fields left out keep their current value."""

    session_id: UUID
    highlight_wins: Optional[bool] = None
    symbol_mode: Optional[SymbolMode] = None
    image_x: Optional[str] = None
    image_o: Optional[str] = None

    @field_validator("symbol_mode", mode="before")
    @classmethod
    def validate_symbol_mode(cls, value: Any) -> Optional[SymbolMode]:
        if value is None:
            return value
        return parse_symbol_mode(value)


class DeleteSessionRequest(BaseModel):
    session_id: UUID


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    session_id: UUID
    board_size: int
    win_length: int
    board: list[Optional[Player]]
    symbols: list[str]
    current_move: int
    history: list[BoardNotation]
    moves: list[str]
    status: Status
    winner: Optional[Player]
    winning_line: list[CellIndex]
    highlighted_cells: list[CellIndex]
    is_draw: bool
    next_player: Player
    status_message: str
