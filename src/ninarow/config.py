"""
Game configuration: board size, win length and the rendering preferences of the presentation layer.

Clamping rules
---
* size is kept within [MIN_BOARD_SIZE, MAX_BOARD_SIZE]
* win_length is kept within [MIN_WIN_LENGTH, size]

Both are applied on construction and again on every update, so a GameConfig can never hold an out-of-range value.
"""

from dataclasses import dataclass
from typing import Any, Optional

from src.core.exceptions import InvalidConfigError
from src.core.shared_types import SymbolMode

MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = 10
MIN_WIN_LENGTH = 3
DEFAULT_BOARD_SIZE = 3
DEFAULT_WIN_LENGTH = 3

DEFAULT_IMAGE_X = "https://cdn.jsdelivr.net/gh/twitter/twemoji@14.0.2/assets/svg/274c.svg"
DEFAULT_IMAGE_O = "https://cdn.jsdelivr.net/gh/twitter/twemoji@14.0.2/assets/svg/2b55.svg"


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _require_int(name: str, value: Any) -> int:
    # bool is a subclass of int, but True is not a board size
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"{name} must be an integer, got {value!r}.")
    return value


def normalize_size(size: Any) -> int:
    return clamp(_require_int("size", size), MIN_BOARD_SIZE, MAX_BOARD_SIZE)


def normalize_win_length(win_length: Any, size: int) -> int:
    return clamp(_require_int("win_length", win_length), MIN_WIN_LENGTH, size)


def parse_symbol_mode(mode: Any) -> SymbolMode:
    try:
        return SymbolMode(mode)
    except ValueError:
        raise InvalidConfigError(
            f"Unknown symbol mode {mode!r}. Pick one from {', '.join(m.value for m in SymbolMode)}"
        ) from None


@dataclass
class GameConfig:
    size: int = DEFAULT_BOARD_SIZE
    win_length: int = DEFAULT_WIN_LENGTH
    highlight_wins: bool = True
    symbol_mode: SymbolMode = SymbolMode.TEXT
    image_x: str = DEFAULT_IMAGE_X
    image_o: str = DEFAULT_IMAGE_O

    def __post_init__(self):
        self.size = normalize_size(self.size)
        self.win_length = normalize_win_length(self.win_length, self.size)
        self.symbol_mode = parse_symbol_mode(self.symbol_mode)

    def set_size(self, size: Any) -> None:
        """A smaller board may no longer fit the current win length, so that one gets clamped down too."""
        self.size = normalize_size(size)
        self.win_length = normalize_win_length(self.win_length, self.size)

    def set_win_length(self, win_length: Any) -> None:
        self.win_length = normalize_win_length(win_length, self.size)

    def update_preferences(
        self,
        highlight_wins: Optional[bool] = None,
        symbol_mode: Optional[str] = None,
        image_x: Optional[str] = None,
        image_o: Optional[str] = None,
    ) -> None:
        """Only touches the preferences that are given. None means: keep the current value."""
        # parse before assigning anything, a bad mode must leave the config as it was
        mode = parse_symbol_mode(symbol_mode) if symbol_mode is not None else None

        if highlight_wins is not None:
            self.highlight_wins = highlight_wins
        if mode is not None:
            self.symbol_mode = mode
        if image_x is not None:
            self.image_x = image_x
        if image_o is not None:
            self.image_o = image_o
