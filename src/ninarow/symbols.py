"""How a cell should be drawn, according to the rendering preferences in the GameConfig."""

from typing import Optional

from src.core.shared_types import Player, SymbolMode
from src.ninarow.config import GameConfig

EMOJI: dict[Player, str] = {
    Player.X: "❌",
    Player.O: "⭕",
}


def symbol_for(cell: Optional[Player], config: GameConfig) -> str:
    """Text, emoji, or image URL for a cell. Empty cells render as an empty string in every mode."""
    if cell is None:
        return ""
    if config.symbol_mode == SymbolMode.EMOJI:
        return EMOJI[cell]
    if config.symbol_mode == SymbolMode.IMAGE:
        return config.image_x if cell == Player.X else config.image_o
    return cell.value
