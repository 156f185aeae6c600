"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    WON = "won"
    DRAW = "draw"


# --- An empty cell is represented by None, so Player only holds the two marks that can be placed.
class Player(StrEnum):
    X = "X"
    O = "O"  # noqa: E741


class SymbolMode(StrEnum):
    TEXT = "text"
    EMOJI = "emoji"
    IMAGE = "image"
