"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the API layer (higher) and domain/db layers (lower) use the model defined here to send to/receive from the Service
(Decouples the in-memory domain objects from the plain data that gets stored and passed across boundaries)
"""

from dataclasses import dataclass

# Type alias to make SessionModel easier to read
BoardNotation = str


@dataclass
class SessionModel:
    """Transport-safe representation of a game session used between API, Service, DB, and Game layers."""

    size: int
    win_length: int
    history: list[BoardNotation]
    current_move: int
    highlight_wins: bool
    symbol_mode: str
    image_x: str
    image_o: str
