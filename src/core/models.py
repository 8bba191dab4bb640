"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
RoleName = str
PlayerName = str


@dataclass
class BoardEntryModel:
    """Checkers of one player on one point. Point 0 holds the borne off checkers."""

    player: PlayerName
    point: int
    count: int
    pinned: bool = False


@dataclass
class MoveRecordModel:
    """One line in the (append-only) move history."""

    player: PlayerName
    from_point: int
    to_point: int
    die: int
    move_number: int


@dataclass
class GameModel:
    """Transport-safe representation of a Plakoto game used between API, Service, DB, and Game layers."""

    registered_players: dict[RoleName, PlayerName]
    status: str
    current_turn: Optional[PlayerName] = None
    dice1: int = 0
    dice2: int = 0
    dice_rolled: bool = False
    moves_remaining: list[int] = field(default_factory=list)
    winner: Optional[PlayerName] = None
    board: list[BoardEntryModel] = field(default_factory=list)
    move_history: list[MoveRecordModel] = field(default_factory=list)
    log: list[str] = field(default_factory=list)
