"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Role, Status

RoleName = str
PlayerName = str

PLAYER_NAME_LENGTH = (2, 50)


# --- REQUEST MODELS ---
class PlayerRequest(BaseModel):
    """Every request is made on behalf of an (already authenticated) player."""

    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise InvalidRequestError("Player name is required.")

        min_length, max_length = PLAYER_NAME_LENGTH
        if not min_length <= len(name) <= max_length:
            raise InvalidRequestError(
                f"Player name must be between {min_length} and {max_length} characters."
            )
        return name


class CreateGameRequest(PlayerRequest):
    pass


class JoinGameRequest(PlayerRequest):
    game_id: UUID


class RollDiceRequest(PlayerRequest):
    game_id: UUID


class LegalMovesRequest(PlayerRequest):
    game_id: UUID


class MoveRequest(PlayerRequest):
    game_id: UUID
    from_point: int
    to_point: int  # 0 = bear off

    @field_validator("from_point")
    @classmethod
    def validate_from_point(cls, value: int) -> int:
        if not 1 <= value <= 24:
            raise InvalidRequestError(
                f"Cannot move from point {value!r}. Points are numbered 1-24."
            )
        return value

    @field_validator("to_point")
    @classmethod
    def validate_to_point(cls, value: int) -> int:
        if not 0 <= value <= 24:
            raise InvalidRequestError(
                f"Cannot move to point {value!r}. Use 1-24, or 0 to bear off."
            )
        return value


class PassTurnRequest(PlayerRequest):
    game_id: UUID


class GetGameRequest(PlayerRequest):
    """The viewer matters: valid moves are only shown to the player whose turn it is."""

    game_id: UUID


class PlayerGamesRequest(PlayerRequest):
    pass


# --- RESPONSE MODELS ---
class PointView(BaseModel):
    """Occupation of a single point. Point 0 shows the borne off checkers."""

    point: int
    player_one: int = 0
    player_two: int = 0
    player_one_pinned: bool = False
    player_two_pinned: bool = False


class MoveOption(BaseModel):
    from_point: int
    to_point: int
    die: int


class MoveRecordView(BaseModel):
    move_number: int
    player: PlayerName
    from_point: int
    to_point: int
    die: int


class GameResponse(BaseModel):
    game_id: UUID
    status: Status
    players: dict[RoleName, PlayerName]
    current_turn: Optional[PlayerName]
    dice: tuple[int, int]
    dice_rolled: bool
    moves_remaining: list[int]
    winner: Optional[PlayerName]
    is_my_turn: bool
    board: list[PointView]
    valid_moves: list[MoveOption]
    move_history: list[MoveRecordView]
    log: list[str]


class RollResponse(BaseModel):
    game_id: UUID
    die1: int
    die2: int
    doubles: bool
    moves_remaining: list[int]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    role: Optional[Role]
    legal_moves: list[MoveOption]


class MoveResponse(BaseModel):
    game_id: UUID
    moved: bool
    game_over: bool
    winner: Optional[PlayerName]
    state: GameResponse


class GameSummary(BaseModel):
    """Lobby listing"""

    game_id: UUID
    creator: PlayerName
    players: dict[RoleName, PlayerName]
    status: Status
