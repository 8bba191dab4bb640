"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from collections.abc import Callable
from typing import Optional, TypeVar
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    GameSummary,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveOption,
    MoveRecordView,
    MoveRequest,
    MoveResponse,
    PassTurnRequest,
    PlayerGamesRequest,
    PointView,
    RollDiceRequest,
    RollResponse,
)
from src.core.config import settings
from src.core.exceptions import GameError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Role, Status
from src.db.repository import GameRepository
from src.plakoto.dice import DiceRoller, RandomDice
from src.plakoto.direction import BORNE_OFF, LAST_POINT
from src.plakoto.game import Game
from src.plakoto.moves import Move
from src.services.match_locks import MATCH_LOCKS, MatchLocks

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PlakotoService:
    """Orchestration of layers for a Plakoto game."""

    def __init__(
        self,
        repository: GameRepository,
        dice: Optional[DiceRoller] = None,
        locks: Optional[MatchLocks] = None,
        log_limit: int = settings.GAME_LOG_LIMIT,
    ) -> None:
        self.repo = repository
        self.dice = dice or RandomDice(settings.DICE_SEED)
        self.locks = locks if locks is not None else MATCH_LOCKS
        self.log_limit = log_limit

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""

        new_game = Game.new_game(player=request.player_name)
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(f"Game {game_id} created by {request.player_name}")
        return self._create_game_response(
            game_id, Game.from_model(stored_game), request.player_name
        )

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""

        game = self._mutate(
            request.game_id,
            request.player_name,
            "join",
            lambda game: game.register_player(request.player_name, self.dice),
        )[0]
        starting_player = game.players.get(game.current_turn) if game.current_turn else None
        logger.info(
            f"{request.player_name} joined game {request.game_id}, {starting_player} plays first"
        )
        return self._create_game_response(request.game_id, game, request.player_name)

    def roll_dice(self, request: RollDiceRequest) -> RollResponse:
        """Turn player rolls both dice."""

        game, roll = self._mutate(
            request.game_id,
            request.player_name,
            "roll",
            lambda game: game.roll_dice(request.player_name, self.dice),
        )
        logger.info(
            f"{request.player_name} rolled {roll.die1}-{roll.die2} in game {request.game_id}"
        )
        return RollResponse(
            game_id=request.game_id,
            die1=roll.die1,
            die2=roll.die2,
            doubles=roll.is_double,
            moves_remaining=game.moves_remaining,
        )

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""

        game = Game.from_model(self._fetch_game(request.game_id))
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            role=game.role_of(request.player_name),
            legal_moves=self._move_options(game.legal_moves(request.player_name)),
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt."""

        game, outcome = self._mutate(
            request.game_id,
            request.player_name,
            "move",
            lambda game: game.make_move(
                request.player_name, request.from_point, request.to_point
            ),
        )
        logger.info(
            f"{request.player_name} moved {request.from_point}->{request.to_point} in game {request.game_id}"
        )
        if outcome.game_over:
            logger.info(f"Game {request.game_id} finished, winner: {outcome.winner}")

        return MoveResponse(
            game_id=request.game_id,
            moved=outcome.moved,
            game_over=outcome.game_over,
            winner=outcome.winner,
            state=self._create_game_response(
                request.game_id, game, request.player_name
            ),
        )

    def pass_turn(self, request: PassTurnRequest) -> GameResponse:
        """Player has no valid moves and gives the turn away."""

        game, _ = self._mutate(
            request.game_id,
            request.player_name,
            "pass",
            lambda game: game.pass_turn(request.player_name),
        )
        logger.info(f"{request.player_name} passed in game {request.game_id}")
        return self._create_game_response(request.game_id, game, request.player_name)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game, request.player_name)

    def list_open_games(self) -> list[GameSummary]:
        """Games waiting for a second player (newest first)."""
        return [
            self._create_summary(game_id, model)
            for game_id, model in self.repo.list_games(status=Status.WAITING.value)
        ]

    def list_player_games(self, request: PlayerGamesRequest) -> list[GameSummary]:
        """Games of this player that are not finished yet."""
        return [
            self._create_summary(game_id, model)
            for game_id, model in self.repo.list_games(player=request.player_name)
            if model.status != Status.FINISHED
        ]

    # -- Internal helpers --
    def _mutate(
        self, game_id: UUID, player: str, action: str, change: Callable[[Game], T]
    ) -> tuple[Game, T]:
        """
        Load -> change -> store, while holding the game's lock.

        If the Game rejects the change nothing gets stored: the persisted game stays exactly as it was.
        """
        with self.locks.hold(game_id):
            game = Game.from_model(self._fetch_game(game_id))
            try:
                result = change(game)
            except GameError as err:
                logger.warning(f"Rejected {action} by {player} in game {game_id}: {err}")
                raise
            self.repo.update_game(game_id, game.to_model())
        return game, result

    def _create_game_response(
        self, game_id: UUID, game: Game, viewer: str
    ) -> GameResponse:
        """Convert a Game into a GameResponse, as seen by the viewer."""
        return GameResponse(
            game_id=game_id,
            status=game.status,
            players={role.value: name for role, name in game.players.items()},
            current_turn=game.players.get(game.current_turn)
            if game.current_turn
            else None,
            dice=game.dice,
            dice_rolled=game.dice_rolled,
            moves_remaining=game.moves_remaining,
            winner=game.winner,
            is_my_turn=game.is_players_turn(viewer),
            board=self._board_view(game),
            valid_moves=self._move_options(game.legal_moves(viewer)),
            move_history=[
                MoveRecordView(
                    move_number=record.move_number,
                    player=game.players[record.role],
                    from_point=record.move.from_point,
                    to_point=record.move.to_point,
                    die=record.move.die,
                )
                for record in game.history
            ],
            log=game.log[-self.log_limit :] if self.log_limit > 0 else [],
        )

    def _board_view(self, game: Game) -> list[PointView]:
        """All 25 points, including the empty ones."""
        board = game.board
        return [
            PointView(
                point=point,
                player_one=board.checkers_at(Role.PLAYER_ONE, point),
                player_two=board.checkers_at(Role.PLAYER_TWO, point),
                player_one_pinned=board.is_pinned(Role.PLAYER_ONE, point),
                player_two_pinned=board.is_pinned(Role.PLAYER_TWO, point),
            )
            for point in range(BORNE_OFF, LAST_POINT + 1)
        ]

    def _move_options(self, moves: list[Move]) -> list[MoveOption]:
        return [
            MoveOption(from_point=move.from_point, to_point=move.to_point, die=move.die)
            for move in moves
        ]

    def _create_summary(self, game_id: UUID, model: GameModel) -> GameSummary:
        return GameSummary(
            game_id=game_id,
            creator=model.registered_players[Role.PLAYER_ONE.value],
            players=model.registered_players,
            status=Status(model.status),
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
