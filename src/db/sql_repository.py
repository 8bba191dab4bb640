"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from collections.abc import Callable
from typing import Optional, TypeVar
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.core.exceptions import StorageUnavailableError
from src.core.models import BoardEntryModel, GameModel, MoveRecordModel
from src.db.schema import DBBoardEntry, DBGame, DBLogEntry, DBMoveRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy

    A game is spread over 4 tables (games, board_entries, move_history, game_log). Every write commits them together.

    Sessions are not thread-safe, so the repository holds a session factory and every call gets its own session.
    One repository can be shared by concurrent requests.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""

        def _get(db: Session) -> GameModel | None:
            game_db = self._fetch_game(db, game_id)
            if game_db:
                return self._to_model(game_db)
            return None

        return self._read(_get)

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        def _create(db: Session) -> tuple[GameModel, UUID]:
            new_id = uuid4()
            game_db = DBGame(id=new_id)
            self._copy_into(game_db, game)
            db.add(game_db)
            db.flush()
            return self._to_model(game_db), new_id

        return self._write(_create)

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the stored game (match, board, history, log) as a single unit."""

        def _update(db: Session) -> GameModel | None:
            game_db = self._fetch_game(db, game_id)
            if not game_db:
                return None
            self._copy_into(game_db, game)
            db.flush()
            return self._to_model(game_db)

        return self._write(_update)

    def list_games(
        self, status: Optional[str] = None, player: Optional[str] = None
    ) -> list[tuple[UUID, GameModel]]:
        """Games filtered by status and/or participating player, newest first."""

        def _list(db: Session) -> list[tuple[UUID, GameModel]]:
            query = select(DBGame).order_by(DBGame.created_at.desc())
            if status is not None:
                query = query.where(DBGame.status == status)
            games = db.scalars(query).all()
            return [
                (game_db.id, self._to_model(game_db))
                for game_db in games
                if player is None or player in game_db.registered_players.values()
            ]

        return self._read(_list)

    # -- Internal helpers --
    def _read(self, operation: Callable[[Session], T]) -> T:
        try:
            with self.session_factory() as db:
                return operation(db)
        except SQLAlchemyError as err:
            raise self._unavailable(err) from err

    def _write(self, operation: Callable[[Session], T]) -> T:
        """One transaction: committed when the operation returns, rolled back if anything fails."""
        try:
            with self.session_factory.begin() as db:
                return operation(db)
        except SQLAlchemyError as err:
            raise self._unavailable(err) from err

    def _unavailable(self, err: SQLAlchemyError) -> StorageUnavailableError:
        logger.error(f"Database operation failed: {err}")
        return StorageUnavailableError(
            "Game storage is unavailable. Please try again later."
        )

    def _fetch_game(self, db: Session, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return db.scalar(query)

    def _copy_into(self, game_db: DBGame, game: GameModel) -> None:
        """
        Overwrite the match row, sync the board rows, append whatever is new in history and log.

        NOTE board rows are updated in place (one row per player and point), history and log are append-only.
        """
        game_db.registered_players = dict(game.registered_players)
        game_db.status = game.status
        game_db.current_turn = game.current_turn
        game_db.dice1 = game.dice1
        game_db.dice2 = game.dice2
        game_db.dice_rolled = game.dice_rolled
        game_db.moves_remaining = list(game.moves_remaining)
        game_db.winner = game.winner

        stored = {(row.player, row.point): row for row in game_db.board}
        wanted = {
            (entry.player, entry.point): entry for entry in game.board if entry.count > 0
        }
        for key, row in stored.items():
            if key not in wanted:
                game_db.board.remove(row)
        for key, entry in wanted.items():
            row = stored.get(key)
            if row is None:
                game_db.board.append(
                    DBBoardEntry(
                        player=entry.player,
                        point=entry.point,
                        count=entry.count,
                        pinned=entry.pinned,
                    )
                )
            else:
                row.count = entry.count
                row.pinned = entry.pinned

        stored_moves = len(game_db.move_history)
        for record in game.move_history[stored_moves:]:
            game_db.move_history.append(
                DBMoveRecord(
                    player=record.player,
                    from_point=record.from_point,
                    to_point=record.to_point,
                    die=record.die,
                    move_number=record.move_number,
                )
            )

        stored_messages = len(game_db.log)
        for message in game.log[stored_messages:]:
            game_db.log.append(DBLogEntry(message=message))

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        # board is ordered by point, then player one before player two
        roles = {name: role for role, name in game_db.registered_players.items()}
        board = sorted(game_db.board, key=lambda e: (e.point, roles.get(e.player, "")))
        return GameModel(
            registered_players=dict(game_db.registered_players),
            status=game_db.status,
            current_turn=game_db.current_turn,
            dice1=game_db.dice1,
            dice2=game_db.dice2,
            dice_rolled=game_db.dice_rolled,
            moves_remaining=list(game_db.moves_remaining),
            winner=game_db.winner,
            board=[
                BoardEntryModel(
                    player=entry.player,
                    point=entry.point,
                    count=entry.count,
                    pinned=entry.pinned,
                )
                for entry in board
            ],
            move_history=[
                MoveRecordModel(
                    player=record.player,
                    from_point=record.from_point,
                    to_point=record.to_point,
                    die=record.die,
                    move_number=record.move_number,
                )
                for record in game_db.move_history
            ],
            log=[entry.message for entry in game_db.log],
        )
