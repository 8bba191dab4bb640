"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    registered_players: Mapped[dict[str, str]] = mapped_column(JSON)
    status: Mapped[str]
    current_turn: Mapped[Optional[str]]
    dice1: Mapped[int] = mapped_column(default=0)
    dice2: Mapped[int] = mapped_column(default=0)
    dice_rolled: Mapped[bool] = mapped_column(default=False)
    moves_remaining: Mapped[list[int]] = mapped_column(JSON, default=list)
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)

    board: Mapped[list["DBBoardEntry"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="DBBoardEntry.point",
    )
    move_history: Mapped[list["DBMoveRecord"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="DBMoveRecord.move_number",
    )
    log: Mapped[list["DBLogEntry"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="DBLogEntry.id",
    )


class DBBoardEntry(Base):
    """One row per (game, point, player). Rows with zero checkers are deleted, never stored."""

    __tablename__ = "board_entries"
    __table_args__ = (UniqueConstraint("game_id", "player", "point"),)
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"))
    player: Mapped[str]
    point: Mapped[int]
    count: Mapped[int]
    pinned: Mapped[bool] = mapped_column(default=False)

    game: Mapped[DBGame] = relationship(back_populates="board")


class DBMoveRecord(Base):
    __tablename__ = "move_history"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"))
    player: Mapped[str]
    from_point: Mapped[int]
    to_point: Mapped[int]
    die: Mapped[int]
    move_number: Mapped[int]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    game: Mapped[DBGame] = relationship(back_populates="move_history")


class DBLogEntry(Base):
    __tablename__ = "game_log"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"))
    message: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    game: Mapped[DBGame] = relationship(back_populates="log")
