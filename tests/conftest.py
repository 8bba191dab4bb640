"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import Role
from src.db.schema import Base
from src.plakoto.board import Board
from src.plakoto.dice import ScriptedDice

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_sessions() -> Generator[sessionmaker[Session], None, None]:
    """Session factory for a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def scripted_dice() -> Callable[..., ScriptedDice]:
    """Call the inner function with the die values that should come up, in order."""

    def _create_dice(*values: int) -> ScriptedDice:
        return ScriptedDice(values)

    return _create_dice


@pytest.fixture
def board_from() -> Callable[..., Board]:
    """
    Build a board from a compact description:
    board_from(one={1: 14, 4: 1}, two={24: 15}, pinned_one=[4])
    """

    def _create_board(
        one: dict[int, int] | None = None,
        two: dict[int, int] | None = None,
        pinned_one: list[int] | None = None,
        pinned_two: list[int] | None = None,
    ) -> Board:
        board = Board()
        for point, count in (one or {}).items():
            board.place_checkers(
                Role.PLAYER_ONE, point, count, pinned=point in (pinned_one or [])
            )
        for point, count in (two or {}).items():
            board.place_checkers(
                Role.PLAYER_TWO, point, count, pinned=point in (pinned_two or [])
            )
        return board

    return _create_board
