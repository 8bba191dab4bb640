"""Unit tests for /src/plakoto/moves.py"""

from typing import Callable

import pytest

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Role
from src.plakoto.board import Board
from src.plakoto.moves import (
    Move,
    can_bear_off_with_higher_die,
    has_legal_move,
    legal_moves,
    validate_move,
)

ONE = Role.PLAYER_ONE
TWO = Role.PLAYER_TWO

BoardFactory = Callable[..., Board]


# --- VALIDATION: SOURCE / DIRECTION ---
def test_exact_die_is_used() -> None:
    board = Board.starting_position([ONE, TWO])
    assert validate_move(board, ONE, [3, 5], 1, 4) == 3
    assert validate_move(board, TWO, [3, 5], 24, 19) == 5


@pytest.mark.parametrize(
    "from_point, to_point, message",
    [
        (0, 4, "Point 0 is not on the board"),
        (25, 4, "Point 25 is not on the board"),
        (1, 25, "Point 25 is not on the board"),
        (1, -1, "Point -1 is not on the board"),
    ],
)
def test_points_must_exist(from_point: int, to_point: int, message: str) -> None:
    board = Board.starting_position([ONE, TWO])
    with pytest.raises(IllegalMoveError, match=message):
        validate_move(board, ONE, [3, 5], from_point, to_point)


def test_no_checkers_at_source() -> None:
    board = Board.starting_position([ONE, TWO])
    with pytest.raises(IllegalMoveError, match="No checkers at point 2"):
        validate_move(board, ONE, [3, 5], 2, 5)


def test_cannot_move_opponent_checkers() -> None:
    board = Board.starting_position([ONE, TWO])
    with pytest.raises(IllegalMoveError, match="No checkers at point 24"):
        validate_move(board, ONE, [3, 5], 24, 21)


def test_pinned_checker_cannot_move(board_from: BoardFactory) -> None:
    board = board_from(one={1: 14, 10: 1}, two={10: 1, 24: 14}, pinned_one=[10])
    with pytest.raises(IllegalMoveError, match="Checker at point 10 is pinned"):
        validate_move(board, ONE, [3, 5], 10, 13)


@pytest.mark.parametrize(
    "role, from_point, to_point",
    [
        (ONE, 10, 7),
        (ONE, 10, 10),
        (TWO, 10, 13),
    ],
)
def test_wrong_direction(
    board_from: BoardFactory, role: Role, from_point: int, to_point: int
) -> None:
    board = board_from(one={10: 15}, two={10: 15})
    with pytest.raises(IllegalMoveError, match="Invalid move direction"):
        validate_move(board, role, [3, 5], from_point, to_point)


def test_no_die_matches_distance() -> None:
    board = Board.starting_position([ONE, TWO])
    with pytest.raises(IllegalMoveError, match=r"No valid die for this move \(distance: 3\)"):
        validate_move(board, ONE, [2, 5], 1, 4)


def test_combined_distance_is_not_a_single_move() -> None:
    """A move uses a single die. 3+5 has to be played as two moves."""
    board = Board.starting_position([ONE, TWO])
    with pytest.raises(IllegalMoveError, match="No valid die"):
        validate_move(board, ONE, [3, 5], 1, 9)


# --- VALIDATION: DESTINATION ---
def test_blocked_by_two_opponent_checkers(board_from: BoardFactory) -> None:
    board = board_from(one={1: 15}, two={4: 2, 24: 13})
    with pytest.raises(IllegalMoveError, match="Point 4 is blocked by opponent"):
        validate_move(board, ONE, [3, 5], 1, 4)


def test_landing_on_single_opponent_checker_is_allowed(
    board_from: BoardFactory,
) -> None:
    board = board_from(one={1: 15}, two={4: 1, 24: 14})
    assert validate_move(board, ONE, [3, 5], 1, 4) == 3


def test_cannot_reinforce_own_pinned_checker(board_from: BoardFactory) -> None:
    board = board_from(one={1: 14, 4: 1}, two={4: 1, 24: 14}, pinned_one=[4])
    with pytest.raises(
        IllegalMoveError,
        match="Cannot add more checkers to point 4 - your checker is pinned there",
    ):
        validate_move(board, ONE, [3, 5], 1, 4)


def test_can_reinforce_own_pinning_checker(board_from: BoardFactory) -> None:
    """You can stack on a point where YOU pin the opponent."""
    board = board_from(one={1: 14, 4: 1}, two={4: 1, 24: 14}, pinned_two=[4])
    assert validate_move(board, ONE, [3, 5], 1, 4) == 3


# --- VALIDATION: BEARING OFF ---
def test_bear_off_with_exact_die(board_from: BoardFactory) -> None:
    board = board_from(one={20: 5, 24: 10})
    assert validate_move(board, ONE, [5, 1], 20, 0) == 5
    assert validate_move(board, ONE, [5, 1], 24, 0) == 1


def test_player_two_bears_off_towards_point_zero(board_from: BoardFactory) -> None:
    board = board_from(two={3: 5, 6: 10})
    assert validate_move(board, TWO, [3, 2], 3, 0) == 3


def test_bear_off_requires_all_checkers_home(board_from: BoardFactory) -> None:
    board = board_from(one={18: 1, 20: 14})
    with pytest.raises(
        IllegalMoveError, match="Cannot bear off - not all checkers in home board"
    ):
        validate_move(board, ONE, [5, 1], 20, 0)


def test_higher_die_without_all_home_has_no_valid_die(
    board_from: BoardFactory,
) -> None:
    board = board_from(one={18: 1, 20: 14})
    with pytest.raises(IllegalMoveError, match="No valid die"):
        validate_move(board, ONE, [6], 20, 0)


def test_higher_die_for_furthest_checker(board_from: BoardFactory) -> None:
    """Checkers only on 20 (furthest) and 24: a 6 bears off from 20 (needs 5)."""
    board = board_from(one={20: 5, 24: 10})
    assert validate_move(board, ONE, [6], 20, 0) == 6


def test_higher_die_for_checker_that_is_not_the_furthest(
    board_from: BoardFactory,
) -> None:
    board = board_from(one={20: 5, 22: 10})
    with pytest.raises(IllegalMoveError, match=r"No valid die for this move \(distance: 3\)"):
        validate_move(board, ONE, [6], 22, 0)


def test_smallest_higher_die_is_used(board_from: BoardFactory) -> None:
    board = board_from(two={2: 15})
    assert validate_move(board, TWO, [6, 4], 2, 0) == 4


def test_exact_die_preferred_over_higher_die(board_from: BoardFactory) -> None:
    board = board_from(one={20: 15})
    assert validate_move(board, ONE, [6, 5], 20, 0) == 5


def test_furthest_checker_rule_counts_pinned_checkers(
    board_from: BoardFactory,
) -> None:
    """A pinned checker on 19 is still the furthest: the checker on 20 cannot use a 6."""
    board = board_from(one={19: 1, 20: 14}, two={19: 1, 1: 14}, pinned_one=[19])
    assert not can_bear_off_with_higher_die(board, ONE, 20)
    with pytest.raises(IllegalMoveError, match="No valid die"):
        validate_move(board, ONE, [6], 20, 0)


# --- ENUMERATION ---
def test_opening_moves_player_one() -> None:
    board = Board.starting_position([ONE, TWO])
    moves = legal_moves(board, ONE, [3, 5])
    assert moves == [Move(1, 4, 3), Move(1, 6, 5)]


def test_opening_moves_player_two() -> None:
    board = Board.starting_position([ONE, TWO])
    moves = legal_moves(board, TWO, [6, 2])
    assert moves == [Move(24, 18, 6), Move(24, 22, 2)]


def test_doubles_are_listed_once() -> None:
    board = Board.starting_position([ONE, TWO])
    assert legal_moves(board, ONE, [4, 4, 4, 4]) == [Move(1, 5, 4)]


def test_no_dice_no_moves() -> None:
    board = Board.starting_position([ONE, TWO])
    assert legal_moves(board, ONE, []) == []
    assert not has_legal_move(board, ONE, [])


def test_blocked_and_pinned_destinations_are_skipped(
    board_from: BoardFactory,
) -> None:
    board = board_from(
        one={1: 13, 6: 1, 10: 1},
        two={4: 2, 6: 1, 10: 1, 24: 11},
        pinned_one=[6],
        pinned_two=[10],
    )
    moves = legal_moves(board, ONE, [3, 5])
    # 1->4 blocked (2 opponents), 1->6 onto own pinned checker, 6 is pinned and cannot move
    assert Move(1, 4, 3) not in moves
    assert Move(1, 6, 5) not in moves
    assert all(move.from_point != 6 for move in moves)
    assert moves == [Move(10, 13, 3), Move(10, 15, 5)]


def test_pinned_checkers_cannot_move_at_all(board_from: BoardFactory) -> None:
    board = board_from(one={10: 1}, two={10: 1, 24: 14}, pinned_one=[10])
    assert legal_moves(board, ONE, [3, 5]) == []


def test_no_bear_off_moves_before_all_home(board_from: BoardFactory) -> None:
    board = board_from(one={17: 1, 22: 14})
    moves = legal_moves(board, ONE, [3, 6])
    assert all(not move.is_bear_off for move in moves)


def test_exact_bear_off_always_listed_when_home(board_from: BoardFactory) -> None:
    board = board_from(one={20: 5, 22: 10})
    moves = legal_moves(board, ONE, [3, 6])
    assert Move(22, 0, 3) in moves
    # 6 from 22 overshoots, and 22 is not the furthest
    assert Move(22, 0, 6) not in moves
    # 6 from 20 overshoots but 20 is the furthest checker
    assert Move(20, 0, 6) in moves


def test_bear_off_enumeration_player_two(board_from: BoardFactory) -> None:
    board = board_from(two={2: 3, 5: 12})
    moves = legal_moves(board, TWO, [6, 2])
    assert Move(2, 0, 2) in moves
    assert Move(5, 0, 6) in moves
    assert Move(2, 0, 6) not in moves
    assert Move(5, 3, 2) in moves


def test_bear_off_listed_once_with_exact_die(board_from: BoardFactory) -> None:
    """Last checker on 23 with 5 and 2: bearing off uses the 2, so the 5 is not offered for it."""
    board = board_from(one={0: 14, 23: 1})
    assert legal_moves(board, ONE, [5, 2]) == [Move(23, 0, 2)]
    assert validate_move(board, ONE, [5, 2], 23, 0) == 2


def test_bear_off_listed_once_with_smallest_higher_die(
    board_from: BoardFactory,
) -> None:
    board = board_from(one={0: 14, 22: 1})
    assert legal_moves(board, ONE, [6, 5]) == [Move(22, 0, 5)]
    assert validate_move(board, ONE, [6, 5], 22, 0) == 5


def test_enumeration_agrees_with_validation(board_from: BoardFactory) -> None:
    """Whatever is listed must pass validation and use the listed die."""
    board = board_from(
        one={0: 2, 19: 3, 21: 4, 23: 5, 24: 1},
        two={20: 1, 22: 2, 6: 12},
    )
    dice = [6, 2]
    moves = legal_moves(board, ONE, dice)
    assert moves
    for move in moves:
        assert validate_move(board, ONE, dice, move.from_point, move.to_point) == move.die


def test_move_dict_roundtrip() -> None:
    move = Move(20, 0, 6)
    assert move.is_bear_off
    assert Move.from_dict(move.to_dict()) == move
