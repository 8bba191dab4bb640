"""
Movement rules of Plakoto.

Two entry points, both pure functions of (board, player, dice left):

* `validate_move()` checks a single move the player asked for and tells which die it uses.
* `legal_moves()` lists every move the player could make right now.

Neither of them changes the board: executing the move is the Game's job.
"""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Role
from src.plakoto.board import Board
from src.plakoto.direction import BORNE_OFF, DIRECTIONS, is_on_board, opponent_of


@dataclass(frozen=True)
class Move:
    from_point: int
    to_point: int  # 0 = bear off
    die: int

    @property
    def is_bear_off(self) -> bool:
        return self.to_point == BORNE_OFF

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> Self:
        return cls(from_point=data["from"], to_point=data["to"], die=data["die"])

    def to_dict(self) -> dict[str, int]:
        return {"from": self.from_point, "to": self.to_point, "die": self.die}


# --- VALIDATION ---
def validate_move(
    board: Board,
    role: Role,
    moves_remaining: list[int],
    from_point: int,
    to_point: int,
) -> int:
    """
    Check a requested move and return the die it consumes.
    ---

    Steps (in this order, each one has its own error message):

    1. Both points must exist on the board (to_point 0 means bearing off)
    2. You need an unpinned checker on the source point
    3. The move must go forward
    4. A die must match: exact distance, or (bearing off only) a bigger die for the furthest checker
    5. The destination must not be blocked, and must not hold your own pinned checker
    6. Bearing off requires all checkers in the home board

    Raises IllegalMoveError, the board is never touched.
    """
    direction = DIRECTIONS[role]
    bearing_off = to_point == BORNE_OFF

    # 1: points must exist
    if not is_on_board(from_point):
        raise IllegalMoveError(f"Point {from_point} is not on the board")
    if not (bearing_off or is_on_board(to_point)):
        raise IllegalMoveError(f"Point {to_point} is not on the board")

    # 2: source
    if board.checkers_at(role, from_point) <= 0:
        raise IllegalMoveError(f"No checkers at point {from_point}")
    if board.is_pinned(role, from_point):
        raise IllegalMoveError(f"Checker at point {from_point} is pinned")

    # 3: direction
    distance = direction.distance(from_point, to_point)
    if distance <= 0:
        raise IllegalMoveError("Invalid move direction")

    # 4: die
    die_used = _match_die(board, role, moves_remaining, from_point, distance, bearing_off)
    if die_used is None:
        raise IllegalMoveError(f"No valid die for this move (distance: {distance})")

    if bearing_off:
        # 6: bearing off
        if not board.all_in_home(role):
            raise IllegalMoveError(
                "Cannot bear off - not all checkers in home board"
            )
    else:
        # 5: destination
        _assert_can_land(board, role, to_point)

    return die_used


def _match_die(
    board: Board,
    role: Role,
    moves_remaining: list[int],
    from_point: int,
    distance: int,
    bearing_off: bool,
) -> int | None:
    """Exact die first. Only when bearing off may a bigger die be used (smallest one that fits)."""
    if distance in moves_remaining:
        return distance

    if not bearing_off:
        return None

    if not can_bear_off_with_higher_die(board, role, from_point):
        return None

    bigger_dice = [die for die in moves_remaining if die > distance]
    return min(bigger_dice) if bigger_dice else None


def _assert_can_land(board: Board, role: Role, to_point: int) -> None:
    """A single opponent checker can be pinned, two or more close the point."""
    opponent = opponent_of(role)
    if board.checkers_at(opponent, to_point) >= 2:
        raise IllegalMoveError(f"Point {to_point} is blocked by opponent")
    if board.checkers_at(role, to_point) > 0 and board.is_pinned(role, to_point):
        raise IllegalMoveError(
            f"Cannot add more checkers to point {to_point} - your checker is pinned there"
        )


def can_bear_off_with_higher_die(board: Board, role: Role, from_point: int) -> bool:
    """A die bigger than needed may only be used on the furthest checker, with everybody home."""
    return board.all_in_home(role) and board.furthest_point(role) == from_point


def is_landing_allowed(board: Board, role: Role, to_point: int) -> bool:
    try:
        _assert_can_land(board, role, to_point)
    except IllegalMoveError:
        return False
    return True


# --- ENUMERATION ---
def legal_moves(board: Board, role: Role, moves_remaining: list[int]) -> list[Move]:
    """
    Every move the player could make with the dice left.
    ---

    For every unpinned point and every (distinct) die value:

    * landing on the board: legal unless blocked by 2+ opponent checkers or onto your own pinned checker.
    * landing past the edge: bearing off. Needs all checkers home, and then either an exact die,
      or the checker has to be the furthest one. Only the die the move would actually use is listed.

    Bear off moves are reported with to_point 0.
    """
    direction = DIRECTIONS[role]
    dice_values = list(dict.fromkeys(moves_remaining))
    all_home = board.all_in_home(role)

    moves: list[Move] = []
    for from_point in board.movable_points(role):
        for die in dice_values:
            target = direction.destination(from_point, die)

            if direction.is_off_board(target):
                if not all_home:
                    continue
                # listed with the die that executing the bear off would consume
                die_used = _match_die(
                    board,
                    role,
                    moves_remaining,
                    from_point,
                    direction.distance_to_off(from_point),
                    bearing_off=True,
                )
                if die_used == die:
                    moves.append(Move(from_point, BORNE_OFF, die))
                continue

            if is_landing_allowed(board, role, target):
                moves.append(Move(from_point, target, die))
    return moves


def has_legal_move(board: Board, role: Role, moves_remaining: list[int]) -> bool:
    return len(legal_moves(board, role, moves_remaining)) > 0
