"""
Which way a player's checkers travel.

(placed in its own module as the board, the move rules and the game all need it)

Player one runs 1 -> 24 and bears off from 19-24, player two runs 24 -> 1 and bears off from 1-6.
Instead of branching on the player everywhere, every distance / overshoot / furthest-checker computation goes through a `Direction`.
"""

from dataclasses import dataclass

from src.core.shared_types import Role

# 24 points on the board. Point 0 is where borne off checkers are kept.
FIRST_POINT = 1
LAST_POINT = 24
BORNE_OFF = 0
CHECKERS_PER_PLAYER = 15


@dataclass(frozen=True)
class Direction:
    sign: int
    entry_point: int
    home: range
    # The virtual point just past the edge of the board. Reaching it exactly means bearing off with an exact die.
    off_point: int

    def destination(self, from_point: int, die: int) -> int:
        """Where a checker lands when moved `die` pips. May fall off the board."""
        return from_point + self.sign * die

    def distance(self, from_point: int, to_point: int) -> int:
        """Pips travelled forward. Zero or negative means the move goes the wrong way."""
        if to_point == BORNE_OFF:
            return self.distance_to_off(from_point)
        return self.sign * (to_point - from_point)

    def distance_to_off(self, point: int) -> int:
        return self.sign * (self.off_point - point)

    def is_off_board(self, target: int) -> bool:
        return not is_on_board(target)

    def is_home(self, point: int) -> bool:
        return point in self.home

    def furthest(self, points: list[int]) -> int | None:
        """The point furthest away from bearing off."""
        if not points:
            return None
        return max(points, key=self.distance_to_off)


def is_on_board(point: int) -> bool:
    return FIRST_POINT <= point <= LAST_POINT


DIRECTIONS: dict[Role, Direction] = {
    Role.PLAYER_ONE: Direction(sign=1, entry_point=1, home=range(19, 25), off_point=25),
    Role.PLAYER_TWO: Direction(sign=-1, entry_point=24, home=range(1, 7), off_point=0),
}


def opponent_of(role: Role) -> Role:
    return Role.PLAYER_TWO if role == Role.PLAYER_ONE else Role.PLAYER_ONE
