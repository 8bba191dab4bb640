"""The Game board keeps track of where every checker is and which stacks are pinned."""

from dataclasses import dataclass, field
from typing import Self

from src.core.shared_types import Role
from src.plakoto.direction import (
    BORNE_OFF,
    CHECKERS_PER_PLAYER,
    DIRECTIONS,
    FIRST_POINT,
    LAST_POINT,
)

BoardEntry = tuple[Role, int, int, bool]  # (role, point, count, pinned)


@dataclass
class Stack:
    """Checkers of a single player on a single point."""

    count: int
    pinned: bool = False


def _empty_slots() -> list[dict[Role, Stack]]:
    return [{} for _ in range(LAST_POINT + 1)]


@dataclass
class Board:
    """
    25 slots: index 0 holds the borne off checkers, 1-24 are the points.

    A slot holds at most one Stack per player. A stack never has a count of zero (it gets removed instead).
    """

    slots: list[dict[Role, Stack]] = field(default_factory=_empty_slots)

    @classmethod
    def starting_position(cls, roles: list[Role]) -> Self:
        """All 15 checkers of every given player on their entry point."""
        board = cls()
        for role in roles:
            board.place_checkers(role, DIRECTIONS[role].entry_point, CHECKERS_PER_PLAYER)
        return board

    @classmethod
    def from_entries(cls, entries: list[BoardEntry]) -> Self:
        board = cls()
        for role, point, count, pinned in entries:
            board.place_checkers(role, point, count, pinned)
        return board

    def to_entries(self) -> list[BoardEntry]:
        """Sparse representation, ordered by point."""
        return [
            (role, point, stack.count, stack.pinned)
            for point, slot in enumerate(self.slots)
            for role, stack in sorted(slot.items())
        ]

    # --- QUERIES ---
    def stack(self, role: Role, point: int) -> Stack | None:
        return self.slots[point].get(role)

    def checkers_at(self, role: Role, point: int) -> int:
        stack = self.stack(role, point)
        return stack.count if stack else 0

    def is_pinned(self, role: Role, point: int) -> bool:
        stack = self.stack(role, point)
        return stack.pinned if stack else False

    def borne_off(self, role: Role) -> int:
        return self.checkers_at(role, BORNE_OFF)

    def occupied_points(self, role: Role) -> list[int]:
        """Points (1-24) where the player has at least one checker, pinned or not."""
        return [
            point
            for point in range(FIRST_POINT, LAST_POINT + 1)
            if role in self.slots[point]
        ]

    def movable_points(self, role: Role) -> list[int]:
        return [
            point for point in self.occupied_points(role) if not self.is_pinned(role, point)
        ]

    def total_checkers(self, role: Role) -> int:
        """On the board plus borne off. Should always add up to 15 once the player is seated."""
        return sum(self.checkers_at(role, point) for point in range(len(self.slots)))

    def all_in_home(self, role: Role) -> bool:
        """Bearing off is only allowed once no checker is left outside the home board."""
        direction = DIRECTIONS[role]
        return all(direction.is_home(point) for point in self.occupied_points(role))

    def furthest_point(self, role: Role) -> int | None:
        """The occupied point furthest away from bearing off."""
        return DIRECTIONS[role].furthest(self.occupied_points(role))

    # --- UPDATES ---
    def place_checkers(
        self, role: Role, point: int, count: int, pinned: bool = False
    ) -> None:
        if count <= 0:
            return
        self.slots[point][role] = Stack(count, pinned)

    def add_checker(self, role: Role, point: int) -> None:
        stack = self.stack(role, point)
        if stack:
            stack.count += 1
        else:
            self.slots[point][role] = Stack(1)

    def remove_checker(self, role: Role, point: int) -> None:
        stack = self.stack(role, point)
        if stack is None:
            return
        stack.count -= 1
        if stack.count == 0:
            del self.slots[point][role]

    def pin(self, role: Role, point: int) -> None:
        stack = self.stack(role, point)
        if stack:
            stack.pinned = True

    def unpin(self, role: Role, point: int) -> None:
        stack = self.stack(role, point)
        if stack:
            stack.pinned = False
