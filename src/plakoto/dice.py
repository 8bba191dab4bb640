"""
Dice rolling.

The Game never calls `random` directly: it asks a `DiceRoller` for a die. That way a seeded or scripted source can be
injected (reproducible games, tests).
"""

import random
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


class DiceRoller(Protocol):
    """Source of single six-sided die values."""

    def roll_die(self) -> int:
        """Uniform integer in [1, 6]"""
        ...


@dataclass(frozen=True)
class DiceRoll:
    die1: int
    die2: int

    @property
    def is_double(self) -> bool:
        return self.die1 == self.die2

    def moves(self) -> list[int]:
        """Doubles are played four times."""
        if self.is_double:
            return [self.die1] * 4
        return [self.die1, self.die2]


class RandomDice:
    """Pseudo random dice. Pass a seed for a reproducible sequence."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def roll_die(self) -> int:
        return self._random.randint(1, 6)


class ScriptedDice:
    """Replays a fixed sequence of die values (e.g. from a recorded game)."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        for value in self._values:
            if not 1 <= value <= 6:
                raise ValueError(f"A die shows 1-6, got {value}")

    def roll_die(self) -> int:
        if not self._values:
            raise RuntimeError("Scripted dice ran out of values.")
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values)


def roll_pair(dice: DiceRoller) -> DiceRoll:
    return DiceRoll(dice.roll_die(), dice.roll_die())
