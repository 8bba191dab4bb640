"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class Role(StrEnum):
    """The creator of a game always plays as player one (moving 1 -> 24)."""

    PLAYER_ONE = "player_one"
    PLAYER_TWO = "player_two"
