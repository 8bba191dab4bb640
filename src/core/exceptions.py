"""
Custom exceptions.

Every `GameError` is a recoverable rule violation: the message is meant to be shown to the player as-is.
Storage failures are kept outside of that hierarchy so the caller can tell "you can't do that" from "try again later".
"""


class GameError(Exception):
    """Top level exception for anything the player did wrong."""


class GameStateError(GameError):
    """The game is not in a state that allows the requested action."""


class NotYourTurnError(GameError):
    pass


class DiceError(GameError):
    """Dice not rolled yet, rolled twice, or all dice already used."""


class IllegalMoveError(GameError):
    pass


class RepositoryError(GameError):
    """Game record could not be found."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted."""


class StorageUnavailableError(Exception):
    """Persistence layer failed. Not the player's fault."""
