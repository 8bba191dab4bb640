from uuid import UUID, uuid4

import pytest

from src.api.models import CreateGameRequest, MoveRequest
from src.core.exceptions import InvalidRequestError


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - player name --
def test_player_name_is_stripped() -> None:
    request = CreateGameRequest(player_name="  alice  ")
    assert request.player_name == "alice"


@pytest.mark.parametrize(
    "name, message",
    [
        ("", "Player name is required."),
        ("   ", "Player name is required."),
        ("a", "Player name must be between 2 and 50 characters."),
        ("x" * 51, "Player name must be between 2 and 50 characters."),
    ],
)
def test_invalid_player_name(name: str, message: str) -> None:
    with pytest.raises(InvalidRequestError, match=message):
        _ = CreateGameRequest(player_name=name)


def test_name_length_limits() -> None:
    assert CreateGameRequest(player_name="ab").player_name == "ab"
    assert CreateGameRequest(player_name="x" * 50).player_name == "x" * 50


# -- Validation - MoveRequest --
@pytest.mark.parametrize("from_point, to_point", [(1, 4), (24, 19), (20, 0)])
def test_valid_points(mock_id: UUID, from_point: int, to_point: int) -> None:
    request = MoveRequest(
        game_id=mock_id, player_name="bladiblidiboo", from_point=from_point, to_point=to_point
    )
    assert request.from_point == from_point
    assert request.to_point == to_point


@pytest.mark.parametrize("point", [0, 25, -3])
def test_invalid_from_point(mock_id: UUID, point: int) -> None:
    """Checkers can only be moved from one of the 24 points."""
    with pytest.raises(InvalidRequestError, match="Points are numbered 1-24"):
        _ = MoveRequest(
            game_id=mock_id, player_name="bladiblidiboo", from_point=point, to_point=5
        )


@pytest.mark.parametrize("point", [25, -1])
def test_invalid_to_point(mock_id: UUID, point: int) -> None:
    """0 is allowed (bearing off), anything outside 0-24 is not."""
    with pytest.raises(InvalidRequestError, match="or 0 to bear off"):
        _ = MoveRequest(
            game_id=mock_id, player_name="bladiblidiboo", from_point=5, to_point=point
        )
