"""Protocol repository (can implement later for SQL Alchemy / simple Excel table etc.)"""

from typing import Optional, Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the stored game (match, board, history, log) as a single unit."""
        ...

    def list_games(
        self, status: Optional[str] = None, player: Optional[str] = None
    ) -> list[tuple[UUID, GameModel]]:
        """Games filtered by status and/or participating player, newest first."""
        ...
