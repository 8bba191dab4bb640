"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of Plakoto -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import DiceError, GameStateError, NotYourTurnError
from src.core.models import BoardEntryModel, GameModel, MoveRecordModel
from src.core.shared_types import Role, Status
from src.plakoto.board import Board
from src.plakoto.dice import DiceRoll, DiceRoller, roll_pair
from src.plakoto.direction import CHECKERS_PER_PLAYER, opponent_of
from src.plakoto.moves import Move, has_legal_move, legal_moves, validate_move


@dataclass(frozen=True)
class MoveRecord:
    role: Role
    move: Move
    move_number: int


@dataclass(frozen=True)
class MoveOutcome:
    """What the service reports back after a successful move."""

    moved: bool
    game_over: bool
    winner: Optional[str] = None
    pinned: bool = False
    turn_ended: bool = False


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    players: dict[Role, str]
    status: Status
    current_turn: Optional[Role] = None
    dice: tuple[int, int] = (0, 0)
    dice_rolled: bool = False
    moves_remaining: list[int] = field(default_factory=list)
    winner_role: Optional[Role] = None
    history: list[MoveRecord] = field(default_factory=list)
    log: list[str] = field(default_factory=list)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        valid_statuses = [status.value for status in Status]
        if model.status not in valid_statuses:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(valid_statuses)}"
            )
        valid_roles = [role.value for role in Role]
        unknown_roles = [role for role in model.registered_players if role not in valid_roles]
        if unknown_roles:
            raise GameStateError(f"Unknown player role(s): {','.join(unknown_roles)}")

        # create the Game
        players = {Role(role): name for role, name in model.registered_players.items()}
        roles_by_name = {name: role for role, name in players.items()}

        def _role(player: str) -> Role:
            if player not in roles_by_name:
                raise GameStateError(f"Player {player!r} is not registered in this game.")
            return roles_by_name[player]

        board = Board.from_entries(
            [
                (_role(entry.player), entry.point, entry.count, entry.pinned)
                for entry in model.board
            ]
        )
        history = [
            MoveRecord(
                role=_role(record.player),
                move=Move(record.from_point, record.to_point, record.die),
                move_number=record.move_number,
            )
            for record in model.move_history
        ]

        return cls(
            board=board,
            players=players,
            status=Status(model.status),
            current_turn=_role(model.current_turn) if model.current_turn else None,
            dice=(model.dice1, model.dice2),
            dice_rolled=model.dice_rolled,
            moves_remaining=list(model.moves_remaining),
            winner_role=_role(model.winner) if model.winner else None,
            history=history,
            log=list(model.log),
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            registered_players={role.value: name for role, name in self.players.items()},
            status=self.status.value,
            current_turn=self._name(self.current_turn),
            dice1=self.dice[0],
            dice2=self.dice[1],
            dice_rolled=self.dice_rolled,
            moves_remaining=list(self.moves_remaining),
            winner=self.winner,
            board=[
                BoardEntryModel(
                    player=self.players[role], point=point, count=count, pinned=pinned
                )
                for role, point, count, pinned in self.board.to_entries()
            ],
            move_history=[
                MoveRecordModel(
                    player=self.players[record.role],
                    from_point=record.move.from_point,
                    to_point=record.move.to_point,
                    die=record.move.die,
                    move_number=record.move_number,
                )
                for record in self.history
            ],
            log=list(self.log),
        )

    @classmethod
    def new_game(cls, player: str) -> Self:
        """The creator always plays as player one, with all 15 checkers on point 1."""
        game = cls(
            board=Board.starting_position([Role.PLAYER_ONE]),
            players={Role.PLAYER_ONE: player},
            status=Status.WAITING,
        )
        game._log("Game created. Waiting for an opponent...")
        return game

    @property
    def winner(self) -> Optional[str]:
        return self._name(self.winner_role)

    def role_of(self, player: str) -> Optional[Role]:
        return next((role for role, name in self.players.items() if name == player), None)

    def is_players_turn(self, player: str) -> bool:
        return self.current_turn is not None and self.players.get(self.current_turn) == player

    def register_player(self, player: str, dice: DiceRoller) -> None:
        """
        Registering the 2nd player to an open game.

        The joining player gets all 15 checkers on point 24, then both players roll a single die
        (until they differ) to decide who goes first.
        """
        if self.status != Status.WAITING:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if self.role_of(player) is not None:
            raise GameStateError("Cannot join your own game")

        self.players[Role.PLAYER_TWO] = player
        starting = Board.starting_position([Role.PLAYER_TWO])
        for role, point, count, pinned in starting.to_entries():
            self.board.place_checkers(role, point, count, pinned)
        self._change_status(Status.PLAYING)
        self._log(f"{player} joined. The game has started!")
        self._determine_first_player(dice)

    def roll_dice(self, player: str, dice: DiceRoller) -> DiceRoll:
        """Roll for the turn player. Doubles are played four times."""
        self._assert_in_progress()
        self._assert_your_turn(player)
        if self.dice_rolled:
            raise DiceError("Dice already rolled this turn")

        roll = roll_pair(dice)
        self.dice = (roll.die1, roll.die2)
        self.dice_rolled = True
        self.moves_remaining = roll.moves()
        self._log(
            f"{player} rolled {roll.die1} and {roll.die2}"
            + (" (doubles!)" if roll.is_double else "")
        )
        return roll

    def legal_moves(self, player: str) -> list[Move]:
        """
        Service will request the set of legal moves.
        ----

        Used for move suggestions on the client. Nothing to suggest (empty list) when the game is not being played,
        when it is somebody else's turn, or before the dice are rolled.
        """
        if self.status != Status.PLAYING or not self.is_players_turn(player):
            return []
        if not self.dice_rolled or not self.moves_remaining:
            return []
        role = self.role_of(player)
        assert role is not None
        return legal_moves(self.board, role, self.moves_remaining)

    def make_move(self, player: str, from_point: int, to_point: int) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. check it is your turn, you rolled, and there are dice left
        2. validate the move (no changes are made if this fails)
        3. update the board (pin / unpin if needed)
        4. use up the die, record the move
        5. check for the end of the game / the end of the turn
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        if not self.dice_rolled:
            raise DiceError("You must roll the dice first")
        if not self.moves_remaining:
            raise DiceError("No moves remaining")

        role = self.role_of(player)
        assert role is not None
        die_used = validate_move(
            self.board, role, self.moves_remaining, from_point, to_point
        )
        move = Move(from_point, to_point, die_used)

        pinned = self._update_board(role, move)
        self._use_die(die_used)
        self._record_move(role, move)

        if self._has_won(role):
            self.winner_role = role
            self._change_status(Status.FINISHED)
            self._log(f"Game over! {player} wins!")
            return MoveOutcome(moved=True, game_over=True, winner=player, pinned=pinned)

        turn_ended = False
        if not self.moves_remaining or not has_legal_move(
            self.board, role, self.moves_remaining
        ):
            self._end_turn()
            turn_ended = True
        return MoveOutcome(
            moved=True, game_over=False, pinned=pinned, turn_ended=turn_ended
        )

    def pass_turn(self, player: str) -> None:
        """Give up the rest of the turn. Only allowed when there is nothing you can play."""
        self._assert_in_progress()
        self._assert_your_turn(player)
        if not self.dice_rolled:
            raise DiceError("You must roll the dice first")
        if self.legal_moves(player):
            raise GameStateError("You have valid moves available")

        self._log(f"{player} has no valid moves and passes.")
        self._end_turn()

    def snapshot(self) -> "Game":
        """Independent copy, e.g. to compare state before and after a rejected request."""
        return deepcopy(self)

    # -- PRIVATE HELPERS ---
    def _name(self, role: Optional[Role]) -> Optional[str]:
        return self.players.get(role) if role is not None else None

    def _assert_in_progress(self) -> None:
        if self.status != Status.PLAYING:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before rolling / moving / passing."""
        if not self.is_players_turn(player):
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self._name(self.current_turn)} to move first."
            )

    def _determine_first_player(self, dice: DiceRoller) -> None:
        """Each player rolls one die, re-roll on a tie. Highest roll starts, and then rolls again for the actual turn."""
        while True:
            roll = roll_pair(dice)
            if not roll.is_double:
                break

        first = Role.PLAYER_ONE if roll.die1 > roll.die2 else Role.PLAYER_TWO
        self.current_turn = first
        self._clear_dice()
        self._log(
            f"Opening roll: {self.players[Role.PLAYER_ONE]} rolled {roll.die1}, "
            f"{self.players[Role.PLAYER_TWO]} rolled {roll.die2}. "
            f"{self.players[first]} plays first!"
        )

    def _update_board(self, role: Role, move: Move) -> bool:
        """
        Move a single checker. Returns True if an opponent checker got pinned.
        ---

        1. take the checker off the source point
        2. leaving a point empty releases the opponent checker you were pinning there
        3. landing on a lone opponent checker pins it (bearing off: the checker goes to point 0)
        """
        opponent = opponent_of(role)

        self.board.remove_checker(role, move.from_point)
        if self.board.checkers_at(role, move.from_point) == 0 and self.board.is_pinned(
            opponent, move.from_point
        ):
            self.board.unpin(opponent, move.from_point)
            self._log(f"Opponent checker on point {move.from_point} is free again.")

        pinned = False
        self.board.add_checker(role, move.to_point)
        if not move.is_bear_off and self.board.checkers_at(opponent, move.to_point) == 1:
            if not self.board.is_pinned(opponent, move.to_point):
                pinned = True
                self._log(
                    f"{self.players[role]} pinned an opponent checker on point {move.to_point}!"
                )
            self.board.pin(opponent, move.to_point)

        self._log(
            f"{self.players[role]} moved from {move.from_point} to "
            + ("off" if move.is_bear_off else str(move.to_point))
        )
        return pinned

    def _use_die(self, die: int) -> None:
        """Remove a single instance of the die value."""
        self.moves_remaining.remove(die)

    def _record_move(self, role: Role, move: Move) -> None:
        next_number = (self.history[-1].move_number + 1) if self.history else 1
        self.history.append(MoveRecord(role=role, move=move, move_number=next_number))

    def _has_won(self, role: Role) -> bool:
        return self.board.borne_off(role) >= CHECKERS_PER_PLAYER

    def _end_turn(self) -> None:
        assert self.current_turn is not None
        self.current_turn = opponent_of(self.current_turn)
        self._clear_dice()
        self._log(f"Turn over. {self.players[self.current_turn]} to play.")

    def _clear_dice(self) -> None:
        self.dice = (0, 0)
        self.dice_rolled = False
        self.moves_remaining = []

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status

    def _log(self, message: str) -> None:
        self.log.append(message)
