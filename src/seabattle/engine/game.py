"""Human vs. computer game controller."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from seabattle.telemetry import get_meter, get_tracer

from .board import AttackResult, Board, BoardView
from .errors import InvalidTurnError
from .placement import (
    MAX_SAMPLING_ATTEMPTS,
    attempt_place_ship,
    choose_random_target,
    place_fleet_randomly,
)
from .ship import Coordinate, Orientation, Ship, ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.game")
meter = get_meter("seabattle.engine.game")

MOVE_COUNTER = meter.create_counter(
    "seabattle_engine_moves",
    unit="1",
    description="Number of attacks made in a Game",
)

PLAYER_WON_MESSAGE = "Congratulations! You have won the game."
COMPUTER_WON_MESSAGE = "The computer has won the game. Better luck next time!"


class GameStatus(Enum):
    """Turn state of a match."""

    SETUP = "setup"
    PLAYER_TURN = "player_turn"
    COMPUTER_TURN = "computer_turn"
    PLAYER_WON = "player_won"
    COMPUTER_WON = "computer_won"
    # Declared for completeness; no transition produces it.
    DRAW = "draw"


TERMINAL_STATUSES = frozenset({GameStatus.PLAYER_WON, GameStatus.COMPUTER_WON})


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the current match."""

    status: GameStatus
    winner: str | None
    player_board: BoardView
    computer_board: BoardView


class Game:
    """Coordinates a match between the human's board and the computer's board."""

    def __init__(
        self,
        rng: random.Random | None = None,
        rng_seed: int | None = None,
        max_sampling_attempts: int = MAX_SAMPLING_ATTEMPTS,
    ) -> None:
        self.player_board = Board(owner="player")
        self.computer_board = Board(owner="computer")
        self.status: GameStatus = GameStatus.SETUP
        self._rng = rng if rng is not None else random.Random(rng_seed)
        self._max_sampling_attempts = max_sampling_attempts
        self.last_computer_result: AttackResult | None = None

    def start_game(self) -> None:
        """Leave setup and hand the first turn to the player."""
        if self.status is not GameStatus.SETUP:
            logger.debug("start_game_ignored", extra={"status": self.status.value})
            return
        self.status = GameStatus.PLAYER_TURN
        logger.info(
            "game_started",
            extra={
                "player_ships": self.player_board.ship_count,
                "computer_ships": self.computer_board.ship_count,
            },
        )

    def place_player_ship(
        self, ship_type: ShipType, start: Coordinate, orientation: Orientation
    ) -> bool:
        """Place one of the human's ships during setup."""
        return attempt_place_ship(self.player_board, Ship(ship_type), start, orientation)

    def place_player_ships_randomly(self) -> None:
        with tracer.start_as_current_span("game.place_player_ships_randomly"):
            place_fleet_randomly(
                self.player_board, self._rng, max_attempts=self._max_sampling_attempts
            )

    def place_computer_ships_randomly(self) -> None:
        """Put one ship of every type on the computer's board at random."""
        with tracer.start_as_current_span("game.place_computer_ships_randomly"):
            place_fleet_randomly(
                self.computer_board, self._rng, max_attempts=self._max_sampling_attempts
            )
            logger.info(
                "computer_fleet_placed", extra={"ships": self.computer_board.ship_count}
            )

    def process_player_attack(self, coord: Coordinate) -> AttackResult:
        """Fire the human's shot at the computer's board."""
        with tracer.start_as_current_span("game.process_player_attack") as span:
            span.set_attribute("x", coord.x)
            span.set_attribute("y", coord.y)
            self._require_status(GameStatus.PLAYER_TURN, "player")

            result = self.computer_board.process_attack(coord)
            if self.computer_board.all_ships_sunk():
                self.status = GameStatus.PLAYER_WON
                logger.info("game_finished", extra={"winner": "player"})
            else:
                self.status = GameStatus.COMPUTER_TURN

            span.set_attribute("result", result.name)
            span.set_attribute("next_status", self.status.value)
            MOVE_COUNTER.add(1, attributes={"result": result.name.lower(), "player": "player"})
            return result

    def process_computer_attack(self) -> Coordinate:
        """Let the computer fire at a random cell it has not tried yet."""
        with tracer.start_as_current_span("game.process_computer_attack") as span:
            self._require_status(GameStatus.COMPUTER_TURN, "computer")

            coord = choose_random_target(
                self.player_board, self._rng, max_attempts=self._max_sampling_attempts
            )
            result = self.player_board.process_attack(coord)
            self.last_computer_result = result
            if self.player_board.all_ships_sunk():
                self.status = GameStatus.COMPUTER_WON
                logger.info("game_finished", extra={"winner": "computer"})
            else:
                self.status = GameStatus.PLAYER_TURN

            span.set_attribute("x", coord.x)
            span.set_attribute("y", coord.y)
            span.set_attribute("result", result.name)
            MOVE_COUNTER.add(1, attributes={"result": result.name.lower(), "player": "computer"})
            return coord

    def is_game_over(self) -> bool:
        return self.computer_board.all_ships_sunk() or self.player_board.all_ships_sunk()

    def get_winner(self) -> str | None:
        """Return the victory message, or None while nobody has won."""
        if self.status is GameStatus.PLAYER_WON:
            return PLAYER_WON_MESSAGE
        if self.status is GameStatus.COMPUTER_WON:
            return COMPUTER_WON_MESSAGE
        return None

    def get_state(self) -> GameState:
        """Return an immutable view; the computer's fleet stays hidden until the end."""
        return GameState(
            status=self.status,
            winner=self.get_winner(),
            player_board=self.player_board.view(hide_ships=False),
            computer_board=self.computer_board.view(
                hide_ships=self.status not in TERMINAL_STATUSES
            ),
        )

    def _require_status(self, expected: GameStatus, actor: str) -> None:
        if self.status is expected:
            return
        logger.error(
            "turn_rejected",
            extra={"actor": actor, "status": self.status.value, "expected": expected.value},
        )
        raise InvalidTurnError(
            f"It is not the {actor}'s turn (status is {self.status.value})."
        )
