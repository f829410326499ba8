"""Game subclass that reports each match through telemetry."""

from __future__ import annotations

import time

from seabattle.engine.board import AttackResult
from seabattle.engine.errors import SeaBattleError
from seabattle.engine.game import TERMINAL_STATUSES, Game, GameStatus
from seabattle.engine.ship import Coordinate
from seabattle.telemetry import get_logger, get_tracer, record_game_metric


class InstrumentedGame(Game):
    """Wraps Game with a per-match span, metrics, and logging."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._logger = get_logger("seabattle.engine")
        self._tracer = get_tracer("seabattle.engine")
        self._game_span_cm = None
        self._game_span = None
        self._game_start_time: float | None = None
        self._turns = 0

    def start_game(self) -> None:
        was_setup = self.status is GameStatus.SETUP
        super().start_game()
        if not was_setup:
            return
        self._open_game_span()
        record_game_metric(
            "seabattle_game_started_total",
            1,
            {
                "player_ships": self.player_board.ship_count,
                "computer_ships": self.computer_board.ship_count,
            },
        )
        self._logger.info("Game started")

    def process_player_attack(self, coord: Coordinate) -> AttackResult:
        with self._tracer.start_as_current_span("seabattle.engine.player_attack") as span:
            span.set_attribute("coord.x", coord.x)
            span.set_attribute("coord.y", coord.y)
            try:
                result = super().process_player_attack(coord)
            except SeaBattleError as exc:
                record_game_metric(
                    "seabattle_game_invalid_moves_total",
                    1,
                    {"actor": "player", "reason": type(exc).__name__},
                )
                span.record_exception(exc)
                span.set_attribute("error", True)
                self._logger.error("Rejected player attack at %s: %s", coord, exc)
                raise

            span.set_attribute("result", result.name)
            self._record_attack("player", result)
            self._logger.info("player attack %s -> %s", coord, result.name)
            return result

    def process_computer_attack(self) -> Coordinate:
        with self._tracer.start_as_current_span("seabattle.engine.computer_attack") as span:
            try:
                coord = super().process_computer_attack()
            except SeaBattleError as exc:
                record_game_metric(
                    "seabattle_game_invalid_moves_total",
                    1,
                    {"actor": "computer", "reason": type(exc).__name__},
                )
                span.record_exception(exc)
                span.set_attribute("error", True)
                self._logger.error("Rejected computer attack: %s", exc)
                raise

            result = self.last_computer_result
            span.set_attribute("coord.x", coord.x)
            span.set_attribute("coord.y", coord.y)
            if result is not None:
                span.set_attribute("result", result.name)
                self._record_attack("computer", result)
            self._logger.info("computer attack %s -> %s", coord, result)
            return coord

    def _record_attack(self, actor: str, result: AttackResult) -> None:
        self._turns += 1
        record_game_metric("seabattle_attacks_total", 1, {"actor": actor})
        record_game_metric(
            "seabattle_attacks_by_result_total",
            1,
            {"actor": actor, "result": result.name.lower()},
        )
        if self.status in TERMINAL_STATUSES:
            self._finish_game()

    def _open_game_span(self) -> None:
        self._close_game_span()
        self._game_start_time = time.perf_counter()
        self._turns = 0
        self._game_span_cm = self._tracer.start_as_current_span("seabattle.engine.game")
        self._game_span = self._game_span_cm.__enter__()

    def _finish_game(self) -> None:
        duration = (time.perf_counter() - self._game_start_time) if self._game_start_time else 0.0
        winner = self.status.value

        record_game_metric("seabattle_game_completed_total", 1, {"winner": winner})
        record_game_metric("seabattle_game_duration_seconds", duration, {"winner": winner})

        with self._tracer.start_as_current_span("seabattle.engine.game_complete") as span:
            span.set_attribute("winner", winner)
            span.set_attribute("turns", self._turns)
            span.set_attribute("duration_ms", duration * 1000)

        if self._game_span is not None:
            self._game_span.set_attribute("winner", winner)
            self._game_span.set_attribute("turns", self._turns)

        self._logger.info(
            "Game finished. Winner=%s turns=%d duration_s=%.3f", winner, self._turns, duration
        )
        self._close_game_span()

    def _close_game_span(self) -> None:
        if self._game_span_cm is not None:
            self._game_span_cm.__exit__(None, None, None)
            self._game_span_cm = None
            self._game_span = None
