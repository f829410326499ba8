"""Exceptions raised by the SeaBattle engine."""

from __future__ import annotations


class SeaBattleError(Exception):
    """Base class for engine errors."""


class InvalidCoordinateError(SeaBattleError, ValueError):
    """A coordinate or index lies outside the board."""

    def __init__(self, x: int, y: int, size: int) -> None:
        super().__init__(f"Invalid coordinate: ({x}, {y}) is outside a {size}x{size} board.")
        self.x = x
        self.y = y
        self.size = size


class InvalidTurnError(SeaBattleError, RuntimeError):
    """An attack was requested outside of the matching turn."""


class SamplingLimitExceededError(SeaBattleError, RuntimeError):
    """A rejection-sampling loop gave up before finding an acceptable candidate."""

    def __init__(self, what: str, attempts: int) -> None:
        super().__init__(f"Gave up on {what} after {attempts} attempts.")
        self.what = what
        self.attempts = attempts
