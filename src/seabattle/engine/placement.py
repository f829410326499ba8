"""Placement helpers and the randomized choices made for the computer player."""

from __future__ import annotations

import logging
import random
from typing import Iterable

from seabattle.telemetry import get_meter, get_tracer

from .board import Board
from .errors import SamplingLimitExceededError
from .ship import FLEET, Coordinate, Orientation, Ship, ShipType

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.placement")
meter = get_meter("seabattle.engine.placement")

# Far beyond anything a 10x10 board with the standard fleet needs.
MAX_SAMPLING_ATTEMPTS = 10_000

SAMPLING_COUNTER = meter.create_counter(
    "seabattle_engine_sampling_attempts",
    unit="1",
    description="Random candidates drawn before one was accepted",
)


def attempt_place_ship(
    board: Board, ship: Ship, start: Coordinate, orientation: Orientation
) -> bool:
    """Validate then place ``ship``; return whether it landed."""
    if not board.is_valid_placement(ship, start, orientation):
        return False
    return board.place_ship(ship, start, orientation)


def is_valid_attack(board: Board, coord: Coordinate) -> bool:
    """Return True if ``coord`` is on the board and has not been attacked yet."""
    if not board.is_valid_coordinate(coord):
        return False
    return not board.get_cell(coord).is_already_attacked()


def _random_coordinate(rng: random.Random, size: int) -> Coordinate:
    return Coordinate(rng.randrange(size), rng.randrange(size))


def place_ship_randomly(
    board: Board,
    ship_type: ShipType,
    rng: random.Random,
    max_attempts: int = MAX_SAMPLING_ATTEMPTS,
) -> int:
    """Draw uniform origins and orientations until ``ship_type`` fits.

    Returns the number of attempts it took.
    """
    ship = Ship(ship_type)
    for attempt in range(1, max_attempts + 1):
        orientation = rng.choice(list(Orientation))
        start = _random_coordinate(rng, board.size)
        if board.place_ship(ship, start, orientation):
            SAMPLING_COUNTER.add(attempt, attributes={"kind": "placement", "owner": board.owner})
            logger.debug(
                "random_ship_placed",
                extra={"ship_type": ship_type.name, "attempts": attempt, "owner": board.owner},
            )
            return attempt
    logger.error(
        "random_placement_exhausted",
        extra={"ship_type": ship_type.name, "attempts": max_attempts, "owner": board.owner},
    )
    raise SamplingLimitExceededError(f"placing a {ship_type.display_name}", max_attempts)


def place_fleet_randomly(
    board: Board,
    rng: random.Random,
    fleet: Iterable[ShipType] = FLEET,
    max_attempts: int = MAX_SAMPLING_ATTEMPTS,
) -> None:
    """Randomly place one ship of each type in ``fleet`` on ``board``."""
    with tracer.start_as_current_span("placement.place_fleet_randomly") as span:
        span.set_attribute("board.owner", board.owner)
        for ship_type in fleet:
            place_ship_randomly(board, ship_type, rng, max_attempts)
        span.set_attribute("board.ship_count", board.ship_count)


def choose_random_target(
    board: Board,
    rng: random.Random,
    max_attempts: int = MAX_SAMPLING_ATTEMPTS,
) -> Coordinate:
    """Draw uniform coordinates until one has not been attacked yet."""
    for attempt in range(1, max_attempts + 1):
        coord = _random_coordinate(rng, board.size)
        if not board.get_cell(coord).is_already_attacked():
            SAMPLING_COUNTER.add(attempt, attributes={"kind": "targeting", "owner": board.owner})
            logger.debug(
                "random_target_chosen",
                extra={"x": coord.x, "y": coord.y, "attempts": attempt, "owner": board.owner},
            )
            return coord
    logger.error(
        "random_target_exhausted", extra={"attempts": max_attempts, "owner": board.owner}
    )
    raise SamplingLimitExceededError("choosing a target", max_attempts)
