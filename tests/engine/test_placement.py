"""Tests for placement helpers and the computer's random choices."""

import random

import pytest

from seabattle.engine.board import Board
from seabattle.engine.errors import SamplingLimitExceededError
from seabattle.engine.placement import (
    attempt_place_ship,
    choose_random_target,
    is_valid_attack,
    place_fleet_randomly,
    place_ship_randomly,
)
from seabattle.engine.ship import FLEET, Coordinate, Orientation, Ship, ShipType


def test_attempt_place_ship_reports_success_and_failure() -> None:
    board = Board()
    assert attempt_place_ship(
        board, Ship(ShipType.CARRIER), Coordinate(0, 0), Orientation.VERTICAL
    )
    assert not attempt_place_ship(
        board, Ship(ShipType.DESTROYER), Coordinate(0, 4), Orientation.HORIZONTAL
    )
    assert not attempt_place_ship(
        board, Ship(ShipType.DESTROYER), Coordinate(9, 0), Orientation.HORIZONTAL
    )
    assert board.ship_count == 1


def test_is_valid_attack() -> None:
    board = Board()
    assert is_valid_attack(board, Coordinate(0, 0))
    assert not is_valid_attack(board, Coordinate(10, 0))
    board.process_attack(Coordinate(0, 0))
    assert not is_valid_attack(board, Coordinate(0, 0))


@pytest.mark.parametrize("seed", range(50))
def test_random_fleet_has_one_of_each_type_without_overlap(seed: int) -> None:
    board = Board()
    place_fleet_randomly(board, random.Random(seed))

    assert board.ship_count == len(FLEET)
    assert [ship.ship_type for ship in board.ships] == list(FLEET)
    coords = [coord for ship in board.ships for coord in ship.coordinates]
    assert len(coords) == len(set(coords)), "Ships should not overlap"
    assert all(coord.is_valid(board.size) for coord in coords)


def test_place_ship_randomly_gives_up_on_a_full_board() -> None:
    board = Board(size=2)
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 1), Orientation.HORIZONTAL)

    with pytest.raises(SamplingLimitExceededError):
        place_ship_randomly(board, ShipType.DESTROYER, random.Random(0), max_attempts=25)
    assert board.ship_count == 2


def test_choose_random_target_skips_attacked_cells() -> None:
    board = Board()
    for coord in board.unattacked_coordinates():
        if coord != Coordinate(6, 2):
            board.process_attack(coord)

    assert choose_random_target(board, random.Random(7)) == Coordinate(6, 2)


def test_choose_random_target_gives_up_when_everything_is_attacked() -> None:
    board = Board(size=3)
    for coord in board.unattacked_coordinates():
        board.process_attack(coord)

    with pytest.raises(SamplingLimitExceededError) as excinfo:
        choose_random_target(board, random.Random(1), max_attempts=40)
    assert excinfo.value.attempts == 40
