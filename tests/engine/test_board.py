"""Tests for the Board mechanics."""

import pytest

from seabattle.engine.board import AttackResult, Board, FleetStats
from seabattle.engine.cell import CellState
from seabattle.engine.errors import InvalidCoordinateError
from seabattle.engine.ship import Coordinate, Orientation, Ship, ShipType


def test_new_board_is_all_water() -> None:
    board = Board()
    assert board.size == 10
    assert board.ship_count == 0
    assert all(cell.state is CellState.EMPTY for cell in board.cells())
    assert len(board.cells()) == 100


def test_destroyer_scenario() -> None:
    board = Board()
    assert board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 0), Orientation.HORIZONTAL)
    placed = board.ships[0]
    assert placed.coordinates == (Coordinate(0, 0), Coordinate(1, 0))

    assert board.process_attack(Coordinate(0, 0)) is AttackResult.HIT
    assert not board.all_ships_sunk()
    assert board.process_attack(Coordinate(1, 0)) is AttackResult.SUNK
    assert board.all_ships_sunk()


def test_hit_outcome_comes_from_the_struck_ship() -> None:
    board = Board()
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.place_ship(Ship(ShipType.SUBMARINE), Coordinate(0, 1), Orientation.HORIZONTAL)

    assert board.process_attack(Coordinate(0, 1)) is AttackResult.HIT
    assert board.process_attack(Coordinate(0, 0)) is AttackResult.HIT
    assert board.process_attack(Coordinate(1, 0)) is AttackResult.SUNK
    assert board.process_attack(Coordinate(1, 1)) is AttackResult.HIT
    assert board.process_attack(Coordinate(5, 5)) is AttackResult.MISS
    assert board.process_attack(Coordinate(2, 1)) is AttackResult.SUNK
    assert board.all_ships_sunk()


@pytest.mark.parametrize("ship_type", list(ShipType))
@pytest.mark.parametrize("orientation", list(Orientation))
def test_successful_placement_footprint(ship_type: ShipType, orientation: Orientation) -> None:
    board = Board()
    start = Coordinate(2, 3)
    assert board.place_ship(Ship(ship_type), start, orientation)

    coords = board.ships[0].coordinates
    assert len(coords) == ship_type.length
    assert coords[0] == start
    assert all(coord.is_valid(board.size) for coord in coords)
    if orientation is Orientation.HORIZONTAL:
        assert {coord.y for coord in coords} == {start.y}
    else:
        assert {coord.x for coord in coords} == {start.x}
    for coord in coords:
        assert board.get_cell(coord).state is CellState.SHIP
        assert board.get_cell(coord).ship is board.ships[0]


def test_overlapping_placement_rejected_without_mutation() -> None:
    board = Board()
    board.place_ship(Ship(ShipType.CRUISER), Coordinate(0, 0), Orientation.HORIZONTAL)

    overlapping = Ship(ShipType.DESTROYER)
    assert not board.is_valid_placement(overlapping, Coordinate(1, 0), Orientation.VERTICAL)
    assert not board.place_ship(overlapping, Coordinate(1, 0), Orientation.VERTICAL)
    assert board.ship_count == 1
    assert board.get_cell(Coordinate(1, 1)).state is CellState.EMPTY


@pytest.mark.parametrize(
    "start, orientation",
    [
        (Coordinate(9, 9), Orientation.HORIZONTAL),
        (Coordinate(9, 9), Orientation.VERTICAL),
        (Coordinate(-1, 0), Orientation.HORIZONTAL),
        (Coordinate(0, 10), Orientation.VERTICAL),
    ],
)
def test_out_of_bounds_placement_rejected(start: Coordinate, orientation: Orientation) -> None:
    board = Board()
    assert not board.is_valid_placement(Ship(ShipType.DESTROYER), start, orientation)
    assert not board.place_ship(Ship(ShipType.DESTROYER), start, orientation)
    assert board.ship_count == 0


def test_adjacent_ships_are_allowed() -> None:
    board = Board()
    assert board.place_ship(Ship(ShipType.SUBMARINE), Coordinate(3, 3), Orientation.VERTICAL)
    assert board.place_ship(Ship(ShipType.DESTROYER), Coordinate(4, 3), Orientation.HORIZONTAL)


def test_repeat_attack_reports_already_attacked() -> None:
    board = Board()
    board.place_ship(Ship(ShipType.BATTLESHIP), Coordinate(0, 5), Orientation.HORIZONTAL)

    assert board.process_attack(Coordinate(0, 5)) is AttackResult.HIT
    assert board.process_attack(Coordinate(0, 5)) is AttackResult.ALREADY_ATTACKED
    assert board.process_attack(Coordinate(0, 5)) is AttackResult.ALREADY_ATTACKED
    assert board.ships[0].hit_count == 1

    assert board.process_attack(Coordinate(7, 7)) is AttackResult.MISS
    assert board.process_attack(Coordinate(7, 7)) is AttackResult.ALREADY_ATTACKED
    assert board.get_cell(Coordinate(7, 7)).state is CellState.MISS


def test_attack_out_of_bounds_raises() -> None:
    board = Board()
    with pytest.raises(InvalidCoordinateError):
        board.process_attack(Coordinate(10, 10))
    with pytest.raises(ValueError):
        board.process_attack(Coordinate(-1, 0))


def test_cell_accessors_are_bounds_checked() -> None:
    board = Board()
    assert board.cell_at(9, 0).coordinate == Coordinate(9, 0)
    with pytest.raises(InvalidCoordinateError):
        board.cell_at(10, 0)
    with pytest.raises(InvalidCoordinateError):
        board.get_cell(Coordinate(0, -1))


def test_all_ships_sunk_is_false_for_empty_board() -> None:
    assert not Board().all_ships_sunk()


def test_all_ships_sunk_requires_every_ship() -> None:
    board = Board()
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 2), Orientation.HORIZONTAL)
    board.process_attack(Coordinate(0, 0))
    board.process_attack(Coordinate(1, 0))
    assert not board.all_ships_sunk()
    board.process_attack(Coordinate(0, 2))
    board.process_attack(Coordinate(1, 2))
    assert board.all_ships_sunk()


def test_ships_is_a_defensive_copy() -> None:
    board = Board()
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.ships.clear()
    assert board.ship_count == 1


def test_fleet_stats_track_sunk_ships() -> None:
    board = Board()
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.place_ship(Ship(ShipType.CRUISER), Coordinate(0, 4), Orientation.HORIZONTAL)
    board.process_attack(Coordinate(0, 0))
    board.process_attack(Coordinate(1, 0))
    assert board.fleet_stats() == FleetStats(total=2, remaining=1, sunk=1)


def test_view_hides_ships_but_not_hits() -> None:
    board = Board()
    board.place_ship(Ship(ShipType.DESTROYER), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.process_attack(Coordinate(0, 0))
    board.process_attack(Coordinate(5, 5))

    hidden = board.view(hide_ships=True)
    assert hidden.state_at(Coordinate(0, 0)) is CellState.HIT
    assert hidden.state_at(Coordinate(1, 0)) is CellState.EMPTY
    assert hidden.state_at(Coordinate(5, 5)) is CellState.MISS

    visible = board.view()
    assert visible.state_at(Coordinate(1, 0)) is CellState.SHIP
    assert board.visible_state(Coordinate(1, 0), hide_ships=True) is CellState.EMPTY


def test_unattacked_coordinates_shrink() -> None:
    board = Board()
    board.process_attack(Coordinate(4, 4))
    remaining = board.unattacked_coordinates()
    assert len(remaining) == 99
    assert Coordinate(4, 4) not in remaining


def test_attack_result_messages() -> None:
    assert AttackResult.MISS.message == "Water!"
    assert AttackResult.SUNK.message == "You sunk a ship!"
