"""Single-player board management for the SeaBattle engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from seabattle.telemetry import get_meter, get_tracer

from .cell import Cell, CellState
from .errors import InvalidCoordinateError
from .ship import Coordinate, Orientation, PlacedShip, Ship, footprint

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.board")
meter = get_meter("seabattle.engine.board")

BOARD_SIZE = 10

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

ATTACK_COUNTER = meter.create_counter(
    "seabattle_engine_attacks",
    unit="1",
    description="Attacks received by a board",
)


class AttackResult(Enum):
    """Outcome of a single attack, with the message shown to the player."""

    HIT = "Hit!"
    MISS = "Water!"
    SUNK = "You sunk a ship!"
    ALREADY_ATTACKED = "Already attacked this cell."

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class FleetStats:
    """Ship counts shown on the status line."""

    total: int
    remaining: int
    sunk: int


@dataclass(frozen=True)
class BoardView:
    """Read-only picture of a board, indexed ``rows[y][x]``."""

    size: int
    hide_ships: bool
    rows: tuple[tuple[CellState, ...], ...]

    def state_at(self, coord: Coordinate) -> CellState:
        return self.rows[coord.y][coord.x]


@dataclass
class Board:
    """A square grid of cells and the fleet placed on it."""

    size: int = BOARD_SIZE
    owner: str = "unknown"
    _cells: list[list[Cell]] = field(init=False, repr=False)
    _ships: list[PlacedShip] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Indexed [x][y].
        self._cells = [
            [Cell(Coordinate(x, y)) for y in range(self.size)] for x in range(self.size)
        ]
        self._ships = []

    @property
    def ships(self) -> list[PlacedShip]:
        """Return a copy of the placed fleet."""
        return list(self._ships)

    @property
    def ship_count(self) -> int:
        return len(self._ships)

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return coord.is_valid(self.size)

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at ``(x, y)``, raising for out-of-range indices."""
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise InvalidCoordinateError(x, y, self.size)
        return self._cells[x][y]

    def get_cell(self, coord: Coordinate) -> Cell:
        return self.cell_at(coord.x, coord.y)

    def cells(self) -> list[Cell]:
        """Return every cell, row by row."""
        return [self._cells[x][y] for y in range(self.size) for x in range(self.size)]

    def is_valid_placement(self, ship: Ship, start: Coordinate, orientation: Orientation) -> bool:
        """Determine whether ``ship`` fits at ``start`` without leaving the board or overlapping."""
        for coord in footprint(start, orientation, ship.length):
            if not self.is_valid_coordinate(coord):
                return False
            if self._cells[coord.x][coord.y].has_ship():
                return False
        return True

    def place_ship(self, ship: Ship, start: Coordinate, orientation: Orientation) -> bool:
        """Put ``ship`` on the board if the placement is valid."""
        with tracer.start_as_current_span("board.place_ship") as span:
            span.set_attribute("ship.type", ship.ship_type.name)
            span.set_attribute("ship.length", ship.length)
            span.set_attribute("ship.start.x", start.x)
            span.set_attribute("ship.start.y", start.y)
            span.set_attribute("board.owner", self.owner)
            fields = {
                "owner": self.owner,
                "ship_type": ship.ship_type.name,
                "orientation": orientation.name,
                "x": start.x,
                "y": start.y,
            }
            if not self.is_valid_placement(ship, start, orientation):
                PLACEMENT_COUNTER.add(1, attributes={"result": "failed", "owner": self.owner})
                logger.debug("ship_placement_rejected", extra=fields)
                return False

            placed = PlacedShip.at(ship, start, orientation)
            for coord in placed.coordinates:
                self._cells[coord.x][coord.y].set_ship(placed)
            self._ships.append(placed)
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            logger.info("ship_placed", extra=fields)
            return True

    def process_attack(self, coord: Coordinate) -> AttackResult:
        """Resolve a shot against this board."""
        with tracer.start_as_current_span("board.process_attack") as span:
            span.set_attribute("attack.x", coord.x)
            span.set_attribute("attack.y", coord.y)
            span.set_attribute("board.owner", self.owner)
            if not self.is_valid_coordinate(coord):
                logger.error(
                    "attack_out_of_bounds",
                    extra={"x": coord.x, "y": coord.y, "owner": self.owner},
                )
                raise InvalidCoordinateError(coord.x, coord.y, self.size)

            cell = self._cells[coord.x][coord.y]
            ship = cell.ship
            if cell.is_already_attacked():
                result = AttackResult.ALREADY_ATTACKED
            elif cell.attack() and ship is not None:
                result = AttackResult.SUNK if ship.is_sunk() else AttackResult.HIT
            else:
                result = AttackResult.MISS

            span.set_attribute("attack.outcome", result.name)
            ATTACK_COUNTER.add(1, attributes={"outcome": result.name.lower(), "owner": self.owner})
            logger.info(
                "attack_resolved",
                extra={"x": coord.x, "y": coord.y, "outcome": result.name, "owner": self.owner},
            )
            return result

    def all_ships_sunk(self) -> bool:
        """True once every placed ship is sunk. An empty board never counts as defeated."""
        if not self._ships:
            return False
        return all(ship.is_sunk() for ship in self._ships)

    def remaining_ship_count(self) -> int:
        return sum(1 for ship in self._ships if not ship.is_sunk())

    def fleet_stats(self) -> FleetStats:
        total = self.ship_count
        remaining = self.remaining_ship_count()
        return FleetStats(total=total, remaining=remaining, sunk=total - remaining)

    def unattacked_coordinates(self) -> list[Coordinate]:
        """Return every coordinate that has not been shot at yet."""
        return [cell.coordinate for cell in self.cells() if not cell.is_already_attacked()]

    def visible_state(self, coord: Coordinate, hide_ships: bool = False) -> CellState:
        """Return the state a viewer may see; hidden ships read as empty water."""
        state = self.get_cell(coord).state
        if hide_ships and state is CellState.SHIP:
            return CellState.EMPTY
        return state

    def view(self, hide_ships: bool = False) -> BoardView:
        """Return an immutable snapshot for rendering."""
        rows = tuple(
            tuple(self.visible_state(Coordinate(x, y), hide_ships) for x in range(self.size))
            for y in range(self.size)
        )
        return BoardView(size=self.size, hide_ships=hide_ships, rows=rows)
