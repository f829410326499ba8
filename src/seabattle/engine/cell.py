"""Grid cells and their attack/occupancy state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .ship import Coordinate, PlacedShip


class CellState(Enum):
    """State of a single board cell."""

    EMPTY = "empty"
    SHIP = "ship"
    HIT = "hit"
    MISS = "miss"


ATTACKED_STATES = frozenset({CellState.HIT, CellState.MISS})


@dataclass
class Cell:
    """One grid position. The ship reference is shared with the board's fleet."""

    coordinate: Coordinate
    state: CellState = CellState.EMPTY
    ship: PlacedShip | None = field(default=None, repr=False)

    def has_ship(self) -> bool:
        return self.ship is not None

    def set_ship(self, ship: PlacedShip) -> None:
        """Mark the cell as occupied by ``ship``."""
        if self.is_already_attacked():
            raise ValueError(f"Cell {self.coordinate} has already been attacked.")
        self.ship = ship
        self.state = CellState.SHIP

    def is_already_attacked(self) -> bool:
        return self.state in ATTACKED_STATES

    def attack(self) -> bool:
        """Resolve a shot on this cell and return True on a hit.

        HIT and MISS are terminal, so attacking a cell twice is rejected.
        """
        if self.is_already_attacked():
            raise ValueError(f"Cell {self.coordinate} has already been attacked.")
        if self.ship is None:
            self.state = CellState.MISS
            return False
        self.state = CellState.HIT
        self.ship.register_hit()
        return True
