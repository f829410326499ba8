"""Ship domain model for the SeaBattle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate; ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    def is_valid(self, board_size: int) -> bool:
        """Return True if the coordinate lies on a ``board_size`` square board."""
        return 0 <= self.x < board_size and 0 <= self.y < board_size

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ShipType(Enum):
    """The fixed fleet. Values are ``(length, display name)``."""

    CARRIER = (5, "Carrier")
    BATTLESHIP = (4, "Battleship")
    CRUISER = (3, "Cruiser")
    SUBMARINE = (3, "Submarine")
    DESTROYER = (2, "Destroyer")

    def __init__(self, length: int, display_name: str) -> None:
        self.length = length
        self.display_name = display_name


FLEET: tuple[ShipType, ...] = tuple(ShipType)


def footprint(start: Coordinate, orientation: Orientation, length: int) -> list[Coordinate]:
    """Return the ``length`` coordinates of a run starting at ``start``."""
    if orientation is Orientation.HORIZONTAL:
        return [Coordinate(start.x + offset, start.y) for offset in range(length)]
    return [Coordinate(start.x, start.y + offset) for offset in range(length)]


@dataclass(frozen=True)
class Ship:
    """A ship that has not been put on a board yet."""

    ship_type: ShipType

    @property
    def length(self) -> int:
        return self.ship_type.length

    def __str__(self) -> str:
        return f"{self.ship_type.display_name} ({self.length} cells)"


@dataclass(eq=False)
class PlacedShip:
    """A ship fixed to a board position. Only the hit counter changes."""

    ship_type: ShipType
    orientation: Orientation
    coordinates: tuple[Coordinate, ...]
    hit_count: int = field(default=0)

    @classmethod
    def at(cls, ship: Ship, start: Coordinate, orientation: Orientation) -> PlacedShip:
        """Build the placed form of ``ship`` anchored at ``start``."""
        return cls(
            ship_type=ship.ship_type,
            orientation=orientation,
            coordinates=tuple(footprint(start, orientation, ship.length)),
        )

    @property
    def length(self) -> int:
        return self.ship_type.length

    @property
    def start(self) -> Coordinate:
        return self.coordinates[0]

    def register_hit(self) -> None:
        """Record one more hit against the ship."""
        self.hit_count += 1

    def is_sunk(self) -> bool:
        """A ship is sunk once it has taken as many hits as it has cells."""
        return self.hit_count >= self.length

    def occupies(self, coord: Coordinate) -> bool:
        return coord in self.coordinates

    def __str__(self) -> str:
        return f"{self.ship_type.display_name} ({self.length} cells)"
