"""Command-line driver for playing SeaBattle against the computer."""

from __future__ import annotations

import argparse
import logging
import time
from typing import Callable, Sequence

from seabattle.engine.board import AttackResult, Board, BoardView
from seabattle.engine.cell import CellState
from seabattle.engine.errors import SeaBattleError
from seabattle.engine.game import Game, GameStatus
from seabattle.engine.instrumented_game import InstrumentedGame
from seabattle.engine.placement import is_valid_attack
from seabattle.engine.ship import FLEET, Coordinate, Orientation, ShipType
from seabattle.telemetry import configure_console_logging, init_telemetry, load_telemetry_config

logger = logging.getLogger(__name__)

ROW_LABELS = "ABCDEFGHIJ"
CLEAR_SCREEN = "\033[H\033[2J"

SYMBOLS = {
    CellState.EMPTY: "~",
    CellState.MISS: "O",
    CellState.HIT: "X",
    CellState.SHIP: "S",
}

LEGEND = """Symbols:
  ~ = Water not attacked
  O = Attacked water (miss)
  X = Impact on a ship
  S = Your ship (only visible on your board)"""

InputFn = Callable[[str], str]


def parse_coordinate(text: str, size: int = 10) -> Coordinate:
    """Parse a row letter plus column such as ``A5``, or ``column row`` such as ``5 1``.

    Both forms are one-based, matching the labels printed by ``format_board``.
    """
    cleaned = text.strip().upper()
    if not cleaned:
        raise ValueError("Empty coordinate.")
    if cleaned[0].isalpha():
        if cleaned[0] not in ROW_LABELS[:size]:
            raise ValueError(f"Row must be between A and {ROW_LABELS[size - 1]}.")
        y = ROW_LABELS.index(cleaned[0])
        try:
            x = int(cleaned[1:]) - 1
        except ValueError as exc:
            raise ValueError(f"Column must be a number between 1 and {size}.") from exc
    else:
        parts = cleaned.split()
        if len(parts) != 2:
            raise ValueError("Use formats like A5 or '5 1'.")
        try:
            column, row = map(int, parts)
        except ValueError as exc:
            raise ValueError("Enter two numbers separated by a space.") from exc
        x, y = column - 1, row - 1
    coord = Coordinate(x, y)
    if not coord.is_valid(size):
        raise ValueError(f"Coordinates must be within the {size}x{size} board.")
    return coord


def parse_orientation(text: str) -> Orientation:
    raw = text.strip().upper()
    if raw in {"H", "HOR", "HORIZONTAL"}:
        return Orientation.HORIZONTAL
    if raw in {"V", "VER", "VERTICAL"}:
        return Orientation.VERTICAL
    raise ValueError("Please enter H for horizontal or V for vertical.")


def format_label(coord: Coordinate) -> str:
    """Return the one-based label a player would type for ``coord``, e.g. ``A5``."""
    return f"{ROW_LABELS[coord.y]}{coord.x + 1}"


def format_board(view: BoardView) -> str:
    header = "   " + " ".join(f"{x + 1:>2}" for x in range(view.size))
    rows = [header]
    for y, row in enumerate(view.rows):
        symbols = " ".join(f"{SYMBOLS[state]:>2}" for state in row)
        rows.append(f"{ROW_LABELS[y]} |{symbols}")
    return "\n".join(rows)


def format_stats(board: Board) -> str:
    stats = board.fleet_stats()
    return f"Ships: {stats.total} total, {stats.remaining} remaining, {stats.sunk} sunk"


def clear_screen() -> None:
    print(CLEAR_SCREEN, end="", flush=True)


def _prompt_coordinate(prompt: str, read: InputFn) -> Coordinate:
    while True:
        raw = read(f"{prompt} (e.g. A5 or '5 1'), 'q' to quit: ").strip()
        if raw.lower() == "q":
            raise SystemExit("Goodbye!")
        try:
            return parse_coordinate(raw)
        except ValueError as exc:
            print(f"Invalid input: {exc}")


def _prompt_orientation(ship_type: ShipType, read: InputFn) -> Orientation:
    while True:
        raw = read(
            f"Place your {ship_type.display_name} (length {ship_type.length}). Orientation [H/V]: "
        )
        try:
            return parse_orientation(raw)
        except ValueError as exc:
            print(exc)


def _prompt_yes_no(prompt: str, read: InputFn) -> bool:
    while True:
        raw = read(f"{prompt} [Y/n]: ").strip().lower()
        if raw in {"", "y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        print("Please answer with 'y' or 'n'.")


def manual_ship_placement(game: Game, read: InputFn = input) -> None:
    for ship_type in FLEET:
        while True:
            print("\nCurrent layout:")
            print(format_board(game.player_board.view()))
            orientation = _prompt_orientation(ship_type, read)
            start = _prompt_coordinate("Starting coordinate", read)
            if game.place_player_ship(ship_type, start, orientation):
                print(f"{ship_type.display_name} placed.")
                break
            print("Ship cannot be placed there (off the board or overlapping). Try again.")


def describe_computer_shot(game: Game, coord: Coordinate) -> str:
    cell = game.player_board.get_cell(coord)
    label = format_label(coord)
    if cell.state is not CellState.HIT or cell.ship is None:
        return f"The computer attacked {label} and missed."
    if cell.ship.is_sunk():
        return f"The computer attacked {label} and sank your {cell.ship.ship_type.display_name}!"
    return f"The computer attacked {label} and hit one of your ships!"


def player_turn(game: Game, read: InputFn = input) -> AttackResult:
    print("\nEnemy waters:")
    print(format_board(game.computer_board.view(hide_ships=True)))
    print(format_stats(game.computer_board))
    print("\nYour board:")
    print(format_board(game.player_board.view()))
    while True:
        coord = _prompt_coordinate("Target", read)
        if is_valid_attack(game.computer_board, coord):
            break
        print("That cell has already been targeted. Choose another.")
    result = game.process_player_attack(coord)
    print(f"\n>>> {result.message} <<<")
    return result


def play_game(
    seed: int | None = None,
    auto_place: bool | None = None,
    delay: float = 1.0,
    read: InputFn = input,
) -> Game:
    clear_screen()
    print("Welcome to SeaBattle!\n")
    print("Fleet: " + ", ".join(f"{t.display_name} ({t.length})" for t in FLEET))
    print(LEGEND)

    game = InstrumentedGame(rng_seed=seed)
    if auto_place is None:
        auto_place = not _prompt_yes_no("Would you like to place your ships manually?", read)
    if auto_place:
        game.place_player_ships_randomly()
        print("\nYour ships have been positioned automatically.")
    else:
        manual_ship_placement(game, read)

    game.place_computer_ships_randomly()
    game.start_game()
    print("\nThe game has started!")

    while not game.is_game_over():
        try:
            if game.status is GameStatus.PLAYER_TURN:
                player_turn(game, read)
            elif game.status is GameStatus.COMPUTER_TURN:
                print("\nThe computer is attacking...")
                if delay > 0:
                    time.sleep(delay)
                coord = game.process_computer_attack()
                print(describe_computer_shot(game, coord))
                print(format_stats(game.player_board))
        except SeaBattleError as exc:
            logger.warning("turn_failed", extra={"error": str(exc)})
            print(f"Error: {exc}")

    print("\nFinal enemy board:")
    print(format_board(game.computer_board.view()))
    print("\nYour final board:")
    print(format_board(game.player_board.view()))
    banner = "=" * 40
    print(f"\n{banner}\n       END OF THE GAME\n{banner}\n{game.get_winner()}\n{banner}")
    return game


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Play SeaBattle via the CLI.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--auto-place",
        action="store_true",
        default=None,
        help="Place your fleet at random instead of being asked.",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=1.0,
        help="Seconds to pause before the computer fires.",
    )
    args = parser.parse_args(argv)

    config = load_telemetry_config()
    configure_console_logging(config.log_level)
    init_telemetry(config)
    play_game(seed=args.seed, auto_place=args.auto_place, delay=args.delay)


if __name__ == "__main__":
    main()
