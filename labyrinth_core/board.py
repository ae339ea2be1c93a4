from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from .deck import DECK_SIZE
from .errors import InvalidDeckSize, InvalidLane
from .tiles import Coord, Direction, Tile, mask_from_name

SIZE = 7
SPARE = 'spare'  # Board.find() result for a player riding the spare tile


@dataclass(frozen=True)
class Cell:
    """A tile together with the ids of the players standing on it."""
    tile: Tile
    occupants: FrozenSet[int] = frozenset()

    def with_occupant(self, player_id: int) -> 'Cell':
        return Cell(self.tile, self.occupants | {player_id})

    def without_occupant(self, player_id: int) -> 'Cell':
        return Cell(self.tile, self.occupants - {player_id})


# The 16 tiles that never move: (x, y) -> (open sides, treasure id).
FIXED_LAYOUT: Dict[Coord, Tuple[str, int]] = {
    (0, 0): ('ES', 8),
    (2, 0): ('ESW', 9),
    (4, 0): ('ESW', 10),
    (6, 0): ('SW', 11),
    (0, 2): ('NES', 12),
    (2, 2): ('NES', 13),
    (4, 2): ('ESW', 14),
    (6, 2): ('NSW', 15),
    (0, 4): ('NES', 16),
    (2, 4): ('NEW', 17),
    (4, 4): ('NSW', 18),
    (6, 4): ('NSW', 19),
    (0, 6): ('NE', 20),
    (2, 6): ('NEW', 21),
    (4, 6): ('NEW', 22),
    (6, 6): ('NW', 23),
}


def in_bounds(coord: Coord) -> bool:
    x, y = coord
    return 0 <= x < SIZE and 0 <= y < SIZE


def coord_index(coord: Coord) -> int:
    """Calculates the flat row-major index of a coordinate, rejecting anything off the board."""
    if not in_bounds(coord):
        raise IndexError(f'Coordinate off the board: {coord}')
    x, y = coord
    return y * SIZE + x


def is_fixed(coord: Coord) -> bool:
    x, y = coord
    return in_bounds(coord) and x % 2 == 0 and y % 2 == 0


MOVABLE_COORDS: Tuple[Coord, ...] = tuple(
    (x, y) for y in range(SIZE) for x in range(SIZE) if not is_fixed((x, y))
)


@dataclass(frozen=True)
class Board:
    """The 7x7 grid of cells plus the spare cell held off the board."""
    cells: Tuple[Cell, ...]  # row-major, length == SIZE * SIZE
    spare: Cell

    def __post_init__(self) -> None:
        if len(self.cells) != SIZE * SIZE:
            raise ValueError(f'A board has {SIZE * SIZE} cells, got {len(self.cells)}')

    def index(self, x: int, y: int) -> int:
        return coord_index((x, y))

    def cell(self, coord: Coord) -> Cell:
        return self.cells[coord_index(coord)]

    def at(self, coord: Coord) -> Tile:
        """Gets the tile at a coordinate."""
        return self.cell(coord).tile

    def occupants_at(self, coord: Coord) -> FrozenSet[int]:
        return self.cell(coord).occupants

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates in row-major order."""
        for y in range(SIZE):
            for x in range(SIZE):
                yield (x, y)

    def with_cell(self, coord: Coord, cell: Cell) -> 'Board':
        cells = list(self.cells)
        cells[coord_index(coord)] = cell
        return replace(self, cells=tuple(cells))

    def with_spare(self, spare: Cell) -> 'Board':
        return replace(self, spare=spare)

    def find(self, player_id: int) -> Optional[Union[Coord, str]]:
        """Where the occupant index records a player: a coordinate, SPARE, or None."""
        if player_id in self.spare.occupants:
            return SPARE
        for coord, cell in zip(self.coords(), self.cells):
            if player_id in cell.occupants:
                return coord
        return None


def layout(dealt_tiles: Sequence[Tile]) -> Board:
    """
    Lays out a fresh board: the fixed tiles go to their even/even coordinates, the
    first 33 dealt tiles fill the remaining coordinates in row-major order and the
    34th becomes the spare.
    """
    if len(dealt_tiles) < DECK_SIZE:
        raise InvalidDeckSize(len(dealt_tiles))
    placed: Dict[Coord, Tile] = {
        coord: Tile(mask_from_name(name), treasure) for coord, (name, treasure) in FIXED_LAYOUT.items()
    }
    for coord, tile in zip(MOVABLE_COORDS, dealt_tiles):
        placed[coord] = tile
    cells = tuple(Cell(placed[(x, y)]) for y in range(SIZE) for x in range(SIZE))
    return Board(cells=cells, spare=Cell(dealt_tiles[len(MOVABLE_COORDS)]))


@dataclass(frozen=True)
class Lane:
    """A movable row or column and the direction tiles are pushed along it."""
    axis: str  # 'column' or 'row'
    line: int
    push: Direction


LANES: Tuple[Lane, ...] = (
    Lane('column', 1, Direction.SOUTH),
    Lane('column', 3, Direction.SOUTH),
    Lane('column', 5, Direction.SOUTH),
    Lane('row', 1, Direction.WEST),
    Lane('row', 3, Direction.WEST),
    Lane('row', 5, Direction.WEST),
    Lane('column', 5, Direction.NORTH),
    Lane('column', 3, Direction.NORTH),
    Lane('column', 1, Direction.NORTH),
    Lane('row', 5, Direction.EAST),
    Lane('row', 3, Direction.EAST),
    Lane('row', 1, Direction.EAST),
)


def get_lane(lane_index: int) -> Lane:
    # bool is an int subclass; True must not mean lane 1
    if isinstance(lane_index, bool) or not isinstance(lane_index, int):
        raise InvalidLane(lane_index)
    if not 0 <= lane_index < len(LANES):
        raise InvalidLane(lane_index)
    return LANES[lane_index]


def lane_coords(lane_index: int) -> List[Coord]:
    """Coordinates of a lane ordered from the entry slot to the far (evicted) end."""
    lane = get_lane(lane_index)
    forward = lane.push in (Direction.SOUTH, Direction.EAST)
    steps = range(SIZE) if forward else range(SIZE - 1, -1, -1)
    if lane.axis == 'column':
        return [(lane.line, y) for y in steps]
    return [(x, lane.line) for x in steps]


def insert_tile(board: Board, lane_index: int) -> Board:
    """
    Pushes the spare cell into a lane. Every cell in the lane moves one step toward
    the far end; the far-end cell, occupants included, becomes the new spare.
    Player positions are not touched here; the engine keeps them in step.
    """
    coords = lane_coords(lane_index)
    shifted = [board.cell(c) for c in coords]
    cells = list(board.cells)
    cells[coord_index(coords[0])] = board.spare
    for dest, cell in zip(coords[1:], shifted[:-1]):
        cells[coord_index(dest)] = cell
    return Board(cells=tuple(cells), spare=shifted[-1])
