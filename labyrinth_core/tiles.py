from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple

Coord = Tuple[int, int]  # (x, y); x grows east, y grows south


class Direction(IntEnum):
    """A side of a tile, stored as its bit in the 4-bit connection mask (NESW)."""
    NORTH = 8
    EAST = 4
    SOUTH = 2
    WEST = 1

    @classmethod
    def parse(cls, text: str) -> 'Direction':
        """Accepts 'N', 'north', 'NORTH', ... and returns the matching direction."""
        key = text.strip().upper()
        for d in cls:
            if d.name == key or d.name[0] == key:
                return d
        raise ValueError(f'Unknown direction: {text!r}')


class Shape(Enum):
    STRAIGHT = 'straight'
    CORNER = 'corner'
    T = 'T'


# Every mask the game uses. Keep literal bit patterns in this table only.
TILE_SHAPES: Dict[int, Tuple[Shape, str]] = {
    0b1010: (Shape.STRAIGHT, 'NS'),
    0b0101: (Shape.STRAIGHT, 'EW'),
    0b1100: (Shape.CORNER, 'NE'),
    0b0110: (Shape.CORNER, 'ES'),
    0b0011: (Shape.CORNER, 'SW'),
    0b1001: (Shape.CORNER, 'NW'),
    0b1110: (Shape.T, 'NES'),
    0b0111: (Shape.T, 'ESW'),
    0b1011: (Shape.T, 'NSW'),
    0b1101: (Shape.T, 'NEW'),
}

_MASK_BY_NAME: Dict[str, int] = {name: mask for mask, (_, name) in TILE_SHAPES.items()}

_OFFSETS: Dict[Direction, Coord] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.EAST: Direction.WEST,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
}


@dataclass(frozen=True)
class Tile:
    """A maze tile: the open sides and, optionally, the treasure printed on it."""
    connections: int
    treasure: Optional[int] = None

    @property
    def shape(self) -> Shape:
        return classify(self.connections)

    def with_treasure(self, treasure: Optional[int]) -> 'Tile':
        return Tile(self.connections, treasure)

    def rotated(self, turns: int = 1) -> 'Tile':
        return Tile(rotate_mask(self.connections, turns), self.treasure)


def classify(mask: int) -> Shape:
    """Determines the shape class of a connection mask."""
    try:
        return TILE_SHAPES[mask][0]
    except KeyError:
        raise ValueError(f'Not a tile mask: {mask:#06b}') from None


def shape_name(mask: int) -> str:
    """Returns the open sides as letters, e.g. 0b0110 -> 'ES'."""
    classify(mask)
    return TILE_SHAPES[mask][1]


def mask_from_name(name: str) -> int:
    try:
        return _MASK_BY_NAME[name.upper()]
    except KeyError:
        raise ValueError(f'Unknown tile name: {name!r}') from None


def is_open(mask: int, direction: Direction) -> bool:
    return (mask & direction) == direction


def open_directions(mask: int) -> List[Direction]:
    return [d for d in Direction if is_open(mask, d)]


def rotate_mask(mask: int, turns: int = 1) -> int:
    """Rotates a connection mask clockwise by quarter turns (N->E->S->W->N)."""
    for _ in range(turns % 4):
        mask = (mask >> 1) | ((mask & 1) << 3)
    return mask


def opposite(direction: Direction) -> Direction:
    return _OPPOSITES[direction]


def step(coord: Coord, direction: Direction) -> Coord:
    """Offsets a coordinate by one cell. No bounds check, no wrap-around."""
    dx, dy = _OFFSETS[direction]
    return coord[0] + dx, coord[1] + dy
