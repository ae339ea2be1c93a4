from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .tiles import Tile, mask_from_name

STRAIGHT_COUNT = 13
T_COUNT = 6
CORNER_COUNT = 15
DECK_SIZE = STRAIGHT_COUNT + T_COUNT + CORNER_COUNT  # 34: 33 on the board plus the spare
MOVABLE_TREASURES = 8  # ids 0..7; ids 8..23 sit on the fixed tiles

STRAIGHT_ORIENTATIONS = ('NS', 'EW')
T_ORIENTATIONS = ('NES', 'ESW', 'NSW', 'NEW')
CORNER_ORIENTATIONS = ('NE', 'ES', 'SW', 'NW')


def _random_tiles(rng: random.Random, orientations: Sequence[str], count: int) -> List[Tile]:
    return [Tile(mask_from_name(rng.choice(orientations))) for _ in range(count)]


def generate_tiles(rng: random.Random) -> List[Tile]:
    """Builds the 34 movable tiles, each in a random orientation, without treasures."""
    return (
        _random_tiles(rng, STRAIGHT_ORIENTATIONS, STRAIGHT_COUNT)
        + _random_tiles(rng, T_ORIENTATIONS, T_COUNT)
        + _random_tiles(rng, CORNER_ORIENTATIONS, CORNER_COUNT)
    )


def shuffle_and_assign_treasures(tiles: Sequence[Tile], rng: random.Random) -> List[Tile]:
    """
    Shuffles the tiles, puts treasures 0..7 on the first eight, then shuffles again.
    The second shuffle keeps the treasure carriers from clustering at the start of
    the deal order.
    """
    deck = list(tiles)
    rng.shuffle(deck)
    deck = [
        tile.with_treasure(index if index < MOVABLE_TREASURES else None)
        for index, tile in enumerate(deck)
    ]
    rng.shuffle(deck)
    return deck


def deal_tiles(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Tile]:
    """Creates a shuffled 34-tile deck. Pass a seed (or an rng) for a reproducible deal."""
    if rng is None:
        rng = random.Random(seed)
    return shuffle_and_assign_treasures(generate_tiles(rng), rng)
