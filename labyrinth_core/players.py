from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .board import Board
from .errors import DuplicatePlayerName, InvalidPlayerCount, PlayerNotPresent
from .tiles import Coord

MIN_PLAYERS = 2
MAX_PLAYERS = 24
TREASURE_COUNT = 24

STARTING_CORNERS: Tuple[Coord, ...] = ((0, 0), (6, 0), (6, 6), (0, 6))

PAWNS: Tuple[str, ...] = (
    '🔴', '🔵', '🟢', '🟡', '🟣', '🟠', '🟤', '⚫',
    '⚪', '🟥', '🟦', '🟩', '🟨', '🟪', '🟧', '🟫',
    '⬛', '⬜', '🔶', '🔷', '🔺', '🔻', '💠', '🔘',
)


@dataclass(frozen=True)
class Player:
    """A pawn on the board and the treasures its owner is hunting."""
    id: int
    name: str
    pawn: str
    position: Optional[Coord]  # None while riding the spare tile
    remaining: Tuple[int, ...]
    found: Tuple[int, ...] = ()

    def with_position(self, position: Optional[Coord]) -> 'Player':
        return replace(self, position=position)

    def collect(self, treasure: Optional[int]) -> 'Player':
        """Moves a treasure from remaining to found if this player is after it."""
        if treasure is None or treasure not in self.remaining:
            return self
        remaining = tuple(t for t in self.remaining if t != treasure)
        return replace(self, remaining=remaining, found=self.found + (treasure,))

    def has_found_all(self) -> bool:
        return not self.remaining


def starting_corner(player_id: int) -> Coord:
    return STARTING_CORNERS[player_id % len(STARTING_CORNERS)]


def create_players(names: Sequence[str], rng: random.Random) -> Tuple[Player, ...]:
    """
    Creates one player per name. Each player is dealt 24 // len(names) treasures
    from a shuffled list of all 24; any remainder is left undealt.
    """
    count = len(names)
    if not MIN_PLAYERS <= count <= MAX_PLAYERS:
        raise InvalidPlayerCount(count)
    seen = set()
    for name in names:
        if name in seen:
            raise DuplicatePlayerName(name)
        seen.add(name)

    treasures: List[int] = list(range(TREASURE_COUNT))
    rng.shuffle(treasures)
    share = TREASURE_COUNT // count
    return tuple(
        Player(
            id=i,
            name=name,
            pawn=PAWNS[i],
            position=starting_corner(i),
            remaining=tuple(treasures[i * share:(i + 1) * share]),
        )
        for i, name in enumerate(names)
    )


def attach(board: Board, player_id: int, coord: Optional[Coord]) -> Board:
    """Records a player as an occupant of a cell, or of the spare tile when coord is None."""
    if coord is None:
        return board.with_spare(board.spare.with_occupant(player_id))
    return board.with_cell(coord, board.cell(coord).with_occupant(player_id))


def detach(board: Board, player_id: int, coord: Optional[Coord]) -> Board:
    """Removes a player from a cell's occupants. The player must be recorded there."""
    cell = board.spare if coord is None else board.cell(coord)
    if player_id not in cell.occupants:
        raise PlayerNotPresent(player_id, coord)
    if coord is None:
        return board.with_spare(cell.without_occupant(player_id))
    return board.with_cell(coord, cell.without_occupant(player_id))


def place(board: Board, players: Iterable[Player]) -> Board:
    """Seeds the occupant index from each player's position."""
    for player in players:
        board = attach(board, player.id, player.position)
    return board
