from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Cell, coord_index
from .players import Player
from .state import GameState
from .tiles import Coord


@dataclass(frozen=True)
class CellView:
    coord: Optional[Coord]  # None for the spare
    connections: int
    treasure: Optional[int]
    occupants: Tuple[int, ...]  # sorted player ids


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of a game for whatever draws or stores it."""
    cells: Tuple[CellView, ...]  # row-major
    spare: CellView
    players: Tuple[Player, ...]

    def cell(self, coord: Coord) -> CellView:
        return self.cells[coord_index(coord)]


def _view(coord: Optional[Coord], cell: Cell) -> CellView:
    return CellView(
        coord=coord,
        connections=cell.tile.connections,
        treasure=cell.tile.treasure,
        occupants=tuple(sorted(cell.occupants)),
    )


def snapshot(state: GameState) -> BoardSnapshot:
    board = state.board
    cells = tuple(_view(coord, cell) for coord, cell in zip(board.coords(), board.cells))
    return BoardSnapshot(cells=cells, spare=_view(None, board.spare), players=state.players)
