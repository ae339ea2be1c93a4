from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .board import Board
from .errors import InconsistentState, UnknownPlayer
from .players import Player
from .tiles import Coord


@dataclass(frozen=True)
class GameState:
    """The whole game at one point in time: the board (with spare) and every player."""
    board: Board
    players: Tuple[Player, ...]  # indexed by player id

    def player(self, player_id: int) -> Player:
        for p in self.players:
            if p.id == player_id:
                return p
        raise UnknownPlayer(player_id)

    def player_pos(self, player_id: int) -> Optional[Coord]:
        return self.player(player_id).position

    def with_board(self, board: Board) -> 'GameState':
        return replace(self, board=board)

    def with_player(self, player: Player) -> 'GameState':
        self.player(player.id)
        players = tuple(player if p.id == player.id else p for p in self.players)
        return replace(self, players=players)


def check_consistency(state: GameState) -> None:
    """Raises InconsistentState unless every player is recorded exactly where its position says."""
    recorded: Dict[int, List[Optional[Coord]]] = {}
    for coord, cell in zip(state.board.coords(), state.board.cells):
        for pid in cell.occupants:
            recorded.setdefault(pid, []).append(coord)
    for pid in state.board.spare.occupants:
        recorded.setdefault(pid, []).append(None)

    known = {p.id for p in state.players}
    for pid, places in recorded.items():
        if pid not in known:
            raise InconsistentState(pid, places[0], 'occupant is not a registered player')
    for p in state.players:
        places = recorded.get(p.id, [])
        if places != [p.position]:
            raise InconsistentState(p.id, p.position, f'occupant index records the player at {places}')
