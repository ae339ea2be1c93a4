from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Set

from . import board as board_mod
from .board import Board, Cell, in_bounds, lane_coords, layout
from .deck import deal_tiles
from .errors import IllegalMove, InconsistentState
from .players import attach, create_players, detach, place
from .state import GameState
from .tiles import Coord, Direction, is_open, opposite, step

logger = logging.getLogger(__name__)


def init_game(names: Sequence[str], seed: Optional[int] = None, rng: Optional[random.Random] = None) -> GameState:
    """Deals a new game: treasures to the players, tiles to the board, pawns to the corners."""
    if rng is None:
        rng = random.Random(seed)
    players = create_players(names, rng)
    board = place(layout(deal_tiles(rng=rng)), players)
    logger.debug("New game for %d players: %s", len(players), ", ".join(p.name for p in players))
    return GameState(board=board, players=players)


def insert_tile(state: GameState, lane: int) -> GameState:
    """
    Inserts the spare tile into a lane and keeps player positions in step with the
    occupant index: pawns on shifted tiles move with them, pawns on the evicted
    tile go to the spare, and pawns that rode the old spare land on the entry slot.
    """
    coords = lane_coords(lane)
    board = board_mod.insert_tile(state.board, lane)
    moved: Dict[int, Optional[Coord]] = {}
    for coord in coords:
        for pid in board.occupants_at(coord):
            moved[pid] = coord
    for pid in board.spare.occupants:
        moved[pid] = None
    players = tuple(p.with_position(moved[p.id]) if p.id in moved else p for p in state.players)
    logger.debug("Inserted spare into lane %d; new spare %s", lane, board.spare.tile)
    return GameState(board=board, players=players)


def rotate_spare(state: GameState, turns: int = 1) -> GameState:
    """Turns the spare tile clockwise by quarter turns before it is inserted."""
    spare = state.board.spare
    return state.with_board(state.board.with_spare(Cell(spare.tile.rotated(turns), spare.occupants)))


def _blocked_reason(board: Board, source: Coord, direction: Direction, strict: bool) -> Optional[str]:
    dest = step(source, direction)
    if not in_bounds(dest):
        return 'off the board'
    if not is_open(board.at(source).connections, direction):
        return 'tile is closed on that side'
    if strict and not is_open(board.at(dest).connections, opposite(direction)):
        return 'destination tile is closed on the entering side'
    return None


def _current_position(state: GameState, player_id: int) -> Optional[Coord]:
    """Returns the player's position after checking the occupant index agrees with it."""
    position = state.player(player_id).position
    cell = state.board.spare if position is None else state.board.cell(position)
    if player_id not in cell.occupants:
        raise InconsistentState(player_id, position, 'player is not an occupant of its own position')
    return position


def move_player(state: GameState, player_id: int, direction: Direction, strict: bool = False) -> GameState:
    """
    Moves a player one cell. By default only the source tile has to be open in the
    direction of travel; strict=True also requires the destination to be open on
    the side the pawn enters from. Collects the destination treasure if the player
    is hunting it.
    """
    try:
        direction = Direction(direction)
    except ValueError:
        raise IllegalMove(player_id, state.player_pos(player_id), direction, 'unknown direction') from None
    source = _current_position(state, player_id)
    if source is None:
        raise IllegalMove(player_id, None, direction, 'player is riding the spare tile')
    reason = _blocked_reason(state.board, source, direction, strict)
    if reason is not None:
        logger.debug("Rejected move of player %d %s from %s: %s", player_id, direction.name, source, reason)
        raise IllegalMove(player_id, source, direction, reason)

    dest = step(source, direction)
    board = attach(detach(state.board, player_id, source), player_id, dest)
    player = state.player(player_id)
    moved = player.with_position(dest).collect(board.at(dest).treasure)
    if moved.found != player.found:
        logger.debug("Player %d collected treasure %d at %s", player_id, moved.found[-1], dest)
    return state.with_board(board).with_player(moved)


def legal_directions(state: GameState, player_id: int, strict: bool = False) -> List[Direction]:
    """Lists the directions the player may step in right now."""
    source = _current_position(state, player_id)
    if source is None:
        return []
    return [d for d in Direction if _blocked_reason(state.board, source, d, strict) is None]


def reachable(state: GameState, player_id: int) -> Set[Coord]:
    """
    Finds every cell joined to the player by a maze path on the current board,
    including the cell it stands on. Each step needs both tiles open toward
    each other.
    """
    start = _current_position(state, player_id)
    if start is None:
        return set()
    seen: Set[Coord] = {start}
    queue: Deque[Coord] = deque([start])
    while queue:
        current = queue.popleft()
        for d in Direction:
            if _blocked_reason(state.board, current, d, True) is not None:
                continue
            nxt = step(current, d)
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen
