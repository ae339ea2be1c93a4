from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from .engine import init_game, insert_tile, move_player, rotate_spare
from .errors import LabyrinthError
from .snapshot import BoardSnapshot, CellView, snapshot
from .tiles import Direction, shape_name

DEFAULT_PLAYERS = ['Pete', 'Lucy', 'Sally', 'John']


def _env_flag(name: str) -> bool:
    return os.getenv(name, '0').lower() in ('1', 'true', 'yes', 'on')


def _env_seed(parser: argparse.ArgumentParser) -> Optional[int]:
    raw = os.getenv('LABYRINTH_SEED')
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        parser.error(f'LABYRINTH_SEED must be an integer, got {raw!r}')


def cell_to_json(view: CellView) -> Dict[str, Any]:
    return {
        "coord": None if view.coord is None else [int(view.coord[0]), int(view.coord[1])],
        "connections": int(view.connections),
        "shape": shape_name(view.connections),
        "treasure": view.treasure,
        "occupants": list(view.occupants),
    }


def snapshot_to_json(snap: BoardSnapshot) -> Dict[str, Any]:
    return {
        "cells": [cell_to_json(c) for c in snap.cells],
        "spare": cell_to_json(snap.spare),
        "players": [
            {
                "id": p.id,
                "name": p.name,
                "pawn": p.pawn,
                "position": None if p.position is None else [int(p.position[0]), int(p.position[1])],
                "remaining": list(p.remaining),
                "found": list(p.found),
            }
            for p in snap.players
        ],
    }


def parse_move(text: str) -> Tuple[int, Direction]:
    """Parses 'PLAYER:DIR', e.g. '0:E' or '2:north'."""
    try:
        pid_s, dir_s = text.split(':')
        return int(pid_s), Direction.parse(dir_s)
    except ValueError:
        raise argparse.ArgumentTypeError(f'expected PLAYER:DIRECTION, got {text!r}') from None


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Deal a Labyrinth board, play some actions and print the board as JSON')
    parser.add_argument('--players', nargs='+', default=DEFAULT_PLAYERS, help='Player names (2 to 24)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal (default: $LABYRINTH_SEED)')
    parser.add_argument('--rotate', type=int, default=0, help='Quarter turns to rotate the spare before inserting')
    parser.add_argument('--insert', type=int, action='append', dest='inserts', metavar='LANE', help='Insert the spare into lane 0..11 (repeatable)')
    parser.add_argument('--move', type=parse_move, action='append', dest='moves', metavar='PLAYER:DIR', help='Step a player one cell (repeatable)')
    parser.add_argument('--strict', action='store_true', help='Require both tiles to be open when stepping')
    parser.add_argument('--verbose', action='store_true', help='Log engine activity to stderr')
    args = parser.parse_args(argv)
    if args.seed is None:
        args.seed = _env_seed(parser)

    verbose = args.verbose or _env_flag('LABYRINTH_DEBUG')
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format='%(levelname)s %(name)s: %(message)s')

    try:
        state = init_game(args.players, seed=args.seed)
        if args.rotate:
            state = rotate_spare(state, args.rotate)
        for lane in args.inserts or []:
            state = insert_tile(state, lane)
        for pid, direction in args.moves or []:
            state = move_player(state, pid, direction, strict=args.strict)
    except LabyrinthError as e:
        print(f'error: {e}', file=sys.stderr)
        return 2

    print(json.dumps(snapshot_to_json(snapshot(state)), ensure_ascii=False, indent=2))
    return 0
