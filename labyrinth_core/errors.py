from __future__ import annotations

from typing import Optional

from .tiles import Coord


class LabyrinthError(Exception):
    """Base class for every error raised by the engine."""


class InvalidDeckSize(LabyrinthError, ValueError):
    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"expected at least 34 tiles, got {size}")


class InvalidLane(LabyrinthError, ValueError):
    def __init__(self, lane: object) -> None:
        self.lane = lane
        super().__init__(f"lane must be an integer in 0..11, got {lane!r}")


class InvalidPlayerCount(LabyrinthError, ValueError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"a game needs 2 to 24 players, got {count}")


class DuplicatePlayerName(LabyrinthError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"player name {name!r} is used more than once")


class IllegalMove(LabyrinthError, ValueError):
    """A move the rules do not allow. The state is left untouched."""

    def __init__(self, player_id: int, coord: Optional[Coord], direction: object, reason: str) -> None:
        self.player_id = player_id
        self.coord = coord
        self.direction = direction
        self.reason = reason
        super().__init__(f"player {player_id} cannot move {getattr(direction, 'name', direction)} from {coord}: {reason}")


class UnknownPlayer(LabyrinthError, KeyError):
    def __init__(self, player_id: int) -> None:
        self.player_id = player_id
        super().__init__(player_id)

    def __str__(self) -> str:
        return f"no player with id {self.player_id}"


class InconsistentState(LabyrinthError, RuntimeError):
    """Occupant index and player positions disagree: a bug, not a rule violation."""

    def __init__(self, player_id: int, coord: Optional[Coord], detail: str) -> None:
        self.player_id = player_id
        self.coord = coord
        self.detail = detail
        super().__init__(f"player {player_id} at {coord}: {detail}")


class PlayerNotPresent(LabyrinthError, RuntimeError):
    def __init__(self, player_id: int, coord: Optional[Coord]) -> None:
        self.player_id = player_id
        self.coord = coord
        where = "the spare tile" if coord is None else f"cell {coord}"
        super().__init__(f"player {player_id} is not an occupant of {where}")
