from __future__ import annotations

# Facade module that re-exports the Labyrinth core functionality.
# Tests and callers import from here; single-responsibility modules live under labyrinth_core/*.

from labyrinth_core.tiles import (  # noqa: F401
    Coord,
    Direction,
    Shape,
    Tile,
    TILE_SHAPES,
    classify,
    shape_name,
    mask_from_name,
    is_open,
    open_directions,
    rotate_mask,
    opposite,
    step,
)
from labyrinth_core.deck import (  # noqa: F401
    DECK_SIZE,
    generate_tiles,
    shuffle_and_assign_treasures,
    deal_tiles,
)
from labyrinth_core.board import (  # noqa: F401
    SIZE,
    SPARE,
    FIXED_LAYOUT,
    MOVABLE_COORDS,
    LANES,
    Board,
    Cell,
    Lane,
    coord_index,
    in_bounds,
    is_fixed,
    layout,
    lane_coords,
    insert_tile as board_insert_tile,
)
from labyrinth_core.players import (  # noqa: F401
    PAWNS,
    STARTING_CORNERS,
    Player,
    attach,
    create_players,
    detach,
    place,
    starting_corner,
)
from labyrinth_core.state import GameState, check_consistency  # noqa: F401
from labyrinth_core.snapshot import BoardSnapshot, CellView, snapshot  # noqa: F401
from labyrinth_core.engine import (  # noqa: F401
    init_game,
    insert_tile,
    move_player,
    rotate_spare,
    legal_directions,
    reachable,
)
from labyrinth_core.errors import (  # noqa: F401
    LabyrinthError,
    InvalidDeckSize,
    InvalidLane,
    InvalidPlayerCount,
    DuplicatePlayerName,
    IllegalMove,
    UnknownPlayer,
    InconsistentState,
    PlayerNotPresent,
)


def main() -> None:
    # CLI driver delegated to labyrinth_core.cli
    from labyrinth_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
