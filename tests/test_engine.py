import random
import unittest

from game import (
    FIXED_LAYOUT,
    PAWNS,
    Board,
    Cell,
    Direction,
    GameState,
    Player,
    Tile,
    IllegalMove,
    InconsistentState,
    InvalidLane,
    InvalidPlayerCount,
    UnknownPlayer,
    check_consistency,
    init_game,
    insert_tile,
    legal_directions,
    mask_from_name,
    move_player,
    place,
    reachable,
    rotate_spare,
)


def make_state(positions, masks=None, treasures=None, remaining=None, default='NS', spare='EW', placed=True):
    """Builds a hand-made game: positions maps player id -> coord (or None for the spare)."""
    masks = masks or {}
    treasures = treasures or {}
    remaining = remaining or {}
    cells = []
    for y in range(7):
        for x in range(7):
            name = masks.get((x, y), default)
            cells.append(Cell(Tile(mask_from_name(name), treasures.get((x, y)))))
    board = Board(cells=tuple(cells), spare=Cell(Tile(mask_from_name(spare))))
    players = tuple(
        Player(id=pid, name=f"P{pid}", pawn=PAWNS[pid], position=pos, remaining=remaining.get(pid, ()))
        for pid, pos in sorted(positions.items())
    )
    if placed:
        board = place(board, players)
    return GameState(board=board, players=players)


class TestInitGame(unittest.TestCase):
    def test_given_names_when_init_then_players_on_corners_and_state_consistent(self):
        state = init_game(['Pete', 'Lucy', 'Sally', 'John', 'Ann'], seed=42)
        check_consistency(state)
        self.assertEqual([p.name for p in state.players], ['Pete', 'Lucy', 'Sally', 'John', 'Ann'])
        self.assertEqual(state.board.occupants_at((0, 0)), frozenset({0, 4}))
        self.assertEqual(state.board.occupants_at((6, 0)), frozenset({1}))
        self.assertEqual(state.board.occupants_at((6, 6)), frozenset({2}))
        self.assertEqual(state.board.occupants_at((0, 6)), frozenset({3}))
        self.assertEqual(state.board.spare.occupants, frozenset())
        self.assertTrue(all(len(p.remaining) == 4 for p in state.players))

    def test_given_same_seed_when_init_then_same_game(self):
        self.assertEqual(init_game(['a', 'b'], seed=5), init_game(['a', 'b'], rng=random.Random(5)))

    def test_given_one_name_when_init_then_invalid_player_count(self):
        with self.assertRaises(InvalidPlayerCount):
            init_game(['solo'], seed=1)


class TestMovePlayer(unittest.TestCase):
    def test_given_player_on_es_corner_when_moving_then_only_east_and_south_allowed(self):
        state = init_game(['Pete', 'Lucy'], seed=3)
        self.assertEqual(state.board.at((0, 0)).connections, 0b0110)
        for d in (Direction.NORTH, Direction.WEST):
            with self.assertRaises(IllegalMove) as ctx:
                move_player(state, 0, d)
            self.assertEqual(ctx.exception.player_id, 0)
            self.assertEqual(ctx.exception.coord, (0, 0))
            self.assertEqual(ctx.exception.direction, d)
        self.assertEqual(state.player(0).position, (0, 0))
        self.assertIn(0, state.board.occupants_at((0, 0)))

        moved = move_player(state, 0, Direction.EAST)
        self.assertEqual(moved.player(0).position, (1, 0))
        self.assertNotIn(0, moved.board.occupants_at((0, 0)))
        self.assertIn(0, moved.board.occupants_at((1, 0)))
        self.assertEqual(legal_directions(state, 0), [Direction.EAST, Direction.SOUTH])
        check_consistency(moved)
        # original state is untouched
        self.assertEqual(state.player(0).position, (0, 0))

    def test_given_edge_when_moving_off_board_then_illegal_even_if_tile_open(self):
        state = make_state({0: (3, 0), 1: (3, 6)})
        with self.assertRaises(IllegalMove) as ctx:
            move_player(state, 0, Direction.NORTH)
        self.assertIn('off the board', ctx.exception.reason)
        with self.assertRaises(IllegalMove):
            move_player(state, 1, Direction.SOUTH)

    def test_given_closed_source_when_moving_then_illegal(self):
        state = make_state({0: (3, 3)})
        with self.assertRaises(IllegalMove):
            move_player(state, 0, Direction.EAST)
        self.assertEqual(move_player(state, 0, Direction.NORTH).player(0).position, (3, 2))

    def test_given_closed_destination_when_moving_then_only_strict_mode_rejects(self):
        state = make_state({0: (1, 1)}, masks={(1, 1): 'EW', (2, 1): 'NS'})
        loose = move_player(state, 0, Direction.EAST)
        self.assertEqual(loose.player(0).position, (2, 1))
        with self.assertRaises(IllegalMove) as ctx:
            move_player(state, 0, Direction.EAST, strict=True)
        self.assertIn('entering side', ctx.exception.reason)
        self.assertEqual(legal_directions(state, 0, strict=True), [])

    def test_given_hunted_treasure_on_destination_when_moving_then_collected(self):
        state = make_state(
            {0: (2, 2), 1: (4, 2)},
            treasures={(2, 3): 5, (4, 3): 6},
            remaining={0: (5, 7), 1: (7,)},
        )
        state = move_player(state, 0, Direction.SOUTH)
        self.assertEqual(state.player(0).found, (5,))
        self.assertEqual(state.player(0).remaining, (7,))
        state = move_player(state, 1, Direction.SOUTH)
        self.assertEqual(state.player(1).found, ())
        self.assertEqual(state.player(1).remaining, (7,))

    def test_given_occupant_index_missing_player_when_moving_then_inconsistent_state(self):
        state = make_state({0: (3, 3)}, placed=False)
        with self.assertRaises(InconsistentState) as ctx:
            move_player(state, 0, Direction.NORTH)
        self.assertEqual(ctx.exception.player_id, 0)
        self.assertEqual(ctx.exception.coord, (3, 3))
        with self.assertRaises(InconsistentState):
            check_consistency(state)

    def test_given_unknown_player_when_moving_then_unknown_player(self):
        state = make_state({0: (3, 3)})
        with self.assertRaises(UnknownPlayer):
            move_player(state, 9, Direction.NORTH)

    def test_given_connected_column_when_searching_then_whole_column_reachable(self):
        state = make_state({0: (3, 3)})
        self.assertEqual(reachable(state, 0), {(3, y) for y in range(7)})

    def test_given_destination_closed_toward_player_when_searching_then_not_reachable(self):
        # (3,2) is open east-west only, so it blocks the column even though (3,3) opens north
        walled = make_state({0: (3, 3)}, masks={(3, 2): 'EW'})
        found = reachable(walled, 0)
        self.assertNotIn((3, 2), found)
        self.assertEqual(found, {(3, y) for y in range(3, 7)})
        # a single step is still allowed by the default move rule
        self.assertEqual(move_player(walled, 0, Direction.NORTH).player(0).position, (3, 2))

    def test_given_unknown_direction_when_moving_then_illegal_move_with_context(self):
        state = make_state({0: (3, 3)})
        for bad in (3, 0, 'N'):
            with self.assertRaises(IllegalMove) as ctx:
                move_player(state, 0, bad)
            self.assertEqual(ctx.exception.player_id, 0)
            self.assertEqual(ctx.exception.coord, (3, 3))
            self.assertEqual(ctx.exception.direction, bad)
            self.assertEqual(ctx.exception.reason, 'unknown direction')

    def test_given_spare_rider_missing_from_spare_when_moving_then_inconsistent_state(self):
        state = make_state({0: None}, placed=False)
        with self.assertRaises(InconsistentState) as ctx:
            move_player(state, 0, Direction.NORTH)
        self.assertEqual(ctx.exception.player_id, 0)
        self.assertIsNone(ctx.exception.coord)
        with self.assertRaises(InconsistentState):
            legal_directions(state, 0)

    def test_given_unregistered_occupant_when_checking_then_inconsistent_state(self):
        state = make_state({0: (3, 3)})
        check_consistency(state)
        stray = state.with_board(state.board.with_cell((5, 5), state.board.cell((5, 5)).with_occupant(7)))
        with self.assertRaises(InconsistentState) as ctx:
            check_consistency(stray)
        self.assertEqual(ctx.exception.player_id, 7)
        self.assertEqual(ctx.exception.coord, (5, 5))


class TestInsertTile(unittest.TestCase):
    def test_given_players_in_lane_when_inserting_then_positions_follow_tiles(self):
        state = make_state({0: (1, 6), 1: (1, 2), 2: (3, 3)})
        after = insert_tile(state, 0)  # column 1 pushed down
        self.assertIsNone(after.player(0).position)
        self.assertEqual(after.board.spare.occupants, frozenset({0}))
        self.assertEqual(after.player(1).position, (1, 3))
        self.assertEqual(after.player(2).position, (3, 3))
        self.assertTrue(all(0 not in c.occupants for c in after.board.cells))
        check_consistency(after)

        with self.assertRaises(IllegalMove) as ctx:
            move_player(after, 0, Direction.NORTH)
        self.assertIsNone(ctx.exception.coord)
        self.assertEqual(legal_directions(after, 0), [])
        self.assertEqual(reachable(after, 0), set())

        # the pushed-off pawn comes back with the next insertion
        again = insert_tile(after, 2)
        self.assertEqual(again.player(0).position, (5, 0))
        self.assertIn(0, again.board.occupants_at((5, 0)))
        check_consistency(again)

    def test_given_bad_lane_when_inserting_then_invalid_lane_and_state_unchanged(self):
        state = init_game(['a', 'b'], seed=8)
        before = state
        with self.assertRaises(InvalidLane):
            insert_tile(state, 12)
        self.assertEqual(state, before)

    def test_given_spare_when_rotating_then_connections_turn_and_occupants_stay(self):
        state = make_state({0: (1, 6)}, spare='NE')
        state = insert_tile(state, 0)
        spare_before = state.board.spare
        rotated = rotate_spare(state, 1)
        self.assertEqual(rotated.board.spare.tile.connections, (spare_before.tile.connections >> 1) | ((spare_before.tile.connections & 1) << 3))
        self.assertEqual(rotated.board.spare.occupants, frozenset({0}))
        self.assertEqual(rotate_spare(rotated, 3).board.spare, spare_before)


class TestRandomPlay(unittest.TestCase):
    def test_given_random_turns_then_occupant_index_always_matches_positions(self):
        rng = random.Random(2024)
        state = init_game([f"P{i}" for i in range(6)], rng=rng)
        fixed = {c: state.board.at(c) for c in FIXED_LAYOUT}
        for _ in range(300):
            state = insert_tile(state, rng.randrange(12))
            pid = rng.randrange(len(state.players))
            options = legal_directions(state, pid)
            if options:
                state = move_player(state, pid, rng.choice(options))
            check_consistency(state)
            for coord, tile in fixed.items():
                self.assertIs(state.board.at(coord), tile)
            for p in state.players:
                self.assertFalse(set(p.found) & set(p.remaining))


if __name__ == '__main__':
    unittest.main(verbosity=2)
