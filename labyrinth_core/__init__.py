"""
Labyrinth core Python package.

Board-state engine for the tile-sliding maze game: the tiles, the 7x7 board with
its spare tile, the players and the turn operations that change them.
Modules:
- tiles.py: Direction, Shape, Tile and the connection-mask helpers
- deck.py: generating and shuffling the 34 movable tiles
- board.py: Board, Cell, the fixed layout and tile insertion
- players.py: Player and the occupant bookkeeping
- state.py: GameState
- engine.py: init_game, insert_tile, move_player
- snapshot.py: read-only view for rendering or storage
"""
