from typing import List

import numpy as np
from hypothesis import given, settings, strategies as st

from connectn.config import GameConfig
from connectn.game.board import Board
from connectn.game.engine import GameEngine
from connectn.utils import Coordinate, GameResult, Player

configs = st.builds(
    lambda rows, cols, extra: GameConfig(rows=rows, cols=cols, connect_n=min(max(rows, cols), 2 + extra)),
    st.integers(min_value=1, max_value=9),
    st.integers(min_value=1, max_value=9),
    st.integers(min_value=0, max_value=4),
)

cells_6x6 = st.lists(st.sampled_from([0, 1, 2]), min_size=36, max_size=36)


@given(configs, st.data())
def test_index_coordinate_round_trip(config: GameConfig, data):
    board = Board(config)
    index = data.draw(st.integers(min_value=0, max_value=config.size - 1))
    coordinate = board.index_to_coordinate(index)
    assert board.is_in_range(coordinate)
    assert board.coordinate_to_index(coordinate) == index


@given(configs, st.integers(min_value=-50, max_value=50), st.integers(min_value=-50, max_value=50))
def test_out_of_range_coordinates_are_inert(config: GameConfig, x: int, y: int):
    board = Board(config)
    coordinate = Coordinate(x, y)
    if board.is_in_range(coordinate):
        assert board.get(coordinate) == Player.EMPTY
        return
    assert board.get(coordinate) == Player.OUT_OF_RANGE
    board.set(coordinate, Player.TWO)
    assert board.empty_locations() == list(range(config.size))


@given(cells_6x6, st.integers(min_value=0, max_value=35), st.sampled_from([Player.ONE, Player.TWO]))
def test_apply_move_only_fills_empty_cells(cells: List[int], location: int, player: Player):
    board = Board()
    board.load(cells)
    before = board.get(location)
    GameEngine(board).apply_move(player, location)
    assert board.get(location) == (player if before == Player.EMPTY else before)


@given(cells_6x6)
def test_occupied_cells_always_evaluate_to_minus_one(cells: List[int]):
    board = Board()
    board.load(cells)
    engine = GameEngine(board)
    for location in range(36):
        for player in (Player.ONE, Player.TWO):
            score = engine.evaluate_location(location, player)
            if board.get(location) == Player.EMPTY:
                assert score >= 0
            else:
                assert score == -1


@settings(max_examples=50)
@given(cells_6x6, st.integers(min_value=0, max_value=2**32 - 1))
def test_computer_move_is_an_empty_cell(cells: List[int], seed: int):
    board = Board()
    board.load(cells)
    engine = GameEngine(board, rng=np.random.default_rng(seed))
    move = engine.get_computer_move()
    if board.is_full():
        assert move == -1
    else:
        assert board.get(move) == Player.EMPTY


@given(cells_6x6, st.integers(min_value=0, max_value=35), st.sampled_from(list(Coordinate(dx, dy)
       for dx, dy in [(1, 0), (-1, 1), (0, 1), (1, 1)])), st.sampled_from([Player.ONE, Player.TWO]))
def test_any_straight_run_of_four_is_detected(cells: List[int], start: int, direction: Coordinate,
                                               player: Player):
    board = Board()
    board.load(cells)
    origin = board.index_to_coordinate(start)
    run = [origin.offset(direction.x, direction.y, i) for i in range(4)]
    if not all(board.is_in_range(c) for c in run):
        return
    for c in run:
        board.set(c, player)
    assert GameEngine(board).check_for_winner() in (GameResult.PLAYER_ONE_WIN, GameResult.PLAYER_TWO_WIN)


@given(cells_6x6)
def test_result_is_consistent_with_winning_line(cells: List[int]):
    board = Board()
    board.load(cells)
    engine = GameEngine(board)
    result = engine.check_for_winner()
    line = engine.winning_line()
    if line:
        assert result == GameResult.win_for(board.get(line[0]))
        assert len({board.get(i) for i in line}) == 1
    elif board.is_full():
        assert result == GameResult.DRAW
    else:
        assert result == GameResult.IN_PROGRESS
