"""Position code tests — encode/decode bijection on small and reference puzzles."""

from __future__ import annotations

import random
from collections import deque

import pytest

from woodpuzzle.engine.positioncode import Illegality, classify, decode, encode
from woodpuzzle.models import REFERENCE_PUZZLE, Board, PuzzleSpec


# -- helpers ------------------------------------------------------------------


def _reachable(puzzle: PuzzleSpec) -> list[Board]:
    """Breadth-first enumeration of every board reachable from the start."""
    start = puzzle.start_board()
    seen = {start.key()}
    queue = deque([start])
    boards: list[Board] = []
    while queue:
        board = queue.popleft()
        boards.append(board)
        for i, dx, dy, _ in board.successors():
            nxt = board.copy()
            nxt.try_move(i, dx, dy)
            if nxt.key() not in seen:
                seen.add(nxt.key())
                queue.append(nxt)
    return boards


def _assert_round_trip(board: Board, puzzle: PuzzleSpec) -> None:
    code = encode(board)
    assert 0 <= code < puzzle.code_space
    result = decode(code, puzzle)
    assert result.is_legal, f"{code:#x}: {result.reason}"
    assert result.board.key() == board.key()
    assert result.board.checksum == puzzle.checksum


# -- reference puzzle ---------------------------------------------------------


def test_start_round_trip() -> None:
    board = REFERENCE_PUZZLE.start_board()
    result = decode(board.encode(), REFERENCE_PUZZLE)
    assert result.is_legal
    assert result.board.key() == {p.key() for p in board.pieces}
    assert not result.final


def test_decoded_pieces_are_in_reverse_raster_order() -> None:
    board = decode(REFERENCE_PUZZLE.start_board().encode(), REFERENCE_PUZZLE).board
    anchors = [(p.y, p.x) for p in board.pieces]
    assert anchors == sorted(anchors, reverse=True)


def test_code_zero_is_illegal() -> None:
    result = decode(0, REFERENCE_PUZZLE)
    assert not result.is_legal
    assert result.board is None
    assert result.reason is Illegality.PIECE_COUNT


@pytest.mark.parametrize("code", [-1, REFERENCE_PUZZLE.code_space])
def test_out_of_range_code(code: int) -> None:
    assert decode(code, REFERENCE_PUZZLE).reason is Illegality.OUT_OF_RANGE


@pytest.mark.parametrize("seed", range(3))
def test_random_walk_round_trip(seed: int) -> None:
    rng = random.Random(seed)
    board = REFERENCE_PUZZLE.start_board()
    for _ in range(300):
        _assert_round_trip(board, REFERENCE_PUZZLE)
        options = [(i, dx, dy) for i, dx, dy, _ in board.successors()]
        board.try_move(*rng.choice(options))


def test_move_returns_code_of_new_board() -> None:
    board = REFERENCE_PUZZLE.start_board()
    code = board.try_move(1, -1, 0)
    assert code == encode(board)
    assert code != encode(REFERENCE_PUZZLE.start_board())


def test_empty_cells_first_round_trip() -> None:
    # Both gaps before the first anchor: the empty digits are all zero.
    board = Board(width=4, height=5, capacity=10)
    board.add(0, 1, 2, 2)
    board.add(2, 1, 2, 1)
    board.add(2, 0)
    board.add(3, 0)
    board.add(2, 2, 1, 2)
    board.add(3, 2, 1, 2)
    board.add(0, 3, 1, 2)
    board.add(1, 3, 1, 2)
    board.add(2, 4)
    board.add(3, 4)
    assert board.is_legal()
    assert board.encode() % REFERENCE_PUZZLE.radix**2 == 0
    _assert_round_trip(board, REFERENCE_PUZZLE)


def test_final_flag_on_goal_placement() -> None:
    board = Board(width=4, height=5, capacity=10)
    board.add(1, 3, 2, 2)
    board.add(1, 2, 2, 1)
    board.add(0, 0, 1, 2)
    board.add(3, 0, 1, 2)
    board.add(0, 3, 1, 2)
    board.add(3, 3, 1, 2)
    board.add(1, 0)
    board.add(2, 0)
    board.add(1, 1)
    board.add(2, 1)
    assert classify(board.encode(), REFERENCE_PUZZLE) == (True, True)


# -- tiny puzzle: exhaustive --------------------------------------------------


def test_tiny_code_space(tiny: PuzzleSpec) -> None:
    assert tiny.code_space == 4**2 * 4**2
    assert tiny.checksum == 1


def test_tiny_every_legal_code_round_trips(tiny: PuzzleSpec) -> None:
    legal = final = 0
    for code in range(tiny.code_space):
        result = decode(code, tiny)
        if not result.is_legal:
            assert result.board is None
            continue
        legal += 1
        final += result.final
        assert encode(result.board) == code
        assert result.board.is_legal()
    # 4 placements of the 2×1 piece, 6 ways to put two 1×1 pieces in the rest.
    assert legal == 24
    assert final == 6


def test_tiny_reachable_boards_round_trip(tiny: PuzzleSpec) -> None:
    boards = _reachable(tiny)
    assert len(boards) > 1
    codes = set()
    for board in boards:
        _assert_round_trip(board, tiny)
        codes.add(encode(board))
    assert len(codes) == len(boards)


def test_stuck_code_space(stuck: PuzzleSpec) -> None:
    legal = [c for c in range(stuck.code_space) if decode(c, stuck).is_legal]
    assert len(legal) == 4
    assert len(_reachable(stuck)) == 2
