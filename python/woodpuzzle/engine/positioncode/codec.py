"""Dense position codes for board configurations.

A code packs two numbers:

* the shape codes of the pieces, two bits each, in raster order of their
  anchor (top-left) cells. The last shape is left out because the sum of
  all shape codes is fixed for an instance.
* the positions of the empty cells, one base ``P+1`` digit per empty cell:
  the number of anchors scanned before it.

``code = (shape_bits >> 2) * (P+1)^E + empties`` with ``P`` pieces and
``E`` empty cells. Raster order is rows ``y = 0..H-1``, columns
``x = 0..W-1``. Not every integer below the bound decodes to a legal board.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from woodpuzzle.models.board import Board
from woodpuzzle.models.piece import shape_size
from woodpuzzle.models.puzzle import PuzzleSpec

_EMPTY = 0
_COVERED = 5  # anchors hold shape code + 1, i.e. 1..4


class Illegality(StrEnum):
    OUT_OF_RANGE = "code outside the code space"
    FOOTPRINT = "piece runs off the grid"
    WRAP = "piece wraps across a row boundary"
    OVERLAP = "pieces overlap"
    EMPTY_COUNT = "wrong number of empty cells"
    PIECE_COUNT = "wrong number of pieces"
    CHECKSUM = "shape codes do not add up to the checksum"


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of :func:`decode`.

    ``board`` is ``None`` whenever ``reason`` is set; callers must check
    :attr:`is_legal` before using it.
    """

    code: int
    board: Board | None = None
    reason: Illegality | None = None
    final: bool = False

    @property
    def is_legal(self) -> bool:
        return self.reason is None


def encode(board: Board) -> int:
    """Return the position code of *board*."""
    width = board.width
    radix = len(board.pieces) + 1
    grid = [_EMPTY] * (width * board.height)
    for piece in board.pieces:
        for dy in range(piece.h):
            for dx in range(piece.w):
                grid[(piece.y + dy) * width + piece.x + dx] = (
                    _COVERED if dx or dy else piece.shape_code + 1
                )

    empties = anchors = shapes = empty_cells = 0
    for cell in grid:
        if cell == _EMPTY:
            empties = empties * radix + anchors
            empty_cells += 1
        elif cell != _COVERED:
            shapes = (shapes << 2) | (cell - 1)
            anchors += 1

    return (shapes >> 2) * radix**empty_cells + empties


def decode(code: int, puzzle: PuzzleSpec) -> DecodeResult:
    """Rebuild the board encoded by *code*.

    The raster walk stops at the first structural violation; the reason is
    reported instead of raising. Pieces of the rebuilt board are listed in
    reverse raster order (last row first, right to left), without goals.
    ``final`` tells whether a piece sits where the goal piece is wanted.
    """
    if not 0 <= code < puzzle.code_space:
        return DecodeResult(code, reason=Illegality.OUT_OF_RANGE)

    width = puzzle.width
    n_cells = width * puzzle.height
    pieces = puzzle.piece_count
    radix = puzzle.radix
    expected_empty = puzzle.empty_cells
    checksum = puzzle.checksum

    span = radix**expected_empty
    top = span // radix
    empties, shapes = code % span, code // span

    grid = [_EMPTY] * n_cells
    anchors = empty_seen = total = 0
    remaining = pieces - 1
    p = 0
    while p < n_cells:
        # Once all empty digits are consumed the next digit reads as 0, which
        # would match again while no anchor has been seen yet.
        if empty_seen < expected_empty and anchors == empties // top % radix:
            empty_seen += 1
            p += 1
            empties *= radix
        else:
            if anchors == pieces:
                return DecodeResult(code, reason=Illegality.PIECE_COUNT)
            if remaining:
                remaining -= 1
                value = (shapes >> (2 * remaining)) & 0x03
            else:
                value = (checksum - total) & 0x03
            w, h = shape_size(value)
            right, below = w - 1, (h - 1) * width
            if p + below + right >= n_cells:
                return DecodeResult(code, reason=Illegality.FOOTPRINT)
            if p // width != (p + right) // width:
                return DecodeResult(code, reason=Illegality.WRAP)
            footprint = {p + right, p + below, p + below + right} - {p}
            if any(grid[c] for c in footprint):
                return DecodeResult(code, reason=Illegality.OVERLAP)
            for c in footprint:
                grid[c] = _COVERED
            grid[p] = value + 1
            total += value
            anchors += 1

        while p < n_cells and grid[p]:
            p += 1

    if empty_seen != expected_empty:
        return DecodeResult(code, reason=Illegality.EMPTY_COUNT)
    if anchors != pieces:
        return DecodeResult(code, reason=Illegality.PIECE_COUNT)
    if total != checksum:
        return DecodeResult(code, reason=Illegality.CHECKSUM)

    board = Board(width=width, height=puzzle.height, capacity=puzzle.capacity)
    final = False
    for c in range(n_cells - 1, -1, -1):
        if _EMPTY < grid[c] < _COVERED:
            w, h = shape_size(grid[c] - 1)
            piece = board.add(c % width, c // width, w, h)
            final = final or puzzle.is_final(piece)

    return DecodeResult(code, board=board, final=final)


def classify(code: int, puzzle: PuzzleSpec) -> tuple[bool, bool]:
    """Return ``(legal, final)`` for *code* without keeping the board."""
    result = decode(code, puzzle)
    return result.is_legal, result.final
