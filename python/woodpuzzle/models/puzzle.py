"""Compiled-in puzzle instances.

A :class:`PuzzleSpec` fixes the grid, the piece set and the goal. The
reference instance is the classic 4×5 layout with ten pieces::

    C A A D
    C A A D
    . B B .
    E G H F
    E I J F

The 2×2 piece ``A`` has to reach the two bottom rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from woodpuzzle.models.board import Board, CapacityError
from woodpuzzle.models.piece import Match, Piece


@dataclass(frozen=True)
class PieceSpec:
    """Initial placement of one piece, plus its optional goal."""

    x: int
    y: int
    w: int = 1
    h: int = 1
    tx: int | None = None
    ty: int | None = None
    match: Match = Match.EXACT

    @property
    def has_goal(self) -> bool:
        return self.tx is not None or self.ty is not None

    def to_piece(self) -> Piece:
        return Piece(self.x, self.y, self.w, self.h, self.tx, self.ty, self.match)


@dataclass(frozen=True)
class PuzzleSpec:
    """A puzzle instance: grid size, pieces in placement order, capacity."""

    width: int
    height: int
    pieces: tuple[PieceSpec, ...]
    capacity: int = 10

    def __post_init__(self) -> None:
        if len(self.pieces) > self.capacity:
            raise CapacityError(
                f"Puzzle defines {len(self.pieces)} pieces, capacity is {self.capacity}."
            )
        for spec in self.pieces:
            if spec.w not in (1, 2) or spec.h not in (1, 2):
                raise ValueError(f"Unsupported piece size {spec.w}×{spec.h}.")
        goals = [s for s in self.pieces if s.has_goal]
        if len(goals) != 1:
            raise ValueError(f"Expected exactly one goal piece, got {len(goals)}.")
        if not self.start_board().is_legal():
            raise ValueError("Initial placement overlaps or leaves the grid.")
        if self.empty_cells < 1:
            raise ValueError("Puzzle needs at least one empty cell.")

    # -- derived constants ----------------------------------------------------

    @property
    def piece_count(self) -> int:
        return len(self.pieces)

    @property
    def radix(self) -> int:
        """Base of the empty-cell digits in a position code."""
        return self.piece_count + 1

    @property
    def empty_cells(self) -> int:
        return self.width * self.height - sum(s.w * s.h for s in self.pieces)

    @property
    def checksum(self) -> int:
        return sum(2 * (s.h - 1) + (s.w - 1) for s in self.pieces)

    @cached_property
    def code_space(self) -> int:
        """Upper bound ``S`` of position codes: ``(P+1)^E · 4^(P-1)``."""
        return self.radix**self.empty_cells << (2 * (self.piece_count - 1))

    @property
    def goal(self) -> PieceSpec:
        return next(s for s in self.pieces if s.has_goal)

    # -- boards ---------------------------------------------------------------

    def start_board(self) -> Board:
        board = Board(width=self.width, height=self.height, capacity=self.capacity)
        for spec in self.pieces:
            board.add(spec.x, spec.y, spec.w, spec.h, spec.tx, spec.ty, spec.match)
        return board

    def is_final(self, piece: Piece) -> bool:
        """Check whether *piece* would satisfy the goal piece's constraint."""
        goal = self.goal
        if (piece.w, piece.h) != (goal.w, goal.h):
            return False
        probe = Piece(piece.x, piece.y, piece.w, piece.h, goal.tx, goal.ty, goal.match)
        return probe.goal_satisfied()


REFERENCE_PUZZLE = PuzzleSpec(
    width=4,
    height=5,
    pieces=(
        PieceSpec(1, 0, 2, 2, tx=1, ty=3, match=Match.MIN),
        PieceSpec(1, 2, 2, 1),
        PieceSpec(0, 0, 1, 2),
        PieceSpec(3, 0, 1, 2),
        PieceSpec(0, 3, 1, 2),
        PieceSpec(3, 3, 1, 2),
        PieceSpec(1, 3),
        PieceSpec(2, 3),
        PieceSpec(1, 4),
        PieceSpec(2, 4),
    ),
)
