"""Board model for the sliding block puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from woodpuzzle.models.piece import Match, Piece

if TYPE_CHECKING:
    from woodpuzzle.engine.positioncode import DecodeResult
    from woodpuzzle.models.puzzle import PuzzleSpec


# Orthogonal unit steps in the order of a dy-major raster over {-1, 0, 1}².
DIRECTIONS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx and not dy) or (dy and not dx)
)


class CapacityError(ValueError):
    """Raised when more pieces are added than the board can hold."""


@dataclass
class Board:
    """Represents the puzzle board.

    ``pieces`` keeps placement order, which is also the order moves are
    generated in. ``moves`` counts every successful piece move made on
    this board, undo steps included.
    """

    width: int
    height: int
    pieces: list[Piece] = field(default_factory=list)
    capacity: int | None = None
    moves: int = 0

    # -- construction helpers -------------------------------------------------

    def add(
        self,
        x: int = 0,
        y: int = 0,
        w: int = 1,
        h: int = 1,
        tx: int | None = None,
        ty: int | None = None,
        match: Match = Match.EXACT,
    ) -> Piece:
        """Append a piece and return it."""
        if self.capacity is not None and len(self.pieces) >= self.capacity:
            raise CapacityError(
                f"Board holds at most {self.capacity} pieces, "
                f"cannot add {w}×{h} at ({x}, {y})."
            )
        piece = Piece(x, y, w, h, tx, ty, match)
        self.pieces.append(piece)
        return piece

    @classmethod
    def decode(cls, code: int, puzzle: PuzzleSpec) -> DecodeResult:
        """Rebuild a board from its position code (see ``engine.positioncode``)."""
        from woodpuzzle.engine.positioncode import decode

        return decode(code, puzzle)

    def copy(self) -> Board:
        return Board(
            width=self.width,
            height=self.height,
            pieces=[p.copy() for p in self.pieces],
            capacity=self.capacity,
        )

    # -- queries --------------------------------------------------------------

    @property
    def checksum(self) -> int:
        """Sum of the pieces' shape codes; fixed for a given piece set."""
        return sum(p.shape_code for p in self.pieces)

    def is_solved(self) -> bool:
        """True if some piece carries a goal and every goal is met."""
        if not any(p.has_goal for p in self.pieces):
            return False
        return all(p.goal_satisfied() for p in self.pieces)

    def is_legal(self) -> bool:
        """Check that all pieces are inside the grid and none overlap."""
        if self.capacity is not None and len(self.pieces) > self.capacity:
            return False
        seen: set[tuple[int, int]] = set()
        for piece in self.pieces:
            if piece.x < 0 or piece.y < 0:
                return False
            if piece.x + piece.w > self.width or piece.y + piece.h > self.height:
                return False
            for cell in piece.cells():
                if cell in seen:
                    return False
                seen.add(cell)
        return True

    def grid(self) -> list[list[int | None]]:
        """Return ``grid[y][x]`` holding the index of the covering piece."""
        cells: list[list[int | None]] = [[None] * self.width for _ in range(self.height)]
        for i, piece in enumerate(self.pieces):
            for x, y in piece.cells():
                cells[y][x] = i
        return cells

    def key(self) -> frozenset[tuple[int, int, int, int]]:
        """Order-independent identity of the configuration."""
        return frozenset(p.key() for p in self.pieces)

    def encode(self) -> int:
        from woodpuzzle.engine.positioncode import encode

        return encode(self)

    # -- movement -------------------------------------------------------------

    def moves_iter(self) -> Iterator[tuple[int, int, int]]:
        """Yield candidate ``(piece_index, dx, dy)`` steps in search order."""
        for i in range(len(self.pieces)):
            for dx, dy in DIRECTIONS:
                yield i, dx, dy

    def try_move(self, index: int, dx: int, dy: int) -> int | None:
        """Move piece *index* one step; return the new position code.

        Returns ``None`` and leaves the board unchanged if the move is
        blocked. Undoing is the caller's job: ``try_move(index, -dx, -dy)``.
        """
        if self.pieces[index].move(self, dx, dy):
            return self.encode()
        return None

    def undo(self, index: int, dx: int, dy: int) -> None:
        """Reverse a previous successful ``try_move(index, dx, dy)``."""
        if not self.pieces[index].move(self, -dx, -dy):
            raise RuntimeError(f"Cannot undo move of piece {index} by ({dx}, {dy}).")

    def successors(self) -> Iterator[tuple[int, int, int, int]]:
        """Yield ``(piece_index, dx, dy, code)`` for every legal one-ply move.

        Each move is undone before the next one is tried, so the board is
        unchanged once the iterator is exhausted.
        """
        for i, dx, dy in self.moves_iter():
            code = self.try_move(i, dx, dy)
            if code is not None:
                self.undo(i, dx, dy)
                yield i, dx, dy, code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and [p.key() for p in self.pieces] == [p.key() for p in other.pieces]
        )
