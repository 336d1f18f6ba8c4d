"""Piece model — a rigid rectangle on the puzzle grid."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from woodpuzzle.models.board import Board


class Match(IntEnum):
    """How a piece's coordinates are compared against its goal."""

    MIN = -1
    EXACT = 0
    MAX = 1


def shape_code(w: int, h: int) -> int:
    """Return the 2-bit shape code: 0=1×1, 1=2×1, 2=1×2, 3=2×2."""
    return 2 * (h - 1) + (w - 1)


def shape_size(code: int) -> tuple[int, int]:
    """Inverse of :func:`shape_code`, returns ``(w, h)``."""
    return 1 + code % 2, 1 + code // 2


class Piece:
    """A piece at ``(x, y)`` (top-left cell) of size ``w`` × ``h``.

    ``tx`` / ``ty`` are ``None`` when that coordinate is unconstrained.
    """

    __slots__ = ("x", "y", "w", "h", "tx", "ty", "match")

    def __init__(
        self,
        x: int = 0,
        y: int = 0,
        w: int = 1,
        h: int = 1,
        tx: int | None = None,
        ty: int | None = None,
        match: Match = Match.EXACT,
    ) -> None:
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self.tx = tx
        self.ty = ty
        self.match = match

    # -- queries --------------------------------------------------------------

    @property
    def shape_code(self) -> int:
        return shape_code(self.w, self.h)

    @property
    def has_goal(self) -> bool:
        return self.tx is not None or self.ty is not None

    def overlaps(self, x: int, y: int) -> bool:
        """Check if the cell ``(x, y)`` lies inside this piece."""
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h

    def cells(self) -> Iterator[tuple[int, int]]:
        for dy in range(self.h):
            for dx in range(self.w):
                yield self.x + dx, self.y + dy

    def goal_satisfied(self) -> bool:
        """Evaluate the goal constraint at the current position.

        ``MIN`` is unsatisfied while a constrained coordinate is below its
        goal, ``MAX`` while it is above, ``EXACT`` while it differs.
        """
        tx, ty = self.tx, self.ty
        if self.match is Match.MIN:
            return not ((tx is not None and self.x < tx) or (ty is not None and self.y < ty))
        if self.match is Match.MAX:
            return not ((tx is not None and self.x > tx) or (ty is not None and self.y > ty))
        return not ((tx is not None and self.x != tx) or (ty is not None and self.y != ty))

    # -- movement -------------------------------------------------------------

    def move(self, board: Board, dx: int, dy: int) -> bool:
        """Translate by one cell if the target rectangle is free.

        Only the four corners of the translated rectangle are tested
        against the other pieces; with sizes of at most 2×2 that covers
        every cell. Returns False and leaves the piece untouched on
        rejection.
        """
        nx, ny = self.x + dx, self.y + dy
        if nx < 0 or nx + self.w > board.width or ny < 0 or ny + self.h > board.height:
            return False

        x1, y1 = nx + self.w - 1, ny + self.h - 1
        for other in board.pieces:
            if other is self:
                continue
            if (
                other.overlaps(nx, ny)
                or other.overlaps(x1, ny)
                or other.overlaps(nx, y1)
                or other.overlaps(x1, y1)
            ):
                return False

        self.x = nx
        self.y = ny
        board.moves += 1
        return True

    # -- identity -------------------------------------------------------------

    def key(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.w, self.h

    def copy(self) -> Piece:
        return Piece(self.x, self.y, self.w, self.h, self.tx, self.ty, self.match)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.key() == other.key()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        goal = ""
        if self.has_goal:
            goal = f", goal=({self.tx}, {self.ty}) {self.match.name}"
        return f"Piece({self.x}, {self.y}, {self.w}x{self.h}{goal})"
