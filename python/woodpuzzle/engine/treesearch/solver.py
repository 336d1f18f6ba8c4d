"""Iterative-deepening depth-first search with a transposition table."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from woodpuzzle.engine.context import SearchContext, SearchMode
from woodpuzzle.engine.visited import MAX_DEPTH
from woodpuzzle.models.board import Board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """One unit move and the position code it leads to."""

    piece: int
    dx: int
    dy: int
    code: int


@dataclass(frozen=True)
class DepthStats:
    """Counters for one finished deepening iteration."""

    depth: int
    elapsed: float
    occupied: int
    tries: int
    recursions: int
    claims: int
    moves: int

    @property
    def expansion_rate(self) -> int:
        """Recursions per hundred tries, as a rough branching measure."""
        return self.recursions // (self.tries // 100 + 1)


@dataclass
class TreeSolution:
    """A solution in start-to-goal order.

    ``boards[i]`` is the configuration after ``steps[i]``.
    """

    depth: int
    steps: list[Step] = field(default_factory=list)
    boards: list[Board] = field(default_factory=list)
    moves: int = 0

    def __len__(self) -> int:
        return len(self.steps)


class DepthFirstSolver:
    """Searches the puzzle of *context* from *board* (default: the start).

    The board is moved in place and every move is undone on the way back,
    so it is at its initial configuration again when a search returns.
    """

    def __init__(self, context: SearchContext, board: Board | None = None) -> None:
        if context.mode is not SearchMode.TREE:
            raise ValueError(f"Depth-first search needs a tree context, got {context.mode}.")
        self.context = context
        self.board = board if board is not None else context.puzzle.start_board()
        self.tries = 0
        self.recursions = 0
        self.claims = 0
        self._path: list[tuple[Step, Board]] = []

    # -- search ---------------------------------------------------------------

    def solve(
        self,
        max_depth: int = MAX_DEPTH,
        on_depth: Callable[[DepthStats], None] | None = None,
    ) -> TreeSolution | None:
        """Deepen from 1 until a solution turns up or *max_depth* is done.

        *max_depth* cannot exceed what a status byte can hold. Returns
        ``None`` if no solution exists within that bound.
        """
        if max_depth > MAX_DEPTH:
            raise ValueError(f"max_depth is limited to {MAX_DEPTH}, got {max_depth}.")

        if self.board.is_solved():
            return TreeSolution(depth=0, moves=self.board.moves)

        t0 = time.perf_counter()
        for depth in range(1, max_depth + 1):
            self.tries = self.recursions = self.claims = 0
            logger.debug("Searching depth %d", depth)

            found = self.solve_depth(depth)

            stats = DepthStats(
                depth=depth,
                elapsed=time.perf_counter() - t0,
                occupied=self.context.table.occupied(),
                tries=self.tries,
                recursions=self.recursions,
                claims=self.claims,
                moves=self.board.moves,
            )
            logger.info(
                "depth %d: %.1fs, %d positions, %d tries, %d recursions",
                depth, stats.elapsed, stats.occupied, stats.tries, stats.recursions,
            )
            if on_depth is not None:
                on_depth(stats)

            if found:
                return self._take_solution(depth)

        logger.warning("No solution within depth %d", max_depth)
        return None

    def solve_depth(self, depth: int) -> bool:
        """Search every line of at most *depth* moves.

        A position is only expanded if the table has not seen it with at
        least as much remaining depth. On success the winning moves are
        collected goal-first in ``self._path``.
        """
        if not depth:
            return False

        self.recursions += 1
        board = self.board
        table = self.context.table
        for i, dx, dy in board.moves_iter():
            code = board.try_move(i, dx, dy)
            if code is None:
                continue

            self.tries += 1
            if board.is_solved():
                found = True
            elif table.try_claim(code, depth):
                self.claims += 1
                found = self.solve_depth(depth - 1)
            else:
                found = False

            if found:
                self._path.append((Step(i, dx, dy, code), board.copy()))
            board.undo(i, dx, dy)
            if found:
                return True

        return False

    # -- helpers --------------------------------------------------------------

    def _take_solution(self, depth: int) -> TreeSolution:
        path = self._path[::-1]
        self._path = []
        solution = TreeSolution(
            depth=depth,
            steps=[step for step, _ in path],
            boards=[board for _, board in path],
            moves=self.board.moves,
        )
        logger.info("Solved at depth %d after %d moves", depth, solution.moves)
        return solution
