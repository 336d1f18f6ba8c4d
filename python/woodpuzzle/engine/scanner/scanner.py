"""Exhaustive reachability scan over the whole code space.

Every code is classified first (legal / final). Reached positions are then
expanded in rounds, each round walking the legal codes in ascending order,
until a final position is reached or nothing is left to expand. Each
reached position remembers the code it was first reached from, which gives
a path back to the start.
"""

from __future__ import annotations

import logging
from array import array
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from itertools import repeat
from typing import Callable, Iterable

from woodpuzzle.engine.context import SearchContext, SearchMode
from woodpuzzle.engine.positioncode import decode
from woodpuzzle.engine.visited import EXPANDED, FINAL, LEGAL, REACHED
from woodpuzzle.models.board import Board
from woodpuzzle.models.puzzle import PuzzleSpec

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1 << 16

ProgressCallback = Callable[[int, int], None]


def classify_range(puzzle: PuzzleSpec, start: int, stop: int) -> bytes:
    """Return the classification bytes for codes ``start..stop-1``.

    Module-level so that worker processes can run it.
    """
    out = bytearray(stop - start)
    for offset, code in enumerate(range(start, stop)):
        result = decode(code, puzzle)
        if result.is_legal:
            out[offset] = LEGAL | FINAL if result.final else LEGAL
    return bytes(out)


@dataclass
class ScanReport:
    """Result of a scan.

    ``path`` runs from the first solution back to the start, the order in
    which the back-pointers are followed. It is empty in all-solutions mode
    and when nothing was found.
    """

    legal: int = 0
    final: int = 0
    expansions: int = 0
    rounds: int = 0
    solutions: list[int] = field(default_factory=list)
    path: list[Board] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return bool(self.solutions)

    @property
    def start_to_goal(self) -> list[Board]:
        return self.path[::-1]


class ReachabilityScanner:
    """Classifies and explores the code space of *context*'s puzzle."""

    def __init__(self, context: SearchContext, board: Board | None = None) -> None:
        if context.mode is not SearchMode.SCAN:
            raise ValueError(f"Reachability scan needs a scan context, got {context.mode}.")
        self.context = context
        self.board = board if board is not None else context.puzzle.start_board()
        self._legal = array("I")

    @property
    def legal_codes(self) -> array:
        return self._legal

    # -- classification -------------------------------------------------------

    def classify(self, jobs: int = 1, progress: ProgressCallback | None = None) -> tuple[int, int]:
        """Tag every code of the table as legal and/or final.

        Resets the table. With ``jobs > 1`` chunks are decoded in worker
        processes; each chunk owns a disjoint slice of the table. Returns
        the ``(legal, final)`` counts.
        """
        table = self.context.table
        puzzle = self.context.puzzle
        size = table.size
        table.reset()

        starts = range(0, size, CHUNK_SIZE)
        stops = [min(s + CHUNK_SIZE, size) for s in starts]

        legal_codes = array("I")
        final = 0
        if jobs > 1:
            with ProcessPoolExecutor(max_workers=jobs) as pool:
                chunks = pool.map(classify_range, repeat(puzzle), starts, stops)
                final = self._store(starts, stops, chunks, legal_codes, progress)
        else:
            chunks = (classify_range(puzzle, a, b) for a, b in zip(starts, stops))
            final = self._store(starts, stops, chunks, legal_codes, progress)

        self._legal = legal_codes
        logger.info("%d legal positions, %d final positions", len(legal_codes), final)
        return len(legal_codes), final

    def _store(
        self,
        starts: Iterable[int],
        stops: Iterable[int],
        chunks: Iterable[bytes],
        legal_codes: array,
        progress: ProgressCallback | None,
    ) -> int:
        status = self.context.table.status
        size = self.context.table.size
        final = 0
        for start, stop, chunk in zip(starts, stops, chunks):
            status[start:stop] = chunk
            for offset, flags in enumerate(chunk):
                if flags:
                    legal_codes.append(start + offset)
                    if flags & FINAL:
                        final += 1
            if progress is not None:
                progress(stop, size)
        return final

    # -- exploration ----------------------------------------------------------

    def expand(self, code: int) -> int:
        """Mark every one-ply successor of *code* as reached from it.

        Returns how many successors were reached for the first time.
        """
        result = decode(code, self.context.puzzle)
        if not result.is_legal:
            raise ValueError(f"Cannot expand illegal code {code:#x}: {result.reason}")

        table = self.context.table
        fresh = 0
        for _, _, _, successor in result.board.successors():
            if table.mark_reached(successor, code):
                fresh += 1
        table.mark_expanded(code)
        return fresh

    def scan(
        self,
        all_solutions: bool = False,
        jobs: int = 1,
        progress: ProgressCallback | None = None,
        on_round: Callable[[int, int], None] | None = None,
        on_solution: Callable[[int, Board], None] | None = None,
    ) -> ScanReport:
        """Classify the code space, then expand from the start position.

        Stops at the first solution unless *all_solutions* is set, or once
        a round expands nothing. ``on_round`` gets the round number and the
        running expansion count, ``on_solution`` each solution as found.
        """
        table = self.context.table
        start = self.board.encode()

        report = ScanReport()
        report.legal, report.final = self.classify(jobs=jobs, progress=progress)
        # The start points at itself; that ends the walk in reconstruct().
        table.mark_reached(start, start)

        while True:
            expanded = 0
            report.rounds += 1
            for code in self._legal:
                flags = table.status[code]
                if flags & REACHED and flags & FINAL and not table.is_found(code):
                    table.mark_found(code)
                    report.solutions.append(code)
                    logger.info("Solution %#x found in round %d", code, report.rounds)
                    if not all_solutions:
                        report.path = self.reconstruct(code)
                        break
                    if on_solution is not None:
                        on_solution(code, self._board(code))

                if flags & (REACHED | FINAL | EXPANDED) == REACHED:
                    self.expand(code)
                    expanded += 1

            report.expansions += expanded
            logger.debug("Round %d: %d expansions", report.rounds, expanded)
            if on_round is not None:
                on_round(report.rounds, report.expansions)

            if report.solutions and not all_solutions:
                break
            if not expanded:
                break

        logger.info(
            "%d solutions found after %d expansions", len(report.solutions), report.expansions
        )
        return report

    def reconstruct(self, code: int) -> list[Board]:
        """Follow back-pointers from *code* to the start; goal first."""
        table = self.context.table
        boards = [self._board(code)]
        while (previous := table.predecessor(code)) != code:
            code = previous
            boards.append(self._board(code))
        return boards

    def _board(self, code: int) -> Board:
        result = decode(code, self.context.puzzle)
        if not result.is_legal:
            raise ValueError(f"Code {code:#x} is not a legal position: {result.reason}")
        return result.board
