"""Search context shared by the solvers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from woodpuzzle.engine.visited import VisitedTable
from woodpuzzle.models.puzzle import REFERENCE_PUZZLE, PuzzleSpec


class SearchMode(StrEnum):
    TREE = "tree"
    SCAN = "scan"


@dataclass
class SearchContext:
    """The puzzle, the search mode and the table the search owns."""

    puzzle: PuzzleSpec
    mode: SearchMode
    table: VisitedTable

    @classmethod
    def create(cls, mode: SearchMode, puzzle: PuzzleSpec = REFERENCE_PUZZLE) -> SearchContext:
        """Allocate a zeroed table sized to the puzzle's code space.

        Back-pointers are only kept in scan mode.
        """
        table = VisitedTable(puzzle.code_space, backtrace=mode is SearchMode.SCAN)
        return cls(puzzle=puzzle, mode=mode, table=table)
