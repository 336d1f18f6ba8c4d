"""Small puzzle instances shared by the test modules.

``tiny`` (3×2, solvable in 5 moves)::

    A A .
    B . C

``A`` has to end up at (1, 1).

``stuck`` (3×2, unsolvable: ``B`` can only shuttle in the right column)::

    A A B
    A A .
"""

from __future__ import annotations

import pytest

from woodpuzzle.models import Match, PieceSpec, PuzzleSpec

TINY = PuzzleSpec(
    width=3,
    height=2,
    pieces=(
        PieceSpec(0, 0, 2, 1, tx=1, ty=1, match=Match.EXACT),
        PieceSpec(0, 1),
        PieceSpec(2, 1),
    ),
    capacity=3,
)

STUCK = PuzzleSpec(
    width=3,
    height=2,
    pieces=(
        PieceSpec(0, 0, 2, 2, tx=1, ty=0),
        PieceSpec(2, 0),
    ),
    capacity=2,
)


@pytest.fixture
def tiny() -> PuzzleSpec:
    return TINY


@pytest.fixture
def stuck() -> PuzzleSpec:
    return STUCK
