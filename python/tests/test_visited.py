from __future__ import annotations

import pytest

from woodpuzzle.engine import SearchContext, SearchMode
from woodpuzzle.engine.visited import EXPANDED, FINAL, FOUND, LEGAL, REACHED, VisitedTable


def test_new_table_is_zeroed() -> None:
    table = VisitedTable(64)
    assert len(table) == 64
    assert table.occupied() == 0
    assert table.backtrace is None


def test_try_claim_keeps_largest_depth() -> None:
    table = VisitedTable(8)
    assert table.try_claim(3, 2)
    assert not table.try_claim(3, 2)
    assert not table.try_claim(3, 1)
    assert table.try_claim(3, 5)
    assert table.status[3] == 5
    assert table.occupied() == 1


def test_mark_reached_first_writer_wins() -> None:
    table = VisitedTable(16, backtrace=True)
    assert table.mark_reached(7, 3)
    assert not table.mark_reached(7, 9)
    assert table.is_reached(7)
    assert table.predecessor(7) == 3


def test_flags() -> None:
    table = VisitedTable(4, backtrace=True)
    table.status[1] = LEGAL
    table.status[2] = LEGAL | FINAL
    assert table.is_legal(1) and not table.is_final(1)
    assert table.is_legal(2) and table.is_final(2)
    assert not table.is_legal(3)

    table.mark_reached(2, 1)
    table.mark_found(2)
    table.mark_expanded(1)
    assert table.status[2] == LEGAL | FINAL | REACHED | FOUND
    assert table.is_expanded(1)
    assert not table.is_reached(1)
    assert table.status[1] & EXPANDED


def test_reset() -> None:
    table = VisitedTable(4, backtrace=True)
    table.try_claim(1, 9)
    table.mark_reached(2, 3)
    table.reset()
    assert table.occupied() == 0
    assert table.predecessor(2) == 0


def test_predecessor_requires_backtrace() -> None:
    with pytest.raises(ValueError):
        VisitedTable(4).predecessor(0)


def test_out_of_range_code_raises() -> None:
    with pytest.raises(IndexError):
        VisitedTable(4).try_claim(4, 1)


@pytest.mark.parametrize("mode, backtrace", [(SearchMode.TREE, False), (SearchMode.SCAN, True)])
def test_context_allocates_table(tiny, mode: SearchMode, backtrace: bool) -> None:
    context = SearchContext.create(mode, tiny)
    assert context.table.size == tiny.code_space
    assert (context.table.backtrace is not None) is backtrace
