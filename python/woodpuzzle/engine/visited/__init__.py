from woodpuzzle.engine.visited.table import (
    EXPANDED,
    FINAL,
    FOUND,
    LEGAL,
    MAX_DEPTH,
    REACHED,
    VisitedTable,
)

__all__ = [
    "EXPANDED",
    "FINAL",
    "FOUND",
    "LEGAL",
    "MAX_DEPTH",
    "REACHED",
    "VisitedTable",
]
