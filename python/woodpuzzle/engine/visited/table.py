"""Flat visited table indexed by position code."""

from __future__ import annotations

from array import array

# Status bits used by the reachability scan. Zero means illegal.
LEGAL = 0x01
REACHED = 0x02
EXPANDED = 0x04
FOUND = 0x40
FINAL = 0x80

# Largest depth a status byte can record in tree mode.
MAX_DEPTH = 0xFF


class VisitedTable:
    """One status byte per position code, plus optional back-pointers.

    In tree mode the status byte holds the largest remaining depth a code
    was claimed with. In scan mode it holds the flag bits above and
    ``backtrace`` keeps the code each position was first reached from.
    """

    def __init__(self, size: int, backtrace: bool = False) -> None:
        self.size = size
        self.status = bytearray(size)
        self.backtrace: array | None = array("I", [0]) * size if backtrace else None

    def __len__(self) -> int:
        return self.size

    def reset(self) -> None:
        """Zero every entry in place."""
        self.status[:] = bytes(self.size)
        if self.backtrace is not None:
            self.backtrace[:] = array("I", [0]) * self.size

    def occupied(self) -> int:
        """Number of entries that are not zero."""
        return self.size - self.status.count(0)

    # -- tree mode ------------------------------------------------------------

    def try_claim(self, code: int, depth: int) -> bool:
        """Record *depth* for *code* unless it was claimed with ``>= depth``."""
        if self.status[code] < depth:
            self.status[code] = depth
            return True
        return False

    # -- scan mode ------------------------------------------------------------

    def is_legal(self, code: int) -> bool:
        return bool(self.status[code] & LEGAL)

    def is_final(self, code: int) -> bool:
        return bool(self.status[code] & FINAL)

    def is_reached(self, code: int) -> bool:
        return bool(self.status[code] & REACHED)

    def is_expanded(self, code: int) -> bool:
        return bool(self.status[code] & EXPANDED)

    def is_found(self, code: int) -> bool:
        return bool(self.status[code] & FOUND)

    def mark_reached(self, code: int, predecessor: int = 0) -> bool:
        """Mark *code* reached from *predecessor*; the first writer wins.

        Returns True if the code was not reached before.
        """
        if self.status[code] & REACHED:
            return False
        self.status[code] |= REACHED
        if self.backtrace is not None:
            self.backtrace[code] = predecessor
        return True

    def mark_expanded(self, code: int) -> None:
        self.status[code] |= EXPANDED

    def mark_found(self, code: int) -> None:
        self.status[code] |= FOUND

    def predecessor(self, code: int) -> int:
        if self.backtrace is None:
            raise ValueError("Table was created without back-pointers.")
        return self.backtrace[code]
