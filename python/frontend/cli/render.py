"""Plain-text board rendering shared by the CLI runners.

No third-party dependencies; the Rich frontend wraps these strings.
"""

from __future__ import annotations

from woodpuzzle.models.board import Board

_CELL = 4  # characters per cell
_ROWS = 3  # text lines per cell


def render_letters(board: Board) -> str:
    """One character per cell: ``A`` for the first piece, ``.`` for empty."""
    grid = board.grid()
    return "\n".join(
        "".join("." if i is None else chr(ord("A") + i) for i in row) for row in grid
    )


def render_blocks(board: Board) -> str:
    """Draw every piece as a solid block of ``#``.

    Cells of the same piece are joined across the gaps, so the outline of
    each piece stays visible.
    """
    grid = board.grid()
    width, height = board.width, board.height

    def same(x: int, y: int, nx: int, ny: int) -> bool:
        if nx >= width or ny >= height:
            return False
        return grid[y][x] is not None and grid[y][x] == grid[ny][nx]

    lines: list[str] = []
    for y in range(height):
        row = " "
        for x in range(width):
            row += ("#" if grid[y][x] is not None else " ") * _CELL
            row += "#" if same(x, y, x + 1, y) else " "
        lines.extend([row.rstrip()] * _ROWS)

        if y < height - 1:
            joint = " "
            for x in range(width):
                joint += ("#" if same(x, y, x, y + 1) else " ") * _CELL
                joint += "#" if same(x, y, x + 1, y) and same(x, y, x, y + 1) else " "
            lines.append(joint.rstrip())

    return "\n".join(lines)
