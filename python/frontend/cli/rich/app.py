"""Rich terminal frontend — runs the solvers and prints their trace.

Boards are drawn with the block renderer inside Rich panels; the
classification pass shows a progress bar. At DEBUG level every printed board
is also logged in the compact letter form.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.text import Text

from frontend.cli.render import render_blocks, render_letters
from woodpuzzle.engine import SearchContext, SearchMode
from woodpuzzle.engine.scanner import ReachabilityScanner, ScanReport
from woodpuzzle.engine.treesearch import DepthFirstSolver, DepthStats, TreeSolution
from woodpuzzle.models.board import Board
from woodpuzzle.models.puzzle import REFERENCE_PUZZLE, PuzzleSpec

logger = logging.getLogger(__name__)

console = Console()


# -- board rendering ----------------------------------------------------------


def _print_board(board: Board, title: str | None = None) -> None:
    panel = Panel(
        Text(render_blocks(board)),
        title=title,
        title_align="left",
        border_style="bright_blue",
        expand=False,
    )
    console.print(panel)
    logger.debug("%s\n%s", title or "board", render_letters(board))


# -- scan ---------------------------------------------------------------------


def run_scan(
    all_solutions: bool = False,
    jobs: int = 1,
    puzzle: PuzzleSpec = REFERENCE_PUZZLE,
) -> ScanReport:
    """Scan the code space for one (or every) reachable solution."""
    context = SearchContext.create(SearchMode.SCAN, puzzle)
    scanner = ReachabilityScanner(context)

    def on_solution(code: int, board: Board) -> None:
        console.print(f"[green]solution {code:x} found[/green]")
        _print_board(board)

    with Progress(
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Classifying", total=context.table.size)

        def on_progress(done: int, total: int) -> None:
            progress.update(task, completed=done)
            if done == total:
                progress.update(task, description="Expanding")

        def on_round(round_no: int, expansions: int) -> None:
            progress.console.print(f"[dim]round {round_no}:[/dim] {expansions} expansions")

        report = scanner.scan(
            all_solutions=all_solutions,
            jobs=jobs,
            progress=on_progress,
            on_round=on_round,
            on_solution=on_solution if all_solutions else None,
        )

    console.print(f"[bold]{report.legal}[/bold] legal positions")
    console.print(f"[bold]{report.final}[/bold] final positions")

    if not all_solutions and report.solved:
        for n, board in enumerate(report.start_to_goal, 1):
            _print_board(board, title=f"{n} # {board.encode():#x}")
        console.print(f"[bold green]Solved in {len(report.path) - 1} moves![/bold green]")
    else:
        console.print(f"{len(report.solutions)} solutions found")

    return report


# -- tree ---------------------------------------------------------------------


def _print_depth(stats: DepthStats) -> None:
    console.print(
        f" depth {stats.depth} {stats.elapsed:.0f}s "
        f"#{stats.occupied} %{stats.expansion_rate}",
        highlight=False,
    )


def run_tree(puzzle: PuzzleSpec = REFERENCE_PUZZLE) -> TreeSolution | None:
    """Iteratively deepen until the puzzle is solved."""
    context = SearchContext.create(SearchMode.TREE, puzzle)
    solver = DepthFirstSolver(context)

    _print_board(solver.board, title="start")
    solution = solver.solve(on_depth=_print_depth)
    if solution is None:
        console.print("[red]No solution within the depth limit.[/red]")
        return None

    console.print(f"{solution.moves} moves")
    for n, (step, board) in enumerate(zip(solution.steps, solution.boards), 1):
        name = chr(ord("A") + step.piece)
        _print_board(board, title=f"{n} # {name} ({step.dx:+d}, {step.dy:+d})")
    console.print(f"[bold green]Solved at depth {solution.depth}![/bold green]")
    return solution
