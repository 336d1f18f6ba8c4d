#!/usr/bin/env python3
"""Wood Puzzle Solver.

Usage::

    python main.py            # scan the code space for one solution
    python main.py --all      # scan for every reachable solution
    python main.py --tree     # iterative-deepening depth-first search
    python main.py -j 8       # classify with 8 worker processes
"""

import logging
import sys
from pathlib import Path

import click
import typer
from rich.logging import RichHandler
from typer.core import TyperCommand

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

USAGE = "usage: woodpuzzle [--all|--tree]"


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    from frontend.cli.rich.app import console

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# -- CLI entry point ----------------------------------------------------------


class UsageCommand(TyperCommand):
    """Print the usage line instead of Click's error box on bad input."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError:
            print(USAGE)
            ctx.exit(0)


app = typer.Typer(add_completion=False)


@app.command(
    cls=UsageCommand,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def main(
    ctx: typer.Context,
    all_solutions: bool = typer.Option(
        False, "--all",
        help="Report every reachable solution instead of the first one.",
    ),
    tree: bool = typer.Option(
        False, "--tree",
        help="Use iterative-deepening depth-first search.",
    ),
    jobs: int = typer.Option(
        1, "-j", "--jobs",
        help="Worker processes for classifying the code space.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log search progress.",
    ),
) -> None:
    """Solve the wood puzzle."""
    if ctx.args or (all_solutions and tree) or jobs < 1:
        print(USAGE)
        return

    _configure_logging(verbose)

    from frontend.cli.rich.app import run_scan, run_tree

    if tree:
        run_tree()
    else:
        run_scan(all_solutions=all_solutions, jobs=jobs)


if __name__ == "__main__":
    app()
