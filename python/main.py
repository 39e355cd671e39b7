#!/usr/bin/env python3
"""Quantum Maze level tooling.

Usage::

    python main.py par ../fixtures/levels.json        # compute PAR for every level
    python main.py par level3.json --write            # store the PAR in the file
    python main.py replay level3.json right down down  # run inputs through the engine
"""

import json
import logging
import sys
from pathlib import Path
from typing import List

import rich.box
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quantum_maze.config import DEFAULT_MAX_ITERATIONS, SolverOptions  # noqa: E402
from quantum_maze.engine.gameplay import GamePlay  # noqa: E402
from quantum_maze.engine.gamesolver import ParReport, solve_levels  # noqa: E402
from quantum_maze.errors import InvalidDirection, InvalidLevel  # noqa: E402
from quantum_maze.models.direction import Position  # noqa: E402
from quantum_maze.models.level import Level, load_levels  # noqa: E402

console = Console()

app = typer.Typer(add_completion=False, help="Quantum Maze level tooling.")


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fmt_pos(pos: Position) -> str:
    return f"({pos.row},{pos.col})"


def _write_par(path: Path, reports: list[ParReport]) -> int:
    """Store computed PAR values back into *path*; returns how many changed."""
    data = json.loads(path.read_text())
    records = data if isinstance(data, list) else [data]
    changed = 0
    for record, report in zip(records, reports):
        if report.ok and record.get("parMoves") != report.optimal_moves:
            record["parMoves"] = report.optimal_moves
            changed += 1
    if changed:
        path.write_text(json.dumps(data, indent=4) + "\n")
    return changed


def _par_table(rows: list[tuple[Path, ParReport]]) -> Table:
    table = Table(box=rich.box.HEAVY_HEAD, border_style="bright_blue")
    table.add_column("File", style="dim")
    table.add_column("Level", justify="right")
    table.add_column("Name")
    table.add_column("Declared", justify="right")
    table.add_column("PAR", justify="right", style="bold")
    table.add_column("Path / error")
    for path, report in rows:
        if report.ok:
            par = f"[green]{report.optimal_moves}[/green]"
            if not report.matches_declared:
                par = f"[yellow]{report.optimal_moves}[/yellow]"
            detail = " ".join(d.value for d in report.path) or "-"
        else:
            par = "[red]-[/red]"
            detail = f"[red]{report.error_kind}[/red]: {report.error}"
        table.add_row(
            path.name,
            str(report.level_id),
            report.name,
            str(report.declared_par),
            par,
            detail,
        )
    return table


# -- commands -----------------------------------------------------------------


@app.command()
def par(
    files: List[Path] = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True,
        help="Level JSON files (one record or a list of records each).",
    ),
    max_iterations: int = typer.Option(
        DEFAULT_MAX_ITERATIONS, "-n", "--max-iterations",
        min=1,
        help="Dequeue ceiling before the search gives up.",
    ),
    jobs: int = typer.Option(
        1, "-j", "--jobs",
        min=1,
        help="Worker processes for solving levels in parallel.",
    ),
    write: bool = typer.Option(
        False, "--write",
        help="Write computed PAR back into each file's parMoves.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Compute the optimal move count (PAR) of each level."""
    _configure_logging(verbose)
    options = SolverOptions(max_iterations=max_iterations)

    failed = False
    batches: list[tuple[Path, list[Level]]] = []
    for path in files:
        try:
            batches.append((path, load_levels(path)))
        except InvalidLevel as exc:
            console.print(f"[red]{path}: {exc}[/red]")
            failed = True

    rows: list[tuple[Path, ParReport]] = []
    for path, levels in batches:
        reports = solve_levels(levels, options, max_workers=jobs)
        rows.extend((path, report) for report in reports)
        if write:
            changed = _write_par(path, reports)
            if changed:
                console.print(f"[cyan]Updated {path} ({changed} level(s))[/cyan]")

    if rows:
        console.print(_par_table(rows))
    if failed or any(not report.ok for _, report in rows):
        raise typer.Exit(code=1)


@app.command()
def replay(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    inputs: List[str] = typer.Argument(..., help="Inputs such as up, down, l, r."),
    index: int = typer.Option(0, "-i", "--index", min=0, help="Level index within the file."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Feed a list of inputs through the engine and show every outcome."""
    _configure_logging(verbose)
    try:
        levels = load_levels(file)
        game = GamePlay.from_level(levels[index])
    except IndexError:
        console.print(f"[red]{file} has no level at index {index}[/red]")
        raise typer.Exit(code=2)
    except InvalidLevel as exc:
        console.print(f"[red]{file}: {exc}[/red]")
        raise typer.Exit(code=2)

    table = Table(box=rich.box.SIMPLE_HEAD)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Input")
    table.add_column("Outcome")
    table.add_column("Left")
    table.add_column("Right")
    table.add_column("Switches")

    for i, raw in enumerate(inputs, 1):
        try:
            outcome = game.apply_input(raw)
        except InvalidDirection as exc:
            console.print(table)
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=2)
        style = "green" if outcome.accepted else "yellow"
        state = outcome.state
        table.add_row(
            str(i),
            raw,
            f"[{style}]{outcome.reason}[/{style}]",
            _fmt_pos(state.left_pos) if state else "-",
            _fmt_pos(state.right_pos) if state else "-",
            ",".join(sorted(state.activated_switches)) if state else "-",
        )

    console.print(table)
    stats = game.stats()
    console.print(
        f"Status: {stats.status.value}  Moves: {stats.move_count}  "
        f"PAR: {stats.par_moves}  Stars: {stats.stars}"
    )


if __name__ == "__main__":
    app()
