"""
Branching CLI: generate trees, inspect them, sample statistics and export CSV.

Each invocation is stateless apart from two files under ``outputs/``:
- the last generated tree (``outputs/trees/<name>.yaml``)
- the last statistics run (``outputs/stats/last.yaml``), for change reporting
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from branching.cli.formatters import (
    build_measurements_table,
    build_settings_table,
    build_stats_table,
    build_tree_view,
    format_generation_rows,
    format_rolls,
)
from branching.cli.load_helpers import load_or_exit
from branching.cli.paths import (
    DEFAULT_TREE_NAME,
    find_tree_file,
    last_stats_path,
    resolve_export_path,
    resolve_tree_path,
)
from branching.config import Settings
from branching.core.errors import GenerationLimitError
from branching.core.randomness import RngStrategy
from branching.core.stats import SampleStats, compare_stats, sample_stats
from branching.core.tree.generator import generate_tree
from branching.core.tree.models import Tree
from branching.io.export import (
    ExportError,
    default_batch_filename,
    default_tree_filename,
    write_sample_batch,
    write_tree,
)
from branching.io.loaders import LoaderError, load_settings, load_tree, save_tree
from branching.io.loaders.yaml_loader import read_yaml_file, write_yaml_file
from branching.utils.logging import configure_logging

app = typer.Typer(help="Branching CLI: generate trees, inspect them, sample statistics and export CSV.")
console = Console()
logger = logging.getLogger(__name__)

N_OPTION = typer.Option(None, "--n", "-n", help="Numerator of the branch probability")
M_OPTION = typer.Option(None, "--m", "-m", help="Denominator of the branch probability")
RNG_OPTION = typer.Option(None, "--rng", help="Randomness strategy")
DEPTH_OPTION = typer.Option(None, "--max-depth", help="Abort trees deeper than this many generations")
SAMPLE_OPTION = typer.Option(None, "--sample-size", "-s", help="Number of trees to generate")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "--config", help="Path to a settings YAML file"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    no_colour: bool = typer.Option(False, "--no-colour", help="Disable colour output"),
) -> None:
    """Load settings shared by all commands."""
    try:
        configure_logging(log_level)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    settings = load_or_exit(load_settings, config, console=console)
    if no_colour:
        settings = settings.model_copy(update={"colour": False})
    console.no_color = not settings.colour
    ctx.obj = settings


def _effective_settings(ctx: typer.Context, **overrides: Any) -> Settings:
    """Apply non-None command-line overrides on top of the loaded settings."""
    settings: Settings = ctx.obj or Settings()
    updates: Dict[str, Any] = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return settings
    try:
        return Settings.model_validate({**settings.model_dump(), **updates})
    except ValidationError as exc:
        for err in exc.errors():
            loc = ".".join(str(entry) for entry in err.get("loc", [])) or "settings"
            console.print(f"[red]Invalid {loc}[/red]: {err.get('msg')}")
        raise typer.Exit(code=2)


def _print_advisories(settings: Settings) -> None:
    for message in settings.warnings():
        console.print(f"[red]{message}[/red]")


def _render_tree(tree: Tree, *, show_tree: bool) -> None:
    if show_tree:
        console.print(build_tree_view(tree))
    console.print(format_rolls(tree))
    for line in format_generation_rows(tree):
        console.print(line)
    console.print(build_measurements_table(tree))


@app.command()
def generate(
    ctx: typer.Context,
    n: Optional[int] = N_OPTION,
    m: Optional[int] = M_OPTION,
    rng: Optional[RngStrategy] = RNG_OPTION,
    max_depth: Optional[int] = DEPTH_OPTION,
    name: str = typer.Option(DEFAULT_TREE_NAME, "--name", help="Name of the saved tree"),
    show: bool = typer.Option(False, "--show", help="Also render the full tree"),
) -> None:
    """Generate a tree and save it as the current tree."""
    settings = _effective_settings(ctx, n=n, m=m, rng=rng, max_depth=max_depth)
    _print_advisories(settings)

    try:
        tree = generate_tree(settings.n, settings.m, settings.rng, max_depth=settings.max_depth)
    except GenerationLimitError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    path = resolve_tree_path(name)
    save_tree(path, tree, settings.n, settings.m, settings.rng)

    console.print("[green]Tree generated[/green]")
    _render_tree(tree, show_tree=show)
    console.print(f"Saved: {path}")


@app.command()
def show(
    name: str = typer.Argument(DEFAULT_TREE_NAME, help="Saved tree name or path"),
    no_tree: bool = typer.Option(False, "--no-tree", help="Skip the full tree rendering"),
) -> None:
    """Print a saved tree, its per-generation rolls and its measurements."""
    try:
        resolved = find_tree_file(name)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    document, tree = load_or_exit(load_tree, resolved, console=console)
    console.print(f"[bold]Tree[/bold] n={document.n} m={document.m} rng={document.rng.value} ({document.created_at})")
    _render_tree(tree, show_tree=not no_tree)


def _load_previous_stats(path: str) -> Optional[SampleStats]:
    if not os.path.exists(path):
        return None
    try:
        return SampleStats.model_validate(read_yaml_file(path))
    except (LoaderError, ValidationError) as exc:
        logger.warning("Ignoring unreadable previous stats at %s: %s", path, exc)
        return None


@app.command()
def stats(
    ctx: typer.Context,
    n: Optional[int] = N_OPTION,
    m: Optional[int] = M_OPTION,
    rng: Optional[RngStrategy] = RNG_OPTION,
    sample_size: Optional[int] = SAMPLE_OPTION,
    max_depth: Optional[int] = DEPTH_OPTION,
) -> None:
    """Collect leaf-count statistics over many generated trees."""
    settings = _effective_settings(ctx, n=n, m=m, rng=rng, sample_size=sample_size, max_depth=max_depth)
    _print_advisories(settings)

    try:
        current = sample_stats(
            settings.n,
            settings.m,
            settings.rng,
            settings.sample_size,
            max_depth=settings.max_depth,
        )
    except GenerationLimitError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    path = last_stats_path()
    previous = _load_previous_stats(path)
    write_yaml_file(path, current.model_dump())

    console.print(f"Generated [blue]{settings.sample_size}[/blue] samples:")
    console.print(build_stats_table(current, compare_stats(previous, current)))


@app.command("export-samples")
def export_samples(
    ctx: typer.Context,
    n: Optional[int] = N_OPTION,
    m: Optional[int] = M_OPTION,
    rng: Optional[RngStrategy] = RNG_OPTION,
    sample_size: Optional[int] = SAMPLE_OPTION,
    max_depth: Optional[int] = DEPTH_OPTION,
    output: Optional[str] = typer.Option(None, "--output", "-o", help="File name (default: <n>-<m>-x<size>.csv)"),
) -> None:
    """Generate trees and write one CSV record per tree."""
    settings = _effective_settings(ctx, n=n, m=m, rng=rng, sample_size=sample_size, max_depth=max_depth)
    _print_advisories(settings)

    path = resolve_export_path(output or default_batch_filename(settings.n, settings.m, settings.sample_size))
    try:
        written = write_sample_batch(
            path,
            settings.n,
            settings.m,
            settings.rng,
            settings.sample_size,
            max_depth=settings.max_depth,
        )
    except (ExportError, GenerationLimitError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    console.print(f"Wrote [blue]{written}[/blue] samples to file [blue]{path}[/blue]")


@app.command("export-tree")
def export_tree(
    name: str = typer.Argument(DEFAULT_TREE_NAME, help="Saved tree name or path"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="File name (default: <leaves>-<branches>-<nodes>-<generations>.csv)"
    ),
) -> None:
    """Write a saved tree as a single CSV record."""
    try:
        resolved = find_tree_file(name)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    _document, tree = load_or_exit(load_tree, resolved, console=console)
    path = resolve_export_path(output or default_tree_filename(tree))
    try:
        write_tree(path, tree)
    except ExportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    console.print(f"Wrote current tree to file [blue]{path}[/blue]")


@app.command("settings")
def show_settings(ctx: typer.Context) -> None:
    """Show the effective settings and any advisories."""
    settings = _effective_settings(ctx)
    console.print(build_settings_table(settings))
    _print_advisories(settings)


__all__ = ["app"]
