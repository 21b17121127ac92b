"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from rich.table import Table
from rich.text import Text
from rich.tree import Tree as RichTree

from branching.core.stats import SampleStats, StatChange
from branching.core.tree.encoding import FIRST_ENCODED_GENERATION, generation_rows
from branching.core.tree.measurement import measure
from branching.core.tree.models import Branch, Tree

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from branching.config import Settings

# Indexed by generation % 8, following the 8 basic terminal colours
GENERATION_STYLES = ["bright_black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]

DIRECTION_STYLES = {"down": "red", "up": "green", "same": "blue"}
DIRECTION_ARROWS = {"down": "↓", "up": "↑", "same": "="}

STAT_LABELS = {
    "min": "Min",
    "median": "Median",
    "max": "Max",
    "mean": "Average",
    "stddev": "σ",
}


def generation_style(generation: int) -> str:
    return GENERATION_STYLES[generation % len(GENERATION_STYLES)]


def build_measurements_table(tree: Tree, title: Optional[str] = None) -> Table:
    stats = measure(tree)
    table = Table(title=title)
    table.add_column("Leaves", justify="right")
    table.add_column("Branches", justify="right")
    table.add_column("Nodes", justify="right")
    table.add_column("Generations", justify="right")
    table.add_row(str(stats.leaves), str(stats.branches), str(stats.nodes), str(stats.generations))
    return table


def format_rolls(tree: Tree) -> Text:
    """The structural encoding, each generation in its own colour."""
    text = Text("Rolls: ")
    for gen, row in enumerate(generation_rows(tree)):
        if gen >= FIRST_ENCODED_GENERATION:
            text.append(row, style=generation_style(gen))
    return text


def format_generation_rows(tree: Tree) -> List[Text]:
    """One ``Gen i: bits`` line per generation, generation numbers centred."""
    rows = generation_rows(tree)
    width = len(str(len(rows) - 1))
    lines: List[Text] = []
    for gen, row in enumerate(rows):
        line = Text(f"Gen {gen:^{width}}: ")
        line.append(row, style=generation_style(gen))
        lines.append(line)
    return lines


def build_tree_view(tree: Tree) -> RichTree:
    """Rich tree rendering with Root/Branch/Leaf labels, built without recursion."""
    if not isinstance(tree, Branch):
        return RichTree("Leaf")

    view = RichTree("[bold]Root[/bold]", guide_style="dim")
    stack: List[Tuple[Branch, RichTree]] = [(tree, view)]
    while stack:
        node, parent = stack.pop()
        for child in (node.left, node.right):
            if isinstance(child, Branch):
                stack.append((child, parent.add("Branch")))
            else:
                parent.add("[green]Leaf[/green]")
    return view


def build_stats_table(stats: SampleStats, changes: Dict[str, StatChange]) -> Table:
    table = Table(title=f"Tree stats ({stats.sample_size} samples)")
    table.add_column("Statistic")
    table.add_column("Value", justify="right")
    table.add_column("Change", justify="right")

    for name, label in STAT_LABELS.items():
        change = changes[name]
        style = DIRECTION_STYLES[change.direction]
        arrow = DIRECTION_ARROWS[change.direction]
        table.add_row(
            label,
            f"[{style}]{getattr(stats, name)}[/{style}]",
            f"[{style}]{arrow}{change.delta}[/{style}]",
        )
    return table


def build_settings_table(settings: "Settings") -> Table:
    table = Table(title="Current settings")
    table.add_column("Setting")
    table.add_column("Value")
    rng_style = "green" if settings.rng.value == "fast" else "magenta"
    table.add_row("Branch P", f"{settings.probability} ({settings.n}/{settings.m})")
    table.add_row("n", str(settings.n))
    table.add_row("m", str(settings.m))
    table.add_row("RNG strategy", f"[{rng_style}]{settings.rng.value.capitalize()}[/{rng_style}]")
    table.add_row("Sample size", str(settings.sample_size))
    table.add_row("Max depth", "none" if settings.max_depth is None else str(settings.max_depth))
    table.add_row("Colours", "enabled" if settings.colour else "disabled")
    return table


__all__ = [
    "GENERATION_STYLES",
    "generation_style",
    "build_measurements_table",
    "format_rolls",
    "format_generation_rows",
    "build_tree_view",
    "build_stats_table",
    "build_settings_table",
]
