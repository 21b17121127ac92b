"""
Structural encoding of tree shape, generation by generation.

Each generation row lists the nodes reached at that depth, left to right:
``1`` for a Branch, ``0`` for a Leaf. Paths that ended in a Leaf earlier
contribute nothing, so a row is as long as the number of paths still alive.

``encode`` joins the rows from generation 2 to the deepest generation;
generations 0 and 1 are the forced root structure and carry no information.
For trees with that forced root the encoding is lossless (see ``decode``).
"""

from __future__ import annotations

from typing import List, Tuple

from branching.core.errors import EncodingError
from branching.core.tree.models import LEAF, Branch, Tree, forced_root

FIRST_ENCODED_GENERATION = 2
_SYMBOLS = frozenset("01")


def _symbol(node: Tree) -> str:
    return "1" if isinstance(node, Branch) else "0"


def nodes_at_generation(tree: Tree, target: int) -> str:
    """Row of node symbols at generation ``target`` (depth-first, left to right)."""
    symbols: List[str] = []
    stack: List[Tuple[Tree, int]] = [(tree, 0)]
    while stack:
        node, gen = stack.pop()
        if gen == target:
            symbols.append(_symbol(node))
        elif isinstance(node, Branch):
            stack.append((node.right, gen + 1))
            stack.append((node.left, gen + 1))
    return "".join(symbols)


def generation_rows(tree: Tree) -> List[str]:
    """Rows for every generation from 0 to the deepest, in one breadth-first pass.

    Level order within a generation matches the left-to-right depth-first order
    used by ``nodes_at_generation``.
    """
    rows: List[str] = []
    level: List[Tree] = [tree]
    while level:
        rows.append("".join(_symbol(node) for node in level))
        level = [child for node in level if isinstance(node, Branch) for child in (node.left, node.right)]
    return rows


def encode(tree: Tree) -> str:
    return "".join(generation_rows(tree)[FIRST_ENCODED_GENERATION:])


def decode(encoding: str) -> Tree:
    """
    Rebuild a tree with the forced two-level root from its encoding.

    Generation 2 always holds four nodes; every ``1`` in a row adds two
    nodes to the next row. Reading stops once a row holds no Branch.

    Raises:
        EncodingError: unknown symbols, truncated input or trailing symbols
    """
    if not encoding:
        raise EncodingError("Empty encoding; a generated tree encodes at least 4 symbols")
    unknown = set(encoding) - _SYMBOLS
    if unknown:
        raise EncodingError(f"Encoding may only contain '0' and '1', found: {''.join(sorted(unknown))}")

    rows: List[str] = []
    pos = 0
    width = 4
    while width:
        row = encoding[pos : pos + width]
        if len(row) < width:
            raise EncodingError(
                f"Encoding ended early: generation {FIRST_ENCODED_GENERATION + len(rows)} "
                f"needs {width} symbols, {len(row)} left"
            )
        rows.append(row)
        pos += width
        width = 2 * row.count("1")
    if pos != len(encoding):
        raise EncodingError(f"{len(encoding) - pos} trailing symbol(s) after the deepest generation")

    below: List[Tree] = []
    for row in reversed(rows):
        children = iter(below)
        below = [Branch(next(children), next(children)) if symbol == "1" else LEAF for symbol in row]
    return forced_root(*below)


__all__ = [
    "FIRST_ENCODED_GENERATION",
    "nodes_at_generation",
    "generation_rows",
    "encode",
    "decode",
]
