"""Tree measurements: leaf, branch and node counts and generation depth."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from branching.core.tree.models import Branch, Leaf, Tree


def walk(tree: Tree) -> Iterator[Tuple[Tree, int]]:
    """Yield ``(node, generation)`` depth-first, left before right."""
    stack: List[Tuple[Tree, int]] = [(tree, 0)]
    while stack:
        node, gen = stack.pop()
        yield node, gen
        if isinstance(node, Branch):
            stack.append((node.right, gen + 1))
            stack.append((node.left, gen + 1))


def count_leaves(tree: Tree) -> int:
    return sum(1 for node, _ in walk(tree) if isinstance(node, Leaf))


def count_branches(tree: Tree) -> int:
    return sum(1 for node, _ in walk(tree) if isinstance(node, Branch))


def count_nodes(tree: Tree) -> int:
    return sum(1 for _ in walk(tree))


def max_generation(tree: Tree) -> int:
    """Depth of the deepest node; a bare Leaf has generation 0."""
    # Every Branch has Leaf descendants, so the deepest node is always a Leaf
    return max(gen for node, gen in walk(tree) if isinstance(node, Leaf))


@dataclass(frozen=True)
class TreeMeasurements:
    """All four measurements of one tree, gathered in a single walk."""

    leaves: int
    branches: int
    nodes: int
    generations: int


def measure(tree: Tree) -> TreeMeasurements:
    leaves = branches = generations = 0
    for node, gen in walk(tree):
        if isinstance(node, Branch):
            branches += 1
        else:
            leaves += 1
            generations = max(generations, gen)
    return TreeMeasurements(
        leaves=leaves,
        branches=branches,
        nodes=leaves + branches,
        generations=generations,
    )


__all__ = [
    "walk",
    "count_leaves",
    "count_branches",
    "count_nodes",
    "max_generation",
    "TreeMeasurements",
    "measure",
]
