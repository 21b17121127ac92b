"""
Binary tree data model.

A tree is either:
- Leaf: terminal node, no payload
- Branch: internal node owning exactly two subtrees (left, right)

Trees are immutable and built in one shot by the generator. Generated trees
always have a Branch root whose two children are Branches as well:

    Root
    ├── Branch
    │   ├── <generation 2>
    │   └── <generation 2>
    └── Branch
        ├── <generation 2>
        └── <generation 2>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Leaf:
    """Terminal node."""

    @property
    def is_leaf(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "Leaf()"


@dataclass(frozen=True, slots=True, repr=False)
class Branch:
    """Internal node with two children."""

    left: "Tree"
    right: "Tree"

    @property
    def is_leaf(self) -> bool:
        return False

    def __repr__(self) -> str:
        # Children are elided so deep trees never recurse here
        return f"Branch(left={type(self.left).__name__}, right={type(self.right).__name__})"


Tree = Union[Leaf, Branch]

LEAF = Leaf()


def forced_root(a: Tree, b: Tree, c: Tree, d: Tree) -> Branch:
    """Assemble the two forced top levels around four generation-2 subtrees."""
    return Branch(Branch(a, b), Branch(c, d))


__all__ = ["Leaf", "Branch", "Tree", "LEAF", "forced_root"]
