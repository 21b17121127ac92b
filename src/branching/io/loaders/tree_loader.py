"""
Persist a generated tree between CLI invocations.

A tree is stored as its structural encoding (``rolls``) next to the process
parameters and measurements; loading validates the document and decodes the
encoding back into a tree.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, Field, ValidationError

from branching.core.errors import EncodingError
from branching.core.randomness import RngStrategy
from branching.core.tree.encoding import decode, encode
from branching.core.tree.measurement import measure
from branching.core.tree.models import Tree
from branching.io.loaders.errors import LoaderError
from branching.io.loaders.yaml_loader import read_yaml_file, write_yaml_file


class TreeDocument(BaseModel):
    """On-disk form of one generated tree."""

    n: int
    m: int
    rng: RngStrategy
    leaves: int
    branches: int
    nodes: int
    generations: int
    rolls: str = Field(pattern=r"^[01]+$")
    created_at: str = Field(default_factory=lambda: datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

    @classmethod
    def from_tree(cls, tree: Tree, n: int, m: int, rng: RngStrategy) -> "TreeDocument":
        stats = measure(tree)
        return cls(
            n=n,
            m=m,
            rng=rng,
            leaves=stats.leaves,
            branches=stats.branches,
            nodes=stats.nodes,
            generations=stats.generations,
            rolls=encode(tree),
        )

    def to_tree(self) -> Tree:
        return decode(self.rolls)


def save_tree(path: str, tree: Tree, n: int, m: int, rng: RngStrategy) -> TreeDocument:
    document = TreeDocument.from_tree(tree, n, m, rng)
    write_yaml_file(path, document.model_dump(mode="json"))
    return document


def load_tree(path: str) -> Tuple[TreeDocument, Tree]:
    """Load a saved tree.

    Raises:
        LoaderError: missing file, invalid document, or rolls that do not decode
            into a tree matching the stored measurements
    """
    if not os.path.exists(path):
        raise LoaderError(path, "Tree file not found")
    data = read_yaml_file(path)
    try:
        document = TreeDocument.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid tree document", cause=exc) from exc
    try:
        tree = document.to_tree()
    except EncodingError as exc:
        raise LoaderError(path, "Corrupt tree encoding", cause=exc) from exc

    stats = measure(tree)
    stored = (document.leaves, document.branches, document.nodes, document.generations)
    if (stats.leaves, stats.branches, stats.nodes, stats.generations) != stored:
        raise LoaderError(path, "Stored measurements do not match the encoded tree")
    return document, tree
