"""
CSV export of tree records.

Record layout (one line per tree, ``\\n`` terminated):

    index,leaves,branches,nodes,generations,rolls

Batch exports start with the header ``0,leaves,branches,nodes,generations,rolls``
and number trees from 1; a single-tree export is one record without the index.
"""

from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import List, Optional

from branching.core.errors import GenerationLimitError, InvalidParameterError
from branching.core.randomness import RandomnessLike, as_randomness
from branching.core.tree.encoding import encode
from branching.core.tree.generator import check_parameters, generate_tree
from branching.core.tree.measurement import measure
from branching.core.tree.models import Tree
from branching.utils.logging import log_calls

logger = logging.getLogger(__name__)

BATCH_HEADER = ["0", "leaves", "branches", "nodes", "generations", "rolls"]
CSV_SUFFIX = ".csv"


class ExportError(RuntimeError):
    """Wraps file-system failures during export with the target path."""

    def __init__(self, file_path: str, cause: Exception):
        self.file_path = file_path
        self.cause = cause
        super().__init__(f"Error writing file {file_path}: {cause}")


def tree_record(tree: Tree, index: Optional[int] = None) -> List[str]:
    stats = measure(tree)
    fields = [stats.leaves, stats.branches, stats.nodes, stats.generations, encode(tree)]
    if index is not None:
        fields.insert(0, index)
    return [str(value) for value in fields]


def with_csv_suffix(name: str) -> str:
    return name if name.endswith(CSV_SUFFIX) else f"{name}{CSV_SUFFIX}"


def default_batch_filename(n: int, m: int, sample_size: int) -> str:
    return f"{n}-{m}-x{sample_size}{CSV_SUFFIX}"


def default_tree_filename(tree: Tree) -> str:
    stats = measure(tree)
    return f"{stats.leaves}-{stats.branches}-{stats.nodes}-{stats.generations}{CSV_SUFFIX}"


def _writer(handle):
    return csv.writer(handle, lineterminator="\n")


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.debug("Could not remove partial export %s: %s", path, exc)


@log_calls()
def write_tree(path: str, tree: Tree) -> str:
    """Write one tree record (no index, no header) to ``path``."""
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            _writer(f).writerow(tree_record(tree))
    except OSError as exc:
        raise ExportError(path, exc) from exc
    return path


@log_calls(expected=(GenerationLimitError,))
def write_sample_batch(
    path: str,
    n: int,
    m: int,
    randomness: RandomnessLike,
    sample_size: int,
    *,
    max_depth: Optional[int] = None,
    truncate: bool = False,
) -> int:
    """Generate ``sample_size`` trees and write their records to ``path``.

    Records stream into a ``.part`` file that replaces ``path`` only once the
    whole batch succeeded; on failure ``path`` is left untouched.

    Returns:
        Number of records written
    """
    check_parameters(n, m)
    if sample_size <= 0:
        raise InvalidParameterError("sample_size", sample_size, "must be a positive integer")

    source = as_randomness(randomness)
    partial = f"{path}.part"
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(partial, "w", encoding="utf-8", newline="") as f:
            writer = _writer(f)
            writer.writerow(BATCH_HEADER)
            for index in range(1, sample_size + 1):
                tree = generate_tree(n, m, source, max_depth=max_depth, truncate=truncate)
                writer.writerow(tree_record(tree, index))
        # The export name only ever holds a complete batch
        os.replace(partial, path)
    except OSError as exc:
        _discard(partial)
        raise ExportError(path, exc) from exc
    except BaseException:
        _discard(partial)
        raise

    logger.info("Wrote %d tree record(s) to %s", sample_size, path)
    return sample_size


__all__ = [
    "BATCH_HEADER",
    "ExportError",
    "tree_record",
    "with_csv_suffix",
    "default_batch_filename",
    "default_tree_filename",
    "write_tree",
    "write_sample_batch",
]
