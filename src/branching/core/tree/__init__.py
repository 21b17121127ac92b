"""
Binary branching trees.

Components:
- Leaf / Branch: Immutable tree nodes
- generate_tree: The stochastic branching process
- count_leaves / count_branches / count_nodes / max_generation: Measurements
- encode / decode / nodes_at_generation: Per-generation structural encoding

Example:
    from branching.core.tree import encode, generate_tree, measure

    tree = generate_tree(50, 100, "fast")
    print(measure(tree).leaves, encode(tree))
"""

from branching.core.tree.encoding import decode, encode, generation_rows, nodes_at_generation
from branching.core.tree.generator import (
    HIGH_PROBABILITY_THRESHOLD,
    branch_probability,
    generate_tree,
    is_high_probability,
)
from branching.core.tree.measurement import (
    TreeMeasurements,
    count_branches,
    count_leaves,
    count_nodes,
    max_generation,
    measure,
)
from branching.core.tree.models import LEAF, Branch, Leaf, Tree

__all__ = [
    "Leaf",
    "Branch",
    "Tree",
    "LEAF",
    "HIGH_PROBABILITY_THRESHOLD",
    "branch_probability",
    "is_high_probability",
    "generate_tree",
    "count_leaves",
    "count_branches",
    "count_nodes",
    "max_generation",
    "TreeMeasurements",
    "measure",
    "nodes_at_generation",
    "generation_rows",
    "encode",
    "decode",
]
