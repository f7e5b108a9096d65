from __future__ import annotations
from dataclasses import replace
from typing import Dict

from src.alloc.model.structures import ParentNode, Tree
from src.alloc.model.variance import compute_variance

def aggregate_parent(root: ParentNode) -> ParentNode:
    if not isinstance(root, ParentNode):
        raise TypeError(f"aggregate_parent expects a ParentNode, got {type(root).__name__} '{getattr(root, 'id', root)}'")
    total = sum(c.value for c in root.children)
    return replace(root, value=total, variance=compute_variance(root.original_value, total))

def grand_total(tree: Tree) -> float:
    # recomputed on every read, never cached
    return sum((r.value for r in tree), 0.0)

def aggregation_gaps(tree: Tree) -> Dict[str, float]:
    """
    Parent value minus the sum of its children, per parent id.

    Non-zero only after a direct edit on a parent row, which leaves its
    children as they were until the next child edit re-aggregates it.
    """
    return {r.id: r.value - sum(c.value for c in r.children)
            for r in tree if isinstance(r, ParentNode)}
