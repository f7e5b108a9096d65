from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable, List

from src.alloc.model.structures import ParentNode, Tree, Node
from src.alloc.model.variance import compute_variance
from src.alloc.model.reconciliation.aggregate import aggregate_parent

logger = logging.getLogger(__name__)

def _percentage_rule(percentage: float) -> Callable[[float], float]:
    return lambda current: current + (current * percentage) / 100

def _value_rule(new_value: float) -> Callable[[float], float]:
    return lambda current: new_value

def _set_value(node: Node, new_value: float) -> Node:
    return replace(node, value=new_value, variance=compute_variance(node.original_value, new_value))

def _apply(tree: Tree, row_id: str, rule: Callable[[float], float]) -> Tree:
    """
    Single pass over the roots. A root id match applies the rule to the root's own
    value and leaves its children alone; a child id match applies it to that child
    and re-aggregates the parent. Roots that do not match are reused as-is, and
    no match anywhere returns the input tree object.
    """
    out: List[Node] = []
    hit = False
    for root in tree:
        if hit:
            out.append(root)
            continue
        if root.id == row_id:
            out.append(_set_value(root, rule(root.value)))
            hit = True
            logger.debug("Adjusted root '%s': %s -> %s", row_id, root.value, out[-1].value)
            continue
        if isinstance(root, ParentNode):
            idx = next((i for i, c in enumerate(root.children) if c.id == row_id), None)
            if idx is not None:
                child = root.children[idx]
                new_child = _set_value(child, rule(child.value))
                children = root.children[:idx] + (new_child,) + root.children[idx + 1:]
                new_root = aggregate_parent(replace(root, children=children))
                out.append(new_root)
                hit = True
                logger.debug("Adjusted child '%s' of '%s': %s -> %s; parent now %s",
                             row_id, root.id, child.value, new_child.value, new_root.value)
                continue
        out.append(root)
    if not hit:
        logger.debug("No ledger row with id '%s'; tree unchanged.", row_id)
        return tree
    return tuple(out)

def apply_percentage(tree: Tree, row_id: str, percentage: float) -> Tree:
    return _apply(tree, row_id, _percentage_rule(percentage))

def apply_value(tree: Tree, row_id: str, new_value: float) -> Tree:
    return _apply(tree, row_id, _value_rule(new_value))
