from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple, Union

@dataclass(frozen=True)
class LeafNode:
    id: str
    label: str
    original_value: float
    value: float
    variance: float = 0.0

@dataclass(frozen=True)
class ParentNode:
    id: str
    label: str
    original_value: float
    value: float
    variance: float = 0.0
    children: Tuple[LeafNode, ...] = ()

Node = Union[LeafNode, ParentNode]
Tree = Tuple[Node, ...]

def _baseline(entry: Mapping[str, Any]) -> float:
    for k in ("original_value", "originalValue"):
        if k in entry and entry[k] is not None:
            return float(entry[k])
    raise ValueError(f"Ledger entry '{entry.get('id')}' is missing 'original_value'.")

def _entry_id(entry: Mapping[str, Any], seen: Set[str]) -> str:
    rid = entry.get("id")
    if rid is None or str(rid).strip() == "":
        raise ValueError(f"Ledger entry without an 'id': {dict(entry)}")
    rid = str(rid)
    if rid in seen:
        raise ValueError(f"Duplicate ledger id '{rid}'. Ids must be unique across parents and children.")
    seen.add(rid)
    return rid

def _make_leaf(entry: Mapping[str, Any], seen: Set[str]) -> LeafNode:
    rid = _entry_id(entry, seen)
    base = _baseline(entry)
    return LeafNode(id=rid, label=str(entry.get("label", rid)), original_value=base, value=base)

def create_tree(initial_config: Iterable[Mapping[str, Any]]) -> Tree:
    """
    Build a two-level tree from an ordered config of
    {id, label, original_value, children?} entries.

    Every node starts at value == original_value, variance == 0.
    A child that declares its own children is rejected (depth is fixed at 2).
    """
    seen: Set[str] = set()
    roots: List[Node] = []
    for entry in initial_config:
        kids = entry.get("children")
        if not kids:
            # absent or empty -> childless root
            roots.append(_make_leaf(entry, seen))
            continue
        rid = _entry_id(entry, seen)
        base = _baseline(entry)
        children: List[LeafNode] = []
        for c in kids:
            if c.get("children"):
                raise ValueError(f"Child '{c.get('id')}' under '{rid}' declares children; only two levels are supported.")
            children.append(_make_leaf(c, seen))
        roots.append(ParentNode(id=rid, label=str(entry.get("label", rid)),
                                original_value=base, value=base, children=tuple(children)))
    return tuple(roots)

def iter_nodes(tree: Tree):
    """Yield (node, parent_id) in display order: each root, then its children."""
    for root in tree:
        yield root, None
        if isinstance(root, ParentNode):
            for child in root.children:
                yield child, root.id

def find_node(tree: Tree, row_id: str) -> Optional[Node]:
    for node, _ in iter_nodes(tree):
        if node.id == row_id:
            return node
    return None

def parent_of(tree: Tree, row_id: str) -> Optional[ParentNode]:
    for root in tree:
        if isinstance(root, ParentNode) and any(c.id == row_id for c in root.children):
            return root
    return None
