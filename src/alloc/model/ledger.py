from __future__ import annotations
import threading
from typing import Any, Iterable, Mapping, Optional

from src.alloc.model.structures import Node, Tree, create_tree, find_node
from src.alloc.model.allocation.engine import apply_percentage, apply_value
from src.alloc.model.reconciliation.aggregate import grand_total

class Ledger:
    """
    Holds the current tree snapshot; the only writer of it.

    Each operation swaps in a new immutable snapshot under one lock, so a reader
    never sees a child edit without its parent re-aggregation.
    """

    def __init__(self, tree: Tree):
        self._tree = tree
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, initial_config: Iterable[Mapping[str, Any]]) -> "Ledger":
        return cls(create_tree(initial_config))

    def get_tree(self) -> Tree:
        return self._tree

    def get_node(self, row_id: str) -> Optional[Node]:
        return find_node(self._tree, row_id)

    def __contains__(self, row_id: str) -> bool:
        return self.get_node(row_id) is not None

    def apply_percentage(self, row_id: str, percentage: float) -> Tree:
        with self._lock:
            self._tree = apply_percentage(self._tree, row_id, percentage)
            return self._tree

    def apply_value(self, row_id: str, new_value: float) -> Tree:
        with self._lock:
            self._tree = apply_value(self._tree, row_id, new_value)
            return self._tree

    def grand_total(self) -> float:
        return grand_total(self._tree)
