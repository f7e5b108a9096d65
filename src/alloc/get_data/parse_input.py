from __future__ import annotations
import re
from typing import Dict, Optional

from src.alloc.model.ledger import Ledger
from src.alloc.model.structures import Tree

# Leading float prefix, parseFloat-style: "12.5abc" -> 12.5, ".5" -> 0.5, "1e2" -> 100, "-Infinity" -> -inf
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

def parse_amount(x) -> float:
    """Parse user-entered text to float; empty or unparseable input becomes 0.0."""
    if x is None: return 0.0
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return float(x)
    s = str(x).strip()
    if s == "": return 0.0
    m = _FLOAT_PREFIX.match(s)
    if m is None: return 0.0
    return float(m.group(0))

class PendingInputs:
    """Unconfirmed per-row text, kept apart from the committed ledger."""

    def __init__(self):
        self._text: Dict[str, str] = {}

    def set(self, row_id: str, text: str) -> None:
        self._text[row_id] = text

    def get(self, row_id: str) -> str:
        return self._text.get(row_id, "")

    def commit(self, ledger: Ledger, row_id: str, mode: str) -> Tree:
        # text stays pending after a commit; the same amount can be reapplied
        amount = parse_amount(self._text.get(row_id))
        if mode == "pct":
            return ledger.apply_percentage(row_id, amount)
        if mode == "val":
            return ledger.apply_value(row_id, amount)
        raise ValueError(f"Unknown allocation mode '{mode}'. Valid modes: ['pct', 'val']")

    def parsed(self, row_id: str) -> Optional[float]:
        if row_id not in self._text:
            return None
        return parse_amount(self._text[row_id])
