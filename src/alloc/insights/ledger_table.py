from __future__ import annotations
import numpy as np
import pandas as pd

from src.alloc.model.structures import Tree, iter_nodes
from src.alloc.model.reconciliation.aggregate import grand_total

TABLE_COLUMNS = ["id", "label", "level", "parent_id", "original_value", "value", "variance"]

def tree_to_frame(tree: Tree) -> pd.DataFrame:
    """
    One row per node in display order (root, then its children).

    Returns: ['id','label','level','parent_id','original_value','value','variance']
    """
    rows = [{
        "id": node.id,
        "label": node.label,
        "level": "root" if parent_id is None else "child",
        "parent_id": parent_id,
        "original_value": node.original_value,
        "value": node.value,
        "variance": node.variance,
    } for node, parent_id in iter_nodes(tree)]
    if not rows:
        return pd.DataFrame(columns=TABLE_COLUMNS)
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)

def ledger_summary(tree: Tree) -> pd.DataFrame:
    df = tree_to_frame(tree)
    total = pd.DataFrame([{
        "id": None, "label": "Grand Total", "level": "total", "parent_id": None,
        "original_value": np.nan, "value": grand_total(tree), "variance": np.nan,
    }], columns=TABLE_COLUMNS)
    if df.empty:
        return total
    return pd.concat([df, total], ignore_index=True)
