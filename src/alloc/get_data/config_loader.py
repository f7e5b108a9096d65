from __future__ import annotations
import os
from typing import Any, Dict, List

import pandas as pd
import yaml

# Seed ledger of the original allocation sheet
DEFAULT_LEDGER_CONFIG: List[Dict[str, Any]] = [
    {"id": "electronics", "label": "Electronics", "original_value": 1500, "children": [
        {"id": "phones",  "label": "Phones",  "original_value": 800},
        {"id": "laptops", "label": "Laptops", "original_value": 700},
    ]},
    {"id": "furniture", "label": "Furniture", "original_value": 1000, "children": [
        {"id": "tables", "label": "Tables", "original_value": 300},
        {"id": "chairs", "label": "Chairs", "original_value": 700},
    ]},
]

_CSV_COLUMNS = ["id", "label", "original_value", "parent_id"]

def load_yaml_config(path: str) -> List[Dict[str, Any]]:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    if isinstance(cfg, dict):
        cfg = cfg.get("nodes")
    if not isinstance(cfg, list):
        raise ValueError(f"{path}: expected a list of nodes (or a top-level 'nodes:' list).")
    return cfg

def load_csv_config(path: str) -> List[Dict[str, Any]]:
    """
    Flat CSV -> nested config. Blank parent_id marks a root; file order is kept.

    Expected columns: ['id','label','original_value','parent_id'] ('label' optional).
    """
    df = pd.read_csv(path, dtype=str)
    missing = [c for c in ("id", "original_value") if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing column(s) {missing}. Expected {_CSV_COLUMNS}.")
    if "parent_id" not in df.columns:
        df["parent_id"] = None
    if "label" not in df.columns:
        df["label"] = df["id"]
    df["label"] = df["label"].fillna(df["id"])

    roots: Dict[str, Dict[str, Any]] = {}
    order: List[str] = []
    pending: List[Dict[str, Any]] = []
    for i, r in enumerate(df.itertuples(index=False), start=2):
        if pd.isna(r.id) or str(r.id).strip() == "":
            raise ValueError(f"{path}: row {i} is missing 'id'.")
        if pd.isna(r.original_value) or str(r.original_value).strip() == "":
            raise ValueError(f"{path}: row {i} ('{str(r.id).strip()}') is missing 'original_value'.")
        entry = {"id": str(r.id).strip(), "label": str(r.label), "original_value": float(r.original_value)}
        parent = r.parent_id.strip() if isinstance(r.parent_id, str) else ""
        if not parent:
            roots[entry["id"]] = entry
            order.append(entry["id"])
        else:
            pending.append({**entry, "_parent": parent})
    for e in pending:
        parent = e.pop("_parent")
        if parent not in roots:
            raise ValueError(f"{path}: row '{e['id']}' references unknown root parent_id '{parent}'.")
        roots[parent].setdefault("children", []).append(e)
    return [roots[k] for k in order]

def load_ledger_config(path: str) -> List[Dict[str, Any]]:
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    ext = os.path.splitext(path)[1].lower()
    if ext in (".yaml", ".yml"):
        return load_yaml_config(path)
    if ext == ".csv":
        return load_csv_config(path)
    raise ValueError(f"Unsupported config extension '{ext}' for {path}; use .yaml/.yml or .csv")
