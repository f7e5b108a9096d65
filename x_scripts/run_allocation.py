#!/usr/bin/env python
from __future__ import annotations
import os, argparse, logging
from typing import List, Optional, Tuple

import pandas as pd

from src.alloc.get_data.config_loader import DEFAULT_LEDGER_CONFIG, load_ledger_config
from src.alloc.get_data.parse_input import parse_amount
from src.alloc.model.ledger import Ledger
from src.alloc.model.reconciliation.aggregate import aggregation_gaps
from src.alloc.model.structures import parent_of
from src.alloc.insights.ledger_table import ledger_summary

MODES = ["pct", "val"]

def parse_op(spec: str) -> Tuple[str, str, float]:
    """'phones:pct:10' -> ('phones', 'pct', 10.0). The amount goes through parse_amount."""
    parts = spec.split(":", 2)
    if len(parts) != 3:
        raise ValueError(f"Bad --op '{spec}'; expected ROW:MODE:AMOUNT")
    row_id, mode, raw = parts
    if mode not in MODES:
        raise ValueError(f"Bad --op '{spec}'; MODE must be one of {MODES}")
    return row_id, mode, parse_amount(raw)

def render_table(summary: pd.DataFrame) -> str:
    d = summary.copy()
    d["Label"] = [("-- " + l) if lvl == "child" else l for l, lvl in zip(d["label"], d["level"])]
    d["Value"] = d["value"].map(lambda v: f"{v:.2f}")
    d["Variance %"] = [
        "" if lvl == "total" else (f"{v:.2f}%" if v else "0%")
        for v, lvl in zip(d["variance"], d["level"])
    ]
    return d[["Label", "Value", "Variance %"]].to_string(index=False)

def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=None, help="Ledger config (.yaml/.yml or .csv); default seed if omitted")
    ap.add_argument("--op", action="append", default=[], help="ROW:MODE:AMOUNT with MODE in pct|val (repeatable)")
    ap.add_argument("--out_csv", default=None, help="Optional summary CSV path")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    cfg = load_ledger_config(args.config) if args.config else DEFAULT_LEDGER_CONFIG
    ledger = Ledger.from_config(cfg)
    print(f"[Ledger] {len(ledger.get_tree())} root rows loaded")

    for spec in args.op:
        row_id, mode, amount = parse_op(spec)
        if row_id not in ledger:
            print(f"[Skip] unknown row '{row_id}'")
            continue
        if mode == "pct":
            ledger.apply_percentage(row_id, amount)
        else:
            ledger.apply_value(row_id, amount)
        parent = parent_of(ledger.get_tree(), row_id)
        rollup = f" -> {parent.id} {parent.value:.2f}" if parent is not None else ""
        print(f"[Apply] {row_id} {mode} {amount:g}{rollup}")

    stale = {k: v for k, v in aggregation_gaps(ledger.get_tree()).items() if abs(v) > 1e-9}
    for k, v in stale.items():
        print(f"[Diag] '{k}' differs from its children's sum by {v:,.2f}")

    summary = ledger_summary(ledger.get_tree())
    print(render_table(summary))
    print(f"Grand Total: {ledger.grand_total():.2f}")

    if args.out_csv:
        out_dir = os.path.dirname(args.out_csv)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        summary.to_csv(args.out_csv, index=False)
        print("Wrote", args.out_csv)
    return ledger

if __name__ == "__main__":
    main()
