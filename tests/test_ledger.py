import sys
import threading

import pytest

from src.alloc.insights.ledger_table import tree_to_frame
from src.alloc.model.ledger import Ledger


def test_scenario_percentage_on_child(ledger):
    tree = ledger.apply_percentage("phones", 10)
    assert tree is ledger.get_tree()
    assert ledger.get_node("phones").value == pytest.approx(880)
    assert ledger.get_node("electronics").value == pytest.approx(1580)
    assert f"{ledger.grand_total():.2f}" == "2580.00"


def test_scenario_value_on_child(ledger):
    ledger.apply_value("tables", 450)
    assert ledger.get_node("furniture").variance == pytest.approx(15.0)
    assert f"{ledger.grand_total():.2f}" == "2650.00"


def test_scenario_percentage_on_parent(ledger):
    ledger.apply_percentage("electronics", 5)
    assert ledger.get_node("electronics").value == pytest.approx(1575)
    assert ledger.get_node("phones").value == 800
    assert ledger.get_node("laptops").value == 700


def test_unknown_id_keeps_snapshot(ledger):
    before = ledger.get_tree()
    assert ledger.apply_percentage("nonexistent", 10) is before
    assert "nonexistent" not in ledger
    assert "chairs" in ledger


def test_grand_total_is_recomputed(ledger):
    assert ledger.grand_total() == pytest.approx(2500)
    assert ledger.grand_total() == ledger.grand_total()
    ledger.apply_value("chairs", 0)
    assert ledger.grand_total() == pytest.approx(1800)


def test_old_snapshot_unchanged(ledger):
    before = ledger.get_tree()
    ledger.apply_value("laptops", 1)
    assert before[0].value == 1500
    assert ledger.get_tree()[0].value == pytest.approx(801)


def test_concurrent_writers_serialized(ledger):
    """Each doubling must land on the snapshot left by the previous one"""
    old = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    n_threads, n_ops = 4, 60

    def double():
        for _ in range(n_ops):
            ledger.apply_percentage("phones", 100)

    try:
        threads = [threading.Thread(target=double) for _ in range(n_threads)]
        for t in threads: t.start()
        for t in threads: t.join()
    finally:
        sys.setswitchinterval(old)
    phones = ledger.get_node("phones").value
    assert phones == 800 * 2 ** (n_threads * n_ops)
    assert ledger.get_node("electronics").value == phones + 700


def test_table_from_snapshot(ledger):
    ledger.apply_value("tables", 450)
    df = tree_to_frame(ledger.get_tree())
    assert df["id"].tolist() == ["electronics", "phones", "laptops", "furniture", "tables", "chairs"]
    assert df.set_index("id").loc["furniture", "value"] == pytest.approx(1150)


def test_empty_ledger():
    ledger = Ledger.from_config([])
    assert ledger.get_tree() == ()
    assert ledger.grand_total() == 0.0
    assert tree_to_frame(ledger.get_tree()).empty
