import math

import pytest

from src.alloc.get_data.parse_input import PendingInputs, parse_amount


@pytest.mark.parametrize("text,expected", [
    ("10", 10.0),
    ("12.5abc", 12.5),
    (" -3", -3.0),
    ("+4", 4.0),
    ("1e2", 100.0),
    (".5", 0.5),
    ("7.", 7.0),
    ("", 0.0),
    ("   ", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    ("-", 0.0),
    (42, 42.0),
    (2.5, 2.5),
    ("Infinity", math.inf),
    ("-Infinity", -math.inf),
    ("+Infinity and beyond", math.inf),
    ("infinity", 0.0),
])
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


def test_pending_inputs_commit(ledger):
    pending = PendingInputs()
    pending.set("phones", "10")
    pending.set("tables", "450")
    assert ledger.get_node("phones").value == 800
    pending.commit(ledger, "phones", "pct")
    pending.commit(ledger, "tables", "val")
    assert ledger.get_node("electronics").value == pytest.approx(1580)
    assert ledger.get_node("furniture").value == pytest.approx(1150)
    assert pending.get("phones") == "10"


def test_pending_inputs_blank_row_applies_zero(ledger):
    pending = PendingInputs()
    assert pending.get("chairs") == ""
    assert pending.parsed("chairs") is None
    pending.commit(ledger, "chairs", "val")
    assert ledger.get_node("chairs").value == 0.0
    assert ledger.get_node("furniture").value == pytest.approx(300)


def test_pending_inputs_bad_mode(ledger):
    with pytest.raises(ValueError, match="mode"):
        PendingInputs().commit(ledger, "phones", "double")
