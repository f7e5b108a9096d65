import pytest

from src.alloc.get_data.config_loader import DEFAULT_LEDGER_CONFIG
from src.alloc.model.structures import create_tree
from src.alloc.model.ledger import Ledger


@pytest.fixture
def seed_tree():
    return create_tree(DEFAULT_LEDGER_CONFIG)


@pytest.fixture
def ledger():
    return Ledger.from_config(DEFAULT_LEDGER_CONFIG)
