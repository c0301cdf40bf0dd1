import os

import pytest

from src.adapters.memory_coin import InMemoryCoinAdapter
from src.adapters.memory_store import InMemoryLedgerStore
from src.app_shell.context import LedgerContext
from src.components.ledger import LedgerService
from src.rules.models import LedgerRules, ProjectRules, Rules

ADMIN = "0xad"


@pytest.fixture
def rules() -> Rules:
    return Rules(
        project=ProjectRules(slug="relief-escrow-ledger-test", rules_version="1.0"),
        ledger=LedgerRules(admin_address=ADMIN),
    )


@pytest.fixture
def coins() -> InMemoryCoinAdapter:
    return InMemoryCoinAdapter()


@pytest.fixture
def store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def ledger_service(
    rules: Rules, store: InMemoryLedgerStore, coins: InMemoryCoinAdapter
) -> LedgerService:
    """Uninitialized in-memory ledger."""
    return LedgerService.from_rules(rules, store=store, coins=coins)


@pytest.fixture
def test_data_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def test_ctx(test_data_dir, rules):
    """
    Creates a full LedgerContext backed by a temporary SQLite DB.
    """
    db_path = os.path.join(test_data_dir, "ledger.db")
    ctx = LedgerContext.create(db_path=db_path, rules=rules)
    yield ctx
    ctx.close()
