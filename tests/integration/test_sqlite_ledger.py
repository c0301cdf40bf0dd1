"""
Integration tests for the SQLite-backed ledger.

Covers persistence across reopen, u64 amounts, and rollback of coin
movements and ledger writes sharing one connection.
"""

import sqlite3
from pathlib import Path

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import open_sqlite_ledger
from src.app_shell.context import LedgerContext
from src.components.ledger import LedgerService
from src.components.registry import LedgerConfig
from src.domain.entities import MAX_U64, Coin
from src.domain.errors import CampaignCompleted, InsufficientFunds

ADMIN = "0xad"
ALICE = "0xa11ce"
BOB = "0xb0b"


def test_state_survives_reopen(test_ctx: LedgerContext, rules) -> None:
    service = test_ctx.ledger_service
    test_ctx.coins.mint(BOB, 1_000)
    service.initialize(ADMIN)
    service.create_campaign(ALICE, "Flood", "help", 600)
    service.donate(BOB, 0, 700)
    db_path = test_ctx.db_path
    test_ctx.close()

    reopened = LedgerContext.create(db_path, rules)
    try:
        view = reopened.ledger_service.get_campaign(0)
        assert view.as_tuple() == (ALICE, b"Flood", b"help", 600, 700, True, False)
        assert reopened.ledger_service.get_treasury_balance().total == 700
        assert reopened.coins.balance_of(BOB) == 300
    finally:
        reopened.close()


def test_u64_amounts_round_trip(test_ctx: LedgerContext) -> None:
    service = test_ctx.ledger_service
    test_ctx.coins.mint(BOB, MAX_U64)
    service.initialize(ADMIN)
    service.create_campaign(ALICE, "Big", "very big", MAX_U64)
    service.donate(BOB, 0, MAX_U64)

    view = service.get_campaign(0)
    assert view.donated == MAX_U64
    assert view.completed is True


def test_abort_rolls_back_shared_transaction(test_ctx: LedgerContext) -> None:
    service = test_ctx.ledger_service
    test_ctx.coins.mint(BOB, 100)
    service.initialize(ADMIN)
    service.create_campaign(ALICE, "Flood", "help", 50)

    with pytest.raises(InsufficientFunds):
        service.donate(BOB, 0, 101)
    service.donate(BOB, 0, 50)
    with pytest.raises(CampaignCompleted):
        service.donate(BOB, 0, 10)

    assert test_ctx.coins.balance_of(BOB) == 50
    assert service.get_campaign(0).donated == 50


def test_failure_after_debit_rolls_back(test_data_dir: str) -> None:
    db_path = str(Path(test_data_dir) / "ledger.db")
    SQLiteMigrator(db_path).run_migrations()
    store, coins = open_sqlite_ledger(db_path)
    service = LedgerService(store=store, coins=coins, config=LedgerConfig(admin_address=ADMIN))
    coins.mint(BOB, 100)
    service.initialize(ADMIN)
    service.create_campaign(ALICE, "Flood", "help", 100)

    def broken_credit(address: str, coin: Coin) -> None:
        raise RuntimeError("credit failed")

    service.donate(BOB, 0, 100)
    coins.credit = broken_credit  # type: ignore[method-assign]
    with pytest.raises(RuntimeError):
        service.withdraw(ALICE, 0)

    assert service.get_campaign(0).withdrawn is False
    assert service.get_treasury_balance().total == 100
    coins.close()


def test_per_campaign_partitions_persist(test_data_dir: str) -> None:
    db_path = str(Path(test_data_dir) / "ledger.db")
    SQLiteMigrator(db_path).run_migrations()
    store, coins = open_sqlite_ledger(db_path)
    config = LedgerConfig(admin_address=ADMIN, treasury_mode="per_campaign")
    service = LedgerService(store=store, coins=coins, config=config)
    coins.mint(BOB, 100)
    service.initialize(ADMIN)
    service.create_campaign(ALICE, "A", "a", 10)
    service.create_campaign(ALICE, "B", "b", 10)
    service.donate(BOB, 1, 7)

    state = store.load()
    assert state.treasury is not None
    assert state.treasury.mode == "per_campaign"
    assert state.treasury.partitions[1].value == 7
    assert service.get_treasury_balance(1).partition == 7
    coins.close()


def test_migrations_are_idempotent(test_data_dir: str) -> None:
    db_path = str(Path(test_data_dir) / "ledger.db")

    first = SQLiteMigrator(db_path).run_migrations()
    second = SQLiteMigrator(db_path).run_migrations()

    assert first == ["0001_ledger.sql"]
    assert second == []

    conn = sqlite3.connect(db_path)
    tables = {
        row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    conn.close()
    assert {"ledger_meta", "campaigns", "treasury_partitions", "coin_accounts"} <= tables
