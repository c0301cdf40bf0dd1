from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteCoinAdapter, SQLiteLedgerStore, open_sqlite_ledger
from src.components.ledger import LedgerService
from src.rules.models import Rules


def resolve_db_path(rules: Rules) -> str:
    """Database path from the data-dir env var named in ops rules."""
    data_dir = os.environ.get(rules.ops.data_dir_env, rules.ops.default_data_dir)
    return str(Path(data_dir) / rules.ops.db_filename)


@dataclass
class LedgerContext:
    ledger_service: LedgerService
    store: SQLiteLedgerStore
    coins: SQLiteCoinAdapter
    rules: Rules
    db_path: str

    @classmethod
    def create(cls, db_path: str, rules: Rules) -> LedgerContext:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        SQLiteMigrator(db_path).run_migrations()

        store, coins = open_sqlite_ledger(db_path)
        service = LedgerService.from_rules(rules, store=store, coins=coins)
        return cls(
            ledger_service=service,
            store=store,
            coins=coins,
            rules=rules,
            db_path=db_path,
        )

    def close(self) -> None:
        self.coins.close()
