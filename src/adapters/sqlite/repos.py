"""
SQLite adapters for the ledger.

SQLiteLedgerStore persists the registry and treasury; SQLiteCoinAdapter
keeps account balances. When both use the same connection (see
``open_sqlite_ledger``), a single SQLite transaction covers the coin
movements and the ledger write of one operation.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from src.adapters.memory_coin import CoinValueMixin
from src.domain.entities import Campaign, Coin, LedgerState, Registry, Treasury
from src.domain.errors import InsufficientFunds
from src.domain.policy import normalize_address, validate_amount

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def open_connection(db_path: str) -> sqlite3.Connection:
    """Connection shared across threads; callers serialize access."""
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = dict_factory
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


class SQLiteRepoBase:
    """Base class holding one long-lived connection."""

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._owns_connection = connection is None
        self._conn = connection if connection is not None else open_connection(db_path)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        if self._owns_connection:
            self._conn.close()


# -----------------------------------------------------------------------------
# Ledger Store
# -----------------------------------------------------------------------------


class SQLiteLedgerStore(SQLiteRepoBase):
    """
    LedgerStorePort backed by SQLite.

    With a shared connection, save() leaves committing to the owner of the
    surrounding transaction.
    """

    def load(self) -> LedgerState:
        conn = self._conn
        meta = conn.execute("SELECT * FROM ledger_meta WHERE id = 1").fetchone()
        if not meta:
            return LedgerState()

        rows = conn.execute("SELECT * FROM campaigns ORDER BY idx ASC").fetchall()
        campaigns = [
            Campaign(
                campaign_id=row["campaign_id"],
                owner=row["owner"],
                title=bytes(row["title"]),
                description=bytes(row["description"]),
                goal=int(row["goal"]),
                donated=int(row["donated"]),
                completed=bool(row["completed"]),
                withdrawn=bool(row["withdrawn"]),
            )
            for row in rows
        ]

        partitions = {
            row["campaign_index"]: Coin(value=int(row["balance"]))
            for row in conn.execute("SELECT * FROM treasury_partitions").fetchall()
        }

        return LedgerState(
            admin=meta["admin"],
            registry=Registry(campaigns=campaigns, counter=meta["campaign_counter"]),
            treasury=Treasury(
                mode=meta["treasury_mode"],
                pool=Coin(value=int(meta["pool"])),
                partitions=partitions,
            ),
        )

    def save(self, state: LedgerState) -> None:
        if not state.initialized:
            return
        assert state.registry is not None and state.treasury is not None

        conn = self._conn
        try:
            conn.execute(
                """
                INSERT INTO ledger_meta (id, admin, treasury_mode, pool, campaign_counter)
                VALUES (1, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    admin=excluded.admin,
                    treasury_mode=excluded.treasury_mode,
                    pool=excluded.pool,
                    campaign_counter=excluded.campaign_counter
            """,
                (
                    state.admin,
                    state.treasury.mode,
                    str(state.treasury.pool.value),
                    state.registry.counter,
                ),
            )

            for idx, campaign in enumerate(state.registry.campaigns):
                conn.execute(
                    """
                    INSERT INTO campaigns (
                        idx, campaign_id, owner, title, description,
                        goal, donated, completed, withdrawn
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(idx) DO UPDATE SET
                        donated=excluded.donated,
                        completed=excluded.completed,
                        withdrawn=excluded.withdrawn
                """,
                    (
                        idx,
                        campaign.campaign_id,
                        campaign.owner,
                        campaign.title,
                        campaign.description,
                        str(campaign.goal),
                        str(campaign.donated),
                        int(campaign.completed),
                        int(campaign.withdrawn),
                    ),
                )

            conn.execute("DELETE FROM treasury_partitions")
            for campaign_index, coin in state.treasury.partitions.items():
                conn.execute(
                    "INSERT INTO treasury_partitions (campaign_index, balance) VALUES (?, ?)",
                    (campaign_index, str(coin.value)),
                )

            if self._owns_connection:
                conn.commit()
        except Exception:
            if self._owns_connection:
                conn.rollback()
            raise

        logger.debug(f"SQLiteLedgerStore.save: campaigns={len(state.registry.campaigns)}")


# -----------------------------------------------------------------------------
# Coin Accounts
# -----------------------------------------------------------------------------


class SQLiteCoinAdapter(CoinValueMixin, SQLiteRepoBase):
    """
    TransactionalCoinPort backed by the ``coin_accounts`` table.

    Outside ``transaction()`` each debit/credit commits on its own.
    """

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        super().__init__(db_path, connection)
        self._in_transaction = False

    def _balance(self, address: str) -> int:
        row = self._conn.execute(
            "SELECT balance FROM coin_accounts WHERE address = ?", (address,)
        ).fetchone()
        return int(row["balance"]) if row else 0

    def _set_balance(self, address: str, balance: int) -> None:
        self._conn.execute(
            """
            INSERT INTO coin_accounts (address, balance) VALUES (?, ?)
            ON CONFLICT(address) DO UPDATE SET balance=excluded.balance
        """,
            (address, str(balance)),
        )
        if not self._in_transaction:
            self._conn.commit()

    def debit(self, signer: str, amount: int) -> Coin:
        validate_amount(amount, require_positive=False)
        address = normalize_address(signer)
        balance = self._balance(address)

        if balance < amount:
            raise InsufficientFunds(
                f"Account {address} holds {balance}, cannot debit {amount}"
            )

        self._set_balance(address, balance - amount)
        logger.debug(f"SQLiteCoinAdapter.debit: address={address}, amount={amount}")
        return Coin(value=amount)

    def credit(self, address: str, coin: Coin) -> None:
        address = normalize_address(address)
        self._set_balance(address, self._balance(address) + coin.value)
        logger.debug(f"SQLiteCoinAdapter.credit: address={address}, amount={coin.value}")

    @contextmanager
    def transaction(self) -> Iterator[None]:
        self._in_transaction = True
        try:
            yield
            self._conn.commit()
        except BaseException:
            self._conn.rollback()
            raise
        finally:
            self._in_transaction = False

    # --- Dev Helpers ---

    def mint(self, address: str, amount: int) -> None:
        validate_amount(amount, require_positive=False)
        self.credit(address, Coin(value=amount))

    def balance_of(self, address: str) -> int:
        return self._balance(normalize_address(address))


def open_sqlite_ledger(db_path: str) -> tuple[SQLiteLedgerStore, SQLiteCoinAdapter]:
    """Store and coin adapter sharing one connection (one transaction per call)."""
    coins = SQLiteCoinAdapter(db_path)
    store = SQLiteLedgerStore(db_path, connection=coins.connection)
    return store, coins
