"""
LedgerService - transactional host for the ledger components.

Serializes every operation behind one lock and runs each mutation as an
all-or-nothing unit:

    lock -> coins.transaction() -> store.load() -> operation -> store.save()

Any exception rolls back coin balances and discards the working state, so
a failed call leaves no partial change.

Shell Layer - handles I/O, logging and transaction boundaries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Lock
from typing import TypeVar

from src.components.donation import DonateInput, DonationOutput, donate
from src.components.query import (
    CampaignProgress,
    CampaignView,
    get_all_campaigns,
    get_campaign,
    get_campaign_count,
    get_campaign_progress,
    get_campaigns_by_owner,
    get_treasury_balance,
)
from src.components.registry import (
    CreateCampaignInput,
    CreateCampaignOutput,
    InitializeOutput,
    LedgerConfig,
    LedgerStorePort,
    check_integrity,
    create_campaign,
    initialize,
    load_config_from_rules,
)
from src.components.treasury import TransactionalCoinPort, TreasuryBalanceOutput
from src.components.withdrawal import (
    AdminWithdrawInput,
    WithdrawalOutput,
    WithdrawInput,
    admin_withdraw,
    withdraw,
)
from src.domain.entities import LedgerState
from src.domain.errors import LedgerError
from src.rules.models import Rules

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LedgerService:
    """
    Ledger service.

    One instance per ledger; share it between request handlers so the lock
    actually serializes them.
    """

    def __init__(
        self,
        store: LedgerStorePort,
        coins: TransactionalCoinPort,
        config: LedgerConfig,
    ) -> None:
        """Initialize service."""
        self.store = store
        self.coins = coins
        self.config = config
        self._lock = Lock()

    @classmethod
    def from_rules(
        cls,
        rules: Rules,
        store: LedgerStorePort,
        coins: TransactionalCoinPort,
    ) -> LedgerService:
        return cls(store=store, coins=coins, config=load_config_from_rules(rules))

    # --- Transaction Plumbing ---

    def _load(self) -> LedgerState:
        state = self.store.load()
        if state.registry is not None:
            check_integrity(state.registry)
        return state

    def _execute(self, operation: str, apply: Callable[[LedgerState], T]) -> T:
        with self._lock:
            try:
                with self.coins.transaction():
                    state = self._load()
                    result = apply(state)
                    self.store.save(state)
            except LedgerError as e:
                logger.warning(f"{operation} aborted: code={e.code} message={e.message}")
                raise

        logger.info(f"{operation} committed: {result}")
        return result

    def _read(self, query: Callable[[LedgerState], T]) -> T:
        with self._lock:
            return query(self._load())

    # --- Mutations ---

    def initialize(self, admin: str) -> InitializeOutput:
        return self._execute(
            "initialize",
            lambda state: initialize(state, admin, self.config, self.coins),
        )

    def create_campaign(
        self,
        creator: str,
        title: str | bytes,
        description: str | bytes,
        goal: int,
    ) -> CreateCampaignOutput:
        input_data = CreateCampaignInput(
            creator=creator, title=title, description=description, goal=goal
        )
        return self._execute(
            "create_campaign",
            lambda state: create_campaign(state, input_data, self.config),
        )

    def donate(self, donor: str, campaign_index: int, amount: int) -> DonationOutput:
        input_data = DonateInput(donor=donor, campaign_index=campaign_index, amount=amount)
        return self._execute(
            "donate",
            lambda state: donate(state, input_data, self.coins, self.config),
        )

    def withdraw(self, owner: str, campaign_index: int) -> WithdrawalOutput:
        input_data = WithdrawInput(owner=owner, campaign_index=campaign_index)
        return self._execute(
            "withdraw",
            lambda state: withdraw(state, input_data, self.coins),
        )

    def admin_withdraw(self, admin: str, campaign_index: int) -> WithdrawalOutput:
        input_data = AdminWithdrawInput(admin=admin, campaign_index=campaign_index)
        return self._execute(
            "admin_withdraw",
            lambda state: admin_withdraw(state, input_data, self.coins, self.config),
        )

    # --- Queries ---

    def get_campaign_count(self) -> int:
        return self._read(get_campaign_count)

    def get_campaign(self, campaign_index: int) -> CampaignView:
        return self._read(lambda state: get_campaign(state, campaign_index))

    def get_all_campaigns(self) -> list[CampaignView]:
        return self._read(get_all_campaigns)

    def get_campaigns_by_owner(self, owner: str) -> list[int]:
        return self._read(lambda state: get_campaigns_by_owner(state, owner))

    def get_campaign_progress(self, campaign_index: int) -> CampaignProgress:
        return self._read(lambda state: get_campaign_progress(state, campaign_index))

    def get_treasury_balance(self, campaign_index: int | None = None) -> TreasuryBalanceOutput:
        return self._read(lambda state: get_treasury_balance(state, campaign_index))
