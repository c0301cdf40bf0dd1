"""
Treasury component.

Escrow custody for donated funds, pooled or partitioned per campaign.
"""

from .component import (
    deposit,
    get_balance,
    open_treasury,
    release,
    run,
    total_balance,
)
from .models import (
    BalanceInput,
    DepositInput,
    ReleaseInput,
    TreasuryBalanceOutput,
)
from .ports import CoinPort, TransactionalCoinPort

__all__ = [
    # Functions
    "open_treasury",
    "deposit",
    "release",
    "get_balance",
    "total_balance",
    "run",
    # Models
    "BalanceInput",
    "DepositInput",
    "ReleaseInput",
    "TreasuryBalanceOutput",
    # Ports
    "CoinPort",
    "TransactionalCoinPort",
]
