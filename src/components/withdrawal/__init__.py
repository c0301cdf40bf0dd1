"""
Withdrawal component.

Public API for owner and administrator payouts.
"""

from .component import admin_withdraw, run, withdraw
from .models import AdminWithdrawInput, WithdrawalOutput, WithdrawInput
from .ports import CoinPort

__all__ = [
    # Functions
    "withdraw",
    "admin_withdraw",
    "run",
    # Models
    "WithdrawInput",
    "AdminWithdrawInput",
    "WithdrawalOutput",
    # Ports
    "CoinPort",
]
