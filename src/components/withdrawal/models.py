"""
Withdrawal component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WithdrawInput:
    """Owner payout request."""

    owner: str
    campaign_index: int


@dataclass(frozen=True)
class AdminWithdrawInput:
    """Administrator emergency payout request."""

    admin: str
    campaign_index: int


@dataclass(frozen=True)
class WithdrawalOutput:
    """Completed payout."""

    campaign_index: int
    recipient: str
    amount: int
    by_admin: bool
    completed: bool  # campaign completion at payout time
