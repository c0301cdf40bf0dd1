"""
Treasury component models.

Inputs and outputs for escrow custody operations.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import Coin, TreasuryMode


@dataclass(frozen=True)
class DepositInput:
    """Coin to place into escrow on behalf of a campaign."""

    campaign_index: int
    coin: Coin


@dataclass(frozen=True)
class ReleaseInput:
    """Amount to take out of escrow for a campaign payout."""

    campaign_index: int
    amount: int


@dataclass(frozen=True)
class BalanceInput:
    """Balance lookup; campaign_index only matters in per_campaign mode."""

    campaign_index: int | None = None


@dataclass(frozen=True)
class TreasuryBalanceOutput:
    """Escrow balance snapshot."""

    mode: TreasuryMode | None
    total: int
    campaign_index: int | None = None
    partition: int | None = None  # None in pooled mode
