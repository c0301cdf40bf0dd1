"""
Treasury component.

Pure functions over the escrow balance. Funds only ever enter through
``deposit`` and leave through ``release``.

Invariants:
- pooled mode: ``pool`` equals the sum of donated amounts not yet released
- per_campaign mode: each partition equals that campaign's unreleased total
"""

from __future__ import annotations

from src.domain.entities import Coin, Treasury, TreasuryMode

from .models import BalanceInput, DepositInput, ReleaseInput, TreasuryBalanceOutput
from .ports import CoinPort


def open_treasury(coin_port: CoinPort, mode: TreasuryMode = "pooled") -> Treasury:
    """Create an empty treasury."""
    return Treasury(mode=mode, pool=coin_port.zero())


def deposit(
    treasury: Treasury,
    campaign_index: int,
    coin: Coin,
    coin_port: CoinPort,
) -> None:
    """Merge ``coin`` into escrow for ``campaign_index``."""
    if treasury.mode == "per_campaign":
        current = treasury.partitions.get(campaign_index, coin_port.zero())
        treasury.partitions[campaign_index] = coin_port.merge(current, coin)
        return

    treasury.pool = coin_port.merge(treasury.pool, coin)


def release(
    treasury: Treasury,
    campaign_index: int,
    amount: int,
    coin_port: CoinPort,
) -> Coin:
    """
    Extract ``amount`` from escrow for ``campaign_index``.

    Raises:
        InsufficientFunds: propagated from the coin port if the pool or
            partition holds less than ``amount``
    """
    if treasury.mode == "per_campaign":
        current = treasury.partitions.get(campaign_index, coin_port.zero())
        remainder, extracted = coin_port.extract(current, amount)
        treasury.partitions[campaign_index] = remainder
        return extracted

    remainder, extracted = coin_port.extract(treasury.pool, amount)
    treasury.pool = remainder
    return extracted


def total_balance(treasury: Treasury) -> int:
    if treasury.mode == "per_campaign":
        return sum(coin.value for coin in treasury.partitions.values())
    return treasury.pool.value


def get_balance(
    treasury: Treasury | None,
    campaign_index: int | None = None,
) -> TreasuryBalanceOutput:
    """Balance snapshot. A missing treasury reports zero."""
    if treasury is None:
        return TreasuryBalanceOutput(mode=None, total=0, campaign_index=campaign_index)

    partition = None
    if treasury.mode == "per_campaign" and campaign_index is not None:
        partition = treasury.partitions.get(campaign_index, Coin()).value

    return TreasuryBalanceOutput(
        mode=treasury.mode,
        total=total_balance(treasury),
        campaign_index=campaign_index,
        partition=partition,
    )


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: DepositInput | ReleaseInput | BalanceInput,
    treasury: Treasury,
    coin_port: CoinPort,
) -> Coin | TreasuryBalanceOutput | None:
    """Run a treasury operation based on input type."""
    if isinstance(input_data, DepositInput):
        deposit(treasury, input_data.campaign_index, input_data.coin, coin_port)
        return None

    if isinstance(input_data, ReleaseInput):
        return release(treasury, input_data.campaign_index, input_data.amount, coin_port)

    if isinstance(input_data, BalanceInput):
        return get_balance(treasury, input_data.campaign_index)

    raise TypeError(f"Unknown input type: {type(input_data)}")
