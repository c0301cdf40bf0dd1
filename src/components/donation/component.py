"""
Donation component.

Validates and applies donations and derives campaign completion.

Invariants:
- ``donated`` never decreases
- ``completed`` is set on the first donation that reaches the goal and is
  never cleared
- overshoot is kept; the goal is a threshold, not a cap
"""

from __future__ import annotations

from src.components.registry import LedgerConfig, get_campaign_record, require_registry
from src.components.treasury import CoinPort, deposit
from src.domain.entities import MAX_U64, LedgerState
from src.domain.errors import CampaignCompleted, InvalidAmount
from src.domain.policy import normalize_address, validate_amount

from .models import DonateInput, DonationOutput


def donate(
    state: LedgerState,
    input_data: DonateInput,
    coin_port: CoinPort,
    config: LedgerConfig,
) -> DonationOutput:
    """
    Move ``amount`` from the donor into escrow and credit the campaign.

    Checks run before any funds move, so a failure leaves the donor's
    balance and the ledger untouched.

    Raises:
        RegistryNotInitialized: before Initialize
        CampaignNotFound: bad index
        CampaignCompleted: goal already reached
        InvalidAmount: amount outside u64, zero (when disallowed) or total overflow
        InsufficientFunds: raised by the coin port
    """
    require_registry(state)
    campaign = get_campaign_record(state, input_data.campaign_index)

    if campaign.completed:
        raise CampaignCompleted(f"Campaign {input_data.campaign_index} already reached its goal")

    validate_amount(input_data.amount, config.require_positive_donation)
    new_total = campaign.donated + input_data.amount
    if new_total > MAX_U64:
        raise InvalidAmount(f"Donation would overflow campaign {input_data.campaign_index}")

    donor = normalize_address(input_data.donor)
    coin = coin_port.debit(donor, input_data.amount)

    assert state.treasury is not None  # guaranteed by require_registry
    deposit(state.treasury, input_data.campaign_index, coin, coin_port)

    campaign.donated = new_total
    goal_reached_now = False
    if campaign.donated >= campaign.goal:
        campaign.completed = True
        goal_reached_now = True

    return DonationOutput(
        campaign_index=input_data.campaign_index,
        amount=input_data.amount,
        donated=campaign.donated,
        goal=campaign.goal,
        completed=campaign.completed,
        goal_reached_now=goal_reached_now,
    )


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: DonateInput,
    state: LedgerState,
    coin_port: CoinPort,
    config: LedgerConfig,
) -> DonationOutput:
    """Run a donation."""
    if isinstance(input_data, DonateInput):
        return donate(state, input_data, coin_port, config)

    raise TypeError(f"Unknown input type: {type(input_data)}")
