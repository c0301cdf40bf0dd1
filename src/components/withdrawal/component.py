"""
Withdrawal component.

Owner and administrator payout paths.

Invariants:
- ``withdrawn`` goes false -> true at most once, by either path
- a payout moves exactly ``donated`` out of escrow
- the recipient is always the campaign owner, never the administrator
"""

from __future__ import annotations

from src.components.registry import LedgerConfig, get_campaign_record, require_registry
from src.components.treasury import CoinPort, release
from src.domain.entities import Campaign, LedgerState
from src.domain.errors import AlreadyWithdrawn, GoalNotReached
from src.domain.policy import require_admin, require_owner

from .models import AdminWithdrawInput, WithdrawalOutput, WithdrawInput


def _pay_out(
    state: LedgerState,
    campaign_index: int,
    campaign: Campaign,
    coin_port: CoinPort,
    by_admin: bool,
) -> WithdrawalOutput:
    assert state.treasury is not None  # guaranteed by require_registry
    coin = release(state.treasury, campaign_index, campaign.donated, coin_port)
    coin_port.credit(campaign.owner, coin)
    campaign.withdrawn = True

    return WithdrawalOutput(
        campaign_index=campaign_index,
        recipient=campaign.owner,
        amount=coin.value,
        by_admin=by_admin,
        completed=campaign.completed,
    )


def withdraw(
    state: LedgerState,
    input_data: WithdrawInput,
    coin_port: CoinPort,
) -> WithdrawalOutput:
    """
    Pay a completed campaign's donations to its owner.

    Raises:
        RegistryNotInitialized: before Initialize
        CampaignNotFound: bad index
        NotCampaignOwner: caller is not the campaign owner
        AlreadyWithdrawn: payout already happened, by either path
        GoalNotReached: campaign not completed
    """
    require_registry(state)
    campaign = get_campaign_record(state, input_data.campaign_index)

    require_owner(input_data.owner, campaign)
    if campaign.withdrawn:
        raise AlreadyWithdrawn(f"Campaign {input_data.campaign_index} was already paid out")
    if not campaign.completed:
        raise GoalNotReached(
            f"Campaign {input_data.campaign_index} has {campaign.donated} of {campaign.goal}"
        )

    return _pay_out(state, input_data.campaign_index, campaign, coin_port, by_admin=False)


def admin_withdraw(
    state: LedgerState,
    input_data: AdminWithdrawInput,
    coin_port: CoinPort,
    config: LedgerConfig,
) -> WithdrawalOutput:
    """
    Emergency payout of whatever has been donated so far.

    Completion is not required. Funds go to the campaign owner.

    Raises:
        NotAdministrator: caller is not the configured administrator
        RegistryNotInitialized: before Initialize
        CampaignNotFound: bad index
        AlreadyWithdrawn: payout already happened
    """
    require_admin(input_data.admin, config.admin_address)
    require_registry(state)
    campaign = get_campaign_record(state, input_data.campaign_index)

    if campaign.withdrawn:
        raise AlreadyWithdrawn(f"Campaign {input_data.campaign_index} was already paid out")

    return _pay_out(state, input_data.campaign_index, campaign, coin_port, by_admin=True)


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: WithdrawInput | AdminWithdrawInput,
    state: LedgerState,
    coin_port: CoinPort,
    config: LedgerConfig,
) -> WithdrawalOutput:
    """Run a withdrawal based on input type."""
    if isinstance(input_data, WithdrawInput):
        return withdraw(state, input_data, coin_port)

    if isinstance(input_data, AdminWithdrawInput):
        return admin_withdraw(state, input_data, coin_port, config)

    raise TypeError(f"Unknown input type: {type(input_data)}")
