"""
Query component.

Read-only projections. None of these functions mutate ledger state.

Uninitialized ledger policy: collection queries return empty/zero,
single-campaign lookups raise CampaignNotFound.
"""

from __future__ import annotations

from src.components.registry import get_campaign_record
from src.components.treasury import TreasuryBalanceOutput, get_balance
from src.domain.entities import LedgerState
from src.domain.policy import normalize_address

from .models import (
    CampaignProgress,
    CampaignView,
    GetCampaignInput,
    GetCampaignsByOwnerInput,
    GetProgressInput,
)


def get_campaign_count(state: LedgerState) -> int:
    if state.registry is None:
        return 0
    return len(state.registry.campaigns)


def get_campaign(state: LedgerState, campaign_index: int) -> CampaignView:
    """
    Full record for one campaign.

    Raises:
        CampaignNotFound: bad index, or the ledger is not initialized
    """
    campaign = get_campaign_record(state, campaign_index)
    return CampaignView.from_campaign(campaign_index, campaign)


def get_all_campaigns(state: LedgerState) -> list[CampaignView]:
    if state.registry is None:
        return []
    return [
        CampaignView.from_campaign(index, campaign)
        for index, campaign in enumerate(state.registry.campaigns)
    ]


def get_campaigns_by_owner(state: LedgerState, owner: str) -> list[int]:
    """Ascending indices of campaigns owned by ``owner`` (linear scan)."""
    if state.registry is None:
        return []
    owner = normalize_address(owner)
    return [
        index
        for index, campaign in enumerate(state.registry.campaigns)
        if campaign.owner == owner
    ]


def get_campaign_progress(state: LedgerState, campaign_index: int) -> CampaignProgress:
    """
    Progress toward the goal.

    ``percent`` is capped at 100 for display even though ``donated`` may
    exceed the goal. A zero goal reports 100 once completed.
    """
    view = get_campaign(state, campaign_index)

    if view.goal == 0:
        percent = 100.0 if view.completed else 0.0
    else:
        percent = min(100.0, round(view.donated * 100 / view.goal, 2))

    return CampaignProgress(
        index=campaign_index,
        goal=view.goal,
        donated=view.donated,
        remaining=max(0, view.goal - view.donated),
        percent=percent,
        status=view.status,
    )


def get_treasury_balance(
    state: LedgerState, campaign_index: int | None = None
) -> TreasuryBalanceOutput:
    return get_balance(state.treasury, campaign_index)


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: GetCampaignInput | GetCampaignsByOwnerInput | GetProgressInput,
    state: LedgerState,
) -> CampaignView | list[int] | CampaignProgress:
    """Run a query based on input type."""
    if isinstance(input_data, GetCampaignInput):
        return get_campaign(state, input_data.campaign_index)

    if isinstance(input_data, GetCampaignsByOwnerInput):
        return get_campaigns_by_owner(state, input_data.owner)

    if isinstance(input_data, GetProgressInput):
        return get_campaign_progress(state, input_data.campaign_index)

    raise TypeError(f"Unknown input type: {type(input_data)}")
