"""
Query component.

Public API for read-only campaign projections.
"""

from .component import (
    get_all_campaigns,
    get_campaign,
    get_campaign_count,
    get_campaign_progress,
    get_campaigns_by_owner,
    get_treasury_balance,
    run,
)
from .models import (
    CampaignProgress,
    CampaignView,
    GetCampaignInput,
    GetCampaignsByOwnerInput,
    GetProgressInput,
)
from .ports import LedgerStorePort

__all__ = [
    # Functions
    "get_campaign_count",
    "get_campaign",
    "get_all_campaigns",
    "get_campaigns_by_owner",
    "get_campaign_progress",
    "get_treasury_balance",
    "run",
    # Models
    "CampaignProgress",
    "CampaignView",
    "GetCampaignInput",
    "GetCampaignsByOwnerInput",
    "GetProgressInput",
    # Ports
    "LedgerStorePort",
]
