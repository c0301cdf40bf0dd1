"""
Campaign registry component.

Public API for ledger initialization and campaign creation.
"""

from .component import (
    check_integrity,
    create_campaign,
    get_campaign_record,
    initialize,
    load_config_from_rules,
    require_registry,
    run,
)
from .models import (
    CreateCampaignInput,
    CreateCampaignOutput,
    InitializeInput,
    InitializeOutput,
    LedgerConfig,
)
from .ports import CoinPort, LedgerStorePort

__all__ = [
    # Functions
    "initialize",
    "create_campaign",
    "get_campaign_record",
    "require_registry",
    "check_integrity",
    "load_config_from_rules",
    "run",
    # Models
    "CreateCampaignInput",
    "CreateCampaignOutput",
    "InitializeInput",
    "InitializeOutput",
    "LedgerConfig",
    # Ports
    "CoinPort",
    "LedgerStorePort",
]
