"""
Campaign registry component.

Functions for initializing the ledger and appending campaigns.

Invariants:
- campaigns are never removed or reordered; index == campaign_id
- ``counter`` equals the number of campaigns ever created
- Initialize is idempotent
"""

from __future__ import annotations

from src.components.treasury import CoinPort, open_treasury
from src.domain.entities import Campaign, LedgerState, Registry
from src.domain.errors import CampaignNotFound, RegistryNotInitialized
from src.domain.policy import encode_text, normalize_address, require_admin, validate_goal
from src.rules.models import Rules

from .models import (
    CreateCampaignInput,
    CreateCampaignOutput,
    InitializeInput,
    InitializeOutput,
    LedgerConfig,
)


def initialize(
    state: LedgerState,
    admin: str,
    config: LedgerConfig,
    coin_port: CoinPort,
) -> InitializeOutput:
    """
    Create an empty registry and zero-balance treasury.

    Only the configured administrator may initialize. Calling again after
    success changes nothing and does not fail.

    Raises:
        NotAdministrator: if ``admin`` is not the configured administrator
    """
    require_admin(admin, config.admin_address)
    admin = normalize_address(admin)

    if state.initialized:
        return InitializeOutput(created=False, admin=state.admin or admin)

    state.admin = admin
    if state.registry is None:
        state.registry = Registry()
    if state.treasury is None:
        state.treasury = open_treasury(coin_port, config.treasury_mode)

    return InitializeOutput(created=True, admin=admin)


def require_registry(state: LedgerState) -> Registry:
    """Return the registry or raise RegistryNotInitialized."""
    if not state.initialized or state.registry is None:
        raise RegistryNotInitialized("Ledger has not been initialized")
    return state.registry


def get_campaign_record(state: LedgerState, campaign_index: int) -> Campaign:
    """
    Look up a campaign by index.

    A missing registry is reported the same way as a bad index.

    Raises:
        CampaignNotFound: if the index does not address a campaign
    """
    registry = state.registry
    if (
        registry is None
        or isinstance(campaign_index, bool)
        or not isinstance(campaign_index, int)
        or not 0 <= campaign_index < len(registry.campaigns)
    ):
        raise CampaignNotFound(f"Campaign {campaign_index} not found")
    return registry.campaigns[campaign_index]


def create_campaign(
    state: LedgerState,
    input_data: CreateCampaignInput,
    config: LedgerConfig,
) -> CreateCampaignOutput:
    """
    Append a new campaign. Any caller may create one.

    Raises:
        RegistryNotInitialized: before Initialize
        InvalidAddress / InvalidGoal / InvalidCampaignText: bad input
    """
    registry = require_registry(state)

    owner = normalize_address(input_data.creator)
    title = encode_text(input_data.title, "Title", config.title_max_bytes)
    description = encode_text(
        input_data.description, "Description", config.description_max_bytes
    )
    validate_goal(input_data.goal, config.require_positive_goal)

    campaign = Campaign(
        campaign_id=registry.counter,
        owner=owner,
        title=title,
        description=description,
        goal=input_data.goal,
    )
    registry.campaigns.append(campaign)
    registry.counter += 1

    return CreateCampaignOutput(campaign_index=len(registry.campaigns) - 1, campaign=campaign)


def check_integrity(registry: Registry) -> None:
    """
    Verify the counter and identifiers line up with the sequence.

    Raises:
        RuntimeError: if stored state violates the registry invariants
    """
    if registry.counter != len(registry.campaigns):
        raise RuntimeError(
            f"Registry counter {registry.counter} does not match "
            f"{len(registry.campaigns)} campaigns"
        )
    for index, campaign in enumerate(registry.campaigns):
        if campaign.campaign_id != index:
            raise RuntimeError(
                f"Campaign at index {index} has identifier {campaign.campaign_id}"
            )
        if campaign.completed and campaign.donated < campaign.goal:
            raise RuntimeError(f"Campaign {index} completed below its goal")


# --- Run Function (Atomic Component Pattern) ---


def run(
    input_data: InitializeInput | CreateCampaignInput,
    state: LedgerState,
    config: LedgerConfig,
    coin_port: CoinPort,
) -> InitializeOutput | CreateCampaignOutput:
    """Run a registry operation based on input type."""
    if isinstance(input_data, InitializeInput):
        return initialize(state, input_data.admin, config, coin_port)

    if isinstance(input_data, CreateCampaignInput):
        return create_campaign(state, input_data, config)

    raise TypeError(f"Unknown input type: {type(input_data)}")


# --- Configuration Loader ---


def load_config_from_rules(rules: Rules) -> LedgerConfig:
    """Build LedgerConfig from the ``ledger`` section of rules.yaml."""
    ledger = rules.ledger
    return LedgerConfig(
        admin_address=ledger.admin_address,
        treasury_mode=ledger.treasury_mode,
        require_positive_goal=ledger.require_positive_goal,
        require_positive_donation=ledger.require_positive_donation,
        title_max_bytes=ledger.title_max_bytes,
        description_max_bytes=ledger.description_max_bytes,
        octas_per_coin=ledger.octas_per_coin,
    )
