"""
Campaign registry models.

Configuration plus inputs/outputs for ledger initialization and campaign
creation.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import Campaign, TreasuryMode

# --- Configuration ---


@dataclass(frozen=True)
class LedgerConfig:
    """Ledger configuration from rules."""

    admin_address: str
    treasury_mode: TreasuryMode = "pooled"
    require_positive_goal: bool = True
    require_positive_donation: bool = True
    title_max_bytes: int = 128
    description_max_bytes: int = 2048
    octas_per_coin: int = 100_000_000


# --- Initialization ---


@dataclass(frozen=True)
class InitializeInput:
    """Input for creating the registry and treasury."""

    admin: str


@dataclass(frozen=True)
class InitializeOutput:
    """Output from initialization. ``created`` is False on repeat calls."""

    created: bool
    admin: str


# --- Campaign Creation ---


@dataclass(frozen=True)
class CreateCampaignInput:
    """Input for creating a campaign. Text may be str (UTF-8 encoded) or bytes."""

    creator: str
    title: str | bytes
    description: str | bytes
    goal: int


@dataclass(frozen=True)
class CreateCampaignOutput:
    """Output with the new campaign and its index."""

    campaign_index: int
    campaign: Campaign
