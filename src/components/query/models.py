"""
Query component models.

Read-only projections over the registry.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass

from src.domain.entities import Campaign, CampaignStatus


@dataclass(frozen=True)
class CampaignView:
    """Snapshot of one campaign, detached from ledger state."""

    index: int
    owner: str
    title: bytes
    description: bytes
    goal: int
    donated: int
    completed: bool
    withdrawn: bool

    @classmethod
    def from_campaign(cls, index: int, campaign: Campaign) -> CampaignView:
        return cls(
            index=index,
            owner=campaign.owner,
            title=campaign.title,
            description=campaign.description,
            goal=campaign.goal,
            donated=campaign.donated,
            completed=campaign.completed,
            withdrawn=campaign.withdrawn,
        )

    def as_tuple(self) -> tuple[str, bytes, bytes, int, int, bool, bool]:
        """(owner, title, description, goal, donated, completed, withdrawn)"""
        return astuple(self)[1:]  # type: ignore[return-value]

    @property
    def status(self) -> CampaignStatus:
        if self.withdrawn:
            return "withdrawn"
        if self.completed:
            return "completed"
        return "active"


@dataclass(frozen=True)
class CampaignProgress:
    """Funding progress for display."""

    index: int
    goal: int
    donated: int
    remaining: int
    percent: float  # capped at 100.0
    status: CampaignStatus


@dataclass(frozen=True)
class GetCampaignInput:
    campaign_index: int


@dataclass(frozen=True)
class GetCampaignsByOwnerInput:
    owner: str


@dataclass(frozen=True)
class GetProgressInput:
    campaign_index: int
