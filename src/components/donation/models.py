"""
Donation component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DonateInput:
    """Input for a donation, amount in octas."""

    donor: str
    campaign_index: int
    amount: int


@dataclass(frozen=True)
class DonationOutput:
    """Campaign totals after an accepted donation."""

    campaign_index: int
    amount: int
    donated: int
    goal: int
    completed: bool
    goal_reached_now: bool  # True only on the donation that crossed the goal
