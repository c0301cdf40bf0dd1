"""
Donation component.

Public API for accepting donations into escrow.
"""

from .component import donate, run
from .models import DonateInput, DonationOutput
from .ports import CoinPort

__all__ = [
    "donate",
    "run",
    "DonateInput",
    "DonationOutput",
    "CoinPort",
]
