"""
Donation component ports.

Donor funds are debited through the coin port.
"""

from src.core.ports.coin import CoinPort

__all__ = ["CoinPort"]
