"""
Withdrawal component ports.

Payouts are credited to owners through the coin port.
"""

from src.core.ports.coin import CoinPort

__all__ = ["CoinPort"]
