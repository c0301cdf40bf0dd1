"""
Treasury component ports.

Escrow custody goes through the coin port; re-exported here so callers
depend on the component, not on core.ports directly.
"""

from src.core.ports.coin import CoinPort, TransactionalCoinPort

__all__ = ["CoinPort", "TransactionalCoinPort"]
