"""
Campaign registry ports.

The registry persists through the ledger store; initialization opens the
treasury through the coin port.
"""

from src.core.ports.coin import CoinPort
from src.core.ports.db import LedgerStorePort

__all__ = ["CoinPort", "LedgerStorePort"]
