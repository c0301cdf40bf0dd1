# relief-escrow-ledger: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.coin import CoinPort, TransactionalCoinPort
from src.core.ports.db import LedgerStorePort

__all__ = [
    "CoinPort",
    "LedgerStorePort",
    "TransactionalCoinPort",
]
