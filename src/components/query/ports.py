"""
Query component ports.

Queries read a loaded LedgerState; the store port supplies it.
"""

from src.core.ports.db import LedgerStorePort

__all__ = ["LedgerStorePort"]
