"""
Ledger component - transactional host over registry, donation,
withdrawal and query.
"""

from ._impl import LedgerService

__all__ = ["LedgerService"]
