"""
Ledger store interface.

Protocol for loading and persisting the ledger handle (registry + treasury).
Implementations: in-memory (tests/dev), SQLite.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import LedgerState


class LedgerStorePort(Protocol):
    """
    Repository for the single ledger handle.

    Invariants:
    - load() always succeeds; an uninitialized ledger loads with
      ``registry``/``treasury`` set to None
    - load() returns a working copy; mutating it does not touch stored
      state until save() is called
    """

    def load(self) -> LedgerState:
        """Return a working copy of the stored ledger."""
        ...

    def save(self, state: LedgerState) -> None:
        """Replace the stored ledger with ``state``."""
        ...
