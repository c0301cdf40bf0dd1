"""
In-memory ledger store (dev/tests).

Keeps one LedgerState; load/save hand out and take in deep copies so a
failed operation never leaks partial changes into the stored state.
"""

from __future__ import annotations

from src.domain.entities import LedgerState


class InMemoryLedgerStore:
    def __init__(self, state: LedgerState | None = None) -> None:
        self._state = state.model_copy(deep=True) if state else LedgerState()

    def load(self) -> LedgerState:
        return self._state.model_copy(deep=True)

    def save(self, state: LedgerState) -> None:
        self._state = state.model_copy(deep=True)
