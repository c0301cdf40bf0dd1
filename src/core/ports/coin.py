"""
Coin port interface.

External currency-transfer primitive. The ledger only needs these five
capabilities and trusts the implementation for overflow safety and
atomicity of each call.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from src.domain.entities import Coin


class CoinPort(Protocol):
    """
    Port for moving settlement currency in and out of custody.

    Implementations:
    - InMemoryCoinAdapter: dict-backed balances (tests/dev)
    - SQLiteCoinAdapter: balances in the ledger database
    """

    def debit(self, signer: str, amount: int) -> Coin:
        """
        Withdraw ``amount`` from the signer's account.

        Raises:
            InsufficientFunds: if the account balance is below ``amount``
        """
        ...

    def credit(self, address: str, coin: Coin) -> None:
        """Deposit ``coin`` into ``address``'s account."""
        ...

    def zero(self) -> Coin:
        """An empty coin."""
        ...

    def merge(self, a: Coin, b: Coin) -> Coin:
        """Combine two coins into one."""
        ...

    def extract(self, coin: Coin, amount: int) -> tuple[Coin, Coin]:
        """
        Split ``amount`` off ``coin``.

        Returns:
            (remainder, extracted)

        Raises:
            InsufficientFunds: if ``coin`` holds less than ``amount``
        """
        ...


class TransactionalCoinPort(CoinPort, Protocol):
    """Coin port whose effects can be grouped and rolled back as one unit."""

    def transaction(self) -> AbstractContextManager[None]:
        """
        Scope in which all debits/credits commit together.

        Any exception raised inside the scope rolls every balance back.
        """
        ...
