"""
In-memory coin adapter (dev/tests).

Dict-backed account balances implementing TransactionalCoinPort.
Balances are keyed by normalized address.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from src.core.ports.coin import TransactionalCoinPort
from src.domain.entities import MAX_U64, Coin
from src.domain.errors import InsufficientFunds, InvalidAmount
from src.domain.policy import normalize_address, validate_amount

logger = logging.getLogger(__name__)


class CoinValueMixin:
    """Coin arithmetic shared by every coin adapter."""

    def zero(self) -> Coin:
        return Coin()

    def merge(self, a: Coin, b: Coin) -> Coin:
        total = a.value + b.value
        if total > MAX_U64:
            raise InvalidAmount(f"Coin merge overflows u64: {a.value} + {b.value}")
        return Coin(value=total)

    def extract(self, coin: Coin, amount: int) -> tuple[Coin, Coin]:
        validate_amount(amount, require_positive=False)
        if coin.value < amount:
            raise InsufficientFunds(f"Cannot extract {amount} from coin holding {coin.value}")
        return Coin(value=coin.value - amount), Coin(value=amount)


@dataclass
class InMemoryCoinAdapter(CoinValueMixin):
    """
    In-memory coin adapter.

    ``mint`` and ``balance_of`` are dev/test helpers outside the port.
    """

    _balances: dict[str, int] = field(default_factory=dict)

    def debit(self, signer: str, amount: int) -> Coin:
        validate_amount(amount, require_positive=False)
        address = normalize_address(signer)
        balance = self._balances.get(address, 0)

        if balance < amount:
            raise InsufficientFunds(
                f"Account {address} holds {balance}, cannot debit {amount}"
            )

        self._balances[address] = balance - amount
        logger.debug(f"InMemoryCoinAdapter.debit: address={address}, amount={amount}")
        return Coin(value=amount)

    def credit(self, address: str, coin: Coin) -> None:
        address = normalize_address(address)
        self._balances[address] = self._balances.get(address, 0) + coin.value
        logger.debug(f"InMemoryCoinAdapter.credit: address={address}, amount={coin.value}")

    @contextmanager
    def transaction(self) -> Iterator[None]:
        snapshot = dict(self._balances)
        try:
            yield
        except BaseException:
            self._balances = snapshot
            raise

    # --- Dev Helpers ---

    def mint(self, address: str, amount: int) -> None:
        """Create ``amount`` out of thin air in ``address``'s account."""
        validate_amount(amount, require_positive=False)
        self.credit(address, Coin(value=amount))

    def balance_of(self, address: str) -> int:
        return self._balances.get(normalize_address(address), 0)


# Verify protocol compliance at module load time
def _verify_protocol_compliance() -> None:
    """Verify InMemoryCoinAdapter satisfies TransactionalCoinPort."""
    adapter: TransactionalCoinPort = InMemoryCoinAdapter()
    _ = adapter.zero()


_verify_protocol_compliance()
