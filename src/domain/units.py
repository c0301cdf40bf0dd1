"""
Conversion between display coin amounts and octas.

The wallet client multiplies user-entered amounts by 10^8 before
submitting; these helpers do the same with Decimal so no float rounding
leaks into the ledger.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from src.domain.entities import MAX_U64
from src.domain.errors import InvalidAmount

OCTAS_PER_COIN = 100_000_000


def to_octas(amount: str | int | Decimal, octas_per_coin: int = OCTAS_PER_COIN) -> int:
    """Convert a coin amount ("2.5") to octas (250_000_000)."""
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise InvalidAmount(f"Not a number: {amount!r}") from e

    if not value.is_finite() or value < 0:
        raise InvalidAmount(f"Amount must be a non-negative number: {amount!r}")

    octas = value * octas_per_coin
    if octas != octas.to_integral_value():
        raise InvalidAmount(f"Amount {amount} is finer than one octa")

    result = int(octas)
    if result > MAX_U64:
        raise InvalidAmount(f"Amount {amount} is outside the u64 range")
    return result


def format_coins(octas: int, octas_per_coin: int = OCTAS_PER_COIN) -> str:
    """Format octas as a coin string without trailing zeros ("2.5")."""
    value = (Decimal(octas) / Decimal(octas_per_coin)).quantize(
        Decimal(1) / Decimal(octas_per_coin), rounding=ROUND_DOWN
    )
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
