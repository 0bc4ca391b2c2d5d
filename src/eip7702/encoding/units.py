"""
Decimal-to-base-unit conversion.

Amounts arrive as human-readable decimal strings ("1.5" ETH, "100" tokens)
and are scaled by 10**decimals with arbitrary precision. Any fractional
remainder below one base unit is truncated toward zero without an error:
ether_to_wei("0.0000000000000000015") == 1.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from eip7702.constants import DEFAULT_TOKEN_DECIMALS, ETHER_DECIMALS
from eip7702.errors import InvalidAmountError

AmountLike = Union[str, int, Decimal]

MAX_DECIMALS = 77


def token_amount_to_base_units(
    amount: AmountLike,
    decimals: int = DEFAULT_TOKEN_DECIMALS,
) -> int:
    """
    Convert a decimal token amount into base units.

    Args:
        amount: Decimal string (e.g. "0.2"), int or Decimal
        decimals: Token decimals (e.g. 6 for USDC, 18 for most ERC-20s)

    Returns:
        Integer amount in base units, truncated toward zero

    Raises:
        InvalidAmountError: If amount is not a finite, non-negative number
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= MAX_DECIMALS:
        raise InvalidAmountError(str(decimals), field="decimals", reason=f"must be 0..{MAX_DECIMALS}")
    if isinstance(amount, (bool, float)):
        raise InvalidAmountError(str(amount), reason="pass a decimal string, not a float")

    text = str(amount).strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidAmountError(text, reason="not a decimal number") from None

    if not value.is_finite():
        raise InvalidAmountError(text, reason="must be finite")
    if value < 0:
        raise InvalidAmountError(text, reason="cannot be negative")

    with localcontext() as ctx:
        ctx.prec = max(100, len(text) + decimals + 10)
        scaled = value.scaleb(decimals)
    return int(scaled)


def ether_to_wei(amount: AmountLike) -> int:
    """Convert a decimal ETH amount into wei (fraction below 1 wei dropped)."""
    return token_amount_to_base_units(amount, ETHER_DECIMALS)
