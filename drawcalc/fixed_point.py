"""Conversions between human readable amounts and 18-decimal integers."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from .constants import ONE

DECIMALS = 18
# Enough significant digits for any 256-bit amount.
_PRECISION = 100

AmountLike = Union[int, str, Decimal]


def to_fixed(value: AmountLike) -> int:
    """Convert ``value`` (in whole units) to an 18-decimal fixed-point integer.

    Strings are parsed exactly, so ``to_fixed("0.8")`` is
    ``800000000000000000``. Values with more than 18 decimal places are
    rejected rather than rounded.

    Parameters
    ----------
    value : int | str | Decimal
        Amount expressed in whole units. ``float`` is not accepted.

    Returns
    -------
    int
        The amount scaled by ``10**18``.

    Raises
    ------
    TypeError
        If ``value`` is a float or another unsupported type.
    ValueError
        If ``value`` cannot be parsed or carries too many decimal places.
    """

    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError("amounts must be int, str, or Decimal, not float")
    if isinstance(value, int):
        return value * ONE
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"invalid amount: {value!r}") from exc
    if not isinstance(value, Decimal):
        raise TypeError(f"unsupported amount type: {type(value).__name__}")
    if not value.is_finite():
        raise ValueError("amount must be finite")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = value.scaleb(DECIMALS)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"amount {value} has more than {DECIMALS} decimal places")
    return int(scaled)


def from_fixed(amount: int) -> Decimal:
    """Return ``amount`` (an 18-decimal integer) as an exact ``Decimal``."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(amount).scaleb(-DECIMALS)


def format_fixed(amount: int) -> str:
    """Render ``amount`` in whole units without trailing zeros."""
    text = format(from_fixed(amount), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


__all__ = ["DECIMALS", "format_fixed", "from_fixed", "to_fixed"]
