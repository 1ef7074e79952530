"""Digit extraction and prefix matching over 256-bit numbers."""

from __future__ import annotations

from ..constants import DEFAULT_NIBBLE_SIZE


def get_value_at_index(
    word: int,
    index: int,
    range_: int,
    mask: int,
    nibble_size: int = DEFAULT_NIBBLE_SIZE,
) -> int:
    """Return the normalized digit of ``word`` at position ``index``.

    The digit is the ``nibble_size``-bit slice starting at bit
    ``index * nibble_size``, isolated with ``mask`` and folded into
    ``[0, range_)`` by a modulus. When ``range_`` does not evenly divide
    ``mask + 1`` the fold is biased towards low digits; the range is a
    tuning knob and that bias is accepted.

    Parameters
    ----------
    word : int
        Non-negative integer to read the digit from.
    index : int
        Digit position, ``0`` being the least significant digit.
    range_ : int
        Modulus used to normalize the raw digit. Must be positive; zero is
        rejected when settings are stored, not here.
    mask : int
        Bit mask applied after shifting (``15`` for a 4-bit digit).
    nibble_size : int, default: 4
        Width of one digit in bits.

    Returns
    -------
    int
        The normalized digit.

    Examples
    --------
    >>> get_value_at_index(63, 1, 15, 15)
    3
    """

    return ((word >> (index * nibble_size)) & mask) % range_


def count_matches(
    a: int,
    b: int,
    cardinality: int,
    range_: int,
    mask: int,
    nibble_size: int = DEFAULT_NIBBLE_SIZE,
) -> int:
    """Count the leading matching digits of ``a`` and ``b``.

    Digits are compared from position ``0`` upwards and counting stops at the
    first mismatch, so the result is the length of the common prefix (in the
    least-significant-first order), between ``0`` and ``cardinality``.
    """

    matches = 0
    for index in range(cardinality):
        left = get_value_at_index(a, index, range_, mask, nibble_size)
        right = get_value_at_index(b, index, range_, mask, nibble_size)
        if left != right:
            break
        matches += 1
    return matches


__all__ = ["count_matches", "get_value_at_index"]
