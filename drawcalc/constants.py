"""Numeric constants shared across the settlement engine."""

ONE = 10**18
"""The 18-decimal fixed-point unit (1.0)."""

MAX_RANGE = 15
"""Largest digit-normalization range representable by a 4-bit digit."""

DEFAULT_NIBBLE_SIZE = 4
DEFAULT_NIBBLE_MASK = 15

UINT256_MAX = 2**256 - 1
