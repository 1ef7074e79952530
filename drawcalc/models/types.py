from typing import Optional

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from drawcalc.constants import UINT256_MAX


class UInt256(TypeDecorator):
    """Unsigned 256-bit integer stored as its exact decimal string.

    Numeric columns on some backends (notably SQLite) degrade very large
    values to floating point, so amounts round-trip through text instead.
    """

    impl = String(78)
    cache_ok = True

    def process_bind_param(self, value: Optional[int], dialect) -> Optional[str]:
        if value is None:
            return None
        value = int(value)
        if value < 0 or value > UINT256_MAX:
            raise ValueError(f"{value} does not fit in an unsigned 256-bit integer")
        return str(value)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[int]:
        if value is None:
            return None
        return int(value)
