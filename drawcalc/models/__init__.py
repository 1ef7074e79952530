from .base import Base

# import models so metadata.create_all() sees every table
from .balance import BalanceCheckpoint  # noqa: F401
from .draw_settings import DrawSettingsOwner, DrawSettingsSnapshot  # noqa: F401
from .types import UInt256  # noqa: F401

__all__ = [
    "Base",
    "BalanceCheckpoint",
    "DrawSettingsOwner",
    "DrawSettingsSnapshot",
    "UInt256",
]
