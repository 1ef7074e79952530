"""Balance history providers consumed by the draw calculator."""

from __future__ import annotations

import logging
from typing import Mapping, Protocol, Sequence

from sqlalchemy.orm import Session

from .calculator.user_number import normalize_address
from .models.balance import BalanceCheckpoint

logger = logging.getLogger(__name__)


class BalanceProvider(Protocol):
    """Source of historical ticket balances.

    ``get_balances`` must return one balance per requested timestamp, in the
    same order, each reflecting the balance *as of* that timestamp rather
    than the current balance.
    """

    def get_balances(self, user: str, timestamps: Sequence[int]) -> list[int]:
        ...


class CheckpointBalanceProvider:
    """Look balances up from :class:`BalanceCheckpoint` rows."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_balances(self, user: str, timestamps: Sequence[int]) -> list[int]:
        address = normalize_address(user)
        balances = [
            BalanceCheckpoint.balance_at(self._session, address, timestamp)
            for timestamp in timestamps
        ]
        logger.debug(f"Resolved {len(balances)} checkpointed balances for {address}")
        return balances


class StaticBalanceProvider:
    """In-memory provider backed by ``{(user, timestamp): balance}``.

    Lookups for unknown pairs return ``0``. Useful for verification tooling
    where balances come from a recorded file instead of a database.
    """

    def __init__(self, balances: Mapping[tuple[str, int], int]) -> None:
        self._balances = {
            (normalize_address(user), int(timestamp)): int(balance)
            for (user, timestamp), balance in balances.items()
        }

    def get_balances(self, user: str, timestamps: Sequence[int]) -> list[int]:
        address = normalize_address(user)
        return [self._balances.get((address, int(ts)), 0) for ts in timestamps]


__all__ = ["BalanceProvider", "CheckpointBalanceProvider", "StaticBalanceProvider"]
