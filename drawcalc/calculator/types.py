"""Value objects passed into and returned from the draw calculator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..constants import UINT256_MAX


@dataclass(frozen=True)
class Draw:
    """One historical lottery round.

    Attributes
    ----------
    winning_random_number : int
        Published 256-bit winning number.
    timestamp : int
        Time of the draw; balances are looked up as of this moment.
    prize_amount : int
        Total prize (18-decimal fixed point) available for the draw.
    """

    winning_random_number: int
    timestamp: int
    prize_amount: int

    def __post_init__(self) -> None:
        if not 0 <= self.winning_random_number <= UINT256_MAX:
            raise ValueError("winning_random_number must be an unsigned 256-bit integer")
        if self.prize_amount < 0:
            raise ValueError("prize_amount must not be negative")


@dataclass(frozen=True)
class PickResult:
    """Evaluation of a single claimed pick."""

    pick_index: int
    user_random_number: int
    matches: int
    payout: int


@dataclass(frozen=True)
class DrawPayout:
    """Per-draw subtotal with the picks that produced it."""

    draw_index: int
    draw: Draw
    balance: int
    allowed_picks: int
    picks: tuple[PickResult, ...] = field(default_factory=tuple)

    @property
    def subtotal(self) -> int:
        return sum(pick.payout for pick in self.picks)


@dataclass(frozen=True)
class DrawCalculation:
    """Full breakdown of a settlement call.

    ``total`` equals the value returned by :meth:`DrawCalculator.calculate`
    for the same inputs.
    """

    user: str
    settings_version: Optional[int]
    draws: tuple[DrawPayout, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return sum(draw.subtotal for draw in self.draws)


__all__ = ["Draw", "DrawCalculation", "DrawPayout", "PickResult"]
