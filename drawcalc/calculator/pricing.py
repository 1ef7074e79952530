"""Tier pricing: turn a match count into a share of the prize."""

from __future__ import annotations

from ..constants import ONE
from .settings import DrawSettings


def prize_fraction(distribution_index: int, settings: DrawSettings) -> int:
    """Return the fixed-point prize fraction paid for ``distribution_index``.

    The tier share is divided by ``range ** distribution_index``: each digit
    that is allowed to differ makes a win ``range`` times more likely, so a
    single winner receives proportionally less and the expected payout of a
    tier stays within its share of the prize.

    Returns ``0`` when no tier exists at ``distribution_index``.
    """

    if distribution_index < 0:
        raise ValueError("distribution_index must not be negative")
    if distribution_index >= len(settings.distributions):
        return 0
    number_of_prizes = settings.range**distribution_index
    return settings.distributions[distribution_index] // number_of_prizes


def calculate_prize_for_matches(
    matches: int, total_prize: int, settings: DrawSettings
) -> int:
    """Return the payout for a pick with ``matches`` leading matching digits.

    Parameters
    ----------
    matches : int
        Prefix match count, between ``0`` and ``settings.match_cardinality``.
    total_prize : int
        Draw prize amount as an 18-decimal fixed-point integer.
    settings : DrawSettings
        Settings providing the cardinality, range and distribution table.

    Returns
    -------
    int
        ``total_prize * fraction // ONE``, floored so rounding never pays
        more than the tier allows. ``0`` when the match count is below the
        lowest tier.

    Raises
    ------
    ValueError
        If ``matches`` is greater than ``settings.match_cardinality``.
    """

    if matches > settings.match_cardinality:
        raise ValueError(
            f"matches ({matches}) cannot exceed match_cardinality "
            f"({settings.match_cardinality})"
        )
    distribution_index = settings.match_cardinality - matches
    fraction = prize_fraction(distribution_index, settings)
    if fraction == 0:
        return 0
    return total_prize * fraction // ONE


__all__ = ["calculate_prize_for_matches", "prize_fraction"]
