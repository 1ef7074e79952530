"""Draw settings value object and its validation rules."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import DEFAULT_NIBBLE_MASK, DEFAULT_NIBBLE_SIZE, MAX_RANGE, ONE
from ..errors import (
    DistributionsExceedTotalError,
    InvalidDrawSettingsError,
    RangeTooLargeError,
)


@dataclass(frozen=True)
class DrawSettings:
    """Tunable parameters that drive matching and prize pricing.

    Attributes
    ----------
    range : int
        Modulus used to normalize extracted digits (``1`` to ``15``).
    match_cardinality : int
        Number of digits compared between the winning and the user number.
    pick_cost : int
        Balance (18-decimal fixed point) required per claimable pick.
    distributions : tuple[int, ...]
        Fixed-point share of the prize per tier. Index ``0`` is the grand
        prize (all digits matched); each further index is one match fewer.
    nibble_mask_value : int, default: 15
        Mask applied to a shifted word to isolate one digit.
    nibble_size : int, default: 4
        Width of one digit in bits.
    """

    range: int
    match_cardinality: int
    pick_cost: int
    distributions: tuple[int, ...] = field(default_factory=tuple)
    nibble_mask_value: int = DEFAULT_NIBBLE_MASK
    nibble_size: int = DEFAULT_NIBBLE_SIZE

    def __post_init__(self) -> None:
        # Accept any sequence but keep the frozen value hashable.
        if not isinstance(self.distributions, tuple):
            object.__setattr__(self, "distributions", tuple(self.distributions))

    @property
    def distributions_total(self) -> int:
        """Sum of all tier fractions."""
        return sum(self.distributions)

    def to_json(self) -> dict:
        """Serialize to a JSON-friendly dict; amounts become decimal strings."""
        return {
            "range": self.range,
            "match_cardinality": self.match_cardinality,
            "pick_cost": str(self.pick_cost),
            "distributions": [str(value) for value in self.distributions],
            "nibble_mask_value": self.nibble_mask_value,
            "nibble_size": self.nibble_size,
        }

    @classmethod
    def from_json(cls, data: dict) -> "DrawSettings":
        """Build settings from the structure produced by :meth:`to_json`."""
        return cls(
            range=int(data["range"]),
            match_cardinality=int(data["match_cardinality"]),
            pick_cost=int(data["pick_cost"]),
            distributions=tuple(int(value) for value in data["distributions"]),
            nibble_mask_value=int(data.get("nibble_mask_value", DEFAULT_NIBBLE_MASK)),
            nibble_size=int(data.get("nibble_size", DEFAULT_NIBBLE_SIZE)),
        )


def validate_draw_settings(settings: DrawSettings) -> None:
    """Check ``settings`` against the validation rules.

    The distribution total is checked first, then the range bound, then the
    structural rules that keep pricing and entitlement well defined.

    Raises
    ------
    DistributionsExceedTotalError
        If the distributions sum to more than ``ONE``.
    RangeTooLargeError
        If ``range`` is greater than ``15``.
    InvalidDrawSettingsError
        If any other parameter is out of its domain.
    """

    if settings.distributions_total > ONE:
        raise DistributionsExceedTotalError(
            f"distributions sum to {settings.distributions_total}, above {ONE}"
        )
    if settings.range > MAX_RANGE:
        raise RangeTooLargeError(
            f"range {settings.range} is greater than {MAX_RANGE}"
        )
    _check_structure(settings)


def _check_structure(settings: DrawSettings) -> None:
    if settings.range < 1:
        raise InvalidDrawSettingsError("range must be at least 1")
    if settings.match_cardinality < 0:
        raise InvalidDrawSettingsError("match_cardinality must not be negative")
    if settings.pick_cost <= 0:
        raise InvalidDrawSettingsError("pick_cost must be positive")
    if settings.nibble_size < 1:
        raise InvalidDrawSettingsError("nibble_size must be at least 1")
    if settings.nibble_mask_value < 0:
        raise InvalidDrawSettingsError("nibble_mask_value must not be negative")
    if any(value < 0 for value in settings.distributions):
        raise InvalidDrawSettingsError("distributions must not be negative")


__all__ = ["DrawSettings", "validate_draw_settings"]
