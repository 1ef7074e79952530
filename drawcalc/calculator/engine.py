"""Settlement engine computing prize payouts for claimed picks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from ..constants import DEFAULT_NIBBLE_SIZE
from ..errors import (
    BalanceLookupError,
    DrawInputMismatchError,
    DrawSettingsNotSetError,
    InsufficientPicksError,
)
from .digits import count_matches, get_value_at_index
from .pricing import calculate_prize_for_matches
from .settings import DrawSettings, validate_draw_settings
from .store import DrawSettingsStore
from .types import Draw, DrawCalculation, DrawPayout, PickResult
from .user_number import derive_user_random_number, normalize_address

if TYPE_CHECKING:
    from ..balances import BalanceProvider

logger = logging.getLogger(__name__)


class DrawCalculator:
    """Engine that checks pick entitlement, matches picks and sums payouts.

    The calculator holds no mutable state of its own: settings are read once
    per call from the store (or passed in explicitly) and balances come from
    the provider, so identical inputs always produce identical results.
    """

    def __init__(
        self,
        store: Optional[DrawSettingsStore],
        balance_provider: "BalanceProvider",
    ) -> None:
        """Create a calculator.

        Parameters
        ----------
        store : Optional[DrawSettingsStore]
            Store providing the active draw settings. May be ``None`` when
            every call passes ``settings`` explicitly.
        balance_provider : BalanceProvider
            Source of the user's historical balances.
        """

        self._store = store
        self._balances = balance_provider

    def get_draw_settings(self) -> DrawSettings:
        """Return the active draw settings."""
        if self._store is None:
            raise DrawSettingsNotSetError("calculator has no settings store")
        return self._store.get_draw_settings()

    def get_value_at_index(self, word: int, index: int, range_: int, mask: int) -> int:
        """Return the normalized digit of ``word`` at ``index``.

        Uses the nibble size of the active settings, or ``4`` when no settings
        have been stored yet.
        """
        try:
            nibble_size = self.get_draw_settings().nibble_size
        except DrawSettingsNotSetError:
            nibble_size = DEFAULT_NIBBLE_SIZE
        return get_value_at_index(word, index, range_, mask, nibble_size)

    def calculate(
        self,
        user: str,
        winning_random_numbers: Sequence[int],
        timestamps: Sequence[int],
        prizes: Sequence[int],
        pick_indices: Sequence[Sequence[int]],
        *,
        settings: Optional[DrawSettings] = None,
    ) -> int:
        """Return the total prize owed to ``user`` across a batch of draws.

        Parameters
        ----------
        user : str
            Account address claiming the prizes.
        winning_random_numbers : Sequence[int]
            Winning number of each draw.
        timestamps : Sequence[int]
            Timestamp of each draw.
        prizes : Sequence[int]
            Total prize (18-decimal fixed point) of each draw.
        pick_indices : Sequence[Sequence[int]]
            Pick indices claimed for each draw.
        settings : Optional[DrawSettings], default: None
            Settings to price with. When omitted the store's active snapshot
            is read once and used for every draw in the batch.

        Returns
        -------
        int
            Sum of all pick payouts, ``0`` when nothing matched well enough.

        Raises
        ------
        DrawInputMismatchError
            If the per-draw sequences have different lengths.
        InsufficientPicksError
            If any draw claims more picks than the balance allows. No payout
            is computed in that case.
        """

        draws = [
            Draw(winning_random_number=number, timestamp=timestamp, prize_amount=prize)
            for number, timestamp, prize in _zip_draw_inputs(
                winning_random_numbers, timestamps, prizes, pick_indices
            )
        ]
        return self.calculate_breakdown(
            user, draws, pick_indices, settings=settings
        ).total

    def calculate_draws(
        self,
        user: str,
        draws: Sequence[Draw],
        pick_indices: Sequence[Sequence[int]],
        *,
        settings: Optional[DrawSettings] = None,
    ) -> int:
        """Same as :meth:`calculate` but taking :class:`Draw` objects."""
        return self.calculate_breakdown(
            user, draws, pick_indices, settings=settings
        ).total

    def calculate_breakdown(
        self,
        user: str,
        draws: Sequence[Draw],
        pick_indices: Sequence[Sequence[int]],
        *,
        settings: Optional[DrawSettings] = None,
    ) -> DrawCalculation:
        """Evaluate every claimed pick and return the full breakdown.

        Notes
        -----
        The evaluation runs in two passes:

        1. Fetch all balances in one provider call and check the pick
           entitlement of every draw. Any violation aborts the call before
           a single payout is computed.
        2. For each pick, derive the user's number, count the matching
           digits against the draw's winning number and price the tier.
        """

        if len(draws) != len(pick_indices):
            raise DrawInputMismatchError(
                f"got {len(draws)} draws but {len(pick_indices)} pick lists"
            )
        address = normalize_address(user)

        if settings is not None:
            validate_draw_settings(settings)
            version, active = None, settings
        elif self._store is not None:
            version, active = self._store.get_active()
        else:
            raise DrawSettingsNotSetError("no settings supplied and no settings store")

        timestamps = [draw.timestamp for draw in draws]
        balances = list(self._balances.get_balances(address, timestamps)) if draws else []
        if len(balances) != len(draws):
            raise BalanceLookupError(
                f"requested {len(draws)} balances, provider returned {len(balances)}"
            )

        allowed = []
        for draw_index, (balance, picks) in enumerate(zip(balances, pick_indices)):
            allowed_picks = balance // active.pick_cost
            if len(picks) > allowed_picks:
                logger.warning(
                    f"Insufficient picks for {address} in draw {draw_index}: "
                    f"requested {len(picks)}, allowed {allowed_picks}"
                )
                raise InsufficientPicksError(draw_index, len(picks), allowed_picks)
            allowed.append(allowed_picks)

        payouts: list[DrawPayout] = []
        for draw_index, draw in enumerate(draws):
            picks = tuple(
                self._evaluate_pick(address, pick_index, draw, active)
                for pick_index in pick_indices[draw_index]
            )
            payouts.append(
                DrawPayout(
                    draw_index=draw_index,
                    draw=draw,
                    balance=balances[draw_index],
                    allowed_picks=allowed[draw_index],
                    picks=picks,
                )
            )

        calculation = DrawCalculation(
            user=address, settings_version=version, draws=tuple(payouts)
        )
        logger.debug(
            f"Calculated {calculation.total} for {address} over {len(draws)} draws "
            f"(settings version {version})"
        )
        return calculation

    @staticmethod
    def _evaluate_pick(
        user: str, pick_index: int, draw: Draw, settings: DrawSettings
    ) -> PickResult:
        user_number = derive_user_random_number(user, pick_index)
        matches = count_matches(
            draw.winning_random_number,
            user_number,
            settings.match_cardinality,
            settings.range,
            settings.nibble_mask_value,
            settings.nibble_size,
        )
        payout = calculate_prize_for_matches(matches, draw.prize_amount, settings)
        return PickResult(
            pick_index=pick_index,
            user_random_number=user_number,
            matches=matches,
            payout=payout,
        )


def _zip_draw_inputs(
    winning_random_numbers: Sequence[int],
    timestamps: Sequence[int],
    prizes: Sequence[int],
    pick_indices: Sequence[Sequence[int]],
):
    lengths = {
        len(winning_random_numbers),
        len(timestamps),
        len(prizes),
        len(pick_indices),
    }
    if len(lengths) != 1:
        raise DrawInputMismatchError(
            "winning_random_numbers, timestamps, prizes and pick_indices "
            "must have the same length"
        )
    return zip(winning_random_numbers, timestamps, prizes)


__all__ = ["DrawCalculator"]
