from __future__ import annotations

import unittest

from drawcalc.calculator import DrawSettings, calculate_prize_for_matches, prize_fraction
from drawcalc.constants import ONE
from drawcalc.fixed_point import to_fixed


def _settings(**overrides) -> DrawSettings:
    params = dict(
        range=10,
        match_cardinality=8,
        pick_cost=to_fixed(1),
        distributions=(to_fixed("0.8"), to_fixed("0.2")),
    )
    params.update(overrides)
    return DrawSettings(**params)


class PrizeFractionTests(unittest.TestCase):
    def test_grand_prize_is_not_divided(self) -> None:
        self.assertEqual(prize_fraction(0, _settings()), to_fixed("0.8"))

    def test_lower_tier_divided_by_range_power(self) -> None:
        self.assertEqual(prize_fraction(1, _settings()), to_fixed("0.02"))

    def test_index_past_table_is_zero(self) -> None:
        self.assertEqual(prize_fraction(2, _settings()), 0)

    def test_negative_index_rejected(self) -> None:
        with self.assertRaises(ValueError):
            prize_fraction(-1, _settings())


class CalculatePrizeForMatchesTests(unittest.TestCase):
    def test_grand_prize(self) -> None:
        payout = calculate_prize_for_matches(8, to_fixed(100), _settings())
        self.assertEqual(payout, to_fixed(80))

    def test_second_tier(self) -> None:
        payout = calculate_prize_for_matches(7, to_fixed(100), _settings())
        self.assertEqual(payout, to_fixed(2))

    def test_no_tier_pays_zero(self) -> None:
        for matches in range(0, 7):
            self.assertEqual(
                calculate_prize_for_matches(matches, to_fixed(100), _settings()), 0
            )

    def test_truncates_instead_of_rounding(self) -> None:
        settings = _settings(
            range=6,
            match_cardinality=5,
            distributions=(to_fixed("0.2"), to_fixed("0.1"), to_fixed("0.1"), to_fixed("0.1")),
        )
        payout = calculate_prize_for_matches(3, to_fixed(100), settings)
        self.assertEqual(payout, to_fixed("0.2777777777777777"))

    def test_third_tier_with_range_four(self) -> None:
        settings = _settings(
            range=4,
            match_cardinality=6,
            distributions=(to_fixed("0.2"), to_fixed("0.1"), to_fixed("0.1"), to_fixed("0.1")),
        )
        self.assertEqual(
            calculate_prize_for_matches(4, to_fixed(100), settings), to_fixed("0.625")
        )
        wider = _settings(
            range=4,
            match_cardinality=7,
            distributions=settings.distributions,
        )
        self.assertEqual(
            calculate_prize_for_matches(4, to_fixed(100), wider), to_fixed("0.15625")
        )

    def test_payout_is_monotonic_in_matches(self) -> None:
        settings = _settings(
            range=3,
            match_cardinality=6,
            distributions=(
                to_fixed("0.5"),
                to_fixed("0.2"),
                to_fixed("0.1"),
                to_fixed("0.1"),
                to_fixed("0.05"),
            ),
        )
        payouts = [
            calculate_prize_for_matches(matches, to_fixed(1000), settings)
            for matches in range(settings.match_cardinality + 1)
        ]
        self.assertEqual(payouts, sorted(payouts))

    def test_zero_prize_pays_zero(self) -> None:
        self.assertEqual(calculate_prize_for_matches(8, 0, _settings()), 0)

    def test_matches_above_cardinality_rejected(self) -> None:
        with self.assertRaises(ValueError):
            calculate_prize_for_matches(9, ONE, _settings())


if __name__ == "__main__":
    unittest.main()
