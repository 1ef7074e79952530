from __future__ import annotations

import unittest
from decimal import Decimal

from drawcalc.constants import ONE
from drawcalc.fixed_point import format_fixed, from_fixed, to_fixed


class FixedPointTests(unittest.TestCase):
    def test_to_fixed_parses_exactly(self) -> None:
        self.assertEqual(to_fixed("0.8"), 800000000000000000)
        self.assertEqual(to_fixed(100), 100 * ONE)
        self.assertEqual(to_fixed(Decimal("0.2777777777777777")), 277777777777777700)
        self.assertEqual(to_fixed("0.000000000000000001"), 1)

    def test_large_amounts_keep_precision(self) -> None:
        self.assertEqual(
            to_fixed("123456789012345678901234.123456789012345678"),
            123456789012345678901234123456789012345678,
        )

    def test_too_many_decimals_rejected(self) -> None:
        with self.assertRaises(ValueError):
            to_fixed("0.0000000000000000001")

    def test_float_rejected(self) -> None:
        with self.assertRaises(TypeError):
            to_fixed(0.8)  # type: ignore[arg-type]

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(ValueError):
            to_fixed("eighty")

    def test_from_fixed_and_format(self) -> None:
        self.assertEqual(from_fixed(625 * 10**15), Decimal("0.625"))
        self.assertEqual(format_fixed(80 * ONE), "80")
        self.assertEqual(format_fixed(277777777777777700), "0.2777777777777777")
        self.assertEqual(format_fixed(0), "0")


if __name__ == "__main__":
    unittest.main()
