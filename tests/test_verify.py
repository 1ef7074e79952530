from __future__ import annotations

import json
import os
import tempfile
import unittest

from drawcalc.calculator import DrawSettings, derive_user_random_number
from drawcalc.fixed_point import to_fixed
from drawcalc.verify import verify_settlement

USER = "0x" + "e5" * 20

SETTINGS = DrawSettings(
    range=10,
    match_cardinality=8,
    pick_cost=to_fixed(1),
    distributions=(to_fixed("0.8"), to_fixed("0.2")),
)


class VerifySettlementTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write_record(self, expected_payout: int, picks=(1,), balance=to_fixed(10)) -> str:
        winning = derive_user_random_number(USER, 1)
        record = {
            "user": USER,
            "settings": SETTINGS.to_json(),
            "draws": [
                {
                    "winning_random_number": hex(winning),
                    "timestamp": 42,
                    "prize_amount": str(to_fixed(100)),
                    "balance": str(balance),
                    "picks": list(picks),
                }
            ],
            "expected_payout": str(expected_payout),
        }
        path = os.path.join(self.tmpdir.name, "record.json")
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(record, fh)
        return path

    def test_matching_record_verifies(self) -> None:
        summary = verify_settlement(self._write_record(to_fixed(80)))
        self.assertTrue(summary["ok"])
        self.assertEqual(summary["payout"], to_fixed(80))
        self.assertEqual(summary["payout_display"], "80")
        self.assertEqual(summary["draws"][0]["matches"], [8])

    def test_mismatch_raises(self) -> None:
        with self.assertRaises(RuntimeError) as ctx:
            verify_settlement(self._write_record(to_fixed(81)))
        self.assertIn("Payout mismatch", str(ctx.exception))

    def test_entitlement_is_enforced(self) -> None:
        from drawcalc.errors import InsufficientPicksError

        path = self._write_record(to_fixed(80), picks=(1, 2), balance=to_fixed(1))
        with self.assertRaises(InsufficientPicksError):
            verify_settlement(path)

    def test_settings_round_trip_through_json(self) -> None:
        self.assertEqual(DrawSettings.from_json(SETTINGS.to_json()), SETTINGS)


if __name__ == "__main__":
    unittest.main()
