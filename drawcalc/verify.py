from __future__ import annotations

import json
from typing import Any, Dict

from .balances import StaticBalanceProvider
from .calculator import Draw, DrawCalculator, DrawSettings
from .fixed_point import format_fixed


def _parse_int(value: Any) -> int:
    # 256-bit numbers are usually recorded as 0x-prefixed hex strings.
    if isinstance(value, str):
        text = value.strip()
        return int(text, 16) if text.lower().startswith("0x") else int(text)
    return int(value)


def verify_settlement(record_path: str) -> Dict[str, Any]:
    """Recompute a recorded settlement and compare it with its payout.

    The record is a JSON document of the form::

        {
          "user": "0x...",
          "settings": {... DrawSettings.to_json() ...},
          "draws": [{"winning_random_number": "0x..", "timestamp": 42,
                     "prize_amount": "100000000000000000000",
                     "balance": "10000000000000000000",
                     "picks": [1, 2]}],
          "expected_payout": "80000000000000000000"
        }

    Raises
    ------
    RuntimeError
        If the recomputed payout differs from ``expected_payout``.
    """

    with open(record_path, "r", encoding="utf-8") as fh:
        record = json.load(fh)

    user = record["user"]
    settings = DrawSettings.from_json(record["settings"])

    draws = []
    pick_indices = []
    balances = {}
    for entry in record["draws"]:
        draw = Draw(
            winning_random_number=_parse_int(entry["winning_random_number"]),
            timestamp=int(entry["timestamp"]),
            prize_amount=_parse_int(entry["prize_amount"]),
        )
        draws.append(draw)
        pick_indices.append([int(pick) for pick in entry.get("picks", [])])
        balances[(user, draw.timestamp)] = _parse_int(entry["balance"])

    calculator = DrawCalculator(None, StaticBalanceProvider(balances))
    calculation = calculator.calculate_breakdown(
        user, draws, pick_indices, settings=settings
    )

    expected = _parse_int(record["expected_payout"])
    if calculation.total != expected:
        raise RuntimeError(
            f"Payout mismatch: record={expected} recomputed={calculation.total}"
        )

    return {
        "ok": True,
        "user": calculation.user,
        "payout": calculation.total,
        "payout_display": format_fixed(calculation.total),
        "draws": [
            {
                "draw_index": payout.draw_index,
                "subtotal": payout.subtotal,
                "matches": [pick.matches for pick in payout.picks],
            }
            for payout in calculation.draws
        ],
    }
