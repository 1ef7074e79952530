from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from drawcalc.config import AppConfig
from drawcalc.errors import DrawCalcError
from drawcalc.verify import verify_settlement


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Recompute a recorded prize settlement and check its payout."
    )
    parser.add_argument("record", help="Path to the settlement record (JSON).")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=AppConfig.from_env().log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        summary = verify_settlement(args.record)
    except (RuntimeError, DrawCalcError) as exc:
        print(f"FAILED: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
