from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .db.utils import resolve_sqlite_url

# Project root directory (repo root)
ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DB_URL = "sqlite:///./dev.db"


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration read from the environment (and ``.env``)."""

    db_url: str
    owner: Optional[str] = None
    ticket_api_base_url: Optional[str] = None
    ticket_api_key: Optional[str] = None
    ticket_api_timeout: int = 45
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "AppConfig":
        load_dotenv()

        db_url = resolve_sqlite_url(os.getenv("DB_URL", DEFAULT_DB_URL), ROOT_DIR)
        owner = os.getenv("DRAWCALC_OWNER", "").strip() or None
        base_url = os.getenv("TICKET_API_BASE_URL", "").strip() or None
        api_key = os.getenv("TICKET_API_KEY", "").strip() or None

        timeout_raw = os.getenv("TICKET_API_TIMEOUT", "45").strip() or "45"
        try:
            timeout = int(timeout_raw)
        except ValueError as exc:
            raise RuntimeError(
                f"TICKET_API_TIMEOUT must be an integer, got {timeout_raw!r}"
            ) from exc

        log_level = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()

        return AppConfig(
            db_url=db_url,
            owner=owner,
            ticket_api_base_url=base_url,
            ticket_api_key=api_key,
            ticket_api_timeout=timeout,
            log_level=log_level,
        )
