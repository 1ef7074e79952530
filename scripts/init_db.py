from __future__ import annotations

import logging

from sqlalchemy import inspect

from drawcalc.config import AppConfig
from drawcalc.db.engine import make_engine
from drawcalc.models import Base


def create_tables(database_url: str) -> None:
    """Create every table known to the ORM metadata."""
    engine = make_engine(database_url)
    Base.metadata.create_all(engine)
    engine.dispose()


def print_tables(database_url: str) -> None:
    """Inspect the configured database and print all table names."""
    engine = make_engine(database_url)
    insp = inspect(engine)
    print("Current tables:", ", ".join(sorted(insp.get_table_names())))
    engine.dispose()


def main() -> None:
    """Create the schema and report the resulting tables."""
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    create_tables(config.db_url)
    print_tables(config.db_url)


if __name__ == "__main__":
    main()
