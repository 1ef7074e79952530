from typing import Optional

from sqlalchemy import create_engine

from ..config import AppConfig


def make_engine(database_url: Optional[str] = None, echo: bool = False):
    url = database_url or AppConfig.from_env().db_url
    return create_engine(
        url,
        echo=echo,
        future=True,
    )
