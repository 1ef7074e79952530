import re
from pathlib import Path

# sqlite URLs with an optional driver, e.g. sqlite+pysqlite:///./dev.db
_RELATIVE_SQLITE_URL = re.compile(r"^(sqlite(?:\+\w+)?:///)\./(.+)$")


def resolve_sqlite_url(url: str, project_root: Path) -> str:
    """Resolve a relative sqlite URL against ``project_root``.

    ``sqlite:///./data/dev.db`` and driver-qualified forms such as
    ``sqlite+pysqlite:///./data/dev.db`` become absolute paths so the
    database does not depend on the working directory. In-memory,
    absolute and non-sqlite URLs are returned unchanged.
    """
    match = _RELATIVE_SQLITE_URL.match(url)
    if match is None:
        return url
    prefix, rel = match.groups()
    return f"{prefix}{(project_root / rel).resolve()}"
