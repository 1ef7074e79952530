import logging
from typing import Any, Mapping, Optional, Sequence
from urllib.parse import urljoin

import requests

from ..calculator.user_number import normalize_address
from ..config import AppConfig
from ..errors import BalanceLookupError

logger = logging.getLogger(__name__)


class TicketClient:
    """HTTP client for a service that indexes historical ticket balances.

    Implements the :class:`~drawcalc.balances.BalanceProvider` protocol.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        config = None
        if base_url is None or timeout is None:
            config = AppConfig.from_env()
        url = base_url or (config.ticket_api_base_url if config else None)
        if not url:
            raise ValueError("Environment variable 'TICKET_API_BASE_URL' is not set")

        self.base_url = url.rstrip("/")
        if api_key is None and config is not None:
            api_key = config.ticket_api_key
        self.api_key = api_key
        self.timeout = timeout if timeout is not None else config.ticket_api_timeout
        self.session = session or requests.Session()

    # -------- headers --------
    @property
    def headers(self) -> Mapping[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    # -------- core request --------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
    ) -> Any:
        url = urljoin(self.base_url + "/", path.lstrip("/"))
        r = self.session.request(
            method=method.upper(),
            url=url,
            headers=self.headers,
            params=params,
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json() if r.content else None

    # -------- API callers --------
    def get_balances(self, user: str, timestamps: Sequence[int]) -> list[int]:
        """Return the balances of ``user`` as of each of ``timestamps``.

        Raises
        ------
        requests.HTTPError
            If the service answers with an error status.
        BalanceLookupError
            If the payload is missing balances or holds a different number of
            them than requested.
        """
        address = normalize_address(user)
        if not timestamps:
            return []
        # Never log the API key; the address and count are enough to trace calls.
        logger.debug(f"Fetching {len(timestamps)} balances for {address}")
        payload = self._request(
            "GET",
            f"/api/v1/tickets/{address}/balances",
            params={"timestamps": ",".join(str(int(ts)) for ts in timestamps)},
        )

        if not isinstance(payload, dict) or not isinstance(payload.get("balances"), list):
            raise BalanceLookupError(f"Unexpected balance response: {payload!r}")
        raw = payload["balances"]
        if len(raw) != len(timestamps):
            raise BalanceLookupError(
                f"Requested {len(timestamps)} balances, service returned {len(raw)}"
            )
        try:
            balances = [int(value) for value in raw]
        except (TypeError, ValueError) as exc:
            raise BalanceLookupError(f"Malformed balance in response: {exc}") from exc
        if any(balance < 0 for balance in balances):
            raise BalanceLookupError("Service returned a negative balance")
        return balances
