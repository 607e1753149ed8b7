"""
Shared aiohttp session for the explorer and exchange hosts.

All cards of a dashboard fetch through one session; it is opened on the
first request and closed together with the dashboard.
"""

import logging
from typing import Optional

import aiohttp

from .constants import CONNECTIONS_PER_HOST, USER_AGENT
from .models.config import ConnectionConfig

logger = logging.getLogger(__name__)

# explorer + exchange
_UPSTREAM_HOSTS = 2


class SessionManager:
    """Owns the single read-only HTTP session used by resolver and aggregator."""

    def __init__(self, config: ConnectionConfig):
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, opening a new one if needed."""
        if self._session is not None and not self._session.closed:
            return self._session

        connector = aiohttp.TCPConnector(
            limit=CONNECTIONS_PER_HOST * _UPSTREAM_HOSTS,
            limit_per_host=CONNECTIONS_PER_HOST,
        )

        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        logger.debug(
            f"Opened HTTP session for {self._config.explorer_base_url} "
            f"and {self._config.exchange_base_url}"
        )
        return self._session

    async def close_session(self) -> None:
        """Close the session if one is open."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
