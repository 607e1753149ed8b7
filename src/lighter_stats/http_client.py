"""
HTTP client for the explorer and exchange APIs.

Executes single read-only GET requests and turns transport, status and
decoding problems into typed exceptions. There is no retry: one failed
attempt is reported to the caller immediately.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientResponse, ClientSession

logger = logging.getLogger(__name__)


class HttpClient:
    """HTTP client specialized for read-only JSON endpoints."""

    async def get_json(
        self,
        session: ClientSession,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Execute a GET request and return the decoded JSON body."""
        logger.debug(f"GET {url} params={params}")

        try:
            async with session.get(url, params=params) as response:
                if not 200 <= response.status < 300:
                    raise HttpStatusError(
                        f"HTTP {response.status} from {url}",
                        status_code=response.status,
                    )
                return await self._process_response(response)
        except asyncio.TimeoutError as e:
            raise HttpClientError(f"Request timeout: {url}") from e
        except aiohttp.ClientError as e:
            raise HttpClientError(f"Connection error: {e}") from e

    async def _process_response(self, response: ClientResponse) -> Any:
        """Process HTTP response and return data."""
        body = await response.read()

        if not body:
            return None

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise HttpClientError(
                f"Invalid JSON response (Status {response.status}): {body[:200]!r}",
                status_code=response.status,
            ) from e


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class HttpStatusError(HttpClientError):
    """Exception for non-success HTTP status codes."""
    pass
