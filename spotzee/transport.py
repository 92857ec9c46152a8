"""
HTTP transport for the Spotzee client API.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from .config import DEFAULT_ENDPOINT
from .errors import ApiError
from .keys import normalize_keys

logger = logging.getLogger(__name__)


class Transport:
    """Issues authenticated requests against `<endpoint>/client/<path>`."""

    def __init__(self, api_key: str, endpoint: str = DEFAULT_ENDPOINT,
                 timeout: Optional[float] = None):
        """
        Initialize the transport.

        Args:
            api_key: API key sent as a bearer token
            endpoint: API base URL
            timeout: Request timeout in seconds, None for no timeout
        """
        self.endpoint = endpoint.rstrip('/')
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {api_key}'
        })

    def url(self, path: str) -> str:
        return f"{self.endpoint}/client/{path}"

    async def post(self, path: str, body: Any) -> str:
        """POST a key-normalized JSON body and return the response text."""
        response = await self._send('post', path, json=normalize_keys(body))
        return response.text

    async def put(self, path: str, body: Any) -> str:
        """PUT a key-normalized JSON body and return the response text."""
        response = await self._send('put', path, json=normalize_keys(body))
        return response.text

    async def get(self, path: str, identity_headers: Dict[str, str],
                  cursor: Optional[str] = None) -> Any:
        """
        GET a resource on behalf of an identity.

        Args:
            path: Resource path below /client/
            identity_headers: x-anonymous-id / x-external-id headers
            cursor: Continuation token from a previous page

        Returns:
            The decoded JSON body
        """
        params = {'cursor': cursor} if cursor else None
        response = await self._send(
            'get', path, params=params, headers=identity_headers
        )
        return response.json()

    async def _send(self, verb: str, path: str, **kwargs) -> requests.Response:
        url = self.url(path)
        logger.debug(f"{verb.upper()} {url}")

        # requests blocks, so the call runs on a worker thread
        response = await asyncio.to_thread(
            getattr(self.session, verb), url, timeout=self.timeout, **kwargs)

        if not 200 <= response.status_code < 300:
            logger.error(f"Request to {url} failed: {response.status_code}")
            raise ApiError(response.status_code, response.text)
        return response

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()
