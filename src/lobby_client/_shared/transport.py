# Area: Shared
"""
lobby_client._shared.transport — HTTP+JSON transport
=====================================================

Issues one GET or POST per call and returns the decoded JSON body.
Connection pooling comes from requests.Session. There are no retries;
the timeout is whatever the transport was built with (None blocks
until the server answers).

Application errors travel inside the JSON envelope, so the HTTP status
code is not treated as a failure on its own: a 4xx/5xx with a JSON body
is handed back like any other response.
"""

from __future__ import annotations
import logging
from typing import Any, Optional, Protocol, Sequence, Tuple

import requests

from ..errors import TransportError
from .routes import join_url

logger = logging.getLogger("lobby_client.transport")

QueryPairs = Sequence[Tuple[str, str]]

SUPPORTED_METHODS = ("GET", "POST")


class Transport(Protocol):
    """What the session client needs from a transport."""

    def call(
        self,
        method: str,
        path: str,
        query: QueryPairs = (),
        body: str = "",
    ) -> Any:
        ...


class HttpTransport:
    """Blocking HTTP transport built on requests."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the transport.

        Args:
            base_url: Server root, e.g. "http://localhost:8000"
            timeout: Per-request timeout in seconds (None = no timeout)
            session: Pre-configured requests.Session to reuse
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def call(
        self,
        method: str,
        path: str,
        query: QueryPairs = (),
        body: str = "",
    ) -> Any:
        """
        Perform one round trip and decode the JSON body.

        Args:
            method: "GET" or "POST"
            path: Command path relative to the base URL
            query: Ordered (key, value) query parameters
            body: Raw request body, sent as UTF-8 text

        Returns:
            The decoded JSON value

        Raises:
            TransportError: On connection failure, timeout, or a non-JSON body
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {method}")

        url = join_url(self.base_url, path)
        logger.debug(f"{method} {url} query={list(query)} body_len={len(body)}")

        try:
            response = self._session.request(
                method,
                url,
                params=list(query),
                data=body.encode("utf-8") if body else None,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}", command=path) from e

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {url} returned a non-JSON body (HTTP {response.status_code})",
                command=path,
                status_code=response.status_code,
            ) from e

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
