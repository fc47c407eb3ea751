# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""HTTP connection to the CredHub and UAA servers."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import DecodeError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class Connection:
    """Blocking HTTP connection shared by the auth manager and API client.

    TLS verification is turned off when ``insecure_skip_verify`` is set and
    applies to every request made through the connection. Transport errors
    are raised as the original ``httpx.TransportError``.
    """

    def __init__(
        self,
        insecure_skip_verify: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.insecure_skip_verify = insecure_skip_verify
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.Client(
            verify=not self.insecure_skip_verify,
            timeout=self._timeout,
            transport=self._transport,
        )

    def close(self) -> None:
        """Close the connection."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        data: dict[str, Any] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and return the response, whatever its status.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            headers: Extra request headers.
            data: Form fields, sent url-encoded.
            auth: HTTP Basic credentials.

        Raises:
            httpx.TransportError: If the server cannot be reached.
        """
        if self._client is None:
            self.connect()
        assert self._client is not None

        logger.debug("%s %s", method, url)
        response = self._client.request(
            method, url, headers=headers, data=data, auth=auth
        )
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def __enter__(self) -> Connection:
        self.connect()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def json_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"Unable to decode response from {response.url}: {e}")
