# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""CredHub data API client."""

from __future__ import annotations

import logging

import httpx

from .connection import Connection
from .errors import ConfigurationError, DecodeError, ServerError
from .models import (
    Certificate,
    Credential,
    CredentialValue,
    KeyPair,
    StringValue,
    parse_credential,
)
from .session import Session
from . import protocol

logger = logging.getLogger(__name__)


class CredhubClient:
    """Fetch and delete named credentials on the session's target.

    Every request is bearer-authenticated with ``session.access_token`` and
    fails with :class:`ConfigurationError`, before touching the network,
    when no API URL is set.
    """

    def __init__(
        self,
        session: Session,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.session = session
        self._transport = transport

    def _connection(self) -> Connection:
        return Connection(
            insecure_skip_verify=self.session.insecure_skip_verify,
            transport=self._transport,
        )

    def _send(self, method: str, url: str) -> httpx.Response:
        with self._connection() as conn:
            resp = conn.request(
                method, url, headers=protocol.bearer_headers(self.session.access_token)
            )
        if not resp.is_success:
            raise _server_error(resp)
        return resp

    def get(self, name: str) -> Credential:
        """Fetch the current version of a credential by name.

        Raises:
            ConfigurationError: If the session has no API URL.
            httpx.TransportError: If the server cannot be reached.
            ServerError: If the server answers with a non-2xx status.
            DecodeError: If the body is not a credential.
        """
        if not self.session.api_url:
            raise ConfigurationError()
        resp = self._send("GET", protocol.data_url(self.session.api_url, name))
        return parse_credential(resp.content)

    def get_value(self, name: str) -> Credential:
        return self._get_typed(name, StringValue, ("value",))

    def get_password(self, name: str) -> Credential:
        return self._get_typed(name, StringValue, ("password",))

    def get_ssh(self, name: str) -> Credential:
        return self._get_typed(name, KeyPair, ("ssh",))

    def get_rsa(self, name: str) -> Credential:
        return self._get_typed(name, KeyPair, ("rsa",))

    def get_certificate(self, name: str) -> Credential:
        return self._get_typed(name, Certificate, ("certificate",))

    def _get_typed(
        self,
        name: str,
        expected: type[CredentialValue],
        types: tuple[str, ...],
    ) -> Credential:
        cred = self.get(name)
        if cred.type not in types or not isinstance(cred.value, expected):
            raise DecodeError(
                f"credential {name!r} is of type {cred.type!r}, "
                f"expected {' or '.join(types)}"
            )
        return cred

    def delete(self, name: str) -> None:
        """Delete every version of a credential.

        Raises:
            ConfigurationError: If the session has no API URL.
            ServerError: With the server's message if deletion fails.
        """
        if not self.session.api_url:
            raise ConfigurationError()
        self._send("DELETE", protocol.secret_url(self.session.api_url, name))
        logger.info("Deleted %s", name)


def _server_error(resp: httpx.Response) -> ServerError:
    try:
        body = resp.json()
    except ValueError:
        body = None
    default = resp.text.strip() or f"request failed ({resp.status_code})"
    return ServerError(
        protocol.error_message(body, default), status_code=resp.status_code
    )
