# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""CredHub Client — Thin client for the CredHub credential manager."""

from __future__ import annotations

import httpx

from .auth import AuthManager, LoginState, ServerInfo
from .client import CredhubClient
from .config import load_session, remove_session, save_session
from .connection import Connection, DEFAULT_TIMEOUT
from .errors import (
    AuthenticationError,
    ConfigurationError,
    CredhubError,
    DecodeError,
    ServerError,
    TargetInvalidError,
)
from .models import (
    Certificate,
    Credential,
    CredentialValue,
    KeyPair,
    OpaqueValue,
    StringValue,
    parse_credential,
)
from .session import REVOKED, AuthToken, Session
from . import protocol

__version__ = "0.1.0"

__all__ = [
    # Top-level functions
    "target",
    "login",
    "logout",
    "get",
    "delete",
    # Classes
    "AuthManager",
    "AuthToken",
    "Certificate",
    "Connection",
    "Credential",
    "CredentialValue",
    "CredhubClient",
    "KeyPair",
    "LoginState",
    "OpaqueValue",
    "ServerInfo",
    "Session",
    "StringValue",
    "REVOKED",
    "DEFAULT_TIMEOUT",
    "load_session",
    "save_session",
    "remove_session",
    "parse_credential",
    "protocol",
    # Errors
    "CredhubError",
    "ConfigurationError",
    "TargetInvalidError",
    "AuthenticationError",
    "DecodeError",
    "ServerError",
]


def target(
    server: str,
    *,
    skip_tls: bool = False,
    config_path: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> ServerInfo:
    """Probe a CredHub server and make it the persisted target.

    Args:
        server: The API URL (e.g. "https://credhub.example.com:8844").
        skip_tls: Whether to skip TLS certificate verification.
        config_path: Path to the session file.
        transport: Optional httpx transport, mainly for tests.

    Returns:
        ServerInfo with the auth server URL and server version.
    """
    session = load_session(config_path)
    info = AuthManager(transport).set_target(session, server, skip_tls)
    save_session(session, config_path)
    return info


def login(
    username: str,
    password: str,
    *,
    server: str | None = None,
    skip_tls: bool = False,
    config_path: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Session:
    """Log in with a password grant and persist the resulting tokens.

    The session is written back even when the grant fails, so that tokens
    revoked along the way are not reused.

    Args:
        username: UAA user name.
        password: UAA password.
        server: Optional API URL to target first.
        skip_tls: Whether to skip TLS verification for ``server``.
        config_path: Path to the session file.
        transport: Optional httpx transport, mainly for tests.

    Returns:
        The authenticated Session.
    """
    session = load_session(config_path)
    try:
        return AuthManager(transport).login(
            username, password, session, server=server, skip_tls=skip_tls
        )
    finally:
        save_session(session, config_path)


def logout(
    *,
    config_path: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Session:
    """Revoke the persisted refresh token and forget the tokens."""
    session = load_session(config_path)
    AuthManager(transport).logout(session)
    save_session(session, config_path)
    return session


def get(
    name: str,
    *,
    config_path: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Credential:
    """Fetch a credential by name from the persisted target.

    Args:
        name: Credential name (e.g. "/deploy/db-password").
        config_path: Path to the session file.
        transport: Optional httpx transport, mainly for tests.

    Returns:
        The decoded Credential.
    """
    return CredhubClient(load_session(config_path), transport).get(name)


def delete(
    name: str,
    *,
    config_path: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> None:
    """Delete a credential by name on the persisted target."""
    CredhubClient(load_session(config_path), transport).delete(name)
