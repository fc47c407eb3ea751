# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Authentication session manager: target discovery, login and revocation."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import httpx

from .connection import Connection, json_body
from .errors import (
    TARGET_UNREACHABLE_MESSAGE,
    AuthenticationError,
    ConfigurationError,
    CredhubError,
    DecodeError,
    ServerError,
    TargetInvalidError,
)
from .session import AuthToken, Session
from . import protocol

logger = logging.getLogger(__name__)


class LoginState(enum.Enum):
    IDLE = "idle"
    PROBING_TARGET = "probing_target"
    ATTEMPTING_GRANT = "attempting_grant"
    AUTHENTICATED = "authenticated"
    REVOKING_STALE = "revoking_stale"
    FAILED = "failed"


@dataclass
class ServerInfo:
    """What a CredHub server reports about itself on ``/info``."""

    auth_url: str
    server_version: str
    app_name: str = ""


class AuthManager:
    """Owns login, stale-token revocation and target discovery.

    Operations take the current :class:`Session` and mutate it in place;
    the caller decides when to persist it. Each operation opens a fresh
    :class:`Connection` honouring ``session.insecure_skip_verify`` unless a
    transport is injected.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport
        self.state = LoginState.IDLE
        self.transitions: list[LoginState] = [LoginState.IDLE]

    def _connection(self, session: Session) -> Connection:
        return Connection(
            insecure_skip_verify=session.insecure_skip_verify,
            transport=self._transport,
        )

    def _enter(self, state: LoginState) -> None:
        logger.debug("login: %s -> %s", self.state.value, state.value)
        self.state = state
        self.transitions.append(state)

    # ------------------------------------------------------------------
    # Target discovery
    # ------------------------------------------------------------------

    def discover_target(self, api_url: str, session: Session) -> ServerInfo:
        """Probe ``{api_url}/info`` and return the advertised auth server.

        Raises:
            TargetInvalidError: If the probe fails or the body is unusable.
        """
        try:
            with self._connection(session) as conn:
                resp = conn.request("GET", protocol.info_url(api_url))
        except (httpx.TransportError, httpx.InvalidURL) as e:
            logger.debug("Target probe for %s failed: %s", api_url, e)
            raise TargetInvalidError(TARGET_UNREACHABLE_MESSAGE) from e

        if not resp.is_success:
            raise TargetInvalidError()
        try:
            body = json_body(resp)
        except DecodeError as e:
            raise TargetInvalidError() from e

        auth_server = body.get("auth-server") if isinstance(body, dict) else None
        auth_url = auth_server.get("url") if isinstance(auth_server, dict) else None
        if not isinstance(auth_url, str) or not auth_url:
            raise TargetInvalidError()

        app = body.get("app") or {}
        if not isinstance(app, dict):
            app = {}
        return ServerInfo(
            auth_url=auth_url,
            server_version=str(app.get("version", "")),
            app_name=str(app.get("name", "")),
        )

    def set_target(
        self, session: Session, api_url: str, skip_tls: bool = False
    ) -> ServerInfo:
        """Point the session at a new API server once it has been probed.

        The URLs and skip flag are only changed when the probe succeeds.
        """
        if not api_url:
            raise ConfigurationError()

        previous_skip = session.insecure_skip_verify
        session.insecure_skip_verify = skip_tls
        try:
            info = self.discover_target(api_url, session)
        except CredhubError:
            session.insecure_skip_verify = previous_skip
            raise

        session.api_url = api_url
        session.auth_url = info.auth_url
        logger.info("Targeting %s (auth server %s)", api_url, info.auth_url)
        return info

    # ------------------------------------------------------------------
    # Login / logout
    # ------------------------------------------------------------------

    def login(
        self,
        username: str,
        password: str,
        session: Session,
        *,
        server: str | None = None,
        skip_tls: bool = False,
    ) -> Session:
        """Exchange username and password for tokens.

        Args:
            username: UAA user name.
            password: UAA password.
            session: Current session; updated in place and returned.
            server: Optional API URL to target before the grant.
            skip_tls: Skip TLS verification for the new target.

        Returns:
            The session holding the new tokens.

        Raises:
            TargetInvalidError: If ``server`` cannot be probed.
            AuthenticationError: If the credentials are rejected.
        """
        self.state = LoginState.IDLE
        self.transitions = [LoginState.IDLE]
        # stale tokens were issued by the auth server targeted before this call
        stale_auth_url = session.auth_url

        if server is not None:
            self._enter(LoginState.PROBING_TARGET)
            try:
                self.set_target(session, server, skip_tls)
            except CredhubError:
                self._enter(LoginState.FAILED)
                raise

        if not session.auth_url:
            self._enter(LoginState.FAILED)
            raise ConfigurationError()

        self._enter(LoginState.ATTEMPTING_GRANT)
        try:
            token = self.request_token(username, password, session)
        except (CredhubError, httpx.TransportError, httpx.InvalidURL):
            if session.has_refresh_token:
                self._enter(LoginState.REVOKING_STALE)
                self._revoke_quietly(session, stale_auth_url)
            self._enter(LoginState.FAILED)
            raise

        session.apply_token(token)
        self._enter(LoginState.AUTHENTICATED)
        return session

    def request_token(
        self, username: str, password: str, session: Session
    ) -> AuthToken:
        """Submit a password grant to the session's auth server."""
        with self._connection(session) as conn:
            resp = conn.request(
                "POST",
                protocol.token_url(session.auth_url),
                headers={"Accept": "application/json"},
                data=protocol.password_grant_request(username, password),
                auth=(protocol.CLIENT_ID, protocol.CLIENT_SECRET),
            )

        if resp.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthenticationError()
        if not resp.is_success:
            body = _maybe_json(resp)
            raise ServerError(
                protocol.error_message(body, f"token request failed ({resp.status_code})"),
                status_code=resp.status_code,
            )

        body = json_body(resp)
        if not isinstance(body, dict) or not isinstance(body.get("access_token"), str):
            raise DecodeError("token response does not contain an access_token")
        return AuthToken(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token") or "",
        )

    def revoke(self, session: Session, auth_url: str | None = None) -> None:
        """Revoke the session's refresh token on the auth server.

        ``auth_url`` overrides ``session.auth_url`` when the token was issued
        by a different auth server.
        """
        with self._connection(session) as conn:
            resp = conn.request(
                "DELETE",
                protocol.revoke_url(auth_url or session.auth_url, session.refresh_token),
                headers=protocol.bearer_headers(session.access_token),
            )
        if not resp.is_success:
            raise ServerError(
                f"token revocation failed ({resp.status_code})",
                status_code=resp.status_code,
            )

    def _revoke_quietly(self, session: Session, auth_url: str) -> None:
        if auth_url:
            try:
                self.revoke(session, auth_url)
            except (CredhubError, httpx.HTTPError, httpx.InvalidURL) as e:
                logger.warning("Could not revoke stale token: %s", e)
        session.mark_revoked()

    def logout(self, session: Session) -> Session:
        """Revoke any refresh token and forget the tokens locally."""
        if session.has_refresh_token:
            self._revoke_quietly(session, session.auth_url)
        else:
            session.mark_revoked()
        return session


def _maybe_json(resp: httpx.Response) -> object:
    try:
        return resp.json()
    except ValueError:
        return None
