# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Request builders for the CredHub and UAA HTTP APIs."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

# UAA public client used by the CredHub CLI
CLIENT_ID = "credhub"
CLIENT_SECRET = ""


def _join(base: str, path: str) -> str:
    return base.rstrip("/") + path


def info_url(api_url: str) -> str:
    """Build the INFO probe URL."""
    return _join(api_url, "/info")


def token_url(auth_url: str) -> str:
    """Build the password GRANT URL."""
    return _join(auth_url, "/oauth/token/")


def revoke_url(auth_url: str, refresh_token: str) -> str:
    """Build the REVOKE URL for a refresh token."""
    return _join(auth_url, f"/oauth/token/revoke/{refresh_token}")


def data_url(api_url: str, name: str) -> str:
    """Build the GET credential URL.

    Everything but ``/`` is percent-encoded, so ``/x`` stays ``?name=/x``
    and reserved characters in the name cannot split the query.
    """
    return _join(api_url, "/api/v1/data?name=" + quote(name, safe="/"))


def secret_url(api_url: str, name: str) -> str:
    """Build the DELETE credential URL."""
    if name.startswith("/"):
        name = name[1:]
    return _join(api_url, "/api/v1/secret/" + quote(name, safe="/"))


def password_grant_request(username: str, password: str) -> dict[str, Any]:
    """Build the form fields of a resource-owner password grant."""
    return {
        "grant_type": "password",
        "password": password,
        "response_type": "token",
        "username": username,
    }


def bearer_headers(access_token: str) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def error_message(body: Any, default: str) -> str:
    """Pull the server's error text out of a decoded error body."""
    if isinstance(body, dict):
        for key in ("error", "error_description", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return default
