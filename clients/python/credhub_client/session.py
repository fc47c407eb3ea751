# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Session record shared between invocations of the client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

REVOKED = "revoked"


@dataclass
class AuthToken:
    """Tokens returned by a successful password grant."""

    access_token: str
    refresh_token: str = ""


@dataclass
class Session:
    """Target URLs and current tokens for one CredHub server.

    A Session is passed into every operation and handed back after any
    mutation; persisting it is the job of :mod:`credhub_client.config`.

    Example::

        session = Session(api_url="https://credhub.example.com:8844")
        session = AuthManager().login("admin", "secret", session)
    """

    api_url: str = ""
    auth_url: str = ""
    access_token: str = ""
    refresh_token: str = ""
    insecure_skip_verify: bool = False

    @property
    def has_refresh_token(self) -> bool:
        return self.refresh_token not in ("", REVOKED)

    def apply_token(self, token: AuthToken) -> None:
        self.access_token = token.access_token
        self.refresh_token = token.refresh_token

    def mark_revoked(self) -> None:
        self.access_token = REVOKED
        self.refresh_token = REVOKED

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the persisted field names."""
        return {
            "ApiURL": self.api_url,
            "AuthURL": self.auth_url,
            "AccessToken": self.access_token,
            "RefreshToken": self.refresh_token,
            "InsecureSkipVerify": self.insecure_skip_verify,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        return cls(
            api_url=data.get("ApiURL") or "",
            auth_url=data.get("AuthURL") or "",
            access_token=data.get("AccessToken") or "",
            refresh_token=data.get("RefreshToken") or "",
            insecure_skip_verify=data.get("InsecureSkipVerify") is True,
        )

    def __repr__(self) -> str:
        token = "set" if self.access_token else "unset"
        return (
            f"Session(api_url={self.api_url!r}, auth_url={self.auth_url!r}, "
            f"token={token}, insecure={self.insecure_skip_verify})"
        )
