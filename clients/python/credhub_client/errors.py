# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Exception types for the CredHub client.

Transport failures are not wrapped: they surface as the original
``httpx.TransportError`` raised by the HTTP layer.
"""

from __future__ import annotations

AUTHENTICATION_FAILED_MESSAGE = (
    "The provided username and password combination are incorrect. "
    "Please validate your input and retry your request."
)
API_NOT_SET_MESSAGE = (
    "API location is not set. Please target the location of your server "
    "with `credhub api --server api.example.com` to continue."
)
TARGET_INVALID_MESSAGE = (
    "The targeted API does not appear to be valid. "
    "Please validate the API address and retry your request."
)
TARGET_UNREACHABLE_MESSAGE = (
    "Error connecting to the targeted API. "
    "Please validate the API address and retry your request."
)


class CredhubError(Exception):
    """Base exception for all CredHub client errors."""


class ConfigurationError(CredhubError):
    """A required session setting (API or auth URL) is not set."""

    def __init__(self, message: str = API_NOT_SET_MESSAGE) -> None:
        super().__init__(message)


class TargetInvalidError(CredhubError):
    """The targeted API could not be reached or did not describe itself."""

    def __init__(self, message: str = TARGET_INVALID_MESSAGE) -> None:
        super().__init__(message)


class AuthenticationError(CredhubError):
    """The authorization server rejected the username/password grant."""

    def __init__(self, message: str = AUTHENTICATION_FAILED_MESSAGE) -> None:
        super().__init__(message)


class DecodeError(CredhubError):
    """A response body was not in the expected shape."""


class ServerError(CredhubError):
    """The server answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
