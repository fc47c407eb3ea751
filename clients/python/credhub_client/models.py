# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Credential model: typed values, JSON mapping and terminal rendering."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import DecodeError

LABEL_WIDTH = 15


class CredentialValue:
    """Base class for the value variants of a credential.

    Each subclass lists the credential ``types`` it carries and knows how to
    decode itself from, and encode itself to, the wire ``value`` field.
    """

    types: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, raw: Any) -> CredentialValue:
        raise NotImplementedError

    def to_json(self) -> Any:
        raise NotImplementedError

    def terminal_lines(self) -> list[tuple[str, str]]:
        """(label, text) pairs rendered between Name and Updated."""
        raise NotImplementedError


@dataclass
class StringValue(CredentialValue):
    """A plain string, used by ``value`` and ``password`` credentials."""

    value: str

    types = ("value", "password")

    @classmethod
    def from_json(cls, raw: Any) -> StringValue:
        if not isinstance(raw, str):
            raise DecodeError(f"expected a string value, got {type(raw).__name__}")
        return cls(raw)

    def to_json(self) -> str:
        return self.value

    def terminal_lines(self) -> list[tuple[str, str]]:
        return [("Value", self.value)]


@dataclass
class KeyPair(CredentialValue):
    """Public/private key pair, used by ``ssh`` and ``rsa`` credentials."""

    public_key: str
    private_key: str

    types = ("ssh", "rsa")

    @classmethod
    def from_json(cls, raw: Any) -> KeyPair:
        if not isinstance(raw, dict):
            raise DecodeError("expected an object for a key pair value")
        public_key = raw.get("public_key")
        private_key = raw.get("private_key")
        if not isinstance(public_key, str) or not isinstance(private_key, str):
            raise DecodeError("key pair requires public_key and private_key")
        return cls(public_key=public_key, private_key=private_key)

    def to_json(self) -> dict[str, str]:
        return {"public_key": self.public_key, "private_key": self.private_key}

    def terminal_lines(self) -> list[tuple[str, str]]:
        return [("Public Key", self.public_key), ("Private Key", self.private_key)]


@dataclass
class Certificate(CredentialValue):
    """Certificate value; every part is optional and empty when absent."""

    ca: str = ""
    certificate: str = ""
    private_key: str = ""

    types = ("certificate",)

    @classmethod
    def from_json(cls, raw: Any) -> Certificate:
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise DecodeError("expected an object for a certificate value")
        parts: dict[str, str] = {}
        for key in ("ca", "certificate", "private_key"):
            part = raw.get(key)
            if part is None:
                part = ""
            if not isinstance(part, str):
                raise DecodeError(f"certificate {key} must be a string")
            parts[key] = part
        return cls(**parts)

    def to_json(self) -> dict[str, str]:
        encoded: dict[str, str] = {}
        if self.ca:
            encoded["ca"] = self.ca
        if self.certificate:
            encoded["certificate"] = self.certificate
        if self.private_key:
            encoded["private_key"] = self.private_key
        return encoded

    def terminal_lines(self) -> list[tuple[str, str]]:
        lines = [
            ("Ca", self.ca),
            ("Certificate", self.certificate),
            ("Private Key", self.private_key),
        ]
        return [(label, text) for label, text in lines if text]


@dataclass
class OpaqueValue(CredentialValue):
    """Payload of a server-defined type the client does not model."""

    payload: Any = None

    @classmethod
    def from_json(cls, raw: Any) -> OpaqueValue:
        return cls(raw)

    def to_json(self) -> Any:
        return self.payload

    def terminal_lines(self) -> list[tuple[str, str]]:
        if isinstance(self.payload, str):
            return [("Value", self.payload)]
        return [("Value", json.dumps(self.payload, separators=(",", ":")))]


VALUE_TYPES: dict[str, type[CredentialValue]] = {
    credential_type: cls
    for cls in (StringValue, KeyPair, Certificate)
    for credential_type in cls.types
}


def value_class_for(credential_type: str) -> type[CredentialValue]:
    """Return the value variant carried by a credential type."""
    return VALUE_TYPES.get(credential_type, OpaqueValue)


@dataclass
class Credential:
    """A named credential as returned by the CredHub data API."""

    name: str
    type: str
    value: CredentialValue
    version_created_at: str = ""
    id: str = ""

    def __post_init__(self) -> None:
        expected = value_class_for(self.type)
        if type(self.value) is not expected:
            raise ValueError(
                f"{self.type!r} credentials carry {expected.__name__}, "
                f"not {type(self.value).__name__}"
            )

    @classmethod
    def from_json(cls, data: Any) -> Credential:
        """Decode one credential from its wire representation."""
        if not isinstance(data, dict):
            raise DecodeError("expected a credential object")
        credential_type = data.get("type")
        name = data.get("name")
        if not isinstance(credential_type, str) or not isinstance(name, str):
            raise DecodeError("credential requires a type and a name")
        value = value_class_for(credential_type).from_json(data.get("value"))
        return cls(
            name=name,
            type=credential_type,
            value=value,
            version_created_at=data.get("version_created_at") or "",
            id=data.get("id") or "",
        )

    def to_json(self) -> dict[str, Any]:
        """Encode to the wire representation."""
        encoded: dict[str, Any] = {
            "type": self.type,
            "name": self.name,
            "value": self.value.to_json(),
            "version_created_at": self.version_created_at,
        }
        if self.id:
            encoded["id"] = self.id
        return encoded

    def json(self) -> str:
        return json.dumps(self.to_json(), indent=2)

    def terminal(self) -> str:
        """Render as aligned ``Label:`` lines without a trailing newline."""
        lines = [("Type", self.type), ("Name", self.name)]
        lines.extend(self.value.terminal_lines())
        lines.append(("Updated", self.version_created_at))
        return "\n".join(
            f"{label + ':':<{LABEL_WIDTH}}{text}" for label, text in lines
        )


def parse_credential(body: str | bytes) -> Credential:
    """Decode a data API response body into exactly one credential.

    Accepts either a bare credential object or a ``{"data": [...]}``
    envelope, in which case the first (newest) entry is used.
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"response is not valid JSON: {e}")
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        if not data["data"]:
            raise DecodeError("response contains no credential")
        data = data["data"][0]
    return Credential.from_json(data)
