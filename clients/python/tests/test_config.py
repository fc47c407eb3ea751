# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Unit tests for the session record and its on-disk store."""

from __future__ import annotations

import json
import os
import stat

import pytest

from credhub_client import REVOKED, Session, load_session, remove_session, save_session
from credhub_client.config import resolve_config_path


class TestSession:
    def test_defaults_are_empty(self) -> None:
        s = Session()
        assert s.api_url == ""
        assert s.access_token == ""
        assert s.insecure_skip_verify is False
        assert s.has_refresh_token is False

    def test_revoked_token_does_not_count(self) -> None:
        s = Session(refresh_token="r")
        assert s.has_refresh_token is True
        s.mark_revoked()
        assert s.access_token == REVOKED
        assert s.has_refresh_token is False

    def test_persisted_field_names(self) -> None:
        s = Session("https://api", "https://uaa", "a", "r", True)
        assert s.to_dict() == {
            "ApiURL": "https://api",
            "AuthURL": "https://uaa",
            "AccessToken": "a",
            "RefreshToken": "r",
            "InsecureSkipVerify": True,
        }
        assert Session.from_dict(s.to_dict()) == s

    @pytest.mark.parametrize("flag", ["false", "true", 1, None])
    def test_skip_verify_requires_a_real_bool(self, flag: object) -> None:
        assert Session.from_dict({"InsecureSkipVerify": flag}).insecure_skip_verify is False

    def test_repr_hides_tokens(self) -> None:
        assert "secret-token" not in repr(Session(access_token="secret-token"))


class TestConfigStore:
    def test_missing_file_gives_empty_session(self, tmp_path) -> None:
        assert load_session(str(tmp_path / "nope.json")) == Session()

    def test_save_and_load(self, tmp_path) -> None:
        path = str(tmp_path / "sub" / "config.json")
        s = Session("https://api", "https://uaa", "a", "r", False)
        save_session(s, path)
        assert load_session(path) == s
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_corrupt_file_gives_empty_session(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_session(str(path)) == Session()

    def test_env_override(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("CREDHUB_CONFIG_DIR", str(tmp_path))
        assert resolve_config_path() == str(tmp_path / "config.json")
        save_session(Session(api_url="https://api"))
        data = json.loads((tmp_path / "config.json").read_text())
        assert data["ApiURL"] == "https://api"

    def test_explicit_path_wins(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("CREDHUB_CONFIG_DIR", str(tmp_path / "env"))
        assert resolve_config_path("/explicit.json") == "/explicit.json"

    def test_remove(self, tmp_path) -> None:
        path = str(tmp_path / "config.json")
        save_session(Session(), path)
        remove_session(path)
        assert not os.path.exists(path)
        remove_session(path)
