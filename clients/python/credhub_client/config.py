# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""On-disk store for the :class:`~credhub_client.session.Session` record."""

from __future__ import annotations

import json
import logging
import os

from .session import Session

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = os.path.expanduser("~/.credhub")
CONFIG_FILENAME = "config.json"


def resolve_config_path(cli_path: str | None = None) -> str:
    # Priority: explicit path > CREDHUB_CONFIG_DIR > default
    if cli_path:
        return cli_path
    config_dir = os.getenv("CREDHUB_CONFIG_DIR") or DEFAULT_CONFIG_DIR
    return os.path.join(config_dir, CONFIG_FILENAME)


def ensure_dir_for(path: str) -> None:
    d = os.path.dirname(os.path.abspath(path))
    if d and not os.path.exists(d):
        os.makedirs(d, mode=0o700, exist_ok=True)


def load_session(path: str | None = None) -> Session:
    """Read the persisted session, or an empty one if there is none."""
    config_path = resolve_config_path(path)
    try:
        with open(config_path) as f:
            data = json.load(f)
    except FileNotFoundError:
        return Session()
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return Session()
    if not isinstance(data, dict):
        return Session()
    return Session.from_dict(data)


def save_session(session: Session, path: str | None = None) -> None:
    """Write the session record, readable by the owner only."""
    config_path = resolve_config_path(path)
    ensure_dir_for(config_path)
    fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        json.dump(session.to_dict(), f)
    logger.debug("Saved session to %s", config_path)


def remove_session(path: str | None = None) -> None:
    config_path = resolve_config_path(path)
    if os.path.exists(config_path):
        os.remove(config_path)
