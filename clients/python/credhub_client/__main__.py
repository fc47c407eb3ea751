# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Entry point for ``python -m credhub_client``.

Usage examples:
    python -m credhub_client api https://credhub.example.com:8844
    python -m credhub_client login -u admin
    python -m credhub_client get /deploy/db-password
    python -m credhub_client delete -n /deploy/db-password
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
