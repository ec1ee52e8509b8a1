"""Repo-wide test fixtures.

Snapshots and restores the SIFT_* environment variables between tests so
``ClientConfig.from_env`` tests cannot leak credentials into each other.
"""

from __future__ import annotations

import os

import pytest

_SENSITIVE_ENV_VARS = [
    "SIFT_API_KEY",
    "SIFT_ACCOUNT_ID",
    "SIFT_ORIGIN",
    "SIFT_TIMEOUT",
]


@pytest.fixture(autouse=True)
def _restore_env():
    """Snapshot sensitive env vars before each test and restore after."""
    snapshot = {}
    for var in _SENSITIVE_ENV_VARS:
        val = os.environ.get(var)
        if val is not None:
            snapshot[var] = val

    yield

    # Restore: remove any that were added, reset any that changed
    for var in _SENSITIVE_ENV_VARS:
        if var in snapshot:
            os.environ[var] = snapshot[var]
        else:
            os.environ.pop(var, None)
