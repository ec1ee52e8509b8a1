"""Client configuration.

Fixed at construction; per-call overrides go through the options classes
of each API. Never exposes the api key in repr or serialization.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sift_sdk.errors import ConfigurationError
from sift_sdk.transport import DEFAULT_TIMEOUT

DEFAULT_ORIGIN = "https://api.sift.com"


def _str_env(key: str) -> Optional[str]:
    """Read an env var, treating blank values as unset."""
    val = os.environ.get(key)
    if val is None or not val.strip():
        return None
    return val.strip()


def _float_env(key: str, default: float) -> float:
    """Parse a float env var with fallback."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client settings. Safe to log: the api key is masked."""

    api_key: str
    account_id: Optional[str] = None
    origin: str = DEFAULT_ORIGIN
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("api key not specified")
        object.__setattr__(self, "origin", self.origin.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key='***', account_id={self.account_id!r}, "
            f"origin={self.origin!r}, timeout={self.timeout})"
        )

    def with_origin(self, origin: str) -> "ClientConfig":
        return dataclasses.replace(self, origin=origin)

    def with_account_id(self, account_id: str) -> "ClientConfig":
        return dataclasses.replace(self, account_id=account_id)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe dict with api_key masked."""
        return {
            "api_key": "configured",
            "account_id": self.account_id or "not set",
            "origin": self.origin,
            "timeout": self.timeout,
        }

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Load settings from ``SIFT_*`` environment variables.

        Args:
            **overrides: Field values taking precedence over the environment

        Raises:
            ConfigurationError: no api key in ``SIFT_API_KEY`` or overrides
        """
        values: Dict[str, Any] = {
            "api_key": _str_env("SIFT_API_KEY") or "",
            "account_id": _str_env("SIFT_ACCOUNT_ID"),
            "origin": _str_env("SIFT_ORIGIN") or DEFAULT_ORIGIN,
            "timeout": _float_env("SIFT_TIMEOUT", DEFAULT_TIMEOUT),
        }
        values.update(overrides)
        return cls(**values)
