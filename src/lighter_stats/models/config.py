"""
Configuration models for the Lighter stats client.

Immutable configuration structures following state-first design.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ..constants import DEFAULT_EXCHANGE_URL, DEFAULT_EXPLORER_URL, DEFAULT_TIMEOUT
from ..utils import validate_url


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for the upstream explorer and exchange APIs."""
    explorer_base_url: str = DEFAULT_EXPLORER_URL
    exchange_base_url: str = DEFAULT_EXCHANGE_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate configuration after initialization."""
        for name in ("explorer_base_url", "exchange_base_url"):
            url = getattr(self, name)
            if not validate_url(url):
                raise ValueError(f"{name} must be a valid HTTP/HTTPS URL, got {url!r}")
            # frozen dataclass, so normalise through object.__setattr__
            object.__setattr__(self, name, url.rstrip("/"))

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls) -> "ConnectionConfig":
        """Create configuration from environment variables (and .env)."""
        load_dotenv()

        timeout_env = os.getenv("LIGHTER_TIMEOUT")
        timeout = float(timeout_env) if timeout_env else DEFAULT_TIMEOUT

        return cls(
            explorer_base_url=os.getenv("LIGHTER_EXPLORER_URL", DEFAULT_EXPLORER_URL),
            exchange_base_url=os.getenv("LIGHTER_EXCHANGE_URL", DEFAULT_EXCHANGE_URL),
            timeout=timeout,
        )
