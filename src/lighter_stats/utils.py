"""
Utility functions for the Lighter stats client.

Helper functions for parsing upstream payloads and validating user input.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from .constants import ADDRESS_PATTERN

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)
ZERO = Decimal("0")


def parse_or_zero(value: Any) -> Decimal:
    """
    Parse a numeric field from an upstream payload.

    Absent, empty or non-numeric values (including NaN and infinities)
    are treated as Decimal("0") instead of failing.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if not isinstance(value, (int, float, str, Decimal)):
        return ZERO

    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO

    if not number.is_finite():
        return ZERO
    return number


def parse_market_index(value: Any) -> Optional[int]:
    """Parse a market identifier; None when absent or unparsable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def validate_address(address: Any) -> bool:
    """Validate account address format."""
    if not address or not isinstance(address, str):
        return False
    return _ADDRESS_RE.match(address) is not None


def validate_url(url: str) -> bool:
    """Validate URL format."""
    if not url or not isinstance(url, str):
        return False
    return url.startswith(("http://", "https://")) and "." in url


def safe_get(data: Dict[str, Any], path: str, default: Any = None) -> Any:
    """Safely get nested dictionary values using dot notation."""
    keys = path.split(".")
    current = data

    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default

    return current
