"""
Address list controller.

Turns free text (one address per line) into the active address list and
keeps the refresh counter that forces every card to re-fetch.
"""

import logging
from typing import List, Tuple

from .utils import validate_address

logger = logging.getLogger(__name__)


def parse_addresses(text: str) -> List[str]:
    """Split on line breaks, trim, and keep well-formed addresses in order."""
    if not text:
        return []

    addresses = []
    for line in text.splitlines():
        candidate = line.strip()
        if not candidate:
            continue
        if validate_address(candidate):
            addresses.append(candidate)
        else:
            logger.debug(f"Ignoring invalid address: {candidate!r}")
    return addresses


class AddressListController:
    """Holds the submitted addresses and the monotonic refresh counter."""

    def __init__(self):
        self._addresses: Tuple[str, ...] = ()
        self._refresh_counter = 0

    @property
    def addresses(self) -> Tuple[str, ...]:
        """Addresses of the latest submission, in input order."""
        return self._addresses

    @property
    def refresh_counter(self) -> int:
        """Number of submissions so far; never decreases."""
        return self._refresh_counter

    def submit(self, text: str) -> Tuple[str, ...]:
        """
        Replace the active list with the addresses found in ``text``.

        Always increments the refresh counter, even when the list is
        unchanged, so that every displayed card re-fetches.
        """
        self._addresses = tuple(parse_addresses(text))
        self._refresh_counter += 1
        logger.info(
            f"Submitted {len(self._addresses)} addresses (refresh #{self._refresh_counter})"
        )
        return self._addresses
