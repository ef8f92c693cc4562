"""
Synthetic identifier generation.

Rows missing a serial or SIM number receive a generated one. Clock and
randomness are injected so generated values can be asserted in tests.
"""

import random
import string
import time
from datetime import date, datetime
from typing import Callable, Optional

from config.asset_fields import DEVICE_PREFIXES, DEFAULT_DEVICE_PREFIX

BASE36_ALPHABET = string.digits + string.ascii_lowercase
RANDOM_SUFFIX_LENGTH = 9


def device_prefix(device_type: Optional[str]) -> str:
    """
    Short code for a device type, e.g. "Laptop" → "LAP".

    Keywords are checked in order, so "PC Portable" → "PC".
    """
    lowered = (device_type or "").lower()
    for keywords, prefix in DEVICE_PREFIXES:
        if any(keyword in lowered for keyword in keywords):
            return prefix
    return DEFAULT_DEVICE_PREFIX


class SyntheticIdGenerator:
    """
    Builds placeholder identifiers and the current date.

    Args:
        clock: Returns seconds since the epoch (defaults to time.time)
        rng: Random source (defaults to a fresh random.Random)
    """

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None
    ):
        self.clock = clock or time.time
        self.rng = rng or random.Random()

    def timestamp_millis(self) -> int:
        return int(self.clock() * 1000)

    def today(self) -> date:
        return datetime.fromtimestamp(self.clock()).date()

    def random_suffix(self, length: int = RANDOM_SUFFIX_LENGTH) -> str:
        """Lowercase base36 characters."""
        return "".join(self.rng.choice(BASE36_ALPHABET) for _ in range(length))

    def serial_number(self, device_type: Optional[str], owner_name: Optional[str]) -> str:
        """
        Serial for an IT asset with none in the file.

        Format: {devicePrefix}-{millis}-{OWNER[:3]}-{base36 x9}
        e.g. "LAP-1710500000000-JEA-k3j9x0a1b"
        """
        owner_prefix = (owner_name or "").strip()[:3].upper()
        return (
            f"{device_prefix(device_type)}-{self.timestamp_millis()}"
            f"-{owner_prefix}-{self.random_suffix()}"
        )

    def sim_number(self) -> str:
        """Format: SIM-{millis}-{base36 x9}"""
        return f"SIM-{self.timestamp_millis()}-{self.random_suffix()}"
