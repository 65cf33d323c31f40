"""
Contract number generation.

A contract number is built from three parts joined by a delimiter:

    <customer prefix>-<UTC timestamp, microseconds>-<random suffix>
    e.g. 32010112-20261019093015123456-4F2A

The customer prefix is the first ``PREFIX_LENGTH`` characters of the NIK
(or the whole NIK when shorter). Together with the microsecond timestamp
and 16 random bits this makes collisions practically impossible without a
central sequence. The store still rejects duplicates.

Clock and randomness are injected so tests can produce reproducible
numbers:

    generator = ContractNumberGenerator(
        clock=lambda: datetime(2026, 1, 1, tzinfo=timezone.utc),
        rng=random.Random(7),
    )
"""

import random
from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class ContractNumberGenerator:
    """Generates contract numbers from a clock and a random source."""

    PREFIX_LENGTH = 8
    DELIMITER = "-"
    TIMESTAMP_FORMAT = "%Y%m%d%H%M%S%f"
    SUFFIX_BITS = 16

    def __init__(
        self,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ):
        self._clock = clock or utc_now
        self._rng = rng or random.SystemRandom()

    def generate(self, customer_nik: str) -> str:
        """
        Generate a contract number for a customer.

        Args:
            customer_nik: The customer's NIK (non-empty)

        Returns:
            The contract number
        """
        if not customer_nik:
            raise ValueError("customer_nik is required")

        prefix = customer_nik[: self.PREFIX_LENGTH]
        timestamp = self._clock().astimezone(timezone.utc).strftime(
            self.TIMESTAMP_FORMAT
        )
        suffix = format(self._rng.getrandbits(self.SUFFIX_BITS), "04X")

        return self.DELIMITER.join((prefix, timestamp, suffix))
