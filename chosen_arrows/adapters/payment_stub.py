"""
Simulated payment processor (dev stand-in).

No gateway is contacted: each charge waits a fixed delay, then fails at the
configured rate. Seed the random source for deterministic tests.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class SimulatedPaymentProcessor:
    delay_seconds: float = 1.5
    failure_rate: float = 0.1
    seed: int | None = None
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    _random: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._random = random.Random(self.seed)

    def charge(self, amount: float, frequency: str, email: str) -> bool:
        """Return True when the simulated charge succeeds."""
        if self.delay_seconds > 0:
            self.sleep(self.delay_seconds)
        succeeded = self._random.random() >= self.failure_rate

        logger.debug(
            f"SimulatedPaymentProcessor.charge: amount={amount:.2f}, "
            f"frequency={frequency}, succeeded={succeeded}"
        )
        if not succeeded:
            logger.info("Simulated payment failure for %s", email)
        return succeeded

    def reference_suffix(self, length: int = 7) -> str:
        alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
        return "".join(self._random.choice(alphabet) for _ in range(length))
