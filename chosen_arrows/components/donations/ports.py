"""
Donations component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from chosen_arrows.core.ports.time import TimePort


class PaymentProcessorPort(Protocol):
    def charge(self, amount: float, frequency: str, email: str) -> bool:
        """True when the charge went through."""
        ...

    def reference_suffix(self, length: int = 7) -> str:
        ...


__all__ = ["PaymentProcessorPort", "TimePort"]
