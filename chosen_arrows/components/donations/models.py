"""
Donations component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass

from chosen_arrows.components.actions import ActionOutput

FORM_ERROR = "Please correct the errors in the form"
PAYMENT_FAILED = (
    "Payment processing failed. Please try again or contact support if the issue persists."
)
UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later or contact support."


@dataclass(frozen=True)
class DonationForm:
    """Raw form values as submitted; nothing is parsed yet."""

    amount: str | None = None
    frequency: str | None = None
    name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class DonationLimits:
    min_amount: float = 1
    max_amount: float = 100000
    frequencies: tuple[str, ...] = ("once", "monthly")
    name_min_length: int = 2
    name_max_length: int = 100
    email_max_length: int = 255


@dataclass(frozen=True)
class DonationOutput(ActionOutput):
    message: str | None = None
    donation_id: str | None = None
