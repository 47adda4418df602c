"""
Donations component - donation form intake.
"""

from .component import donation_reference, run_process_donation, validate_donation
from .models import (
    FORM_ERROR,
    PAYMENT_FAILED,
    UNEXPECTED_ERROR,
    DonationForm,
    DonationLimits,
    DonationOutput,
)
from .ports import PaymentProcessorPort

__all__ = [
    "donation_reference",
    "run_process_donation",
    "validate_donation",
    "DonationForm",
    "DonationLimits",
    "DonationOutput",
    "PaymentProcessorPort",
    "FORM_ERROR",
    "PAYMENT_FAILED",
    "UNEXPECTED_ERROR",
]
