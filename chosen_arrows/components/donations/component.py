"""
Donations component - donation form intake.

Illustrative only: no money moves. Validation failures come back per field;
a valid form goes to the payment processor and, on success, gets a reference
id of the form ``DON-<epoch-ms>-<7 upper-case alphanumerics>``.
"""

from __future__ import annotations

import logging
import math
import re

from .models import (
    FORM_ERROR,
    PAYMENT_FAILED,
    UNEXPECTED_ERROR,
    DonationForm,
    DonationLimits,
    DonationOutput,
)
from .ports import PaymentProcessorPort, TimePort

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _amount_errors(raw: str | None, limits: DonationLimits) -> list[str]:
    if not raw or not raw.strip():
        return ["Amount is required"]
    try:
        value = float(raw)
    except ValueError:
        return ["Amount must be a positive number"]
    if math.isnan(value) or value <= 0:
        return ["Amount must be a positive number"]
    if value < limits.min_amount:
        return [f"Minimum donation amount is ${limits.min_amount:,.0f}"]
    if value > limits.max_amount:
        return [f"Maximum donation amount is ${limits.max_amount:,.0f}"]
    return []


def _name_errors(raw: str | None, limits: DonationLimits) -> list[str]:
    name = raw or ""
    errors = []
    if len(name) < limits.name_min_length:
        errors.append(f"Name must be at least {limits.name_min_length} characters")
    if len(name) > limits.name_max_length:
        errors.append(f"Name must be less than {limits.name_max_length} characters")
    if not NAME_PATTERN.match(name):
        errors.append("Name can only contain letters, spaces, hyphens, and apostrophes")
    return errors


def _email_errors(raw: str | None, limits: DonationLimits) -> list[str]:
    email = raw or ""
    if not email:
        return ["Email is required"]
    errors = []
    if not EMAIL_PATTERN.match(email):
        errors.append("Please enter a valid email address")
    if len(email) > limits.email_max_length:
        errors.append(f"Email must be less than {limits.email_max_length} characters")
    return errors


def validate_donation(
    form: DonationForm, limits: DonationLimits | None = None
) -> dict[str, list[str]]:
    """Per-field error messages; empty when the form is valid."""
    limits = limits or DonationLimits()
    errors = {
        "amount": _amount_errors(form.amount, limits),
        "frequency": []
        if form.frequency in limits.frequencies
        else ["Please select a donation frequency"],
        "name": _name_errors(form.name, limits),
        "email": _email_errors(form.email, limits),
    }
    return {k: v for k, v in errors.items() if v}


def donation_reference(clock: TimePort, payments: PaymentProcessorPort) -> str:
    millis = int(clock.now_utc().timestamp() * 1000)
    return f"DON-{millis}-{payments.reference_suffix(7)}"


def run_process_donation(
    form: DonationForm,
    *,
    payments: PaymentProcessorPort,
    clock: TimePort,
    limits: DonationLimits | None = None,
) -> DonationOutput:
    errors = validate_donation(form, limits)
    if errors:
        return DonationOutput(success=False, error=FORM_ERROR, field_errors=errors)

    amount = float(form.amount or 0)
    frequency = form.frequency or "once"
    try:
        charged = payments.charge(amount, frequency, form.email or "")
    except Exception:
        logger.exception("Donation processing error")
        return DonationOutput(success=False, error=UNEXPECTED_ERROR)
    if not charged:
        return DonationOutput(success=False, error=PAYMENT_FAILED)

    donation_id = donation_reference(clock, payments)
    frequency_text = "monthly" if frequency == "monthly" else "one-time"
    logger.info("Donation %s accepted (%s, %.2f)", donation_id, frequency_text, amount)
    return DonationOutput(
        success=True,
        donation_id=donation_id,
        message=(
            f"Thank you, {form.name}! Your {frequency_text} donation of ${amount:.2f} "
            "has been processed successfully."
        ),
    )
