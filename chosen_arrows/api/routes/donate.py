"""
Donation submit endpoint.

Illustrative intake only: the configured processor simulates the charge.
Field errors come back as 422 with per-field messages.
"""

from typing import Any

from fastapi import APIRouter, Depends, Form

from chosen_arrows.api.deps import get_clock, get_donation_limits, get_payments
from chosen_arrows.api.responses import output_body
from chosen_arrows.components.donations import (
    DonationForm,
    DonationLimits,
    PaymentProcessorPort,
    run_process_donation,
)
from chosen_arrows.core.ports.time import TimePort

router = APIRouter()


@router.post("")
def submit_donation(
    amount: str | None = Form(default=None),
    frequency: str | None = Form(default=None),
    name: str | None = Form(default=None),
    email: str | None = Form(default=None),
    payments: PaymentProcessorPort = Depends(get_payments),
    clock: TimePort = Depends(get_clock),
    limits: DonationLimits = Depends(get_donation_limits),
) -> dict[str, Any]:
    form = DonationForm(amount=amount, frequency=frequency, name=name, email=email)
    return output_body(run_process_donation(form, payments=payments, clock=clock, limits=limits))
