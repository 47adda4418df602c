"""
Tests for donation form intake.
"""

from __future__ import annotations

import re
from dataclasses import replace

import pytest

from chosen_arrows.adapters.payment_stub import SimulatedPaymentProcessor
from chosen_arrows.components.donations import (
    FORM_ERROR,
    PAYMENT_FAILED,
    UNEXPECTED_ERROR,
    DonationForm,
    DonationLimits,
    run_process_donation,
    validate_donation,
)

VALID = DonationForm(
    amount="50", frequency="once", name="Mary O'Neil-Smith", email="mary@example.org"
)


class ScriptedPayments:
    def __init__(self, result: bool | Exception = True) -> None:
        self.result = result
        self.charges: list[tuple[float, str, str]] = []

    def charge(self, amount: float, frequency: str, email: str) -> bool:
        self.charges.append((amount, frequency, email))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def reference_suffix(self, length: int = 7) -> str:
        return "ABC1234"[:length]


def with_(**changes) -> DonationForm:
    return replace(VALID, **changes)


class TestValidateDonation:
    def test_valid_form(self) -> None:
        assert validate_donation(VALID) == {}

    @pytest.mark.parametrize(
        ("amount", "message"),
        [
            (None, "Amount is required"),
            ("  ", "Amount is required"),
            ("abc", "Amount must be a positive number"),
            ("-5", "Amount must be a positive number"),
            ("0.5", "Minimum donation amount is $1"),
            ("100001", "Maximum donation amount is $100,000"),
        ],
    )
    def test_amount(self, amount, message) -> None:
        assert validate_donation(with_(amount=amount))["amount"] == [message]

    def test_frequency(self) -> None:
        assert validate_donation(with_(frequency="weekly")) == {
            "frequency": ["Please select a donation frequency"]
        }

    def test_name_rules(self) -> None:
        errors = validate_donation(with_(name="J"))["name"]
        assert errors == ["Name must be at least 2 characters"]

        errors = validate_donation(with_(name="R2-D2"))["name"]
        assert errors == ["Name can only contain letters, spaces, hyphens, and apostrophes"]

    def test_email_rules(self) -> None:
        assert validate_donation(with_(email=""))["email"] == ["Email is required"]
        assert validate_donation(with_(email="mary@example"))["email"] == [
            "Please enter a valid email address"
        ]

    def test_custom_limits(self) -> None:
        limits = DonationLimits(min_amount=10)

        assert validate_donation(with_(amount="5"), limits)["amount"] == [
            "Minimum donation amount is $10"
        ]


class TestProcessDonation:
    def test_invalid_form_never_charges(self, clock) -> None:
        payments = ScriptedPayments()

        out = run_process_donation(with_(amount=""), payments=payments, clock=clock)

        assert out.error == FORM_ERROR
        assert "amount" in out.field_errors
        assert payments.charges == []

    def test_success(self, clock) -> None:
        payments = ScriptedPayments()

        out = run_process_donation(
            with_(frequency="monthly", amount="25.5"), payments=payments, clock=clock
        )

        assert out.success
        millis = int(clock.now_utc().timestamp() * 1000)
        assert out.donation_id == f"DON-{millis}-ABC1234"
        assert out.message == (
            "Thank you, Mary O'Neil-Smith! Your monthly donation of $25.50 "
            "has been processed successfully."
        )
        assert payments.charges == [(25.5, "monthly", "mary@example.org")]

    def test_declined(self, clock) -> None:
        out = run_process_donation(VALID, payments=ScriptedPayments(False), clock=clock)

        assert out.error == PAYMENT_FAILED
        assert out.donation_id is None

    def test_processor_crash(self, clock) -> None:
        payments = ScriptedPayments(RuntimeError("boom"))

        out = run_process_donation(VALID, payments=payments, clock=clock)

        assert out.error == UNEXPECTED_ERROR


class TestSimulatedPaymentProcessor:
    def test_waits_then_succeeds(self) -> None:
        slept: list[float] = []
        processor = SimulatedPaymentProcessor(
            delay_seconds=1.5, failure_rate=0.0, sleep=slept.append
        )

        assert processor.charge(10, "once", "a@example.org")
        assert slept == [1.5]

    def test_always_fails_at_full_rate(self) -> None:
        processor = SimulatedPaymentProcessor(delay_seconds=0, failure_rate=1.0)

        assert not processor.charge(10, "once", "a@example.org")

    def test_seeded_reference_is_deterministic(self) -> None:
        first = SimulatedPaymentProcessor(delay_seconds=0, seed=7).reference_suffix()
        second = SimulatedPaymentProcessor(delay_seconds=0, seed=7).reference_suffix()

        assert first == second
        assert re.fullmatch(r"[A-Z0-9]{7}", first)

    def test_reference_format(self, clock) -> None:
        processor = SimulatedPaymentProcessor(delay_seconds=0, failure_rate=0.0, seed=1)

        out = run_process_donation(VALID, payments=processor, clock=clock)

        assert re.fullmatch(r"DON-\d+-[A-Z0-9]{7}", out.donation_id)
