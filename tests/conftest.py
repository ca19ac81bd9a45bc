"""Canonical fixtures shared across the engine tests.

Fixture loan: $100K, 5.5%, 30yr, monthly, amortized.
"""

from datetime import date
from decimal import Decimal

import pytest

from loancalc.engine.amortized import AmortizedStrategy
from loancalc.engine.interest_only import InterestOnlyStrategy
from loancalc.engine.registry import build_default_registry
from loancalc.engine.simple import SimpleInterestStrategy
from loancalc.models.loan import CalculationType, LoanParameters, PaymentFrequency, PaymentRecord


@pytest.fixture
def mortgage_params() -> LoanParameters:
    return LoanParameters(
        principal=Decimal("100000"),
        annual_interest_rate=Decimal("5.5"),
        term_months=360,
        payment_frequency=PaymentFrequency.MONTHLY,
        calculation_type=CalculationType.AMORTIZED,
    )


@pytest.fixture
def short_loan_params() -> LoanParameters:
    """$10K at 6% over 12 months."""
    return LoanParameters(
        principal=Decimal("10000"),
        annual_interest_rate=Decimal("6"),
        term_months=12,
    )


@pytest.fixture
def simple_strategy() -> SimpleInterestStrategy:
    return SimpleInterestStrategy()


@pytest.fixture
def amortized_strategy() -> AmortizedStrategy:
    return AmortizedStrategy()


@pytest.fixture
def interest_only_strategy() -> InterestOnlyStrategy:
    return InterestOnlyStrategy()


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def two_mortgage_payments() -> list[PaymentRecord]:
    return [
        PaymentRecord(amount=Decimal("567.79"), date=date(2024, 1, 1)),
        PaymentRecord(amount=Decimal("567.79"), date=date(2024, 2, 1)),
    ]
