from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class PaymentFrequency(Enum):
    MONTHLY = "MONTHLY"
    BI_WEEKLY = "BI_WEEKLY"


class CalculationType(Enum):
    SIMPLE = "SIMPLE"
    AMORTIZED = "AMORTIZED"
    INTEREST_ONLY = "INTEREST_ONLY"


@dataclass(frozen=True)
class LoanParameters:
    """Contractual terms of a loan. Validated by the engine, not on construction."""
    principal: Decimal
    annual_interest_rate: Decimal  # Percent, e.g. Decimal("5.5")
    term_months: int
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    calculation_type: CalculationType = CalculationType.AMORTIZED
    start_date: date | None = None  # Anchor for due dates; schedule starts one period later


@dataclass(frozen=True)
class PaymentRecord:
    amount: Decimal
    date: date
