from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from loancalc.models.loan import PaymentFrequency

T = TypeVar("T")


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"  # Advisory only; never blocks a calculation


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str
    code: str
    severity: Severity = Severity.ERROR

    @property
    def is_blocking(self) -> bool:
        return self.severity is Severity.ERROR


class CalculationFailed(Exception):
    """Raised by CalculationResult.unwrap() on a failed result."""

    def __init__(self, errors: tuple[ValidationError, ...]):
        self.errors = errors
        detail = "; ".join(f"{e.field}: {e.message} [{e.code}]" for e in errors)
        super().__init__(f"Calculation failed: {detail}")


@dataclass(frozen=True)
class CalculationResult(Generic[T]):
    """Tagged outcome: either a value or a non-empty tuple of errors."""
    value: T | None = None
    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationError, ...] = ()

    def __post_init__(self):
        if (self.value is None) == (not self.errors):
            raise ValueError("CalculationResult needs exactly one of value or errors")

    @classmethod
    def ok(cls, value: T, warnings=()) -> "CalculationResult[T]":
        return cls(value=value, warnings=tuple(warnings))

    @classmethod
    def failure(cls, errors) -> "CalculationResult[T]":
        return cls(errors=tuple(errors))

    @property
    def success(self) -> bool:
        return self.value is not None

    def unwrap(self) -> T:
        if self.value is None:
            raise CalculationFailed(self.errors)
        return self.value


@dataclass(frozen=True)
class PaymentCalculation:
    payment_amount: Decimal
    total_payments: int
    payment_frequency: PaymentFrequency
    total_interest: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class ScheduleEntry:
    payment_number: int
    payment_amount: Decimal
    principal_amount: Decimal
    interest_amount: Decimal
    remaining_balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    due_date: date | None = None


@dataclass(frozen=True)
class ScheduleSummary:
    total_payments: int
    total_interest: Decimal
    total_amount: Decimal
    average_payment: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    entries: tuple[ScheduleEntry, ...]
    summary: ScheduleSummary

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class BalanceCalculation:
    current_balance: Decimal
    total_principal_paid: Decimal
    total_interest_paid: Decimal
    payments_made: int
    payments_remaining: int
    percentage_paid: Decimal
    total_paid: Decimal = Decimal("0")  # Includes any amount past payoff
    next_payment_due: date | None = None
    remaining_interest: Decimal = Decimal("0")  # Interest on scheduled periods not yet paid

    @property
    def is_paid_off(self) -> bool:
        return self.current_balance == 0


@dataclass(frozen=True)
class PaymentImpact:
    """Effect of one hypothetical payment on the outstanding balance."""
    original_balance: Decimal
    new_balance: Decimal
    principal_reduction: Decimal
    interest_portion: Decimal
    # Amortized loans only
    term_reduction: int | None = None
    interest_saved: Decimal | None = None
    new_payoff_date: date | None = None  # Requires start_date


@dataclass
class YearlySummary:
    year: int
    principal: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    payments: Decimal = Decimal("0")
    ending_balance: Decimal = Decimal("0")
