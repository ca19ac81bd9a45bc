"""Shared contract for the interest calculation strategies.

Each concrete strategy supplies the arithmetic (periodic payment, schedule rows,
expected interest per period); this base class owns validation, error
wrapping, rounding and result assembly so every strategy behaves the same at
its boundary.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from decimal import Decimal
from itertools import islice

from loancalc.engine.money import HUNDRED, ZERO, round_money
from loancalc.engine.periods import due_date, periodic_rate, total_payments
from loancalc.engine.validation import validate_loan_parameters, validate_payment_records
from loancalc.models.loan import CalculationType, LoanParameters, PaymentRecord
from loancalc.models.results import (
    AmortizationSchedule,
    BalanceCalculation,
    CalculationResult,
    PaymentCalculation,
    ScheduleEntry,
    ScheduleSummary,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentTerms:
    """Full-precision payment figures; rounded only when published."""
    payment_amount: Decimal
    total_payments: int
    periodic_rate: Decimal
    total_interest: Decimal


@dataclass(frozen=True)
class ScheduleRow:
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


def _failure(field: str, code: str, label: str, exc: Exception) -> CalculationResult:
    return CalculationResult.failure([ValidationError(
        field=field,
        message=f"{label} failed: {exc}",
        code=code,
    )])


class CalculationStrategy(ABC):
    calculation_type: CalculationType
    label: str = "Loan"

    # ---- Hooks implemented by concrete strategies ----

    @abstractmethod
    def compute_terms(self, params: LoanParameters) -> PaymentTerms:
        """Periodic payment and total interest at full precision."""

    @abstractmethod
    def schedule_rows(self, params: LoanParameters, terms: PaymentTerms) -> Iterator[ScheduleRow]:
        """Yield one row per period, the last one landing at a zero balance."""

    @abstractmethod
    def expected_interest(
        self, params: LoanParameters, terms: PaymentTerms, balance: Decimal
    ) -> Decimal:
        """Interest a payment must cover before any of it reduces principal."""

    def advisories(self, params: LoanParameters) -> list[ValidationError]:
        """Strategy-specific, non-blocking warnings. Called only on valid input."""
        return []

    # ---- Shared helpers ----

    def total_payments(self, params: LoanParameters) -> int:
        return total_payments(params.term_months, params.payment_frequency)

    def periodic_rate(self, params: LoanParameters) -> Decimal:
        return periodic_rate(params.annual_interest_rate, params.payment_frequency)

    def validate_parameters(self, params: LoanParameters) -> list[ValidationError]:
        errors = validate_loan_parameters(params)
        if errors:
            return errors
        return self.advisories(params)

    # ---- Public contract ----

    def calculate_payment(self, params: LoanParameters) -> CalculationResult[PaymentCalculation]:
        issues = self.validate_parameters(params)
        if any(e.is_blocking for e in issues):
            return CalculationResult.failure(issues)

        try:
            terms = self.compute_terms(params)
        except ArithmeticError as e:
            logger.warning("%s payment calculation failed: %s", self.label, e)
            return _failure("calculation", "CALCULATION_ERROR", f"{self.label} calculation", e)

        logger.debug(
            "%s payment: principal=%s rate=%s%% n=%d payment=%s",
            self.label, params.principal, params.annual_interest_rate,
            terms.total_payments, terms.payment_amount,
        )
        return CalculationResult.ok(
            PaymentCalculation(
                payment_amount=round_money(terms.payment_amount),
                total_payments=terms.total_payments,
                payment_frequency=params.payment_frequency,
                total_interest=round_money(terms.total_interest),
                total_amount=round_money(params.principal + terms.total_interest),
            ),
            warnings=issues,
        )

    def generate_schedule(self, params: LoanParameters) -> CalculationResult[AmortizationSchedule]:
        issues = self.validate_parameters(params)
        if any(e.is_blocking for e in issues):
            return CalculationResult.failure(issues)

        try:
            terms = self.compute_terms(params)
            entries: list[ScheduleEntry] = []
            cumulative_interest = ZERO
            cumulative_principal = ZERO
            paid = ZERO

            for number, row in enumerate(self.schedule_rows(params, terms), start=1):
                cumulative_interest += row.interest
                cumulative_principal += row.principal
                paid += row.payment
                entries.append(ScheduleEntry(
                    payment_number=number,
                    payment_amount=round_money(row.payment),
                    principal_amount=round_money(row.principal),
                    interest_amount=round_money(row.interest),
                    remaining_balance=round_money(row.balance),
                    cumulative_interest=round_money(cumulative_interest),
                    cumulative_principal=round_money(cumulative_principal),
                    due_date=(
                        due_date(params.start_date, params.payment_frequency, number)
                        if params.start_date is not None else None
                    ),
                ))

            summary = ScheduleSummary(
                total_payments=len(entries),
                total_interest=round_money(cumulative_interest),
                total_amount=round_money(paid),
                average_payment=round_money(paid / len(entries)),
            )
        except ArithmeticError as e:
            logger.warning("%s schedule generation failed: %s", self.label, e)
            return _failure("schedule", "SCHEDULE_GENERATION_ERROR", "Schedule generation", e)

        return CalculationResult.ok(
            AmortizationSchedule(entries=tuple(entries), summary=summary),
            warnings=issues,
        )

    def calculate_balance(
        self, params: LoanParameters, payments: list[PaymentRecord]
    ) -> CalculationResult[BalanceCalculation]:
        if isinstance(payments, Iterable):
            payments = tuple(payments)
        issues = self.validate_parameters(params) + validate_payment_records(payments)
        if any(e.is_blocking for e in issues):
            return CalculationResult.failure(issues)

        try:
            terms = self.compute_terms(params)
            history = sorted(payments, key=lambda p: p.date.toordinal())

            principal = params.principal
            balance = principal
            principal_paid = ZERO
            interest_paid = ZERO
            total_paid = ZERO

            for payment in history:
                total_paid += payment.amount
                if balance <= ZERO:
                    continue  # Paid off; later amounts are not applied
                expected = self.expected_interest(params, terms, balance)
                interest_part = min(payment.amount, expected)
                principal_part = min(max(ZERO, payment.amount - expected), balance)

                interest_paid += interest_part
                principal_paid += principal_part
                balance -= principal_part

            current_balance = max(ZERO, principal - principal_paid)
            payments_made = len(history)
            payments_remaining = max(0, terms.total_payments - payments_made)

            # Scheduled interest still ahead, taking each recorded payment as one period
            remaining_interest = ZERO
            if current_balance > ZERO:
                remaining_interest = sum(
                    (row.interest for row in islice(self.schedule_rows(params, terms), payments_made, None)),
                    ZERO,
                )

            next_due = None
            if params.start_date is not None and current_balance > ZERO and payments_remaining:
                next_due = due_date(params.start_date, params.payment_frequency, payments_made + 1)

            result = BalanceCalculation(
                current_balance=round_money(current_balance),
                total_principal_paid=round_money(principal_paid),
                total_interest_paid=round_money(interest_paid),
                payments_made=payments_made,
                payments_remaining=payments_remaining,
                percentage_paid=round_money(principal_paid / principal * HUNDRED),
                total_paid=round_money(total_paid),
                next_payment_due=next_due,
                remaining_interest=round_money(remaining_interest),
            )
        except ArithmeticError as e:
            logger.warning("%s balance calculation failed: %s", self.label, e)
            return _failure("balance", "BALANCE_CALCULATION_ERROR", "Balance calculation", e)

        return CalculationResult.ok(result, warnings=issues)
