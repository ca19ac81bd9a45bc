"""Interest-only loans with a balloon principal payment at maturity.

Pure functions of LoanParameters. No I/O.
"""

from collections.abc import Iterator
from decimal import Decimal

from loancalc.config import settings
from loancalc.engine.money import ZERO
from loancalc.engine.strategy import CalculationStrategy, PaymentTerms, ScheduleRow
from loancalc.models.loan import CalculationType, LoanParameters
from loancalc.models.results import Severity, ValidationError


class InterestOnlyStrategy(CalculationStrategy):
    calculation_type = CalculationType.INTEREST_ONLY
    label = "Interest-only"

    def __init__(
        self,
        large_loan_threshold: Decimal | None = None,
        max_term_months: int | None = None,
        near_zero_rate: Decimal | None = None,
    ):
        self.large_loan_threshold = (
            large_loan_threshold if large_loan_threshold is not None
            else settings.large_loan_threshold
        )
        self.max_term_months = (
            max_term_months if max_term_months is not None
            else settings.interest_only_max_term_months
        )
        self.near_zero_rate = near_zero_rate if near_zero_rate is not None else settings.near_zero_rate

    def compute_terms(self, params: LoanParameters) -> PaymentTerms:
        n = self.total_payments(params)
        rate = self.periodic_rate(params)
        interest_payment = params.principal * rate
        return PaymentTerms(
            payment_amount=interest_payment,
            total_payments=n,
            periodic_rate=rate,
            total_interest=interest_payment * n,  # Balloon does not change interest
        )

    def schedule_rows(self, params: LoanParameters, terms: PaymentTerms) -> Iterator[ScheduleRow]:
        n = terms.total_payments
        interest = terms.payment_amount

        for number in range(1, n):
            yield ScheduleRow(
                payment=interest,
                principal=ZERO,
                interest=interest,
                balance=params.principal,
            )

        yield ScheduleRow(
            payment=interest + params.principal,
            principal=params.principal,
            interest=interest,
            balance=ZERO,
        )

    def expected_interest(
        self, params: LoanParameters, terms: PaymentTerms, balance: Decimal
    ) -> Decimal:
        # Contractual interest stays on the original principal until the balloon
        return terms.payment_amount

    def advisories(self, params: LoanParameters) -> list[ValidationError]:
        warnings: list[ValidationError] = []

        if params.annual_interest_rate < self.near_zero_rate:
            warnings.append(ValidationError(
                field="annual_interest_rate",
                message="Interest-only loans require an interest rate greater than 0",
                code="INTEREST_ONLY_REQUIRES_RATE",
                severity=Severity.WARNING,
            ))

        if params.term_months > self.max_term_months:
            warnings.append(ValidationError(
                field="term_months",
                message=f"Interest-only loans are typically limited to {self.max_term_months} months or less",
                code="INTEREST_ONLY_TERM_WARNING",
                severity=Severity.WARNING,
            ))

        if params.principal > self.large_loan_threshold:
            warnings.append(ValidationError(
                field="principal",
                message="Large interest-only loans carry significant balloon payment risk",
                code="INTEREST_ONLY_BALLOON_RISK",
                severity=Severity.WARNING,
            ))

        return warnings
