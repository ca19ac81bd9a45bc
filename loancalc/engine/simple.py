"""Simple interest strategy: I = P x r x t, spread evenly over the term.

Pure functions of LoanParameters. No I/O.
"""

from collections.abc import Iterator
from decimal import Decimal

from loancalc.config import settings
from loancalc.engine.money import HUNDRED, ZERO
from loancalc.engine.strategy import CalculationStrategy, PaymentTerms, ScheduleRow
from loancalc.models.loan import CalculationType, LoanParameters
from loancalc.models.results import Severity, ValidationError


class SimpleInterestStrategy(CalculationStrategy):
    calculation_type = CalculationType.SIMPLE
    label = "Simple interest"

    def __init__(self, max_term_months: int | None = None):
        self.max_term_months = (
            max_term_months if max_term_months is not None
            else settings.simple_interest_max_term_months
        )

    def compute_terms(self, params: LoanParameters) -> PaymentTerms:
        n = self.total_payments(params)
        years = Decimal(params.term_months) / 12
        total_interest = params.principal * (params.annual_interest_rate / HUNDRED) * years
        return PaymentTerms(
            payment_amount=(params.principal + total_interest) / n,
            total_payments=n,
            periodic_rate=self.periodic_rate(params),
            total_interest=total_interest,
        )

    def schedule_rows(self, params: LoanParameters, terms: PaymentTerms) -> Iterator[ScheduleRow]:
        n = terms.total_payments
        interest = terms.total_interest / n
        principal_each = params.principal / n
        balance = params.principal

        for number in range(1, n + 1):
            # Last period takes whatever division left behind
            principal = balance if number == n else principal_each
            balance -= principal
            yield ScheduleRow(
                payment=principal + interest,
                principal=principal,
                interest=interest,
                balance=balance if number < n else ZERO,
            )

    def expected_interest(
        self, params: LoanParameters, terms: PaymentTerms, balance: Decimal
    ) -> Decimal:
        # Interest is fixed up front, so each period carries an equal share
        return terms.total_interest / terms.total_payments

    def advisories(self, params: LoanParameters) -> list[ValidationError]:
        if params.term_months > self.max_term_months:
            return [ValidationError(
                field="term_months",
                message=(
                    "Simple interest is typically used for shorter-term loans "
                    f"({self.max_term_months} months or less)"
                ),
                code="SIMPLE_INTEREST_TERM_WARNING",
                severity=Severity.WARNING,
            )]
        return []
