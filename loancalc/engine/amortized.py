"""Fixed-payment amortization.

Pure functions of LoanParameters. No I/O.
"""

from collections.abc import Iterator
from decimal import Decimal, localcontext

from loancalc.config import settings
from loancalc.engine.money import ZERO
from loancalc.engine.strategy import CalculationStrategy, PaymentTerms, ScheduleRow
from loancalc.models.loan import CalculationType, LoanParameters
from loancalc.models.results import Severity, ValidationError


# Below this periodic rate the interest over any allowed term is far under a cent
NEGLIGIBLE_RATE = Decimal("1E-40")
WORKING_PRECISION = 80


def level_payment(principal: Decimal, rate: Decimal, n: int) -> Decimal:
    """Payment that retires ``principal`` in ``n`` equal installments at ``rate`` per period.

    The annuity factor is evaluated at extended precision so that tiny positive
    rates do not collapse ``1 + r`` to 1.
    """
    if rate < NEGLIGIBLE_RATE:
        return principal / n
    with localcontext() as ctx:
        ctx.prec = WORKING_PRECISION
        # M = P * [r(1+r)^n] / [(1+r)^n - 1]
        factor = (1 + rate) ** n
        if factor == 1:
            return principal / n
        payment = principal * (rate * factor) / (factor - 1)
    return +payment


class AmortizedStrategy(CalculationStrategy):
    calculation_type = CalculationType.AMORTIZED
    label = "Amortized"

    def __init__(self, min_term_months: int | None = None):
        self.min_term_months = (
            min_term_months if min_term_months is not None
            else settings.amortized_min_term_months
        )

    def compute_terms(self, params: LoanParameters) -> PaymentTerms:
        n = self.total_payments(params)
        rate = self.periodic_rate(params)
        payment = level_payment(params.principal, rate, n)
        total_interest = ZERO if rate == 0 else max(ZERO, payment * n - params.principal)
        return PaymentTerms(
            payment_amount=payment,
            total_payments=n,
            periodic_rate=rate,
            total_interest=total_interest,
        )

    def schedule_rows(self, params: LoanParameters, terms: PaymentTerms) -> Iterator[ScheduleRow]:
        n = terms.total_payments
        balance = params.principal

        for number in range(1, n + 1):
            interest = balance * terms.periodic_rate
            principal = terms.payment_amount - interest
            payment = terms.payment_amount

            if number == n:
                # Final payment absorbs the rounding residue
                principal = balance
                payment = interest + principal

            balance -= principal
            yield ScheduleRow(
                payment=payment,
                principal=principal,
                interest=interest,
                balance=balance,
            )

    def expected_interest(
        self, params: LoanParameters, terms: PaymentTerms, balance: Decimal
    ) -> Decimal:
        return balance * terms.periodic_rate

    def advisories(self, params: LoanParameters) -> list[ValidationError]:
        if params.term_months < self.min_term_months:
            return [ValidationError(
                field="term_months",
                message=f"Amortized loans typically have terms of at least {self.min_term_months} months",
                code="AMORTIZED_MIN_TERM_WARNING",
                severity=Severity.WARNING,
            )]
        return []
