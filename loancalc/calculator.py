"""Public calculation API.

The only entry points collaborators should call. Raw numeric input is coerced
to Decimal here, the strategy is resolved from the registry, and every outcome
comes back as a CalculationResult. An unknown calculation type is a caller
bug and raises UnsupportedCalculationTypeError.
"""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from loancalc.engine.money import ZERO, ConversionError, round_money, to_decimal
from loancalc.engine.periods import due_date
from loancalc.engine.registry import StrategyRegistry, build_default_registry
from loancalc.engine.strategy import CalculationStrategy
from loancalc.models.loan import CalculationType, LoanParameters, PaymentFrequency, PaymentRecord
from loancalc.models.results import (
    AmortizationSchedule,
    BalanceCalculation,
    CalculationResult,
    PaymentCalculation,
    PaymentImpact,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _parse_frequency(value) -> PaymentFrequency | None:
    if isinstance(value, PaymentFrequency):
        return value
    if isinstance(value, str):
        try:
            return PaymentFrequency(value.strip().upper())
        except ValueError:
            return None
    return None


def _coerce(value, field: str, errors: list[ValidationError]):
    try:
        return to_decimal(value)
    except ConversionError as e:
        errors.append(ValidationError(field=field, message=str(e), code="INVALID_NUMBER"))
        return None


def _normalize_payments(payments) -> list:
    """Coerce raw payment amounts to Decimal; unconvertible ones are left for validation."""
    if not isinstance(payments, Iterable):
        return payments
    records = []
    for payment in payments:
        amount = getattr(payment, "amount", None)
        try:
            amount = to_decimal(amount)
        except ConversionError:
            records.append(payment)
            continue
        records.append(PaymentRecord(amount=amount, date=getattr(payment, "date", None)))
    return records


def _term_savings(
    params: LoanParameters,
    schedule: AmortizationSchedule,
    balance_before: Decimal,
    balance_after: Decimal,
) -> dict:
    """Scheduled periods and interest a lower balance no longer needs.

    A balance is retired by the scheduled periods that end below it, so the
    payments dropped are the difference in that count. Those periods come off
    the tail of the schedule, taking their interest with them.
    """
    def periods_left(balance: Decimal) -> int:
        return sum(1 for e in schedule.entries if e.remaining_balance < balance)

    reduction = max(0, periods_left(balance_before) - periods_left(balance_after))
    dropped = schedule.entries[len(schedule.entries) - reduction:] if reduction else ()

    payoff_number = len(schedule.entries) - reduction
    new_payoff_date = None
    if params.start_date is not None and payoff_number > 0:
        new_payoff_date = due_date(params.start_date, params.payment_frequency, payoff_number)

    return {
        "term_reduction": reduction,
        "interest_saved": round_money(sum((e.interest_amount for e in dropped), ZERO)),
        "new_payoff_date": new_payoff_date,
    }


def make_payment(amount, paid_on: date) -> PaymentRecord:
    """Build a PaymentRecord from raw input. Raises ConversionError on non-numeric amounts."""
    return PaymentRecord(amount=to_decimal(amount), date=paid_on)


class LoanCalculator:
    def __init__(self, registry: StrategyRegistry | None = None):
        self.registry = registry if registry is not None else build_default_registry()

    def _prepare(
        self,
        principal,
        annual_rate,
        term_months,
        calculation_type,
        payment_frequency,
        start_date,
    ) -> tuple[CalculationStrategy, LoanParameters | None, list[ValidationError]]:
        strategy = self.registry.create(calculation_type)

        errors: list[ValidationError] = []
        principal_value = _coerce(principal, "principal", errors)
        rate_value = _coerce(annual_rate, "annual_interest_rate", errors)

        frequency = _parse_frequency(payment_frequency)
        if frequency is None:
            errors.append(ValidationError(
                field="payment_frequency",
                message=f"Invalid payment frequency: {payment_frequency!r}",
                code="INVALID_PAYMENT_FREQUENCY",
            ))

        if errors:
            logger.warning("Rejected loan input: %s", ", ".join(e.code for e in errors))
            return strategy, None, errors

        params = LoanParameters(
            principal=principal_value,
            annual_interest_rate=rate_value,
            term_months=term_months,
            payment_frequency=frequency,
            calculation_type=strategy.calculation_type,
            start_date=start_date,
        )
        return strategy, params, errors

    def calculate_payment(
        self,
        principal,
        annual_rate,
        term_months: int,
        calculation_type: CalculationType | str = CalculationType.AMORTIZED,
        payment_frequency: PaymentFrequency | str = PaymentFrequency.MONTHLY,
        *,
        start_date: date | None = None,
    ) -> CalculationResult[PaymentCalculation]:
        strategy, params, errors = self._prepare(
            principal, annual_rate, term_months, calculation_type, payment_frequency, start_date
        )
        if params is None:
            return CalculationResult.failure(errors)
        return strategy.calculate_payment(params)

    def generate_schedule(
        self,
        principal,
        annual_rate,
        term_months: int,
        calculation_type: CalculationType | str = CalculationType.AMORTIZED,
        payment_frequency: PaymentFrequency | str = PaymentFrequency.MONTHLY,
        *,
        start_date: date | None = None,
    ) -> CalculationResult[AmortizationSchedule]:
        strategy, params, errors = self._prepare(
            principal, annual_rate, term_months, calculation_type, payment_frequency, start_date
        )
        if params is None:
            return CalculationResult.failure(errors)
        return strategy.generate_schedule(params)

    def calculate_balance(
        self,
        principal,
        annual_rate,
        term_months: int,
        calculation_type: CalculationType | str = CalculationType.AMORTIZED,
        payment_frequency: PaymentFrequency | str = PaymentFrequency.MONTHLY,
        payments=(),
        *,
        start_date: date | None = None,
    ) -> CalculationResult[BalanceCalculation]:
        strategy, params, errors = self._prepare(
            principal, annual_rate, term_months, calculation_type, payment_frequency, start_date
        )
        if params is None:
            return CalculationResult.failure(errors)
        return strategy.calculate_balance(params, _normalize_payments(payments))

    def analyze_payment_impact(
        self,
        principal,
        annual_rate,
        term_months: int,
        calculation_type: CalculationType | str = CalculationType.AMORTIZED,
        payment_frequency: PaymentFrequency | str = PaymentFrequency.MONTHLY,
        payments=(),
        amount=None,
        paid_on: date | None = None,
        *,
        start_date: date | None = None,
    ) -> CalculationResult[PaymentImpact]:
        """Compare the balance before and after one hypothetical payment.

        Without ``paid_on`` the payment is applied after every recorded one.
        """
        strategy, params, errors = self._prepare(
            principal, annual_rate, term_months, calculation_type, payment_frequency, start_date
        )
        amount_value = _coerce(amount, "amount", errors)
        if params is None or amount_value is None:
            return CalculationResult.failure(errors)

        history = _normalize_payments(payments)
        before = strategy.calculate_balance(params, history)
        if not before.success:
            return CalculationResult.failure(before.errors)

        if paid_on is None:
            # Histories may mix date and datetime; order by calendar day like the balance pass
            paid_on = max(
                (p.date for p in history if isinstance(getattr(p, "date", None), date)),
                key=lambda d: d.toordinal(),
                default=date.min,
            )
        after = strategy.calculate_balance(params, history + [PaymentRecord(amount_value, paid_on)])
        if not after.success:
            return CalculationResult.failure(after.errors)

        b, a = before.value, after.value
        savings = {}
        if params.calculation_type is CalculationType.AMORTIZED:
            schedule = strategy.generate_schedule(params)
            if not schedule.success:
                return CalculationResult.failure(schedule.errors)
            savings = _term_savings(params, schedule.value, b.current_balance, a.current_balance)

        return CalculationResult.ok(
            PaymentImpact(
                original_balance=b.current_balance,
                new_balance=a.current_balance,
                principal_reduction=b.current_balance - a.current_balance,
                interest_portion=a.total_interest_paid - b.total_interest_paid,
                **savings,
            ),
            warnings=after.warnings,
        )

    def supported_calculation_types(self) -> list[CalculationType]:
        return self.registry.available_types()

    def is_supported(self, calculation_type) -> bool:
        return self.registry.is_supported(calculation_type)


default_calculator = LoanCalculator()

calculate_payment = default_calculator.calculate_payment
generate_schedule = default_calculator.generate_schedule
calculate_balance = default_calculator.calculate_balance
analyze_payment_impact = default_calculator.analyze_payment_impact
supported_calculation_types = default_calculator.supported_calculation_types
is_supported = default_calculator.is_supported
