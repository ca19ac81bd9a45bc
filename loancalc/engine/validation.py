"""Input validation for loan parameters and payment history.

Never raises: returns a (possibly empty) list of ValidationError.
"""

from datetime import date

from loancalc.config import settings
from loancalc.engine.money import HUNDRED, ZERO, is_finite_decimal
from loancalc.models.loan import CalculationType, LoanParameters, PaymentFrequency
from loancalc.models.results import ValidationError

MAX_INTEREST_RATE = HUNDRED
MIN_LOAN_TERM = 1


def validate_loan_parameters(params: LoanParameters) -> list[ValidationError]:
    errors: list[ValidationError] = []

    principal = params.principal
    if not is_finite_decimal(principal) or principal <= ZERO:
        errors.append(ValidationError(
            field="principal",
            message="Principal amount must be a positive number greater than 0",
            code="INVALID_PRINCIPAL",
        ))
    elif principal > settings.max_principal:
        errors.append(ValidationError(
            field="principal",
            message=f"Principal amount cannot exceed {settings.max_principal:,}",
            code="PRINCIPAL_TOO_LARGE",
        ))

    rate = params.annual_interest_rate
    if not is_finite_decimal(rate) or rate < ZERO:
        errors.append(ValidationError(
            field="annual_interest_rate",
            message="Interest rate must be a non-negative number",
            code="INVALID_INTEREST_RATE",
        ))
    elif rate > MAX_INTEREST_RATE:
        errors.append(ValidationError(
            field="annual_interest_rate",
            message=f"Interest rate cannot exceed {MAX_INTEREST_RATE}%",
            code="EXCESSIVE_INTEREST_RATE",
        ))

    term = params.term_months
    if isinstance(term, bool) or not isinstance(term, int) or term < MIN_LOAN_TERM:
        errors.append(ValidationError(
            field="term_months",
            message="Loan term must be a positive integer (number of months)",
            code="INVALID_TERM",
        ))
    elif term > settings.max_term_months:
        errors.append(ValidationError(
            field="term_months",
            message=f"Loan term cannot exceed {settings.max_term_months} months",
            code="EXCESSIVE_TERM",
        ))

    if not isinstance(params.payment_frequency, PaymentFrequency):
        errors.append(ValidationError(
            field="payment_frequency",
            message="Payment frequency must be MONTHLY or BI_WEEKLY",
            code="INVALID_PAYMENT_FREQUENCY",
        ))

    if not isinstance(params.calculation_type, CalculationType):
        errors.append(ValidationError(
            field="calculation_type",
            message="Calculation type must be SIMPLE, AMORTIZED, or INTEREST_ONLY",
            code="INVALID_CALCULATION_TYPE",
        ))

    return errors


def validate_payment_records(payments) -> list[ValidationError]:
    try:
        records = list(payments)
    except TypeError:
        return [ValidationError(
            field="payments",
            message="Payments must be a sequence of payment records",
            code="INVALID_PAYMENTS",
        )]

    errors: list[ValidationError] = []
    for index, payment in enumerate(records):
        amount = getattr(payment, "amount", None)
        if not is_finite_decimal(amount) or amount <= ZERO:
            errors.append(ValidationError(
                field=f"payments[{index}].amount",
                message=f"Payment {index + 1}: amount must be a positive number",
                code="INVALID_PAYMENT_AMOUNT",
            ))

        paid_on = getattr(payment, "date", None)
        if not isinstance(paid_on, date):
            errors.append(ValidationError(
                field=f"payments[{index}].date",
                message=f"Payment {index + 1}: date must be a valid date",
                code="INVALID_PAYMENT_DATE",
            ))

    return errors
