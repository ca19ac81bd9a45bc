"""Pydantic schemas for handing calculation results to collaborators."""

from dataclasses import asdict, is_dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from loancalc.models.results import (
    AmortizationSchedule,
    BalanceCalculation,
    CalculationResult,
    PaymentCalculation,
    PaymentImpact,
    ValidationError,
)


class ValidationErrorResponse(BaseModel):
    field: str
    message: str
    code: str
    severity: str = "error"


class PaymentCalculationResponse(BaseModel):
    payment_amount: Decimal
    total_payments: int
    payment_frequency: str
    total_interest: Decimal
    total_amount: Decimal


class ScheduleEntryResponse(BaseModel):
    payment_number: int
    payment_amount: Decimal
    principal_amount: Decimal
    interest_amount: Decimal
    remaining_balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    due_date: date | None = None


class ScheduleSummaryResponse(BaseModel):
    total_payments: int
    total_interest: Decimal
    total_amount: Decimal
    average_payment: Decimal


class AmortizationScheduleResponse(BaseModel):
    entries: list[ScheduleEntryResponse]
    summary: ScheduleSummaryResponse


class BalanceCalculationResponse(BaseModel):
    current_balance: Decimal
    total_principal_paid: Decimal
    total_interest_paid: Decimal
    payments_made: int
    payments_remaining: int
    percentage_paid: Decimal
    total_paid: Decimal
    is_paid_off: bool
    next_payment_due: date | None = None
    remaining_interest: Decimal = Decimal("0")


class PaymentImpactResponse(BaseModel):
    original_balance: Decimal
    new_balance: Decimal
    principal_reduction: Decimal
    interest_portion: Decimal
    term_reduction: int | None = None
    interest_saved: Decimal | None = None
    new_payoff_date: date | None = None


ResponseData = (
    PaymentCalculationResponse
    | AmortizationScheduleResponse
    | BalanceCalculationResponse
    | PaymentImpactResponse
)


class CalculationResponse(BaseModel):
    success: bool
    data: ResponseData | None = None
    errors: list[ValidationErrorResponse] = []
    warnings: list[ValidationErrorResponse] = []


_RESPONSE_TYPES = {
    PaymentCalculation: PaymentCalculationResponse,
    AmortizationSchedule: AmortizationScheduleResponse,
    BalanceCalculation: BalanceCalculationResponse,
    PaymentImpact: PaymentImpactResponse,
}


def _plain(value):
    """Dataclass tree -> dict tree with enums flattened to their values."""
    if is_dataclass(value):
        return {k: _plain(v) for k, v in asdict(value).items()}
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


def _error(e: ValidationError) -> ValidationErrorResponse:
    return ValidationErrorResponse(
        field=e.field, message=e.message, code=e.code, severity=e.severity.value
    )


def to_response(result: CalculationResult) -> CalculationResponse:
    """Convert an engine CalculationResult to its serializable response."""
    data = None
    if result.success:
        value = result.value
        schema = _RESPONSE_TYPES[type(value)]
        payload = _plain(value)
        if isinstance(value, BalanceCalculation):
            payload["is_paid_off"] = value.is_paid_off
        data = schema(**payload)

    return CalculationResponse(
        success=result.success,
        data=data,
        errors=[_error(e) for e in result.errors],
        warnings=[_error(e) for e in result.warnings],
    )
