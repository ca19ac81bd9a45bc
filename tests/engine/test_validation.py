from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from loancalc.engine.validation import validate_loan_parameters, validate_payment_records
from loancalc.models.loan import PaymentRecord


def codes(errors):
    return [e.code for e in errors]


class TestValidateLoanParameters:
    def test_valid(self, mortgage_params):
        assert validate_loan_parameters(mortgage_params) == []

    @pytest.mark.parametrize("principal", [Decimal("-1000"), Decimal("0"), Decimal("NaN"), Decimal("Infinity")])
    def test_invalid_principal(self, mortgage_params, principal):
        errors = validate_loan_parameters(replace(mortgage_params, principal=principal))
        assert codes(errors) == ["INVALID_PRINCIPAL"]
        assert errors[0].field == "principal"

    def test_float_principal_rejected(self, mortgage_params):
        errors = validate_loan_parameters(replace(mortgage_params, principal=100000.0))
        assert codes(errors) == ["INVALID_PRINCIPAL"]

    def test_principal_too_large(self, mortgage_params):
        errors = validate_loan_parameters(replace(mortgage_params, principal=Decimal("200000000")))
        assert codes(errors) == ["PRINCIPAL_TOO_LARGE"]

    def test_negative_rate(self, mortgage_params):
        errors = validate_loan_parameters(replace(mortgage_params, annual_interest_rate=Decimal("-1")))
        assert codes(errors) == ["INVALID_INTEREST_RATE"]
        assert errors[0].field == "annual_interest_rate"

    def test_excessive_rate(self, mortgage_params):
        errors = validate_loan_parameters(replace(mortgage_params, annual_interest_rate=Decimal("150")))
        assert codes(errors) == ["EXCESSIVE_INTEREST_RATE"]

    def test_rate_boundaries_allowed(self, mortgage_params):
        assert validate_loan_parameters(replace(mortgage_params, annual_interest_rate=Decimal("0"))) == []
        assert validate_loan_parameters(replace(mortgage_params, annual_interest_rate=Decimal("100"))) == []

    @pytest.mark.parametrize("term", [0, -12, 12.5, True, "12"])
    def test_invalid_term(self, mortgage_params, term):
        errors = validate_loan_parameters(replace(mortgage_params, term_months=term))
        assert codes(errors) == ["INVALID_TERM"]
        assert errors[0].field == "term_months"

    def test_excessive_term(self, mortgage_params):
        errors = validate_loan_parameters(replace(mortgage_params, term_months=601))
        assert codes(errors) == ["EXCESSIVE_TERM"]

    def test_invalid_enums(self, mortgage_params):
        params = replace(mortgage_params, payment_frequency="WEEKLY", calculation_type="BALLOON")
        assert codes(validate_loan_parameters(params)) == [
            "INVALID_PAYMENT_FREQUENCY",
            "INVALID_CALCULATION_TYPE",
        ]

    def test_collects_every_error(self, mortgage_params):
        params = replace(
            mortgage_params,
            principal=Decimal("-1"),
            annual_interest_rate=Decimal("-1"),
            term_months=0,
        )
        assert codes(validate_loan_parameters(params)) == [
            "INVALID_PRINCIPAL",
            "INVALID_INTEREST_RATE",
            "INVALID_TERM",
        ]


class TestValidatePaymentRecords:
    def test_empty_is_valid(self):
        assert validate_payment_records([]) == []

    def test_valid(self, two_mortgage_payments):
        assert validate_payment_records(two_mortgage_payments) == []

    def test_negative_amount(self):
        payments = [
            PaymentRecord(amount=Decimal("100"), date=date(2024, 1, 1)),
            PaymentRecord(amount=Decimal("-50"), date=date(2024, 2, 1)),
        ]
        errors = validate_payment_records(payments)
        assert codes(errors) == ["INVALID_PAYMENT_AMOUNT"]
        assert errors[0].field == "payments[1].amount"

    def test_zero_amount(self):
        errors = validate_payment_records([PaymentRecord(amount=Decimal("0"), date=date(2024, 1, 1))])
        assert codes(errors) == ["INVALID_PAYMENT_AMOUNT"]

    def test_invalid_date(self):
        errors = validate_payment_records([PaymentRecord(amount=Decimal("10"), date="2024-01-01")])
        assert codes(errors) == ["INVALID_PAYMENT_DATE"]
        assert errors[0].field == "payments[0].date"

    def test_not_iterable(self):
        assert codes(validate_payment_records(None)) == ["INVALID_PAYMENTS"]
