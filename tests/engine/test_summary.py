from dataclasses import replace
from decimal import Decimal

import pytest

from loancalc.engine.summary import summarize_by_year
from loancalc.models.loan import PaymentFrequency


class TestYearlySummary:
    def test_thirty_years(self, amortized_strategy, mortgage_params):
        schedule = amortized_strategy.generate_schedule(mortgage_params).value
        years = summarize_by_year(schedule, PaymentFrequency.MONTHLY)
        assert len(years) == 30
        assert [y.year for y in years] == list(range(1, 31))
        assert years[-1].ending_balance == 0

    def test_interest_declines(self, amortized_strategy, mortgage_params):
        schedule = amortized_strategy.generate_schedule(mortgage_params).value
        years = summarize_by_year(schedule, PaymentFrequency.MONTHLY)
        assert years[0].interest > years[1].interest > years[-1].interest
        assert years[0].principal < years[-1].principal

    def test_year_one_matches_schedule(self, amortized_strategy, mortgage_params):
        schedule = amortized_strategy.generate_schedule(mortgage_params).value
        year_one = summarize_by_year(schedule, PaymentFrequency.MONTHLY)[0]
        first_twelve = schedule.entries[:12]
        assert year_one.interest == sum(e.interest_amount for e in first_twelve)
        assert year_one.ending_balance == first_twelve[-1].remaining_balance

    def test_totals_reconcile(self, amortized_strategy, mortgage_params):
        schedule = amortized_strategy.generate_schedule(mortgage_params).value
        years = summarize_by_year(schedule, PaymentFrequency.MONTHLY)
        total_principal = sum(y.principal for y in years)
        # Per-entry rounding may drift a few cents
        assert total_principal == pytest.approx(Decimal("100000"), abs=Decimal("1.00"))

    def test_partial_final_year(self, amortized_strategy, short_loan_params):
        params = replace(short_loan_params, term_months=18)
        schedule = amortized_strategy.generate_schedule(params).value
        years = summarize_by_year(schedule, PaymentFrequency.MONTHLY)
        assert len(years) == 2
        assert years[1].ending_balance == 0

    def test_biweekly_years(self, amortized_strategy, mortgage_params):
        params = replace(mortgage_params, payment_frequency=PaymentFrequency.BI_WEEKLY)
        schedule = amortized_strategy.generate_schedule(params).value
        years = summarize_by_year(schedule, PaymentFrequency.BI_WEEKLY)
        assert len(schedule) == 780
        assert len(years) == 30
