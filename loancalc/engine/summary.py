"""Roll an amortization schedule up by year."""

from loancalc.engine.periods import periods_per_year
from loancalc.models.loan import PaymentFrequency
from loancalc.models.results import AmortizationSchedule, YearlySummary


def summarize_by_year(
    schedule: AmortizationSchedule, frequency: PaymentFrequency
) -> list[YearlySummary]:
    """Aggregate schedule entries into loan years (12 or 26 periods each).

    A trailing partial year is reported as its own year.
    """
    per_year = periods_per_year(frequency)
    yearly: list[YearlySummary] = []
    current: YearlySummary | None = None

    for entry in schedule.entries:
        year_num = (entry.payment_number - 1) // per_year + 1
        if current is None or current.year != year_num:
            current = YearlySummary(year=year_num)
            yearly.append(current)

        current.principal += entry.principal_amount
        current.interest += entry.interest_amount
        current.payments += entry.payment_amount
        current.ending_balance = entry.remaining_balance

    return yearly
