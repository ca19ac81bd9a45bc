"""Period derivations shared by every strategy.

Bi-weekly counts follow the ratio definition (26 periods per 12 months,
rounded up over the whole term) rather than literal calendar dates.
"""

import calendar
from datetime import date, timedelta
from decimal import Decimal

from loancalc.engine.money import HUNDRED
from loancalc.models.loan import PaymentFrequency

PERIODS_PER_YEAR = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.BI_WEEKLY: 26,
}


def periods_per_year(frequency: PaymentFrequency) -> int:
    return PERIODS_PER_YEAR[frequency]


def total_payments(term_months: int, frequency: PaymentFrequency) -> int:
    """Number of scheduled payments: ceil(term_months * periods_per_year / 12)."""
    return -(-term_months * periods_per_year(frequency) // 12)


def periodic_rate(annual_rate: Decimal, frequency: PaymentFrequency) -> Decimal:
    """Annual percentage rate -> rate per payment period (e.g. 6 -> 0.005 monthly)."""
    return annual_rate / HUNDRED / periods_per_year(frequency)


def add_months(dt: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month's length."""
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def due_date(start: date, frequency: PaymentFrequency, payment_number: int) -> date:
    """Due date of the n-th payment (1-indexed), one period after ``start`` for n=1."""
    if frequency is PaymentFrequency.BI_WEEKLY:
        return start + timedelta(weeks=2 * payment_number)
    return add_months(start, payment_number)
