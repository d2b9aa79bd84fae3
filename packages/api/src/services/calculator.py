# This project was developed with assistance from AI tools.
"""Loan interest and balance calculation.

Pure math, no I/O. Shared by the loan listing service and the calculator
route. Interest accrues on a 360-day financial year: full years compound
annually, leftover months and days earn simple interest on the compounded
base, and short spans are charged a minimum number of days.
"""

import logging
import math
from calendar import monthrange
from datetime import date, datetime, timedelta
from decimal import Decimal

from ..core.config import settings
from ..schemas.calculator import InterestResult

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 360
DAYS_PER_MONTH = 30

NOT_COMPUTABLE = InterestResult(interest=0, days=0, formatted_interval="N/A")


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_number(value) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite amount: {value!r}")
    return number


def _to_date(value) -> date:
    """Accept date/datetime objects or ISO strings (time part ignored)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def split_interval(start: date, end: date) -> tuple[int, int, int]:
    """Break ``end - start`` into calendar (years, months, days) with borrowing.

    Negative days borrow the length of the month before ``end``; a start on
    the 31st can need a second borrow from the month before that.
    """
    years = end.year - start.year
    months = end.month - start.month
    days = end.day - start.day

    year, month = end.year, end.month
    while days < 0:
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
        months -= 1
        days += monthrange(year, month)[1]

    if months < 0:
        years -= 1
        months += 12

    return years, months, days


def compute_interest(
    principal,
    annual_rate,
    start_date,
    last_date,
    minimum_days: int = 0,
) -> InterestResult:
    """Compute accrued interest between two dates, both inclusive.

    Returns ``NOT_COMPUTABLE`` instead of raising for missing, unparseable or
    out-of-order input so a bad record never blocks a listing.
    """
    if any(_is_missing(v) for v in (principal, annual_rate, start_date, last_date)):
        return NOT_COMPUTABLE

    try:
        loan = _to_number(principal)
        rate = _to_number(annual_rate)
        start = _to_date(start_date)
        last = _to_date(last_date)
        floor_days = int(minimum_days or 0)

        if loan <= 0 or rate <= 0 or start > last:
            return NOT_COMPUTABLE

        total_days = (last - start).days + 1
        years, months, days = split_interval(start, last + timedelta(days=1))

        accrual_days = years * DAYS_PER_YEAR + months * DAYS_PER_MONTH + days
        charged_days = max(accrual_days, floor_days)
        remaining_days = charged_days - years * DAYS_PER_YEAR - months * DAYS_PER_MONTH

        monthly_rate = rate / 12
        for _ in range(years):
            loan += loan * 12 * monthly_rate / 100

        month_total = loan + loan * months * monthly_rate / 100

        daily_rate = monthly_rate / DAYS_PER_MONTH
        final_total = month_total + month_total * remaining_days * daily_rate / 100

        # Half-up, matching how branch statements round
        interest = math.floor(final_total - _to_number(principal) + 0.5)

        return InterestResult(
            interest=interest,
            days=total_days,
            formatted_interval=f"{years} Y, {months} M, {days} D",
        )
    except (ArithmeticError, TypeError, ValueError) as exc:
        logger.warning(
            "Interest not computable (principal=%r rate=%r start=%r last=%r): %s",
            principal,
            annual_rate,
            start_date,
            last_date,
            exc,
        )
        return NOT_COMPUTABLE


def minimum_days_for_rate(
    annual_rate,
    table: dict[float, int] | None = None,
    default: int | None = None,
) -> int:
    """Look up the minimum chargeable days for a rate in the policy table."""
    if table is None:
        table = settings.MINIMUM_INTEREST_DAYS_BY_RATE
    if default is None:
        default = settings.DEFAULT_MINIMUM_INTEREST_DAYS

    try:
        rate = _to_number(annual_rate)
    except (TypeError, ValueError):
        return default

    for table_rate, days in table.items():
        if math.isclose(float(table_rate), rate):
            return days
    return default


def outstanding_balance(principal, interest: int, paid_amount=None) -> Decimal:
    """Principal plus accrued interest less what has been paid so far."""
    paid = Decimal(str(paid_amount)) if paid_amount not in (None, "") else Decimal("0")
    return Decimal(str(principal)) + Decimal(interest) - paid
