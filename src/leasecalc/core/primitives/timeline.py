# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease period resolution.

A lease spans calendar periods: calendar years for annual cashflows and
calendar months for monthly cashflows. The first and last periods are clipped
to commencement and expiration, so a lease starting 2025-04-01 has a first
annual period covering April through December (9 months).
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

import pandas as pd
from dateutil.relativedelta import relativedelta

from .enums import GranularityEnum
from .model import Model

DateRange = Tuple[date, date]


class InvalidDateRangeError(ValueError):
    """Raised when a lease expires on or before its commencement."""


class Period(Model):
    """
    One calendar period of a lease cashflow.

    Attributes:
        index: Zero-based position in the lease's period sequence
        year: Calendar year of the period
        month: Calendar month (1-12) for monthly periods, None for annual
        start: First lease day inside the period
        end: Last lease day inside the period
        months: Number of calendar months the period touches
    """

    index: int
    year: int
    month: Optional[int] = None
    start: date
    end: date
    months: int

    @property
    def label(self) -> str:
        if self.month is None:
            return str(self.year)
        return f"{self.year}-{self.month:02d}"

    @property
    def date_range(self) -> DateRange:
        return (self.start, self.end)

    def to_period(self) -> pd.Period:
        """pandas Period for indexing frames built from these periods."""
        freq = "Y" if self.month is None else "M"
        return pd.Period(self.label, freq=freq)


def calendar_months(start: date, end: date) -> int:
    """Calendar months touched by [start, end], ignoring the day of month."""
    if end < start:
        return 0
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def resolve_periods(
    commencement: date, expiration: date, granularity: GranularityEnum
) -> List[Period]:
    """
    Enumerate the calendar periods between commencement and expiration.

    Args:
        commencement: Lease commencement date
        expiration: Lease expiration date (inclusive)
        granularity: Annual (calendar years) or monthly (calendar months)

    Returns:
        Periods in chronological order, each clipped to the lease dates

    Raises:
        InvalidDateRangeError: If expiration is on or before commencement
    """
    if expiration <= commencement:
        raise InvalidDateRangeError(
            f"Expiration {expiration.isoformat()} must be after commencement "
            f"{commencement.isoformat()}"
        )

    periods: List[Period] = []
    if granularity == GranularityEnum.MONTHLY:
        span = pd.period_range(start=commencement, end=expiration, freq="M")
        for i, p in enumerate(span):
            start = max(p.start_time.date(), commencement)
            end = min(p.end_time.date(), expiration)
            periods.append(
                Period(index=i, year=p.year, month=p.month, start=start, end=end, months=1)
            )
        return periods

    for i, year in enumerate(range(commencement.year, expiration.year + 1)):
        start = max(date(year, 1, 1), commencement)
        end = min(date(year, 12, 31), expiration)
        periods.append(
            Period(index=i, year=year, start=start, end=end, months=calendar_months(start, end))
        )
    return periods


def overlap_units(
    range_a: DateRange, range_b: DateRange, granularity: GranularityEnum
) -> int:
    """
    Count the units of overlap between two inclusive date ranges.

    Annual granularity counts months inclusively: a same-day overlap is one
    month, and a month is dropped only when the overlap ends on an earlier
    day-of-month than it starts (Jan 15 - Apr 14 is three months, Jan 15 -
    Apr 15 is four). Monthly granularity answers 1 when the ranges touch at
    all and 0 otherwise.
    """
    start = max(range_a[0], range_b[0])
    end = min(range_a[1], range_b[1])
    if end < start:
        return 0
    if granularity == GranularityEnum.MONTHLY:
        return 1

    months = calendar_months(start, end)
    if end.day < start.day:
        months -= 1
    return max(0, months)


def add_months(anchor: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of shorter months."""
    return anchor + relativedelta(months=months)


def months_between(start: date, end: date) -> int:
    """Whole months from start to end, anchored on the start day."""
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


def expiration_from_term(commencement: date, term_months: int) -> date:
    """Last day of a term of whole months starting on commencement."""
    return add_months(commencement, term_months) - relativedelta(days=1)
