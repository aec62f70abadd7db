# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Monthly contractual rent schedule.

Unlike the calendar cashflow, this schedule follows lease months: month k
runs from ``commencement + k months`` to the day before month k+1 (clamped to
month ends), and rent steps on each lease anniversary. Free rent is applied
to whole lease months, earliest first, never twice to the same month.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Literal, Optional, Sequence

from pydantic import Field

from ..core.primitives import (
    BillingTimingEnum,
    Model,
    RoundingPolicyEnum,
    add_months,
)
from .abatement import AbatementPeriod
from .escalation import FixedEscalation, resolve_rate
from .lease import LeaseDescription
from .normalize import NormalizedLease, normalize_lease

logger = logging.getLogger(__name__)


class MonthlyRentRow(Model):
    period_index: int
    start: date
    end: date
    contractual_base_rent: float
    free_rent_amount: float = Field(default=0.0, description="Negative when abated")
    net_rent_due: float
    effective_rent_running: float


class MonthlyRentSchedule(Model):
    """
    Month-by-month base rent with free rent applied.

    Attributes:
        months: Schedule rows in lease-month order
        total_contract_rent: Sum of contractual rent before free rent
        total_net_rent: Sum of rent actually due
        free_rent_value: Magnitude of the rent given up to free months
        billing_timing: Advance or arrears (metadata for discounting)
        rounding: Rounding applied to every amount
        term_source: Whether the length came from the lease term, the
            expiration date, or neither
    """

    months: List[MonthlyRentRow] = Field(default_factory=list)
    total_contract_rent: float = 0.0
    total_net_rent: float = 0.0
    free_rent_value: float = 0.0
    billing_timing: BillingTimingEnum = BillingTimingEnum.ADVANCE
    rounding: RoundingPolicyEnum = RoundingPolicyEnum.NONE
    term_source: Literal["term_months", "expiration", "none"] = "none"

    @property
    def rent_paying_months(self) -> List[MonthlyRentRow]:
        return [m for m in self.months if m.net_rent_due > 0]


def _round(value: float, rounding: RoundingPolicyEnum) -> float:
    if rounding == RoundingPolicyEnum.CENTS:
        return round(value, 2)
    return value


def _month_windows(
    commencement: date, term_months: Optional[int], expiration: Optional[date]
) -> List[tuple]:
    """Lease-month windows for a fixed count, or until expiration when no count."""
    windows = []
    index = 0
    while True:
        if term_months is not None and index >= term_months:
            break
        start = add_months(commencement, index)
        if term_months is None and (expiration is None or start > expiration):
            break
        end = date.fromordinal(add_months(commencement, index + 1).toordinal() - 1)
        if expiration is not None and end > expiration:
            end = expiration
        windows.append((start, end))
        index += 1
    return windows


def _free_rent_map(
    windows: Sequence[tuple], abatement_periods: Sequence[AbatementPeriod]
) -> List[bool]:
    free = [False] * len(windows)
    for period in abatement_periods:
        remaining = period.months
        for index, (start, end) in enumerate(windows):
            if remaining <= 0:
                break
            if free[index] or start > period.end or end < period.start:
                continue
            free[index] = True
            remaining -= 1
    return free


def build_monthly_rent_schedule(
    lease: LeaseDescription, normalized: Optional[NormalizedLease] = None
) -> MonthlyRentSchedule:
    """
    Build the lease-month rent schedule.

    The annual contract rent in term year k is the first row's rate times
    the area, escalated k years by the lease rent escalation (or the first
    row's own escalation when the lease has none). Each month bills one
    twelfth of its term year's rent.
    """
    if normalized is None:
        normalized = normalize_lease(lease).normalized
    settings = lease.cashflow_settings

    if lease.lease_term is not None and normalized.term_months_total > 0:
        term_source = "term_months"
    elif normalized.has_valid_dates:
        term_source = "expiration"
    else:
        term_source = "none"

    if term_source == "term_months":
        windows = _month_windows(normalized.commencement, normalized.term_months_total, None)
    elif term_source == "expiration":
        windows = _month_windows(normalized.commencement, None, normalized.expiration)
    else:
        windows = []
    if not windows:
        logger.debug("Lease %r has no rent months", lease.name)
        return MonthlyRentSchedule(
            billing_timing=settings.billing_timing,
            rounding=settings.rounding,
            term_source=term_source,
        )

    first_row = lease.first_rent_row
    variant = normalized.rent_escalation or FixedEscalation(
        rate=max(0.0, first_row.escalation_percentage or 0.0) if first_row else 0.0
    )
    base_annual = normalized.base_rent_psf * normalized.rsf
    start_year = normalized.commencement.year
    term_years = (len(windows) + 11) // 12
    annual_rent = [
        resolve_rate(variant, base_annual, start_year + k, start_year)
        for k in range(term_years)
    ]
    free = _free_rent_map(windows, normalized.abatement_periods)

    rounding = settings.rounding
    rows: List[MonthlyRentRow] = []
    running = 0.0
    for index, (start, end) in enumerate(windows):
        contractual = _round(annual_rent[index // 12] / 12, rounding)
        free_amount = _round(-contractual, rounding) if free[index] else 0.0
        net = _round(contractual + free_amount, rounding)
        running += net
        rows.append(
            MonthlyRentRow(
                period_index=index,
                start=start,
                end=end,
                contractual_base_rent=contractual,
                free_rent_amount=free_amount,
                net_rent_due=net,
                effective_rent_running=_round(running / (index + 1), rounding),
            )
        )

    return MonthlyRentSchedule(
        months=rows,
        total_contract_rent=_round(sum(r.contractual_base_rent for r in rows), rounding),
        total_net_rent=_round(sum(r.net_rent_due for r in rows), rounding),
        free_rent_value=_round(sum(-min(0.0, r.free_rent_amount) for r in rows), rounding),
        billing_timing=settings.billing_timing,
        rounding=rounding,
        term_source=term_source,
    )


def blended_rate(schedule: MonthlyRentSchedule, rsf: float) -> float:
    """Average net rent in $/RSF/year over the schedule."""
    months = len(schedule.months)
    if rsf <= 0 or months == 0:
        return 0.0
    return schedule.total_net_rent / (rsf * months / 12)
