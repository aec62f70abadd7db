# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Negotiation equivalencies between TI, free rent, rent rate and term.

Each conversion holds present value constant on the lease's monthly rent
schedule: rent is billed in advance on each lease-month start date and
discounted monthly, TI is paid at commencement (its present value is its
nominal amount), and free rent consumes the earliest rent-paying months.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from ..core.primitives import DEFAULT_ENGINE_SETTINGS, add_months
from ..lease.rent_schedule import MonthlyRentRow, MonthlyRentSchedule
from .metrics import npv_monthly


def _paying(months: Sequence[MonthlyRentRow]) -> List[MonthlyRentRow]:
    return [m for m in months if m.net_rent_due > 0]


def pv_of_rate_delta(
    rate_delta_psf_yr: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
) -> float:
    """PV of changing the rent rate by `rate_delta_psf_yr` over the paying months."""
    if rate_delta_psf_yr == 0 or rsf <= 0:
        return 0.0
    paying = _paying(schedule.months)
    if not paying:
        return 0.0
    monthly_delta = rate_delta_psf_yr * rsf / 12
    return npv_monthly([(m.start, monthly_delta) for m in paying], discount_rate_annual)


def pv_of_ti(ti_psf: float, rsf: float) -> float:
    if ti_psf == 0 or rsf <= 0:
        return 0.0
    return ti_psf * rsf


def pv_of_free_rent_months(
    free_rent_months: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
) -> float:
    """
    PV of granting additional free months, fractional months allowed.

    The months come off the front of the rent-paying months; a fractional
    remainder abates that share of the next month.
    """
    if free_rent_months == 0 or rsf <= 0:
        return 0.0
    paying = _paying(schedule.months)
    if not paying:
        return 0.0

    sign = 1 if free_rent_months >= 0 else -1
    target = min(abs(free_rent_months), len(paying))
    full = math.floor(target)
    remainder = target - full
    selected = paying[: full + (1 if remainder > 0 else 0)]
    flows = [
        (m.start, m.net_rent_due * (remainder if i == full else 1) * sign)
        for i, m in enumerate(selected)
    ]
    return npv_monthly(flows, discount_rate_annual)


def pv_of_term_extension(
    extension_months: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
) -> float:
    """
    PV of extending the term at the final month's rent.

    Extension months follow the last scheduled month and are discounted back
    to the first month of the schedule.
    """
    if extension_months == 0 or rsf <= 0 or not schedule.months:
        return 0.0
    last = schedule.months[-1]
    monthly_rent = last.contractual_base_rent or last.net_rent_due
    if monthly_rent == 0:
        return 0.0

    sign = 1 if extension_months >= 0 else -1
    total = abs(extension_months)
    full = math.floor(total)
    remainder = total - full
    flows = [(add_months(last.start, i), monthly_rent * sign) for i in range(1, full + 1)]
    if remainder > 0:
        flows.append((add_months(last.start, full + 1), monthly_rent * remainder * sign))
    if not flows:
        return 0.0
    return npv_monthly(flows, discount_rate_annual, anchor=schedule.months[0].start)


def ti_to_rate_equivalent_psf_yr(
    ti_psf: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
) -> float:
    """Rent increase ($/RSF/yr) worth the same as `ti_psf` of TI."""
    pv_ti = pv_of_ti(ti_psf, rsf)
    if pv_ti == 0:
        return 0.0
    pv_per_rate = pv_of_rate_delta(1.0, rsf, schedule, discount_rate_annual)
    if pv_per_rate == 0:
        return 0.0
    return pv_ti / pv_per_rate


def rate_to_ti_equivalent_psf(
    rate_delta_psf_yr: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
) -> float:
    """TI ($/RSF) worth the same as a rent change of `rate_delta_psf_yr`."""
    if rsf <= 0:
        return 0.0
    pv_rate = pv_of_rate_delta(rate_delta_psf_yr, rsf, schedule, discount_rate_annual)
    if pv_rate == 0:
        return 0.0
    return pv_rate / rsf


def free_rent_to_rate_equivalent_psf_yr(
    free_rent_months: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
) -> float:
    pv_free = pv_of_free_rent_months(free_rent_months, rsf, schedule, discount_rate_annual)
    if pv_free == 0:
        return 0.0
    pv_per_rate = pv_of_rate_delta(1.0, rsf, schedule, discount_rate_annual)
    if pv_per_rate == 0:
        return 0.0
    return pv_free / pv_per_rate


def rate_to_free_rent_months(
    rate_delta_psf_yr: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
    max_months: Optional[int] = None,
) -> int:
    """
    Whole free months closest in value to a rent change.

    Searches 0 through `max_months` (default 18, never more than the paying
    months) and returns the nearest count, signed like the rate change.
    """
    target = pv_of_rate_delta(rate_delta_psf_yr, rsf, schedule, discount_rate_annual)
    if target == 0:
        return 0
    if max_months is None:
        max_months = DEFAULT_ENGINE_SETTINGS.max_free_rent_months
    sign = 1 if target >= 0 else -1
    upper = min(max_months, len(_paying(schedule.months)))

    best_months, best_diff = 0, math.inf
    for months in range(upper + 1):
        pv = abs(pv_of_free_rent_months(months, rsf, schedule, discount_rate_annual))
        diff = abs(abs(target) - pv)
        if diff < best_diff:
            best_months, best_diff = months, diff
    return best_months * sign


def term_extension_to_additional_ti_psf(
    extension_months: float,
    rsf: float,
    schedule: MonthlyRentSchedule,
    discount_rate_annual: float,
) -> float:
    """Additional TI ($/RSF) a landlord could fund for a term extension."""
    if rsf <= 0:
        return 0.0
    pv = pv_of_term_extension(extension_months, rsf, schedule, discount_rate_annual)
    if pv == 0:
        return 0.0
    return pv / rsf
