# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease Cashflow Metrics - Return and Cost Measures

Summary measures over a sequence of cashflow lines: NPV, effective rent per
square foot, IRR, payback, and simple return ratios. Every function returns
a finite number for finite inputs; zero denominators yield 0 rather than an
error.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional, Sequence, Tuple

from pyxirr import InvalidPaymentsError, xirr

from ..core.primitives import DEFAULT_ENGINE_SETTINGS, EngineSettings, Model
from ..lease.cashflow import CashflowLine
from ..lease.lease import LeaseDescription

logger = logging.getLogger(__name__)

DatedFlow = Tuple[date, float]


class LeaseMetrics(Model):
    """Headline metrics of a lease cashflow."""

    npv: float = 0.0
    effective_rent_psf: float = 0.0
    irr: Optional[float] = None
    payback_period: Optional[float] = None


def _flows(lines: Sequence[CashflowLine]) -> list:
    return [line.net_cash_flow for line in lines]


def npv(lines: Sequence[CashflowLine], rate: float) -> float:
    """
    Net present value with end-of-period discounting.

    The first line is discounted one full period: ``sum(cf_i / (1 + rate) ** (i + 1))``.
    A zero rate returns the plain sum.
    """
    flows = _flows(lines)
    if rate == 0:
        return sum(flows)
    return sum(cf / (1 + rate) ** (i + 1) for i, cf in enumerate(flows))


def effective_rent_psf(lines: Sequence[CashflowLine], rsf: float, years: float) -> float:
    """Total net cash flow per square foot per year (area and years floored at 1)."""
    return sum(_flows(lines)) / (max(1.0, rsf) * max(1.0, years))


def irr(
    lines: Sequence[CashflowLine],
    guess: float = 0.10,
    settings: EngineSettings = DEFAULT_ENGINE_SETTINGS,
) -> float:
    """
    Internal rate of return by Newton-Raphson.

    Iterates on the NPV function and its analytic derivative until |NPV|
    drops below the tolerance. Never raises: when the derivative vanishes or
    a step leaves the domain (rate <= -1 or overflow), the last finite rate
    is returned.

    Args:
        lines: Cashflow lines
        guess: Starting rate
        settings: Iteration limit and tolerance

    Returns:
        The converged rate, or the best estimate reached
    """
    flows = _flows(lines)
    rate = guess
    tolerance = settings.irr_tolerance
    for _ in range(settings.irr_max_iterations):
        base = 1 + rate
        if base <= 0:
            break
        try:
            value = sum(cf / base ** (j + 1) for j, cf in enumerate(flows))
            derivative = sum(-(j + 1) * cf / base ** (j + 2) for j, cf in enumerate(flows))
        except (OverflowError, ZeroDivisionError):
            break
        if abs(value) < tolerance:
            return rate
        if abs(derivative) < tolerance:
            break
        step = rate - value / derivative
        if not math.isfinite(step) or step <= -1:
            break
        rate = step
    else:
        logger.debug("IRR did not converge after %d iterations", settings.irr_max_iterations)
    return rate if math.isfinite(rate) else guess


def payback_period(lines: Sequence[CashflowLine]) -> float:
    """
    Periods until cumulative net cash flow first reaches zero.

    The crossing period is interpolated linearly. Returns the number of
    periods when the cumulative flow never recovers.
    """
    flows = _flows(lines)
    cumulative = 0.0
    for period, cf in enumerate(flows, start=1):
        previous = cumulative
        cumulative += cf
        if cumulative >= 0:
            if cf == 0:
                return float(period - 1)
            return period - 1 + abs(previous) / abs(cf)
    return float(len(flows))


def cash_on_cash_return(lines: Sequence[CashflowLine], initial_investment: float) -> float:
    if initial_investment == 0:
        return 0.0
    return sum(_flows(lines)) / abs(initial_investment)


def roi(lines: Sequence[CashflowLine], initial_investment: float) -> float:
    if initial_investment == 0:
        return 0.0
    return (sum(_flows(lines)) - initial_investment) / abs(initial_investment)


def average_annual_return(lines: Sequence[CashflowLine]) -> float:
    if not lines:
        return 0.0
    return sum(_flows(lines)) / len(lines)


def yield_on_cost(lines: Sequence[CashflowLine], initial_investment: float) -> float:
    """Average periodic net cash flow over the investment."""
    if initial_investment == 0:
        return 0.0
    return average_annual_return(lines) / abs(initial_investment)


def equity_multiple(lines: Sequence[CashflowLine], initial_investment: float) -> float:
    if initial_investment == 0:
        return 0.0
    return sum(_flows(lines)) / abs(initial_investment)


def calculate_lease_term_years(lease: LeaseDescription) -> float:
    """
    Term length in years.

    Uses the lease term (years plus months) when given, else the day count
    between commencement and expiration over 365.25.
    """
    term = lease.lease_term
    if term is not None and (term.years or term.months):
        return term.years + term.months / 12
    expiration = lease.key_dates.expiration
    if expiration is None:
        return 0.0
    days = (expiration - lease.key_dates.commencement).days
    return max(0.0, days / 365.25)


def month_index_from_anchor(anchor: date, day: date) -> int:
    """Whole months from anchor to day (never negative)."""
    months = (day.year - anchor.year) * 12 + (day.month - anchor.month)
    if day.day < anchor.day:
        months -= 1
    return max(0, months)


def npv_monthly(
    flows: Sequence[DatedFlow], annual_rate: float, anchor: Optional[date] = None
) -> float:
    """
    NPV of dated flows with monthly compounding.

    The monthly rate is ``(1 + annual_rate) ** (1/12) - 1`` and each flow is
    discounted by its whole-month distance from `anchor` (the earliest flow
    date by default). A flow on the anchor is not discounted.
    """
    if not flows:
        return 0.0
    if anchor is None:
        anchor = min(d for d, _ in flows)
    if annual_rate == 0:
        return sum(amount for _, amount in flows)
    monthly_rate = (1 + annual_rate) ** (1 / 12) - 1
    return sum(
        amount / (1 + monthly_rate) ** month_index_from_anchor(anchor, d)
        for d, amount in flows
    )


def xirr_monthly(flows: Sequence[DatedFlow]) -> Optional[float]:
    """
    Annualized IRR of dated flows using PyXIRR.

    Returns None when the flows do not contain both a negative and a
    positive amount or PyXIRR cannot solve them.
    """
    amounts = [amount for _, amount in flows]
    if not any(a < 0 for a in amounts) or not any(a > 0 for a in amounts):
        return None
    try:
        result = xirr([d for d, _ in flows], amounts)
    except InvalidPaymentsError as e:
        logger.debug("XIRR rejected payments: %s", e)
        return None
    if result is None or not math.isfinite(result):
        return None
    return float(result)


def calculate_metrics(
    lines: Sequence[CashflowLine], discount_rate: float, rsf: float, years: float
) -> LeaseMetrics:
    """
    Headline metrics for a cashflow.

    IRR is only reported when the flows change sign; a cashflow of pure
    rent payments has no meaningful rate of return.
    """
    flows = _flows(lines)
    has_sign_change = any(cf < 0 for cf in flows) and any(cf > 0 for cf in flows)
    return LeaseMetrics(
        npv=npv(lines, discount_rate),
        effective_rent_psf=effective_rent_psf(lines, rsf, years),
        irr=irr(lines) if has_sign_change else None,
        payback_period=payback_period(lines) if lines else None,
    )
