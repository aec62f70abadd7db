# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period-by-period lease cashflow construction.

Each line reports recurring charges (base rent, operating pass-through,
parking, other), the abatement credit, one-time commencement costs (TI
shortfall, transaction costs) and amortized deal costs. Every bucket is
computed once per period into an index-addressed array and the lines are
assembled at the end.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..core.primitives import (
    GranularityEnum,
    InvalidDateRangeError,
    Model,
    Period,
    resolve_periods,
)
from ..financing.amortization import (
    AmortizationRow,
    build_amortization_schedule,
    payments_by_period,
)
from .abatement import RateResolver, resolve_abatement
from .escalation import FixedEscalation, resolve_rate
from .lease import LeaseDescription
from .normalize import NormalizedLease, normalize_lease

logger = logging.getLogger(__name__)

BUCKETS = (
    "base_rent",
    "operating",
    "parking",
    "other_recurring",
    "abatement_credit",
    "ti_shortfall",
    "transaction_costs",
    "amortized_costs",
)


class CashflowLine(Model):
    """
    Cash flows for one annual or monthly period.

    `subtotal` and `net_cash_flow` are derived from the buckets, so a line
    always reconciles.
    """

    period: str
    year: int
    month: Optional[int] = None
    start: date
    end: date
    months: int
    base_rent: float = 0.0
    operating: float = 0.0
    parking: float = 0.0
    other_recurring: float = 0.0
    abatement_credit: float = 0.0
    ti_shortfall: float = 0.0
    transaction_costs: float = 0.0
    amortized_costs: float = 0.0

    @property
    def subtotal(self) -> float:
        return self.base_rent + self.operating + self.parking + self.other_recurring

    @property
    def net_cash_flow(self) -> float:
        return (
            self.subtotal
            + self.abatement_credit
            + self.ti_shortfall
            + self.transaction_costs
            + self.amortized_costs
        )

    @property
    def one_time_costs(self) -> float:
        return self.ti_shortfall + self.transaction_costs


class ConcessionTotals(Model):
    """Dollar value of the landlord concessions in a lease."""

    ti_allowance: float = 0.0
    moving_allowance: float = 0.0
    other_credits: float = 0.0
    free_rent_value: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.ti_allowance
            + self.moving_allowance
            + self.other_credits
            + self.free_rent_value
        )


def rent_rate_resolver(
    lease: LeaseDescription, normalized: NormalizedLease
) -> RateResolver:
    """
    Annual base rent PSF in effect for a period.

    A lease-level rent escalation escalates the first row's rate from the
    commencement year. Otherwise the row containing the period start is
    escalated by its own percentage from the row's start year; periods no row
    covers carry no rent.
    """
    commencement_year = normalized.commencement.year
    variant = normalized.rent_escalation
    if variant is not None:
        base = normalized.base_rent_psf
        return lambda p: resolve_rate(variant, base, p.year, commencement_year)

    rows = list(lease.rent_schedule)

    def rate(period: Period) -> float:
        for row in rows:
            if row.contains(period.start):
                escalation = FixedEscalation(rate=max(0.0, row.escalation_percentage or 0.0))
                return resolve_rate(
                    escalation, row.rent_psf, period.year, row.period_start.year
                )
        return 0.0

    return rate


def opex_rate_resolver(
    lease: LeaseDescription, normalized: NormalizedLease
) -> RateResolver:
    """Escalated gross operating expense PSF in effect for a period."""
    commencement_year = normalized.commencement.year
    base = base_operating_psf(lease, normalized)
    variant = normalized.opex_escalation
    return lambda p: resolve_rate(variant, base, p.year, commencement_year)


def base_operating_psf(lease: LeaseDescription, normalized: NormalizedLease) -> float:
    """
    Unescalated operating expense PSF.

    Full service leases without an operating estimate fall back to the first
    row's rent, which makes the base-year stop equal to the rent itself.
    """
    if lease.operating.est_op_ex_psf is not None:
        return lease.operating.est_op_ex_psf
    if lease.is_full_service:
        return normalized.base_rent_psf
    return 0.0


def _uses_manual_pass_through(lease: LeaseDescription) -> bool:
    return (
        lease.is_full_service
        and lease.operating.use_manual_pass_through
        and lease.operating.manual_pass_through_psf is not None
    )


def _manual_rate_resolver(
    lease: LeaseDescription, normalized: NormalizedLease
) -> RateResolver:
    commencement_year = normalized.commencement.year
    base = lease.operating.manual_pass_through_psf or 0.0
    variant = normalized.opex_escalation
    return lambda p: resolve_rate(variant, base, p.year, commencement_year)


def _operating(
    lease: LeaseDescription,
    normalized: NormalizedLease,
    periods: Sequence[Period],
    opex_rate: RateResolver,
) -> List[float]:
    rsf = normalized.rsf
    if _uses_manual_pass_through(lease):
        manual = _manual_rate_resolver(lease, normalized)
        return [manual(p) * rsf * p.months / 12 for p in periods]

    if lease.is_full_service:
        base_year = lease.base_year or normalized.commencement.year
        stop = resolve_rate(
            normalized.opex_escalation,
            base_operating_psf(lease, normalized),
            base_year,
            normalized.commencement.year,
        )
        return [max(0.0, opex_rate(p) - stop) * rsf * p.months / 12 for p in periods]

    return [opex_rate(p) * rsf * p.months / 12 for p in periods]


def _parking(
    lease: LeaseDescription, normalized: NormalizedLease, periods: Sequence[Period]
) -> List[float]:
    parking = lease.parking
    if parking is None or not parking.monthly_rate_per_stall or not parking.stalls:
        return [0.0] * len(periods)
    escalation = FixedEscalation(rate=max(0.0, parking.escalation_rate))
    commencement_year = normalized.commencement.year
    return [
        resolve_rate(escalation, parking.monthly_rate_per_stall, p.year, commencement_year)
        * parking.stalls
        * p.months
        for p in periods
    ]


def ti_shortfall_amount(lease: LeaseDescription, rsf: float) -> float:
    """Tenant-funded build cost above the TI allowance."""
    concessions = lease.concessions
    if concessions.ti_actual_build_cost_psf is None or concessions.ti_allowance_psf is None:
        return 0.0
    return max(0.0, concessions.ti_actual_build_cost_psf - concessions.ti_allowance_psf) * rsf


def transaction_cost_amount(lease: LeaseDescription) -> float:
    if lease.transaction_costs is None:
        return 0.0
    return max(0.0, lease.transaction_costs.total_amount)


def amortization_principal(
    lease: LeaseDescription, normalized: NormalizedLease, free_rent_value: float
) -> float:
    """Total of the deal costs the financing block elects to amortize."""
    financing = lease.financing
    if financing is None:
        return 0.0
    total = 0.0
    if financing.amortize_ti and lease.concessions.ti_allowance_psf:
        total += lease.concessions.ti_allowance_psf * normalized.rsf
    if financing.amortize_free_rent:
        total += free_rent_value
    if financing.amortize_transaction_costs:
        total += transaction_cost_amount(lease)
    return total


def build_cost_amortization(
    lease: LeaseDescription,
    normalized: NormalizedLease,
    free_rent_value: float,
    total_months: int,
) -> List[AmortizationRow]:
    """Amortization schedule for the elected deal costs over the lease months."""
    principal = amortization_principal(lease, normalized, free_rent_value)
    if principal <= 0 or lease.financing is None:
        return []
    return build_amortization_schedule(
        principal, lease.financing.effective_rate, total_months
    )


def lease_periods(
    normalized: NormalizedLease, granularity: GranularityEnum
) -> List[Period]:
    """Periods of a normalized lease, or none when its dates are unusable."""
    if normalized.expiration is None:
        logger.warning("Lease has no expiration or term; no periods resolved")
        return []
    try:
        return resolve_periods(normalized.commencement, normalized.expiration, granularity)
    except InvalidDateRangeError as e:
        logger.warning("Cannot resolve lease periods: %s", e)
        return []


def build_cashflow(
    lease: LeaseDescription,
    granularity: Optional[GranularityEnum] = None,
    normalized: Optional[NormalizedLease] = None,
) -> List[CashflowLine]:
    """
    Build the cashflow lines of a lease.

    Args:
        lease: Lease to price
        granularity: Annual or monthly; defaults to the lease's cashflow settings
        normalized: Result of `normalize_lease` for this lease, when the
            caller already has it

    Returns:
        One line per period; empty when the lease dates are unusable
    """
    granularity = granularity or lease.cashflow_settings.granularity
    if normalized is None:
        normalized = normalize_lease(lease).normalized

    periods = lease_periods(normalized, granularity)
    if not periods:
        return []

    rsf = normalized.rsf
    rent_rate = rent_rate_resolver(lease, normalized)
    opex_rate = opex_rate_resolver(lease, normalized)
    abated_opex_rate = (
        _manual_rate_resolver(lease, normalized)
        if _uses_manual_pass_through(lease)
        else opex_rate
    )

    n = len(periods)
    columns: Dict[str, List[float]] = {
        "base_rent": [rent_rate(p) * rsf * p.months / 12 for p in periods],
        "operating": _operating(lease, normalized, periods, opex_rate),
        "parking": _parking(lease, normalized, periods),
        "other_recurring": [0.0] * n,
        "abatement_credit": resolve_abatement(
            normalized.abatement,
            periods,
            rent_rate,
            abated_opex_rate,
            rsf,
            granularity,
            normalized.commencement,
            normalized.base_rent_psf,
        ),
        "ti_shortfall": [0.0] * n,
        "transaction_costs": [0.0] * n,
    }
    columns["ti_shortfall"][0] = ti_shortfall_amount(lease, rsf)
    columns["transaction_costs"][0] = transaction_cost_amount(lease)

    free_rent_value = -sum(columns["abatement_credit"])
    months = [p.months for p in periods]
    schedule = build_cost_amortization(lease, normalized, free_rent_value, sum(months))
    columns["amortized_costs"] = (
        payments_by_period(schedule, months) if schedule else [0.0] * n
    )

    logger.debug(
        "Built %d %s cashflow lines for lease %r", n, granularity.value, lease.name
    )
    return [
        CashflowLine(
            period=p.label,
            year=p.year,
            month=p.month,
            start=p.start,
            end=p.end,
            months=p.months,
            **{bucket: columns[bucket][p.index] for bucket in BUCKETS},
        )
        for p in periods
    ]


def build_annual_cashflow(
    lease: LeaseDescription, normalized: Optional[NormalizedLease] = None
) -> List[CashflowLine]:
    return build_cashflow(lease, GranularityEnum.ANNUAL, normalized)


def build_monthly_cashflow(
    lease: LeaseDescription, normalized: Optional[NormalizedLease] = None
) -> List[CashflowLine]:
    return build_cashflow(lease, GranularityEnum.MONTHLY, normalized)


def cashflow_frame(lines: Sequence[CashflowLine]) -> pd.DataFrame:
    """Lines as a DataFrame indexed by pandas Period, with derived totals."""
    if not lines:
        return pd.DataFrame(columns=["year", "months", *BUCKETS, "subtotal", "net_cash_flow"])
    freq = "M" if lines[0].month is not None else "Y"
    df = pd.DataFrame(
        {
            "year": [line.year for line in lines],
            "months": [line.months for line in lines],
            **{bucket: [getattr(line, bucket) for line in lines] for bucket in BUCKETS},
        },
        index=pd.PeriodIndex([line.period for line in lines], freq=freq),
    )
    df["subtotal"] = df[["base_rent", "operating", "parking", "other_recurring"]].sum(axis=1)
    df["net_cash_flow"] = df[["subtotal", *BUCKETS[4:]]].sum(axis=1)
    return df


def rollup_annual(lines: Sequence[CashflowLine]) -> List[CashflowLine]:
    """Aggregate monthly lines into calendar-year lines."""
    if not lines:
        return []
    grouped: Dict[int, List[CashflowLine]] = {}
    for line in lines:
        grouped.setdefault(line.year, []).append(line)
    return [
        CashflowLine(
            period=str(year),
            year=year,
            start=group[0].start,
            end=group[-1].end,
            months=sum(line.months for line in group),
            **{bucket: sum(getattr(line, bucket) for line in group) for bucket in BUCKETS},
        )
        for year, group in grouped.items()
    ]


def concession_totals(
    lease: LeaseDescription, lines: Optional[Sequence[CashflowLine]] = None
) -> ConcessionTotals:
    """Dollar value of TI, moving, other credits and free rent."""
    normalized = normalize_lease(lease).normalized
    if lines is None:
        lines = build_cashflow(lease, normalized=normalized)
    concessions = lease.concessions
    return ConcessionTotals(
        ti_allowance=(concessions.ti_allowance_psf or 0.0) * normalized.rsf,
        moving_allowance=concessions.moving_allowance or 0.0,
        other_credits=concessions.other_credits or 0.0,
        free_rent_value=-sum(line.abatement_credit for line in lines),
    )
