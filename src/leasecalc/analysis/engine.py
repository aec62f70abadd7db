# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Top-level lease analysis.

`analyze_lease` runs the whole pipeline for one lease: normalization, the
annual cashflow and its metrics, and the monthly economics (lease-month rent
schedule, deal-cost amortization, monthly cashflow and termination exposure).
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Optional

from pydantic import Field

from ..core.primitives import (
    BillingTimingEnum,
    GranularityEnum,
    Model,
    RoundingPolicyEnum,
)
from ..financing.amortization import AmortizationRow
from ..financing.termination import TerminationSummary
from ..lease.cashflow import (
    CashflowLine,
    build_cashflow,
    build_cost_amortization,
    rollup_annual,
)
from ..lease.lease import LeaseDescription
from ..lease.normalize import NormalizationIssue, NormalizedLease, normalize_lease
from ..lease.rent_schedule import (
    MonthlyRentSchedule,
    blended_rate,
    build_monthly_rent_schedule,
)
from ..valuation.metrics import (
    LeaseMetrics,
    calculate_lease_term_years,
    calculate_metrics,
    npv_monthly,
)

logger = logging.getLogger(__name__)


class EconomicsAssumptions(Model):
    """Assumptions the monthly economics were computed under."""

    discount_rate_annual: float
    amortization_rate_annual: float = 0.0
    billing_timing: BillingTimingEnum = BillingTimingEnum.ADVANCE
    rounding: RoundingPolicyEnum = RoundingPolicyEnum.NONE
    escalation_mode: Optional[str] = None


class MonthlyEconomics(Model):
    """
    Month-level view of a lease.

    Attributes:
        rent_schedule: Lease-month contractual rent with free rent applied
        amortization: Schedule of the deal costs the financing block amortizes
        amortization_total: Principal of that schedule
        blended_rate: Average net rent in $/RSF/year
        npv: Monthly-compounded NPV of the net rent due
        monthly_cashflow: Calendar-month cashflow lines
        annual_from_monthly: Monthly lines rolled up to calendar years
        termination: Fee exposure by month, when the lease has a
            termination option
        assumptions: Rates and conventions used
    """

    rent_schedule: MonthlyRentSchedule
    amortization: List[AmortizationRow] = Field(default_factory=list)
    amortization_total: float = 0.0
    blended_rate: float = 0.0
    npv: float = 0.0
    monthly_cashflow: List[CashflowLine] = Field(default_factory=list)
    annual_from_monthly: List[CashflowLine] = Field(default_factory=list)
    termination: Optional[TerminationSummary] = None
    assumptions: EconomicsAssumptions


class LeaseAnalysisResult(Model):
    cashflow: List[CashflowLine] = Field(default_factory=list)
    years: float = 0.0
    metrics: LeaseMetrics = Field(default_factory=LeaseMetrics)
    monthly_economics: Optional[MonthlyEconomics] = None
    normalization_issues: List[NormalizationIssue] = Field(default_factory=list)


def _escalation_mode(lease: LeaseDescription) -> Optional[str]:
    if lease.rent_escalation is not None:
        return lease.rent_escalation.kind
    if lease.rent_schedule:
        return "per_row"
    return None


def build_monthly_economics(
    lease: LeaseDescription, normalized: Optional[NormalizedLease] = None
) -> MonthlyEconomics:
    """Monthly rent schedule, amortization, NPV and termination exposure."""
    if normalized is None:
        normalized = normalize_lease(lease).normalized
    settings = lease.cashflow_settings

    schedule = build_monthly_rent_schedule(lease, normalized)
    monthly = build_cashflow(lease, GranularityEnum.MONTHLY, normalized)
    free_rent_value = -sum(line.abatement_credit for line in monthly)
    amortization = build_cost_amortization(
        lease, normalized, free_rent_value, sum(line.months for line in monthly)
    )

    timing = settings.billing_timing
    # Arrears rent lands on the day after the month it pays for
    flows = [
        (
            row.start if timing == BillingTimingEnum.ADVANCE else row.end + timedelta(days=1),
            row.net_rent_due,
        )
        for row in schedule.months
    ]
    economics_npv = npv_monthly(flows, settings.discount_rate, anchor=normalized.commencement)

    termination = None
    options = lease.termination_options
    if options:
        termination = TerminationSummary(
            penalty_months=options[0].fee_months_of_rent or 0.0,
            amortization=amortization,
            monthly_rent=[line.base_rent for line in monthly],
        )

    return MonthlyEconomics(
        rent_schedule=schedule,
        amortization=amortization,
        amortization_total=amortization[0].beginning_balance if amortization else 0.0,
        blended_rate=blended_rate(schedule, normalized.rsf),
        npv=economics_npv,
        monthly_cashflow=monthly,
        annual_from_monthly=rollup_annual(monthly),
        termination=termination,
        assumptions=EconomicsAssumptions(
            discount_rate_annual=settings.discount_rate,
            amortization_rate_annual=lease.financing.effective_rate if lease.financing else 0.0,
            billing_timing=timing,
            rounding=settings.rounding,
            escalation_mode=_escalation_mode(lease),
        ),
    )


def analyze_lease(
    lease: LeaseDescription, include_monthly: bool = True
) -> LeaseAnalysisResult:
    """
    Analyze a lease end to end.

    Args:
        lease: Lease to analyze
        include_monthly: Also compute the monthly economics

    Returns:
        Annual cashflow, term in years, headline metrics, monthly economics
        and any normalization issues
    """
    result = normalize_lease(lease)
    normalized = result.normalized

    cashflow = build_cashflow(lease, GranularityEnum.ANNUAL, normalized)
    years = calculate_lease_term_years(lease)
    metrics = calculate_metrics(
        cashflow, lease.cashflow_settings.discount_rate, normalized.rsf, years
    )
    monthly = build_monthly_economics(lease, normalized) if include_monthly else None

    logger.debug(
        "Analyzed lease %r: %d annual lines, NPV %.2f", lease.name, len(cashflow), metrics.npv
    )
    return LeaseAnalysisResult(
        cashflow=cashflow,
        years=years,
        metrics=metrics,
        monthly_economics=monthly,
        normalization_issues=result.issues,
    )
