# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Leasecalc Valuation - Metrics and Negotiation Equivalencies

Cashflow metrics (NPV, IRR, effective rent, payback, return ratios) and
present-value equivalencies between TI, free rent, rent rate and term.
"""

from .metrics import (
    LeaseMetrics,
    average_annual_return,
    calculate_lease_term_years,
    calculate_metrics,
    cash_on_cash_return,
    effective_rent_psf,
    equity_multiple,
    irr,
    npv,
    npv_monthly,
    payback_period,
    roi,
    xirr_monthly,
    yield_on_cost,
)
from .negotiation import (
    free_rent_to_rate_equivalent_psf_yr,
    pv_of_free_rent_months,
    pv_of_rate_delta,
    pv_of_term_extension,
    pv_of_ti,
    rate_to_free_rent_months,
    rate_to_ti_equivalent_psf,
    term_extension_to_additional_ti_psf,
    ti_to_rate_equivalent_psf_yr,
)

__all__ = [
    # Metrics
    "LeaseMetrics",
    "average_annual_return",
    "calculate_lease_term_years",
    "calculate_metrics",
    "cash_on_cash_return",
    "effective_rent_psf",
    "equity_multiple",
    "irr",
    "npv",
    "npv_monthly",
    "payback_period",
    "roi",
    "xirr_monthly",
    "yield_on_cost",
    # Negotiation equivalencies
    "free_rent_to_rate_equivalent_psf_yr",
    "pv_of_free_rent_months",
    "pv_of_rate_delta",
    "pv_of_term_extension",
    "pv_of_ti",
    "rate_to_free_rent_months",
    "rate_to_ti_equivalent_psf",
    "term_extension_to_additional_ti_psf",
    "ti_to_rate_equivalent_psf_yr",
]
