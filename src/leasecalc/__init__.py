# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Leasecalc - Commercial Real Estate Lease Cashflow & Metrics Engine

Turns a structured lease description into annual or monthly cashflow lines
and summary metrics: NPV, IRR, effective rent, payback, termination fees and
negotiation equivalencies.

Key Entry Points:
- leasecalc.analysis.analyze_lease() - Complete analysis of one lease
- leasecalc.analysis.analyze_scenarios() - Override sets applied to a base lease
- leasecalc.lease.* - Lease description, escalation and abatement models
- leasecalc.financing.* - Deal cost amortization and early termination
- leasecalc.valuation.* - Metrics and negotiation equivalencies

Example Usage:
    ```python
    from datetime import date

    from leasecalc.analysis import analyze_lease
    from leasecalc.lease import FixedEscalation, KeyDates, LeaseDescription, RentRow

    lease = LeaseDescription(
        name="Suite 400",
        rsf=20000,
        lease_type="NNN",
        key_dates=KeyDates(commencement=date(2025, 1, 1), expiration=date(2029, 12, 31)),
        rent_schedule=[
            RentRow(period_start=date(2025, 1, 1), period_end=date(2029, 12, 31), rent_psf=50.0)
        ],
        rent_escalation=FixedEscalation(rate=0.03),
    )
    result = analyze_lease(lease)
    print(f"NPV: {result.metrics.npv:,.0f}")
    ```
"""

import importlib
import logging

# Libraries leave handler configuration to the application
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "core",
    "financing",
    "lease",
    "valuation",
]


_LAZY_MODULES = {
    "analysis": "leasecalc.analysis",
    "core": "leasecalc.core",
    "financing": "leasecalc.financing",
    "lease": "leasecalc.lease",
    "valuation": "leasecalc.valuation",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'leasecalc' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
