#!/usr/bin/env python3
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Office Lease Analysis: Base Deal vs Counter-Proposal

Analyzes a five-year NNN office lease, then compares it with a tenant
counter-proposal (more free rent, higher TI, lower starting rent) and
prints the headline metrics, the annual cashflow and the drivers of the
difference. It also shows the negotiation equivalencies a broker would
quote across the table.
"""

import sys
from datetime import date
from pathlib import Path

# Add src to path so we can import leasecalc
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from leasecalc.analysis import analyze_lease, apply_overrides, compare_scenarios
from leasecalc.lease import LeaseDescription, cashflow_frame
from leasecalc.valuation import (
    rate_to_free_rent_months,
    ti_to_rate_equivalent_psf_yr,
)


def build_base_lease() -> LeaseDescription:
    return LeaseDescription.model_validate(
        {
            "name": "Harbor Point - Suite 1200",
            "tenant_name": "Acme Analytics",
            "rsf": 20_000,
            "lease_type": "NNN",
            "key_dates": {"commencement": date(2025, 4, 1), "expiration": date(2030, 3, 31)},
            "rent_schedule": [
                {
                    "period_start": date(2025, 4, 1),
                    "period_end": date(2030, 3, 31),
                    "rent_psf": 48.0,
                }
            ],
            "rent_escalation": {"kind": "fixed", "rate": 0.03},
            "operating": {
                "est_op_ex_psf": 14.0,
                "escalation": {"kind": "fixed", "rate": 0.03, "cap": 0.05},
            },
            "concessions": {
                "ti_allowance_psf": 40.0,
                "ti_actual_build_cost_psf": 52.0,
                "abatement": {"kind": "at_commencement", "months": 3},
            },
            "parking": {"monthly_rate_per_stall": 185.0, "stalls": 40, "escalation_rate": 0.02},
            "transaction_costs": {"legal_fees": 20_000.0, "brokerage_fees": 95_000.0},
            "financing": {
                "amortize_ti": True,
                "amortization_method": "present_value",
                "interest_rate": 0.07,
            },
            "options": [
                {"type": "Termination", "fee_months_of_rent": 4, "unamortized_costs_included": True}
            ],
        }
    )


def main():
    print("OFFICE LEASE ANALYSIS")
    print("=" * 65)
    print()

    base = build_base_lease()
    counter = apply_overrides(
        base,
        {
            "name": "Harbor Point - Counter",
            "rent_schedule": [
                {
                    "period_start": date(2025, 4, 1),
                    "period_end": date(2030, 3, 31),
                    "rent_psf": 46.5,
                }
            ],
            "concessions": {
                "ti_allowance_psf": 55.0,
                "abatement": {"kind": "at_commencement", "months": 5},
            },
        },
    )

    base_result = analyze_lease(base)
    counter_result = analyze_lease(counter)

    for label, result in (("Base deal", base_result), ("Counter", counter_result)):
        metrics = result.metrics
        print(f"{label}:")
        print(f"   NPV @ 8%: ${metrics.npv:,.0f}")
        print(f"   Effective rent: ${metrics.effective_rent_psf:,.2f}/SF/yr")
        print(f"   Blended rate: ${result.monthly_economics.blended_rate:,.2f}/SF/yr")
        for issue in result.normalization_issues:
            print(f"   ! {issue.code}: {issue.message}")
        print()

    print("Annual cashflow (base deal)")
    print("-" * 35)
    df = cashflow_frame(base_result.cashflow)
    print(df[["base_rent", "operating", "parking", "abatement_credit", "net_cash_flow"]].round(0))
    print()

    comparison = compare_scenarios(
        base_result.monthly_economics, counter_result.monthly_economics
    )
    print("Counter vs base")
    print("-" * 35)
    print(f"   NPV delta: ${comparison.npv_delta:,.0f}")
    for driver in comparison.top_drivers:
        print(f"   {driver.label}: ${driver.delta:,.0f}")
    print()

    schedule = base_result.monthly_economics.rent_schedule
    discount = base.cashflow_settings.discount_rate
    extra_ti = 15.0
    rate = ti_to_rate_equivalent_psf_yr(extra_ti, base.rsf, schedule, discount)
    print("Negotiation equivalencies (base deal)")
    print("-" * 35)
    print(f"   ${extra_ti:.2f}/SF of extra TI = ${rate:.2f}/SF/yr of rent")
    print(
        f"   $1.50/SF/yr of rent = "
        f"{rate_to_free_rent_months(1.5, base.rsf, schedule, discount)} free months"
    )

    termination = base_result.monthly_economics.termination
    if termination is not None:
        print(f"   Termination fee after month 24: ${termination.fee_at_month(24):,.0f}")


if __name__ == "__main__":
    main()
