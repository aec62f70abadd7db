# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal cost amortization and early termination.
"""

from .amortization import (
    AmortizationRow,
    CostAmortization,
    amortization_frame,
    amortization_summary,
    build_amortization_schedule,
    payments_by_period,
)
from .termination import (
    TerminationFee,
    TerminationScenario,
    TerminationSummary,
    UnamortizedCosts,
    build_termination_scenario,
    calculate_early_termination_fee,
    calculate_unamortized_costs,
    pv_amortization_balance,
    termination_fee_at_month,
)

__all__ = [
    "AmortizationRow",
    "CostAmortization",
    "TerminationFee",
    "TerminationScenario",
    "TerminationSummary",
    "UnamortizedCosts",
    "amortization_frame",
    "amortization_summary",
    "build_amortization_schedule",
    "build_termination_scenario",
    "calculate_early_termination_fee",
    "calculate_unamortized_costs",
    "payments_by_period",
    "pv_amortization_balance",
    "termination_fee_at_month",
]
