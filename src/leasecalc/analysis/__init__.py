# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease and scenario analysis entry points.
"""

from .engine import (
    EconomicsAssumptions,
    LeaseAnalysisResult,
    MonthlyEconomics,
    analyze_lease,
    build_monthly_economics,
)
from .scenarios import (
    DRIVER_BUCKETS,
    Scenario,
    ScenarioComparison,
    ScenarioDriver,
    ScenarioResult,
    analyze_scenarios,
    apply_overrides,
    compare_scenarios,
    compute_scenario_drivers,
)

__all__ = [
    "DRIVER_BUCKETS",
    "EconomicsAssumptions",
    "LeaseAnalysisResult",
    "MonthlyEconomics",
    "Scenario",
    "ScenarioComparison",
    "ScenarioDriver",
    "ScenarioResult",
    "analyze_lease",
    "analyze_scenarios",
    "apply_overrides",
    "build_monthly_economics",
    "compare_scenarios",
    "compute_scenario_drivers",
]
