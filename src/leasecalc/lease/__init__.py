# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease Description and Cashflow Construction

Lease models, the escalation and abatement resolvers, the normalization
pass, the calendar cashflow builder and the lease-month rent schedule.
"""

from .abatement import (
    AbatementPeriod,
    AnyAbatement,
    AtCommencementAbatement,
    CustomAbatement,
    resolve_abatement,
)
from .cashflow import (
    CashflowLine,
    ConcessionTotals,
    build_annual_cashflow,
    build_cashflow,
    build_monthly_cashflow,
    cashflow_frame,
    concession_totals,
    rollup_annual,
)
from .escalation import (
    AnyEscalation,
    CustomEscalation,
    EscalationPeriod,
    FixedEscalation,
    resolve_rate,
)
from .lease import (
    Concessions,
    Financing,
    KeyDates,
    LeaseDescription,
    LeaseOption,
    LeaseTerm,
    OperatingExpenses,
    Parking,
    RentRow,
    TransactionCosts,
)
from .normalize import (
    NormalizationIssue,
    NormalizationResult,
    NormalizedLease,
    normalize_lease,
)
from .rent_schedule import (
    MonthlyRentRow,
    MonthlyRentSchedule,
    blended_rate,
    build_monthly_rent_schedule,
)

__all__ = [
    # Variants
    "AbatementPeriod",
    "AnyAbatement",
    "AnyEscalation",
    "AtCommencementAbatement",
    "CustomAbatement",
    "CustomEscalation",
    "EscalationPeriod",
    "FixedEscalation",
    # Lease description
    "Concessions",
    "Financing",
    "KeyDates",
    "LeaseDescription",
    "LeaseOption",
    "LeaseTerm",
    "OperatingExpenses",
    "Parking",
    "RentRow",
    "TransactionCosts",
    # Normalization
    "NormalizationIssue",
    "NormalizationResult",
    "NormalizedLease",
    "normalize_lease",
    # Cashflow
    "CashflowLine",
    "ConcessionTotals",
    "build_annual_cashflow",
    "build_cashflow",
    "build_monthly_cashflow",
    "cashflow_frame",
    "concession_totals",
    "resolve_abatement",
    "resolve_rate",
    "rollup_annual",
    # Rent schedule
    "MonthlyRentRow",
    "MonthlyRentSchedule",
    "blended_rate",
    "build_monthly_rent_schedule",
]
