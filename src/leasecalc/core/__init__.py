# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Leasecalc Core Framework

Shared primitives used by the lease, financing, valuation and analysis
packages.
"""

from . import primitives
from .primitives import (
    CashflowSettings,
    EngineSettings,
    GranularityEnum,
    InvalidDateRangeError,
    LeaseTypeEnum,
    Model,
    Period,
    overlap_units,
    resolve_periods,
)

__all__ = [
    "primitives",
    "CashflowSettings",
    "EngineSettings",
    "GranularityEnum",
    "InvalidDateRangeError",
    "LeaseTypeEnum",
    "Model",
    "Period",
    "overlap_units",
    "resolve_periods",
]
