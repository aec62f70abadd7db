# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Leasecalc Core Primitives

Building blocks shared by every calculator: the immutable base model,
constrained numeric types, enums, settings, and calendar period resolution.
"""

from .enums import (
    AbatementAppliesToEnum,
    AmortizationMethodEnum,
    BillingTimingEnum,
    DriverBucketEnum,
    GranularityEnum,
    IssueSeverityEnum,
    LeaseOptionTypeEnum,
    LeaseStatusEnum,
    LeaseTypeEnum,
    RoundingPolicyEnum,
)
from .model import Model
from .settings import DEFAULT_ENGINE_SETTINGS, CashflowSettings, EngineSettings
from .timeline import (
    DateRange,
    InvalidDateRangeError,
    Period,
    add_months,
    calendar_months,
    expiration_from_term,
    months_between,
    overlap_units,
    resolve_periods,
)
from .types import FloatBetween0And1, PositiveFloat, PositiveInt, Rate

__all__ = [
    "AbatementAppliesToEnum",
    "AmortizationMethodEnum",
    "BillingTimingEnum",
    "CashflowSettings",
    "DEFAULT_ENGINE_SETTINGS",
    "DateRange",
    "DriverBucketEnum",
    "EngineSettings",
    "FloatBetween0And1",
    "GranularityEnum",
    "InvalidDateRangeError",
    "IssueSeverityEnum",
    "LeaseOptionTypeEnum",
    "LeaseStatusEnum",
    "LeaseTypeEnum",
    "Model",
    "Period",
    "PositiveFloat",
    "PositiveInt",
    "Rate",
    "RoundingPolicyEnum",
    "add_months",
    "calendar_months",
    "expiration_from_term",
    "months_between",
    "overlap_units",
    "resolve_periods",
]
