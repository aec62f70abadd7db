# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class LeaseTypeEnum(str, Enum):
    """
    Expense structure of the lease.

    Full service leases carry operating expenses in the rent and pass through
    only increases above a base year; triple net leases pass through the full
    escalated operating cost.
    """

    FULL_SERVICE = "FS"
    TRIPLE_NET = "NNN"


class LeaseStatusEnum(str, Enum):
    """Workflow status of a lease analysis."""

    DRAFT = "Draft"
    ACTIVE = "Active"
    FINAL = "Final"


class GranularityEnum(str, Enum):
    """Cashflow period length."""

    ANNUAL = "annual"
    MONTHLY = "monthly"


class AbatementAppliesToEnum(str, Enum):
    """What a free-rent period abates."""

    BASE_ONLY = "base_only"
    BASE_PLUS_NNN = "base_plus_nnn"


class AmortizationMethodEnum(str, Enum):
    """How amortized deal costs are spread over the term."""

    STRAIGHT_LINE = "straight_line"  # Constant principal, no interest
    PRESENT_VALUE = "present_value"  # Level payment at the financing rate


class LeaseOptionTypeEnum(str, Enum):
    """Contractual option types."""

    RENEWAL = "Renewal"
    EXPANSION = "Expansion"
    TERMINATION = "Termination"
    ROFR = "ROFR"
    ROFO = "ROFO"


class BillingTimingEnum(str, Enum):
    """Whether monthly rent is paid at the start or the end of each month."""

    ADVANCE = "advance"
    ARREARS = "arrears"


class RoundingPolicyEnum(str, Enum):
    NONE = "none"
    CENTS = "cents"


class IssueSeverityEnum(str, Enum):
    """Severity of a normalization finding."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DriverBucketEnum(str, Enum):
    """
    Cashflow buckets compared between scenarios.

    Declaration order is the tie-break order when two buckets move by the
    same absolute amount.
    """

    BASE_RENT = "base_rent"
    ABATEMENT_CREDIT = "abatement_credit"
    OPERATING = "operating"
    PARKING = "parking"
    AMORTIZED_COSTS = "amortized_costs"
    ONE_TIME_COSTS = "one_time_costs"
    OTHER_RECURRING = "other_recurring"
