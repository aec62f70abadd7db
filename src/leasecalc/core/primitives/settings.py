# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import Field

from .enums import BillingTimingEnum, GranularityEnum, RoundingPolicyEnum
from .model import Model
from .types import PositiveFloat, PositiveInt


class CashflowSettings(Model):
    """
    Per-lease valuation settings.

    Attached to every lease description so that a saved analysis carries the
    discount rate and period length it was reviewed under.

    Usage Examples:
        # Annual cashflow discounted at 8% (defaults)
        settings = CashflowSettings()

        # Monthly cashflow at 7.5%, billed in arrears and rounded to cents
        settings = CashflowSettings(
            discount_rate=0.075,
            granularity=GranularityEnum.MONTHLY,
            billing_timing=BillingTimingEnum.ARREARS,
            rounding=RoundingPolicyEnum.CENTS,
        )
    """

    discount_rate: float = Field(
        default=0.08,
        description="Annual discount rate applied to net cash flows (e.g., 0.08 for 8%).",
    )
    granularity: GranularityEnum = Field(
        default=GranularityEnum.ANNUAL,
        description="Default period length when building a cashflow without an explicit granularity.",
    )
    billing_timing: BillingTimingEnum = Field(
        default=BillingTimingEnum.ADVANCE,
        description="Monthly rent timing used when discounting the monthly rent schedule.",
    )
    rounding: RoundingPolicyEnum = Field(
        default=RoundingPolicyEnum.NONE,
        description="Rounding applied to monthly rent schedule amounts.",
    )


class EngineSettings(Model):
    """Numerical defaults shared by the calculators."""

    termination_interest_rate: PositiveFloat = Field(
        default=0.08,
        description="Rate used to present-value unamortized deal costs at termination.",
    )
    max_free_rent_months: PositiveInt = Field(
        default=18,
        description="Upper bound of the free-rent month search in negotiation equivalencies.",
    )
    driver_epsilon: PositiveFloat = Field(
        default=0.01,
        description="Bucket deltas below this magnitude are not reported as scenario drivers.",
    )
    irr_max_iterations: PositiveInt = Field(
        default=100, description="Newton-Raphson iteration limit for IRR."
    )
    irr_tolerance: PositiveFloat = Field(
        default=1e-6,
        description="IRR converges once |NPV| falls below this tolerance.",
    )
    days_per_month: PositiveFloat = Field(
        default=30.44,
        description="Average month length used to convert day spans into months.",
    )


DEFAULT_ENGINE_SETTINGS = EngineSettings()
