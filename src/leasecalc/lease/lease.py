# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lease description data model.

A `LeaseDescription` is the immutable input to every calculator. Escalation
and abatement settings are closed tagged unions; flat legacy payloads (with
``escalation_type``/``abatement_type`` discriminators spread across the
operating, rent-escalation and concessions blocks) are converted into those
unions before validation.
"""

from __future__ import annotations

from datetime import date
from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator

from ..core.primitives import (
    AmortizationMethodEnum,
    CashflowSettings,
    LeaseOptionTypeEnum,
    LeaseStatusEnum,
    LeaseTypeEnum,
    Model,
    PositiveFloat,
    PositiveInt,
)
from .abatement import AnyAbatement, AtCommencementAbatement
from .escalation import AnyEscalation, FixedEscalation, coerce_legacy_escalation

_LEGACY_OPEX_KEYS = (
    "escalation_method",
    "escalation_value",
    "escalation_cap",
    "escalation_type",
    "escalation_periods",
)
_LEGACY_RENT_KEYS = (
    "escalation_type",
    "fixed_escalation_percentage",
    "escalation_periods",
)
_LEGACY_ABATEMENT_KEYS = (
    "abatement_type",
    "abatement_free_rent_months",
    "abatement_applies_to",
    "abatement_periods",
)


class RentRow(Model):
    """One row of the contractual rent schedule."""

    period_start: date
    period_end: date
    rent_psf: float = Field(..., description="Base rent in $/RSF/year")
    escalation_percentage: Optional[float] = Field(
        default=None, description="Row-local annual escalation (e.g., 0.03 for 3%)"
    )

    def contains(self, day: date) -> bool:
        return self.period_start <= day <= self.period_end


class KeyDates(Model):
    commencement: date
    rent_start: Optional[date] = None
    expiration: Optional[date] = Field(
        default=None, description="Derived from the lease term when omitted"
    )
    early_access: Optional[date] = None


class LeaseTerm(Model):
    """Lease term length, excluding abatement months unless told otherwise."""

    years: PositiveInt = 0
    months: PositiveInt = 0
    include_abatement_in_term: bool = False

    @property
    def base_months(self) -> int:
        return self.years * 12 + self.months


class OperatingExpenses(Model):
    """
    Operating expense assumptions.

    Attributes:
        est_op_ex_psf: Estimated operating expenses in $/RSF/year
        escalation: Escalation applied to operating expenses
        use_manual_pass_through: Full service only, bill a fixed pass-through
            instead of the increase over the base year
        manual_pass_through_psf: Manual pass-through in $/RSF/year
    """

    est_op_ex_psf: Optional[float] = None
    escalation: AnyEscalation = Field(default_factory=FixedEscalation)
    use_manual_pass_through: bool = False
    manual_pass_through_psf: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def coerce_legacy_escalation_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "escalation" in data:
            return data
        if not any(key in data for key in _LEGACY_OPEX_KEYS):
            return data
        data = dict(data)
        legacy = {key: data.pop(key) for key in _LEGACY_OPEX_KEYS if key in data}
        data["escalation"] = coerce_legacy_escalation(
            legacy, rate_key="escalation_value", cap_key="escalation_cap"
        )
        return data


class Concessions(Model):
    """Landlord concessions: TI, moving and other credits, and free rent."""

    ti_allowance_psf: Optional[float] = None
    ti_actual_build_cost_psf: Optional[float] = None
    ti_benchmark_cost_psf: Optional[float] = None
    moving_allowance: Optional[float] = None
    other_credits: Optional[float] = None
    abatement: AnyAbatement = Field(default_factory=AtCommencementAbatement)

    @model_validator(mode="before")
    @classmethod
    def coerce_legacy_abatement_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "abatement" in data:
            return data
        if not any(key in data for key in _LEGACY_ABATEMENT_KEYS):
            return data
        data = dict(data)
        legacy = {key: data.pop(key) for key in _LEGACY_ABATEMENT_KEYS if key in data}
        if legacy.get("abatement_type") == "custom":
            data["abatement"] = {
                "kind": "custom",
                "periods": list(legacy.get("abatement_periods") or []),
            }
        else:
            data["abatement"] = {
                "kind": "at_commencement",
                "months": legacy.get("abatement_free_rent_months") or 0,
                "applies_to": legacy.get("abatement_applies_to") or "base_only",
            }
        return data


class Parking(Model):
    monthly_rate_per_stall: PositiveFloat = 0.0
    stalls: PositiveInt = 0
    escalation_rate: float = Field(
        default=0.0,
        validation_alias=AliasChoices("escalation_rate", "escalation_value"),
        description="Annual escalation; whole numbers above 1 are read as percentages",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_legacy_method(cls, data: Any) -> Any:
        if isinstance(data, dict) and "escalation_method" in data:
            data = {k: v for k, v in data.items() if k != "escalation_method"}
        return data

    @field_validator("escalation_rate")
    @classmethod
    def percent_to_decimal(cls, v: float) -> float:
        return v / 100 if v > 1 else v


class TransactionCosts(Model):
    """One-time deal costs borne at commencement."""

    legal_fees: float = 0.0
    brokerage_fees: float = 0.0
    due_diligence: float = 0.0
    environmental: float = 0.0
    other: float = 0.0
    total: Optional[float] = Field(
        default=None, description="Explicit total; the component sum is used when omitted"
    )

    @property
    def total_amount(self) -> float:
        if self.total is not None:
            return self.total
        return (
            self.legal_fees
            + self.brokerage_fees
            + self.due_diligence
            + self.environmental
            + self.other
        )


class Financing(Model):
    """Which deal costs are amortized into the rent stream, and how."""

    amortize_ti: bool = False
    amortize_free_rent: bool = False
    amortize_transaction_costs: bool = False
    amortization_method: AmortizationMethodEnum = AmortizationMethodEnum.STRAIGHT_LINE
    interest_rate: Optional[float] = Field(
        default=None, description="Annual rate for present value amortization"
    )

    @property
    def effective_rate(self) -> float:
        """Rate used for the schedule; straight-line schedules carry no interest."""
        if self.amortization_method != AmortizationMethodEnum.PRESENT_VALUE:
            return 0.0
        return max(0.0, self.interest_rate or 0.0)


class LeaseOption(Model):
    """A contractual option; termination options carry fee terms."""

    type: LeaseOptionTypeEnum
    window_open: Optional[date] = None
    window_close: Optional[date] = None
    terms: Optional[str] = None
    notice_months: Optional[int] = None
    fee_months_of_rent: Optional[float] = Field(
        default=None, description="Fee as a number of months of then-current rent"
    )
    base_rent_penalty: Optional[float] = Field(
        default=None, description="Additional penalty in $/RSF"
    )
    unamortized_costs_included: bool = False
    termination_interest_rate: Optional[float] = None


class LeaseDescription(Model):
    """
    Complete description of a lease under analysis.

    Example:
        >>> lease = LeaseDescription(
        ...     name="Acme HQ",
        ...     rsf=20000,
        ...     lease_type=LeaseTypeEnum.TRIPLE_NET,
        ...     key_dates=KeyDates(
        ...         commencement=date(2025, 1, 1), expiration=date(2029, 12, 31)
        ...     ),
        ...     operating=OperatingExpenses(est_op_ex_psf=12.0),
        ...     rent_schedule=[
        ...         RentRow(
        ...             period_start=date(2025, 1, 1),
        ...             period_end=date(2029, 12, 31),
        ...             rent_psf=50.0,
        ...         )
        ...     ],
        ...     rent_escalation=FixedEscalation(rate=0.03),
        ... )
    """

    id: str = ""
    name: str = ""
    status: LeaseStatusEnum = LeaseStatusEnum.DRAFT
    tenant_name: Optional[str] = None
    market: Optional[str] = None
    rep_type: Optional[Literal["Occupier", "Landlord"]] = None
    rsf: float = Field(..., description="Rentable square feet")
    usf: Optional[float] = None
    lease_type: LeaseTypeEnum
    base_year: Optional[int] = Field(
        default=None, description="Full service base year; defaults to the commencement year"
    )
    key_dates: KeyDates
    lease_term: Optional[LeaseTerm] = None
    operating: OperatingExpenses = Field(default_factory=OperatingExpenses)
    rent_schedule: List[RentRow] = Field(default_factory=list)
    rent_escalation: Optional[AnyEscalation] = Field(
        default=None,
        description="Overrides the per-row escalation of the rent schedule when set",
    )
    concessions: Concessions = Field(default_factory=Concessions)
    parking: Optional[Parking] = None
    transaction_costs: Optional[TransactionCosts] = None
    financing: Optional[Financing] = None
    options: List[LeaseOption] = Field(default_factory=list)
    cashflow_settings: CashflowSettings = Field(default_factory=CashflowSettings)
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def coerce_legacy_rent_escalation(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        escalation = data.get("rent_escalation")
        if not isinstance(escalation, dict) or "kind" in escalation:
            return data
        if not any(key in escalation for key in _LEGACY_RENT_KEYS):
            return data
        fallback = None
        rows = data.get("rent_schedule") or []
        if rows:
            first = rows[0]
            fallback = (
                first.get("escalation_percentage")
                if isinstance(first, dict)
                else getattr(first, "escalation_percentage", None)
            )
        data = dict(data)
        data["rent_escalation"] = coerce_legacy_escalation(
            escalation, rate_key="fixed_escalation_percentage", fallback_rate=fallback
        )
        return data

    @property
    def first_rent_row(self) -> Optional[RentRow]:
        return self.rent_schedule[0] if self.rent_schedule else None

    @property
    def is_full_service(self) -> bool:
        return self.lease_type == LeaseTypeEnum.FULL_SERVICE

    @property
    def termination_options(self) -> List[LeaseOption]:
        return [o for o in self.options if o.type == LeaseOptionTypeEnum.TERMINATION]
