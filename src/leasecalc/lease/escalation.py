# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Escalation models and the single resolver that applies them.

Two variants exist: a fixed annual rate (optionally capped), and a list of
custom dated periods each carrying its own rate. Rent, operating expenses and
parking all escalate through `resolve_rate`.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, Field
from typing_extensions import Annotated

from ..core.primitives import Model, PositiveFloat, Rate


class EscalationPeriod(Model):
    """A dated window during which a specific annual escalation rate applies."""

    start: date = Field(validation_alias=AliasChoices("start", "period_start"))
    end: date = Field(validation_alias=AliasChoices("end", "period_end"))
    rate: Rate = Field(
        default=0.0,
        validation_alias=AliasChoices("rate", "escalation_percentage"),
        description="Annual escalation rate as a decimal (e.g., 0.03 for 3%)",
    )


def _clamp(rate: float, cap: Optional[float]) -> float:
    if cap is not None:
        rate = min(rate, cap)
    return max(0.0, rate)


class FixedEscalation(Model):
    """
    A single annual escalation rate applied for the whole term.

    Example:
        >>> esc = FixedEscalation(rate=0.03, cap=0.025)
        >>> esc.effective_rate
        0.025
    """

    kind: Literal["fixed"] = "fixed"
    rate: Rate = Field(default=0.0, description="Annual escalation rate as a decimal")
    cap: Optional[PositiveFloat] = Field(
        default=None, description="Optional ceiling on the annual rate"
    )

    @property
    def effective_rate(self) -> float:
        return _clamp(self.rate, self.cap)

    def rate_for_year(self, year: int) -> float:
        return self.effective_rate


class CustomEscalation(Model):
    """
    Explicit escalation periods.

    Periods need not be sorted or contiguous. They are resolved in start-date
    order and the first period whose calendar-year span contains the target
    year supplies that year's rate. A year covered by no period is priced
    at the unescalated base.
    """

    kind: Literal["custom"] = "custom"
    periods: List[EscalationPeriod] = Field(default_factory=list)
    cap: Optional[PositiveFloat] = Field(
        default=None, description="Optional ceiling applied to every period's rate"
    )

    @property
    def sorted_periods(self) -> List[EscalationPeriod]:
        return sorted(self.periods, key=lambda p: p.start)

    def period_for_year(self, year: int) -> Optional[EscalationPeriod]:
        for period in self.sorted_periods:
            if period.start.year <= year <= period.end.year:
                return period
        return None

    def rate_for_year(self, year: int) -> float:
        period = self.period_for_year(year)
        return 0.0 if period is None else _clamp(period.rate, self.cap)


AnyEscalation = Annotated[
    Union[FixedEscalation, CustomEscalation], Field(discriminator="kind")
]


def resolve_rate(
    variant: Union[FixedEscalation, CustomEscalation],
    base_value: float,
    as_of_year: int,
    start_year: int,
) -> float:
    """
    Escalate a base value from `start_year` to `as_of_year`.

    Fixed: ``base * (1 + rate) ** years``. Custom: the base compounds once per
    year boundary crossed, each step using the rate in effect for the year
    being entered; a target year no period covers returns the base. Rates
    are clamped to ``[0, cap]`` before compounding.

    Args:
        variant: Escalation variant to apply
        base_value: Unescalated value at `start_year`
        as_of_year: Calendar year to escalate to
        start_year: Calendar year in which `base_value` applies

    Returns:
        The escalated value; `base_value` for any year at or before the start
    """
    years = as_of_year - start_year
    if years <= 0:
        return base_value

    if isinstance(variant, FixedEscalation):
        return base_value * (1 + variant.effective_rate) ** years

    # A year outside every custom period falls back to the unescalated base
    if variant.period_for_year(as_of_year) is None:
        return base_value

    value = base_value
    for year in range(start_year + 1, as_of_year + 1):
        value *= 1 + variant.rate_for_year(year)
    return value


def coerce_legacy_escalation(
    data: Dict[str, Any],
    rate_key: str,
    cap_key: Optional[str] = None,
    fallback_rate: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Convert a flat legacy escalation block into a tagged variant payload.

    Legacy blocks carry ``escalation_type`` ("fixed" or "custom"), a rate
    under `rate_key`, an optional cap under `cap_key` and
    ``escalation_periods``. A fixed block with no rate falls back to
    `fallback_rate`.
    """
    cap = data.get(cap_key) if cap_key else None
    if data.get("escalation_type") == "custom":
        payload: Dict[str, Any] = {
            "kind": "custom",
            "periods": list(data.get("escalation_periods") or []),
        }
    else:
        rate = data.get(rate_key)
        if rate is None:
            rate = fallback_rate
        payload = {"kind": "fixed", "rate": rate or 0.0}
    if cap is not None:
        payload["cap"] = cap
    return payload
