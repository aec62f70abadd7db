# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Free-rent (abatement) models and credit resolution.

Credits are always reported as negative amounts. Custom periods are priced at
the escalated rent (and, when they extend to operating costs, the escalated
operating rate) in effect during each overlapping cashflow period.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Literal, Union

from pydantic import AliasChoices, Field
from typing_extensions import Annotated

from ..core.primitives import (
    AbatementAppliesToEnum,
    DateRange,
    GranularityEnum,
    Model,
    Period,
    expiration_from_term,
    overlap_units,
)

logger = logging.getLogger(__name__)

RateResolver = Callable[[Period], float]


class AbatementPeriod(Model):
    """A dated free-rent window and the number of free months it grants."""

    start: date = Field(validation_alias=AliasChoices("start", "period_start"))
    end: date = Field(validation_alias=AliasChoices("end", "period_end"))
    months: int = Field(
        default=0,
        validation_alias=AliasChoices("months", "free_rent_months"),
        description="Free months granted inside the window",
    )
    applies_to: AbatementAppliesToEnum = Field(
        default=AbatementAppliesToEnum.BASE_ONLY,
        validation_alias=AliasChoices("applies_to", "abatement_applies_to"),
    )

    @property
    def date_range(self) -> DateRange:
        return (self.start, self.end)


class AtCommencementAbatement(Model):
    """
    Free months granted from commencement.

    The credit is anchored to the first rent row's unescalated rate and only
    falls inside the commencement calendar year.
    """

    kind: Literal["at_commencement"] = "at_commencement"
    months: int = Field(default=0, description="Free rent months from commencement")
    applies_to: AbatementAppliesToEnum = AbatementAppliesToEnum.BASE_ONLY

    @property
    def total_months(self) -> int:
        return max(0, self.months)

    def dated_periods(self, commencement: date) -> List[AbatementPeriod]:
        """Express the block as a single dated period starting on commencement."""
        if self.total_months == 0:
            return []
        return [
            AbatementPeriod(
                start=commencement,
                end=expiration_from_term(commencement, self.total_months),
                months=self.total_months,
                applies_to=self.applies_to,
            )
        ]


class CustomAbatement(Model):
    """Explicit free-rent windows, possibly spanning year boundaries."""

    kind: Literal["custom"] = "custom"
    periods: List[AbatementPeriod] = Field(default_factory=list)

    @property
    def total_months(self) -> int:
        return sum(max(0, p.months) for p in self.periods)

    def dated_periods(self, commencement: date) -> List[AbatementPeriod]:
        return list(self.periods)


AnyAbatement = Annotated[
    Union[AtCommencementAbatement, CustomAbatement], Field(discriminator="kind")
]


def resolve_abatement(
    variant: Union[AtCommencementAbatement, CustomAbatement],
    periods: List[Period],
    rent_rate: RateResolver,
    opex_rate: RateResolver,
    rsf: float,
    granularity: GranularityEnum,
    commencement: date,
    anchor_rent_psf: float,
) -> List[float]:
    """
    Compute the abatement credit for every cashflow period.

    Args:
        variant: At-commencement block or custom periods
        periods: Cashflow periods from `resolve_periods`
        rent_rate: Escalated annual rent PSF in effect for a period
        opex_rate: Escalated annual operating PSF in effect for a period
        rsf: Rentable area
        granularity: Granularity the periods were resolved at
        commencement: Lease commencement date
        anchor_rent_psf: First rent row's unescalated rate

    Returns:
        One credit (<= 0) per period, indexed like `periods`
    """
    credits = [0.0] * len(periods)
    if not periods:
        return credits

    if isinstance(variant, AtCommencementAbatement):
        months = min(variant.total_months, 12 - (commencement.month - 1))
        if months <= 0:
            return credits
        if variant.total_months > months:
            logger.debug(
                "At-commencement abatement of %d months truncated to %d months "
                "inside %d",
                variant.total_months,
                months,
                commencement.year,
            )
        include_opex = variant.applies_to == AbatementAppliesToEnum.BASE_PLUS_NNN
        if granularity == GranularityEnum.MONTHLY:
            targets = [(p, 1) for p in periods[:months]]
        else:
            targets = [(periods[0], min(months, periods[0].months))]
        for period, units in targets:
            rate = anchor_rent_psf
            if include_opex:
                rate += opex_rate(period)
            credits[period.index] -= rate * rsf * units / 12
        return credits

    for abatement in variant.periods:
        remaining = max(0, abatement.months)
        include_opex = abatement.applies_to == AbatementAppliesToEnum.BASE_PLUS_NNN
        for period in periods:
            if remaining <= 0:
                break
            units = min(
                remaining,
                overlap_units(abatement.date_range, period.date_range, granularity),
            )
            if units <= 0:
                continue
            rate = rent_rate(period)
            if include_opex:
                rate += opex_rate(period)
            credits[period.index] -= rate * rsf * units / 12
            remaining -= units
    return credits
