# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Pre-normalization of lease descriptions.

`normalize_lease` resolves everything the calculators derive from a lease
before any period is priced: effective dates, the term length, the clamped
area, and the escalation and abatement variants in force. Problems that a
half-edited lease commonly has are reported as issues rather than raised, so
the cashflow can still be built from whatever is usable.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from pydantic import Field

from ..core.primitives import (
    IssueSeverityEnum,
    Model,
    add_months,
    expiration_from_term,
    months_between,
)
from .abatement import (
    AbatementPeriod,
    AnyAbatement,
    AtCommencementAbatement,
    CustomAbatement,
)
from .escalation import AnyEscalation, CustomEscalation
from .lease import LeaseDescription

logger = logging.getLogger(__name__)


class NormalizationIssue(Model):
    """A problem found while normalizing a lease."""

    severity: IssueSeverityEnum = IssueSeverityEnum.WARNING
    code: str
    message: str
    field: Optional[str] = None


class NormalizedLease(Model):
    """
    Resolved view of a lease consumed by the cashflow builder.

    Attributes:
        commencement: Lease commencement
        expiration: Expiration from the key dates, else derived from the
            lease term; None when neither is available
        rent_start: First rent-paying day
        term_months_total: Term length in months, including abatement months
            when the lease term says so
        rsf: Rentable area clamped to be non-negative
        base_rent_psf: First rent row's unescalated rate
        rent_escalation: Lease-level rent escalation, if any
        opex_escalation: Operating expense escalation
        abatement: Abatement variant
        abatement_periods: Abatement expressed as dated periods
    """

    commencement: date
    expiration: Optional[date] = None
    rent_start: date
    term_months_total: int = 0
    rsf: float = 0.0
    base_rent_psf: float = 0.0
    rent_escalation: Optional[AnyEscalation] = None
    opex_escalation: AnyEscalation
    abatement: AnyAbatement
    abatement_periods: List[AbatementPeriod] = Field(default_factory=list)

    @property
    def has_valid_dates(self) -> bool:
        return self.expiration is not None and self.expiration > self.commencement

    @property
    def term_years(self) -> float:
        return self.term_months_total / 12

    @property
    def abatement_months_total(self) -> int:
        return self.abatement.total_months


class NormalizationResult(Model):
    normalized: NormalizedLease
    issues: List[NormalizationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == IssueSeverityEnum.ERROR for i in self.issues)


def _check_ranges(
    ranges: Sequence[Tuple[date, date]],
    kind: str,
    field: str,
    issues: List[NormalizationIssue],
) -> None:
    """Report unsorted or overlapping dated periods."""
    starts = [r[0] for r in ranges]
    if starts != sorted(starts):
        issues.append(
            NormalizationIssue(
                code=f"{kind}_unsorted",
                message=f"{kind} are not in start-date order; they are resolved sorted",
                field=field,
            )
        )
    ordered = sorted(ranges)
    for previous, current in zip(ordered, ordered[1:]):
        if current[0] <= previous[1]:
            issues.append(
                NormalizationIssue(
                    code=f"{kind}_overlap",
                    message=(
                        f"{kind} overlap between {current[0].isoformat()} and "
                        f"{previous[1].isoformat()}; the earlier period wins"
                    ),
                    field=field,
                )
            )
            break


def _leading_free_months(abatement: AnyAbatement, commencement: date) -> int:
    if isinstance(abatement, AtCommencementAbatement):
        return abatement.total_months
    return sum(
        max(0, p.months) for p in abatement.periods if p.start <= commencement
    )


def normalize_lease(lease: LeaseDescription) -> NormalizationResult:
    """
    Resolve the derived view of a lease and collect data-quality issues.

    The pass never raises for inconsistent dates, negative areas or
    misordered periods; it records an issue and falls back to the documented
    default (empty cashflow, zero area, sorted resolution).
    """
    issues: List[NormalizationIssue] = []
    dates = lease.key_dates
    commencement = dates.commencement
    abatement = lease.concessions.abatement

    if abatement.kind == "at_commencement" and abatement.months < 0:
        issues.append(
            NormalizationIssue(
                code="negative_free_rent_months",
                message="Free rent months cannot be negative; treated as 0",
                field="concessions.abatement.months",
            )
        )
    elif isinstance(abatement, CustomAbatement):
        if any(p.months < 0 for p in abatement.periods):
            issues.append(
                NormalizationIssue(
                    code="negative_free_rent_months",
                    message="Abatement periods with negative months are treated as 0",
                    field="concessions.abatement.periods",
                )
            )
        _check_ranges(
            [p.date_range for p in abatement.periods],
            "abatement_periods",
            "concessions.abatement.periods",
            issues,
        )

    for field, variant in (
        ("rent_escalation", lease.rent_escalation),
        ("operating.escalation", lease.operating.escalation),
    ):
        if isinstance(variant, CustomEscalation):
            _check_ranges(
                [(p.start, p.end) for p in variant.periods],
                "escalation_periods",
                f"{field}.periods",
                issues,
            )

    term_months: Optional[int] = None
    if lease.lease_term is not None:
        term_months = lease.lease_term.base_months
        if lease.lease_term.include_abatement_in_term:
            term_months += abatement.total_months

    expiration = dates.expiration
    if expiration is None and term_months:
        expiration = expiration_from_term(commencement, term_months)

    if expiration is not None and expiration <= commencement:
        issues.append(
            NormalizationIssue(
                severity=IssueSeverityEnum.ERROR,
                code="expiration_before_commencement",
                message="Expiration must fall after commencement",
                field="key_dates.expiration",
            )
        )

    if term_months is None:
        if expiration is not None and expiration > commencement:
            term_months = months_between(commencement, expiration + timedelta(days=1))
        else:
            term_months = 0

    rent_start = dates.rent_start
    if rent_start is None:
        rent_start = add_months(commencement, _leading_free_months(abatement, commencement))
    elif rent_start < commencement:
        issues.append(
            NormalizationIssue(
                code="rent_start_before_commencement",
                message="Rent start precedes commencement",
                field="key_dates.rent_start",
            )
        )

    rsf = lease.rsf
    if rsf < 0:
        issues.append(
            NormalizationIssue(
                code="negative_rsf",
                message="Rentable area cannot be negative; treated as 0",
                field="rsf",
            )
        )
        rsf = 0.0

    first_row = lease.first_rent_row
    if first_row is None:
        issues.append(
            NormalizationIssue(
                code="rent_schedule_empty",
                message="No rent schedule rows; base rent is zero",
                field="rent_schedule",
            )
        )

    for issue in issues:
        logger.debug("Lease %r: %s (%s)", lease.name, issue.message, issue.code)

    normalized = NormalizedLease(
        commencement=commencement,
        expiration=expiration,
        rent_start=rent_start,
        term_months_total=term_months,
        rsf=rsf,
        base_rent_psf=first_row.rent_psf if first_row else 0.0,
        rent_escalation=lease.rent_escalation,
        opex_escalation=lease.operating.escalation,
        abatement=abatement,
        abatement_periods=abatement.dated_periods(commencement),
    )
    return NormalizationResult(normalized=normalized, issues=issues)
