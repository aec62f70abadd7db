# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Scenario analysis: named override sets applied to a base lease, and the
bucket-level drivers of the difference between two cashflows.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import Field

from ..core.primitives import DEFAULT_ENGINE_SETTINGS, DriverBucketEnum, Model
from ..lease.cashflow import CashflowLine
from ..lease.lease import LeaseDescription
from .engine import LeaseAnalysisResult, MonthlyEconomics, analyze_lease

logger = logging.getLogger(__name__)

# Declaration order doubles as the tie-break order for equal deltas
DRIVER_BUCKETS: Tuple[Tuple[DriverBucketEnum, str, Callable[[CashflowLine], float]], ...] = (
    (DriverBucketEnum.BASE_RENT, "Base Rent", lambda line: line.base_rent),
    (DriverBucketEnum.ABATEMENT_CREDIT, "Free Rent / Abatement", lambda line: line.abatement_credit),
    (DriverBucketEnum.OPERATING, "Operating", lambda line: line.operating),
    (DriverBucketEnum.PARKING, "Parking", lambda line: line.parking),
    (DriverBucketEnum.AMORTIZED_COSTS, "Amortized", lambda line: line.amortized_costs),
    (DriverBucketEnum.ONE_TIME_COSTS, "One-time Costs", lambda line: line.one_time_costs),
    (DriverBucketEnum.OTHER_RECURRING, "Other Recurring", lambda line: line.other_recurring),
)


class Scenario(Model):
    """A named set of field overrides for a base lease."""

    name: str
    overrides: Dict[str, Any] = Field(default_factory=dict)


class ScenarioResult(Model):
    name: str
    lease: LeaseDescription
    result: LeaseAnalysisResult


class ScenarioDriver(Model):
    key: DriverBucketEnum
    label: str
    delta: float = Field(..., description="Scenario minus base, summed over all periods")


class ScenarioComparison(Model):
    base_npv: float
    scenario_npv: float
    npv_delta: float
    base_total_cashflow: float
    scenario_total_cashflow: float
    total_cashflow_delta: float
    top_drivers: List[ScenarioDriver] = Field(default_factory=list)


# Tagged union blocks an override may address: the section holding the block
# (None for top level), the block's field, flat legacy keys mapped onto
# variant fields (None drops the key) and the variant assumed when nothing
# names one.
_ESCALATION_LEGACY_FIELDS = {"escalation_type": "kind", "escalation_periods": "periods"}
_UNION_OVERRIDES: Tuple[Tuple[Optional[str], str, Dict[str, Optional[str]], str], ...] = (
    (
        "operating",
        "escalation",
        {
            **_ESCALATION_LEGACY_FIELDS,
            "escalation_value": "rate",
            "escalation_cap": "cap",
            "escalation_method": None,
        },
        "fixed",
    ),
    (
        "concessions",
        "abatement",
        {
            "abatement_type": "kind",
            "abatement_free_rent_months": "months",
            "abatement_applies_to": "applies_to",
            "abatement_periods": "periods",
        },
        "at_commencement",
    ),
    (
        None,
        "rent_escalation",
        {**_ESCALATION_LEGACY_FIELDS, "fixed_escalation_percentage": "rate"},
        "fixed",
    ),
)


def _split_legacy(
    block: Mapping[str, Any], legacy_fields: Mapping[str, Optional[str]]
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    rest: Dict[str, Any] = {}
    tagged: Dict[str, Any] = {}
    for key, value in block.items():
        if key not in legacy_fields:
            rest[key] = value
        elif legacy_fields[key] is not None:
            tagged[legacy_fields[key]] = value
    return rest, tagged


def _with_kind(block: Dict[str, Any], current: Any, default_kind: str) -> Dict[str, Any]:
    if "kind" in block:
        return block
    if "periods" in block:
        return {**block, "kind": "custom"}
    if not isinstance(current, dict):
        return {**block, "kind": default_kind}
    return block


def _tag_union_overrides(
    base: Dict[str, Any], overrides: Mapping[str, Any]
) -> Dict[str, Any]:
    """
    Rewrite escalation and abatement overrides as tagged variant payloads.

    Flat legacy keys (``escalation_value``, ``abatement_free_rent_months``
    and the like) become fields of the tagged block, and a block naming no
    variant is tagged from its fields or from the variant the base lease
    already uses.
    """
    tagged = dict(overrides)
    for section, field, legacy_fields, default_kind in _UNION_OVERRIDES:
        if section is None:
            block = tagged.get(field)
            if not isinstance(block, Mapping):
                continue
            rest, legacy = _split_legacy(block, legacy_fields)
            tagged[field] = _with_kind({**rest, **legacy}, base.get(field), default_kind)
            continue

        values = tagged.get(section)
        if not isinstance(values, Mapping):
            continue
        rest, legacy = _split_legacy(values, legacy_fields)
        block = rest.get(field, {})
        if not isinstance(block, Mapping) or (not legacy and field not in rest):
            continue
        current = (base.get(section) or {}).get(field)
        rest[field] = _with_kind({**block, **legacy}, current, default_kind)
        tagged[section] = rest
    return tagged


def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if (
            isinstance(value, Mapping)
            and isinstance(current, dict)
            # A different union member replaces the block outright
            and value.get("kind", current.get("kind")) == current.get("kind")
        ):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def apply_overrides(base: LeaseDescription, overrides: Mapping[str, Any]) -> LeaseDescription:
    """
    Build a new lease from `base` with `overrides` deep-merged on top.

    Nested mappings merge key by key with the override winning; lists are
    replaced wholesale. Escalation and abatement blocks may be given in the
    flat legacy shape or without a ``kind``. The base lease is left untouched.
    """
    dumped = base.model_dump()
    merged = _deep_merge(dumped, _tag_union_overrides(dumped, overrides))
    return LeaseDescription.model_validate(merged)


def analyze_scenarios(
    base: LeaseDescription, scenarios: Sequence[Scenario]
) -> List[ScenarioResult]:
    """Analyze each scenario's lease, in the order given."""
    results = []
    for scenario in scenarios:
        lease = apply_overrides(base, scenario.overrides)
        logger.debug("Analyzing scenario %r", scenario.name)
        results.append(
            ScenarioResult(name=scenario.name, lease=lease, result=analyze_lease(lease))
        )
    return results


def compute_scenario_drivers(
    base_lines: Sequence[CashflowLine],
    scenario_lines: Sequence[CashflowLine],
    top_n: int = 3,
) -> List[ScenarioDriver]:
    """
    Buckets that move the most between two cashflows.

    Each bucket's delta is the scenario total minus the base total across all
    periods. Buckets moving less than a cent are dropped; the rest are
    ranked by absolute delta.
    """
    epsilon = DEFAULT_ENGINE_SETTINGS.driver_epsilon
    drivers = []
    for key, label, extract in DRIVER_BUCKETS:
        delta = sum(extract(line) for line in scenario_lines) - sum(
            extract(line) for line in base_lines
        )
        if abs(delta) < epsilon:
            continue
        drivers.append(ScenarioDriver(key=key, label=label, delta=delta))
    drivers.sort(key=lambda d: abs(d.delta), reverse=True)
    return drivers[:top_n]


def compare_scenarios(
    base: MonthlyEconomics, scenario: MonthlyEconomics, top_n: int = 3
) -> ScenarioComparison:
    """Compare the monthly economics of two scenarios."""
    base_total = sum(line.net_cash_flow for line in base.monthly_cashflow)
    scenario_total = sum(line.net_cash_flow for line in scenario.monthly_cashflow)
    return ScenarioComparison(
        base_npv=base.npv,
        scenario_npv=scenario.npv,
        npv_delta=scenario.npv - base.npv,
        base_total_cashflow=base_total,
        scenario_total_cashflow=scenario_total,
        total_cashflow_delta=scenario_total - base_total,
        top_drivers=compute_scenario_drivers(
            base.monthly_cashflow, scenario.monthly_cashflow, top_n
        ),
    )
