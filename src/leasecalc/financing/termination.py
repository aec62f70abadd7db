# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Early termination analysis.

A termination fee is the sum of a rent-based fee (months of then-current
rent), a per-square-foot penalty, and optionally the unamortized balance of
the landlord's deal costs (TI, TI overage, free rent, brokerage, other),
each amortized on a present value basis over the original term.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional, Sequence, Union

import pandas as pd
from pydantic import Field

from ..core.primitives import (
    DEFAULT_ENGINE_SETTINGS,
    LeaseOptionTypeEnum,
    Model,
)
from ..lease.lease import LeaseDescription, LeaseOption
from ..lease.normalize import normalize_lease
from .amortization import AmortizationRow

logger = logging.getLogger(__name__)

DateInput = Union[str, date, pd.Timestamp, None]


def termination_fee_at_month(
    schedule: Sequence[AmortizationRow],
    month_index: int,
    penalty_months: float,
    current_monthly_rent: float = 0.0,
) -> float:
    """
    Fee to terminate after the given schedule month.

    Args:
        schedule: Amortization schedule of the deal costs
        month_index: Zero-based schedule row (clamped into the schedule)
        penalty_months: Months of rent charged on top of the balance
        current_monthly_rent: Monthly rent at termination

    Returns:
        The unamortized balance after that month plus the rent penalty
    """
    penalty = max(0.0, penalty_months) * current_monthly_rent
    if not schedule:
        return penalty
    index = min(max(0, month_index), len(schedule) - 1)
    return schedule[index].ending_balance + penalty


def pv_amortization_balance(
    principal: float, annual_rate: float, total_months: int, months_elapsed: int
) -> float:
    """
    Remaining balance of a level-payment amortization after `months_elapsed`.

    Computed as the present value of the remaining payments; a zero rate
    declines linearly.
    """
    values = (principal, annual_rate, total_months, months_elapsed)
    if not all(math.isfinite(v) for v in values):
        return 0.0
    if principal <= 0 or total_months <= 0 or months_elapsed < 0:
        return 0.0
    if months_elapsed >= total_months:
        return 0.0

    remaining = total_months - months_elapsed
    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return principal * remaining / total_months

    discount = 1 - (1 + monthly_rate) ** -total_months
    if discount == 0 or not math.isfinite(discount):
        return principal * remaining / total_months
    payment = principal * monthly_rate / discount
    balance = payment * (1 - (1 + monthly_rate) ** -remaining) / monthly_rate
    return max(0.0, balance) if math.isfinite(balance) else 0.0


class UnamortizedCosts(Model):
    """Unamortized landlord costs at a termination date."""

    ti: float = 0.0
    ti_overage: float = 0.0
    free_rent: float = 0.0
    brokerage: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return self.ti + self.ti_overage + self.free_rent + self.brokerage + self.other


def _parse_date(value: DateInput) -> Optional[pd.Timestamp]:
    if value is None:
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed


def calculate_unamortized_costs(
    rsf: float,
    ti_allowance_psf: Optional[float],
    ti_actual_build_cost_psf: Optional[float],
    free_rent_months: Optional[float],
    free_rent_rate_psf: Optional[float],
    brokerage_commission: Optional[float],
    other_transaction_costs: Optional[float],
    commencement: DateInput,
    expiration: DateInput,
    termination: DateInput,
    interest_rate: float = DEFAULT_ENGINE_SETTINGS.termination_interest_rate,
) -> UnamortizedCosts:
    """
    Unamortized balance of each deal cost at termination.

    Term and elapsed months are day spans divided by 30.44 and rounded. Each
    component is amortized on its own at `interest_rate`. Unparseable dates
    or a non-positive term return an all-zero result.
    """
    start = _parse_date(commencement)
    end = _parse_date(expiration)
    terminated = _parse_date(termination)
    if start is None or end is None or terminated is None:
        logger.warning("Unamortized costs skipped: invalid dates")
        return UnamortizedCosts()

    days_per_month = DEFAULT_ENGINE_SETTINGS.days_per_month
    total_months = round((end - start).days / days_per_month)
    elapsed = round((terminated - start).days / days_per_month)
    if total_months <= 0 or elapsed < 0:
        return UnamortizedCosts()

    def balance(amount: float) -> float:
        if amount <= 0:
            return 0.0
        return pv_amortization_balance(amount, interest_rate, total_months, elapsed)

    ti = balance(ti_allowance_psf * rsf) if ti_allowance_psf else 0.0
    overage = 0.0
    if ti_actual_build_cost_psf is not None and ti_allowance_psf is not None:
        overage = balance(max(0.0, (ti_actual_build_cost_psf - ti_allowance_psf) * rsf))
    free_rent = 0.0
    if free_rent_months and free_rent_rate_psf:
        free_rent = balance(free_rent_months / 12 * free_rent_rate_psf * rsf)

    return UnamortizedCosts(
        ti=ti,
        ti_overage=overage,
        free_rent=free_rent,
        brokerage=balance(brokerage_commission or 0.0),
        other=balance(other_transaction_costs or 0.0),
    )


class TerminationFee(Model):
    rent_fee: float = 0.0
    base_rent_penalty: float = 0.0
    unamortized_costs: float = 0.0

    @property
    def total_fee(self) -> float:
        return self.rent_fee + self.base_rent_penalty + self.unamortized_costs


def _termination_option(lease: LeaseDescription, option: Optional[LeaseOption]) -> LeaseOption:
    if option is not None:
        return option
    options = lease.termination_options
    return options[0] if options else LeaseOption(type=LeaseOptionTypeEnum.TERMINATION)


def calculate_early_termination_fee(
    lease: LeaseDescription,
    termination_date: date,
    option: Optional[LeaseOption] = None,
) -> TerminationFee:
    """
    Fee owed for terminating a lease on `termination_date`.

    The then-current rent is the rent row active at termination (else the
    first row), escalated by its own rate over the fractional years since
    the row started. The option defaults to the lease's first termination
    option.
    """
    option = _termination_option(lease, option)
    rows = lease.rent_schedule
    if not rows:
        return TerminationFee()
    active = next((r for r in rows if r.contains(termination_date)), rows[0])

    years = (termination_date.year - active.period_start.year) + (
        termination_date.month - active.period_start.month
    ) / 12
    escalation = max(0.0, active.escalation_percentage or 0.0)
    rate = active.rent_psf * (1 + escalation) ** years
    monthly_rent = rate * lease.rsf / 12

    unamortized = 0.0
    if option.unamortized_costs_included:
        normalized = normalize_lease(lease).normalized
        costs = lease.transaction_costs
        brokerage = costs.brokerage_fees if costs else 0.0
        other = (costs.total_amount if costs else 0.0) - brokerage
        unamortized = calculate_unamortized_costs(
            lease.rsf,
            lease.concessions.ti_allowance_psf,
            lease.concessions.ti_actual_build_cost_psf,
            normalized.abatement_months_total,
            rate,
            brokerage,
            other,
            normalized.commencement,
            normalized.expiration,
            termination_date,
            option.termination_interest_rate
            if option.termination_interest_rate is not None
            else DEFAULT_ENGINE_SETTINGS.termination_interest_rate,
        ).total

    return TerminationFee(
        rent_fee=(option.fee_months_of_rent or 0.0) * monthly_rent,
        base_rent_penalty=(option.base_rent_penalty or 0.0) * lease.rsf,
        unamortized_costs=unamortized,
    )


class TerminationScenario(Model):
    """A lease cut short at the termination date, with the fee it triggers."""

    lease: LeaseDescription
    termination_date: date
    termination_fee: TerminationFee


def build_termination_scenario(
    lease: LeaseDescription,
    termination_date: date,
    option: Optional[LeaseOption] = None,
) -> TerminationScenario:
    data = lease.model_dump()
    data["key_dates"]["expiration"] = termination_date
    data["lease_term"] = None
    data["name"] = f"{lease.name} - Early Termination"
    return TerminationScenario(
        lease=LeaseDescription.model_validate(data),
        termination_date=termination_date,
        termination_fee=calculate_early_termination_fee(lease, termination_date, option),
    )


class TerminationSummary(Model):
    """
    Termination exposure across the lease months.

    Attributes:
        penalty_months: Months of rent charged on termination
        amortization: Deal-cost amortization schedule
        monthly_rent: Base rent by lease month
    """

    penalty_months: float = 0.0
    amortization: List[AmortizationRow] = Field(default_factory=list)
    monthly_rent: List[float] = Field(default_factory=list)

    def fee_at_month(self, month_index: int) -> float:
        rent = 0.0
        if self.monthly_rent:
            rent = self.monthly_rent[min(max(0, month_index), len(self.monthly_rent) - 1)]
        return termination_fee_at_month(
            self.amortization, month_index, self.penalty_months, rent
        )
