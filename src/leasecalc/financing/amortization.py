# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Deal cost amortization schedules"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd
from pydantic import Field
from pyxirr import pmt

from ..core.primitives import Model, PositiveFloat, PositiveInt


class AmortizationRow(Model):
    """One month of an amortization schedule (period numbers start at 1)."""

    period: int
    beginning_balance: float
    payment: float
    interest: float
    principal: float
    ending_balance: float


def build_amortization_schedule(
    principal: float, annual_rate: float, total_months: int
) -> List[AmortizationRow]:
    """
    Build a monthly schedule that retires `principal` over `total_months`.

    A zero (or negative) rate gives a straight-line schedule: equal principal
    reductions and no interest. A positive rate gives a level-payment schedule
    at ``annual_rate / 12`` per month, with each payment computed for the
    remaining term as the loan amortization tables in the debt module do.

    Args:
        principal: Amount to amortize
        annual_rate: Annual interest rate as a decimal
        total_months: Number of monthly payments

    Returns:
        Schedule rows; empty when principal or term is not positive
    """
    n = int(total_months)
    if principal <= 0 or n <= 0:
        return []

    monthly_rate = max(0.0, annual_rate) / 12

    payments = np.zeros(n)
    interest_paid = np.zeros(n)
    principal_paid = np.zeros(n)
    balances = np.zeros(n + 1)
    balances[0] = principal

    for i in range(n):
        current_balance = balances[i]
        remaining_periods = n - i
        if monthly_rate > 0:
            interest_payment = current_balance * monthly_rate
            payment = pmt(monthly_rate, remaining_periods, current_balance) * -1
            principal_payment = payment - interest_payment
        else:
            interest_payment = 0.0
            principal_payment = principal / n
            payment = principal_payment

        if remaining_periods == 1:
            # Retire whatever rounding left behind
            principal_payment = current_balance
            payment = principal_payment + interest_payment

        payments[i] = payment
        interest_paid[i] = interest_payment
        principal_paid[i] = principal_payment
        balances[i + 1] = current_balance - principal_payment

    balances[-1] = 0.0

    return [
        AmortizationRow(
            period=i + 1,
            beginning_balance=float(balances[i]),
            payment=float(payments[i]),
            interest=float(interest_paid[i]),
            principal=float(principal_paid[i]),
            ending_balance=float(balances[i + 1]),
        )
        for i in range(n)
    ]


def amortization_frame(rows: Sequence[AmortizationRow]) -> pd.DataFrame:
    """Schedule as a DataFrame indexed by period number."""
    df = pd.DataFrame(
        {
            "Period": [r.period for r in rows],
            "Begin Balance": [r.beginning_balance for r in rows],
            "Payment": [r.payment for r in rows],
            "Interest": [r.interest for r in rows],
            "Principal": [r.principal for r in rows],
            "End Balance": [r.ending_balance for r in rows],
        }
    )
    return df.set_index("Period")


def amortization_summary(rows: Sequence[AmortizationRow]) -> pd.Series:
    df = amortization_frame(rows)
    return pd.Series(
        {
            "Total Payments": df["Payment"].sum(),
            "Total Principal Paid": df["Principal"].sum(),
            "Total Interest Paid": df["Interest"].sum(),
            "Last Payment Amount": df["Payment"].iloc[-1] if len(df) else 0.0,
            "Amortizing Periods": len(df),
        }
    )


def payments_by_period(
    rows: Sequence[AmortizationRow], months_per_period: Sequence[int]
) -> List[float]:
    """
    Sum schedule payments into consecutive cashflow periods.

    `months_per_period` lists how many schedule months fall in each period;
    periods beyond the end of the schedule receive 0.
    """
    payments = np.array([r.payment for r in rows], dtype=float)
    totals: List[float] = []
    offset = 0
    for months in months_per_period:
        totals.append(float(payments[offset : offset + months].sum()))
        offset += months
    return totals


class CostAmortization(Model):
    """
    Amortization of landlord-funded deal costs over a lease term.

    Attributes:
        principal: Total cost to amortize
        annual_rate: Interest rate (0 for straight-line)
        term_months: Amortization term in months

    Examples:
        >>> amortization = CostAmortization(
        ...     principal=500000.0, annual_rate=0.08, term_months=120
        ... )
        >>> schedule, summary = amortization.amortization_schedule
        >>> round(schedule["End Balance"].iloc[-1], 6)
        0.0
    """

    principal: PositiveFloat
    annual_rate: PositiveFloat = Field(
        default=0.0, description="Annual rate as a decimal; 0 gives straight-line"
    )
    term_months: PositiveInt

    @property
    def rows(self) -> List[AmortizationRow]:
        return build_amortization_schedule(
            self.principal, self.annual_rate, self.term_months
        )

    @property
    def amortization_schedule(self) -> Tuple[pd.DataFrame, pd.Series]:
        rows = self.rows
        return amortization_frame(rows), amortization_summary(rows)
