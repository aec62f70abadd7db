# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for lease cashflow metrics.
"""

from datetime import date

import pytest

from leasecalc.lease import build_annual_cashflow
from leasecalc.lease.cashflow import CashflowLine
from leasecalc.valuation import (
    average_annual_return,
    calculate_lease_term_years,
    calculate_metrics,
    cash_on_cash_return,
    effective_rent_psf,
    equity_multiple,
    irr,
    npv,
    npv_monthly,
    payback_period,
    roi,
    xirr_monthly,
    yield_on_cost,
)
from leasecalc.valuation.metrics import month_index_from_anchor


def _lines(flows):
    """Annual lines whose net cash flow equals each given amount."""
    return [
        CashflowLine(
            period=str(2025 + i),
            year=2025 + i,
            start=date(2025 + i, 1, 1),
            end=date(2025 + i, 12, 31),
            months=12,
            other_recurring=amount,
        )
        for i, amount in enumerate(flows)
    ]


class TestNpv:
    def test_zero_rate_is_sum(self, nnn_lease):
        lines = build_annual_cashflow(nnn_lease)
        assert npv(lines, 0) == pytest.approx(sum(line.net_cash_flow for line in lines))

    def test_end_of_period_discounting(self):
        assert npv(_lines([110.0]), 0.10) == pytest.approx(100.0)
        assert npv(_lines([0.0, 121.0]), 0.10) == pytest.approx(100.0)

    def test_empty(self):
        assert npv([], 0.08) == 0.0


class TestIrr:
    def test_simple_return(self):
        assert irr(_lines([-1000.0, 1100.0])) == pytest.approx(0.10, abs=1e-6)

    def test_multi_period(self):
        flows = [-1000.0, 300.0, 400.0, 500.0]
        rate = irr(_lines(flows))
        assert npv(_lines(flows), rate) == pytest.approx(0.0, abs=1e-4)

    def test_never_raises_without_sign_change(self):
        result = irr(_lines([100.0, 100.0, 100.0]))
        assert isinstance(result, float)

    def test_empty_lines(self):
        assert irr([]) == pytest.approx(0.10)


class TestPayback:
    def test_exact_recovery(self):
        assert payback_period(_lines([-1000.0, 500.0, 500.0, 500.0])) == pytest.approx(3.0)

    def test_interpolated(self):
        assert payback_period(_lines([-1000.0, 400.0, 800.0])) == pytest.approx(2.75)

    def test_never_recovers(self):
        assert payback_period(_lines([-1000.0, 100.0])) == 2.0

    def test_positive_first_flow(self):
        assert payback_period(_lines([500.0, 500.0])) == pytest.approx(0.0)


class TestReturnRatios:
    def test_ratios(self):
        lines = _lines([100.0, 200.0, 300.0])

        assert cash_on_cash_return(lines, 600.0) == pytest.approx(1.0)
        assert roi(lines, 600.0) == pytest.approx(0.0)
        assert average_annual_return(lines) == pytest.approx(200.0)
        assert yield_on_cost(lines, 600.0) == pytest.approx(1 / 3)
        assert equity_multiple(lines, 600.0) == pytest.approx(1.0)

    def test_zero_investment(self):
        lines = _lines([100.0])

        assert cash_on_cash_return(lines, 0) == 0.0
        assert roi(lines, 0) == 0.0
        assert yield_on_cost(lines, 0) == 0.0
        assert equity_multiple(lines, 0) == 0.0
        assert average_annual_return([]) == 0.0

    def test_effective_rent_floors_area_and_years(self):
        lines = _lines([1000.0, 1000.0])

        assert effective_rent_psf(lines, 100, 2) == pytest.approx(10.0)
        assert effective_rent_psf(lines, 0, 0) == pytest.approx(2000.0)


class TestLeaseTerm:
    def test_from_lease_term(self, make_lease):
        lease = make_lease(lease_term={"years": 5, "months": 6})
        assert calculate_lease_term_years(lease) == pytest.approx(5.5)

    def test_from_dates(self, nnn_lease):
        assert calculate_lease_term_years(nnn_lease) == pytest.approx(1825 / 365.25)

    def test_no_expiration(self, make_lease):
        assert calculate_lease_term_years(make_lease(expiration=None)) == 0.0


class TestMonthlyDiscounting:
    def test_month_index(self):
        assert month_index_from_anchor(date(2025, 1, 15), date(2025, 3, 14)) == 1
        assert month_index_from_anchor(date(2025, 1, 15), date(2025, 3, 15)) == 2
        assert month_index_from_anchor(date(2025, 3, 1), date(2025, 1, 1)) == 0

    def test_npv_monthly_compounds_to_annual_rate(self):
        flows = [(date(2025, 1, 1), 100.0), (date(2026, 1, 1), 108.0)]
        assert npv_monthly(flows, 0.08) == pytest.approx(200.0)

    def test_npv_monthly_zero_rate_and_empty(self):
        flows = [(date(2025, 1, 1), 100.0), (date(2030, 1, 1), 100.0)]

        assert npv_monthly(flows, 0.0) == 200.0
        assert npv_monthly([], 0.08) == 0.0

    def test_npv_monthly_explicit_anchor(self):
        flows = [(date(2026, 1, 1), 108.0)]
        assert npv_monthly(flows, 0.08, anchor=date(2025, 1, 1)) == pytest.approx(100.0)

    def test_xirr(self):
        flows = [(date(2025, 1, 1), -1000.0), (date(2026, 1, 1), 1100.0)]
        assert xirr_monthly(flows) == pytest.approx(0.10, abs=1e-4)

    def test_xirr_requires_sign_change(self):
        flows = [(date(2025, 1, 1), 1000.0), (date(2026, 1, 1), 1100.0)]
        assert xirr_monthly(flows) is None


class TestCalculateMetrics:
    def test_rent_only_cashflow_has_no_irr(self, nnn_lease):
        lines = build_annual_cashflow(nnn_lease)
        metrics = calculate_metrics(lines, 0.08, 20000, 5)

        assert metrics.irr is None
        assert metrics.npv == pytest.approx(npv(lines, 0.08))
        assert metrics.effective_rent_psf == pytest.approx(
            sum(line.net_cash_flow for line in lines) / (20000 * 5)
        )
        assert metrics.payback_period == pytest.approx(0.0)

    def test_irr_reported_on_sign_change(self):
        metrics = calculate_metrics(_lines([-1000.0, 1100.0]), 0.08, 1, 1)
        assert metrics.irr == pytest.approx(0.10, abs=1e-6)

    def test_empty(self):
        metrics = calculate_metrics([], 0.08, 20000, 5)

        assert metrics.npv == 0.0
        assert metrics.irr is None
        assert metrics.payback_period is None
