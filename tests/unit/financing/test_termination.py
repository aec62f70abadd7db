# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for early termination fees and unamortized deal costs.
"""

from datetime import date

import pytest

from leasecalc.financing import (
    TerminationSummary,
    build_amortization_schedule,
    build_termination_scenario,
    calculate_early_termination_fee,
    calculate_unamortized_costs,
    pv_amortization_balance,
    termination_fee_at_month,
)
from leasecalc.lease import LeaseOption, build_annual_cashflow


class TestFeeAtMonth:
    def test_balance_plus_rent_penalty(self):
        schedule = build_amortization_schedule(1200.0, 0.0, 12)

        assert termination_fee_at_month(schedule, 0, 2, 1000.0) == pytest.approx(3100.0)

    def test_index_is_clamped(self):
        schedule = build_amortization_schedule(1200.0, 0.0, 12)

        assert termination_fee_at_month(schedule, 99, 0, 0.0) == 0.0
        assert termination_fee_at_month(schedule, -5, 0, 0.0) == pytest.approx(1100.0)

    def test_empty_schedule_charges_penalty_only(self):
        assert termination_fee_at_month([], 3, 1.5, 1000.0) == pytest.approx(1500.0)

    def test_summary_fee_at_month(self):
        summary = TerminationSummary(
            penalty_months=2,
            amortization=build_amortization_schedule(1200.0, 0.0, 12),
            monthly_rent=[1000.0] * 12,
        )
        assert summary.fee_at_month(0) == pytest.approx(3100.0)


class TestPvAmortizationBalance:
    def test_zero_rate_declines_linearly(self):
        assert pv_amortization_balance(1200.0, 0.0, 12, 3) == pytest.approx(900.0)

    def test_matches_schedule_balance(self):
        rows = build_amortization_schedule(100_000.0, 0.08, 60)
        assert pv_amortization_balance(100_000.0, 0.08, 60, 24) == pytest.approx(
            rows[23].ending_balance
        )

    def test_out_of_range_inputs(self):
        assert pv_amortization_balance(1000.0, 0.08, 12, 12) == 0.0
        assert pv_amortization_balance(1000.0, 0.08, 12, -1) == 0.0
        assert pv_amortization_balance(0.0, 0.08, 12, 3) == 0.0
        assert pv_amortization_balance(float("nan"), 0.08, 12, 3) == 0.0


class TestUnamortizedCosts:
    def test_components(self):
        costs = calculate_unamortized_costs(
            rsf=10000,
            ti_allowance_psf=30.0,
            ti_actual_build_cost_psf=35.0,
            free_rent_months=3,
            free_rent_rate_psf=40.0,
            brokerage_commission=50_000.0,
            other_transaction_costs=0.0,
            commencement=date(2025, 1, 1),
            expiration=date(2029, 12, 31),
            termination=date(2027, 1, 1),
            interest_rate=0.0,
        )

        # 60 month term, 24 months elapsed: 60% remains
        assert costs.ti == pytest.approx(300_000 * 0.6)
        assert costs.ti_overage == pytest.approx(50_000 * 0.6)
        assert costs.free_rent == pytest.approx(100_000 * 0.6)
        assert costs.brokerage == pytest.approx(50_000 * 0.6)
        assert costs.other == 0.0
        assert costs.total == pytest.approx(500_000 * 0.6)

    def test_string_dates(self):
        costs = calculate_unamortized_costs(
            10000, 30.0, None, None, None, None, None,
            "2025-01-01", "2029-12-31", "2027-01-01", 0.0,
        )
        assert costs.ti == pytest.approx(180_000)

    def test_invalid_dates_give_zero(self):
        costs = calculate_unamortized_costs(
            10000, 30.0, None, None, None, None, None,
            "not a date", "2029-12-31", "2027-01-01",
        )
        assert costs.total == 0.0


class TestEarlyTerminationFee:
    def test_rent_fee_and_penalty(self, make_lease):
        lease = make_lease(
            rsf=10000,
            rent_psf=48.0,
            options=[
                {"type": "Termination", "fee_months_of_rent": 3, "base_rent_penalty": 2.0}
            ],
        )
        fee = calculate_early_termination_fee(lease, date(2025, 1, 1))

        assert fee.rent_fee == pytest.approx(3 * 48.0 * 10000 / 12)
        assert fee.base_rent_penalty == pytest.approx(20_000)
        assert fee.unamortized_costs == 0.0
        assert fee.total_fee == pytest.approx(120_000 + 20_000)

    def test_rent_escalated_to_termination(self, make_lease):
        lease = make_lease(
            rsf=12000,
            row_escalation=0.03,
            options=[{"type": "Termination", "fee_months_of_rent": 1}],
        )
        fee = calculate_early_termination_fee(lease, date(2027, 1, 1))

        assert fee.rent_fee == pytest.approx(50.0 * 1.03**2 * 12000 / 12)

    def test_rent_decline_below_minus_one_is_clamped(self, make_lease):
        lease = make_lease(
            rsf=12000,
            row_escalation=-1.5,
            options=[{"type": "Termination", "fee_months_of_rent": 1}],
        )
        fee = calculate_early_termination_fee(lease, date(2026, 7, 1))

        assert isinstance(fee.rent_fee, float)
        assert fee.rent_fee == pytest.approx(50.0 * 12000 / 12)

    def test_unamortized_costs_included(self, make_lease):
        lease = make_lease(
            rsf=10000,
            concessions={"ti_allowance_psf": 30.0},
            options=[
                {
                    "type": "Termination",
                    "unamortized_costs_included": True,
                    "termination_interest_rate": 0.0,
                }
            ],
        )
        fee = calculate_early_termination_fee(lease, date(2027, 1, 1))

        assert fee.unamortized_costs == pytest.approx(180_000)

    def test_explicit_option_and_no_rows(self, make_lease):
        option = LeaseOption(type="Termination", fee_months_of_rent=6)

        assert calculate_early_termination_fee(
            make_lease(rent_schedule=[]), date(2027, 1, 1), option
        ).total_fee == 0.0


class TestTerminationScenario:
    def test_cuts_the_lease_short(self, make_lease):
        lease = make_lease(
            lease_term={"years": 5},
            options=[{"type": "Termination", "fee_months_of_rent": 2}],
        )
        scenario = build_termination_scenario(lease, date(2027, 12, 31))

        assert scenario.lease.key_dates.expiration == date(2027, 12, 31)
        assert scenario.lease.lease_term is None
        assert scenario.lease.name.endswith("Early Termination")
        assert len(build_annual_cashflow(scenario.lease)) == 3
        assert scenario.termination_fee.rent_fee == pytest.approx(2 * 1_000_000 / 12)
        # The base lease is untouched
        assert lease.key_dates.expiration == date(2029, 12, 31)
