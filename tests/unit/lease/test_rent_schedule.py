# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the lease-month rent schedule.
"""

from datetime import date

import pytest

from leasecalc.lease import blended_rate, build_monthly_rent_schedule


class TestScheduleLength:
    def test_follows_expiration(self, nnn_lease):
        schedule = build_monthly_rent_schedule(nnn_lease)

        assert schedule.term_source == "expiration"
        assert len(schedule.months) == 60
        assert schedule.months[0].start == date(2025, 1, 1)
        assert schedule.months[0].end == date(2025, 1, 31)
        assert schedule.months[-1].start == date(2029, 12, 1)
        assert schedule.months[-1].end == date(2029, 12, 31)

    def test_follows_lease_term(self, make_lease):
        schedule = build_monthly_rent_schedule(
            make_lease(expiration=None, lease_term={"years": 2})
        )

        assert schedule.term_source == "term_months"
        assert len(schedule.months) == 24

    def test_mid_month_commencement(self, make_lease):
        schedule = build_monthly_rent_schedule(
            make_lease(commencement=date(2025, 1, 15), expiration=date(2026, 1, 14))
        )

        assert len(schedule.months) == 12
        assert schedule.months[0].end == date(2025, 2, 14)
        assert schedule.months[-1].end == date(2026, 1, 14)

    def test_no_dates_gives_empty_schedule(self, make_lease):
        schedule = build_monthly_rent_schedule(make_lease(expiration=None))

        assert schedule.term_source == "none"
        assert schedule.months == []
        assert schedule.total_net_rent == 0.0


class TestRentAmounts:
    def test_steps_on_anniversary(self, nnn_lease):
        months = build_monthly_rent_schedule(nnn_lease).months

        assert months[0].contractual_base_rent == pytest.approx(1_000_000 / 12)
        assert months[11].contractual_base_rent == pytest.approx(1_000_000 / 12)
        assert months[12].contractual_base_rent == pytest.approx(1_030_000 / 12)

    def test_row_escalation_when_lease_has_none(self, make_lease):
        months = build_monthly_rent_schedule(make_lease(row_escalation=0.03)).months

        assert months[12].contractual_base_rent == pytest.approx(1_030_000 / 12)

    def test_free_rent_applied_to_first_months(self, free_rent_lease):
        schedule = build_monthly_rent_schedule(free_rent_lease)
        monthly = 1_000_000 / 12

        assert [m.net_rent_due for m in schedule.months[:6]] == [0.0] * 6
        assert schedule.months[0].free_rent_amount == pytest.approx(-monthly)
        assert schedule.months[6].net_rent_due == pytest.approx(monthly)
        assert len(schedule.rent_paying_months) == 54
        assert schedule.free_rent_value == pytest.approx(500_000)
        assert schedule.total_contract_rent == pytest.approx(5_000_000)
        assert schedule.total_net_rent == pytest.approx(4_500_000)

    def test_running_effective_rent(self, free_rent_lease):
        months = build_monthly_rent_schedule(free_rent_lease).months

        assert months[5].effective_rent_running == 0.0
        assert months[11].effective_rent_running == pytest.approx(1_000_000 / 12 / 2)

    def test_custom_free_rent_windows(self, make_lease):
        lease = make_lease(
            concessions={
                "abatement": {
                    "kind": "custom",
                    "periods": [
                        {"start": "2026-01-01", "end": "2026-12-31", "months": 2},
                    ],
                }
            }
        )
        months = build_monthly_rent_schedule(lease).months
        free = [m.period_index for m in months if m.free_rent_amount < 0]

        assert free == [12, 13]

    def test_cents_rounding(self, make_lease):
        lease = make_lease(rsf=1000, cashflow_settings={"rounding": "cents"})
        schedule = build_monthly_rent_schedule(lease)

        assert schedule.months[0].contractual_base_rent == 4166.67
        assert schedule.rounding == "cents"


class TestBlendedRate:
    def test_blended_rate_with_free_rent(self, free_rent_lease):
        schedule = build_monthly_rent_schedule(free_rent_lease)
        assert blended_rate(schedule, 20000) == pytest.approx(45.0)

    def test_blended_rate_zero_area(self, free_rent_lease):
        schedule = build_monthly_rent_schedule(free_rent_lease)
        assert blended_rate(schedule, 0) == 0.0
