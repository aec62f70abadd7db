# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for lease normalization and the issues it reports.
"""

from datetime import date

from leasecalc.core.primitives import IssueSeverityEnum
from leasecalc.lease import normalize_lease


def _codes(result):
    return {issue.code for issue in result.issues}


class TestDates:
    def test_clean_lease_has_no_issues(self, nnn_lease):
        result = normalize_lease(nnn_lease)

        assert result.issues == []
        assert not result.has_errors
        assert result.normalized.expiration == date(2029, 12, 31)
        assert result.normalized.term_months_total == 60
        assert result.normalized.term_years == 5

    def test_expiration_derived_from_term(self, make_lease):
        lease = make_lease(expiration=None, lease_term={"years": 5})
        normalized = normalize_lease(lease).normalized

        assert normalized.expiration == date(2029, 12, 31)
        assert normalized.term_months_total == 60
        assert normalized.has_valid_dates

    def test_abatement_months_extend_the_term_when_included(self, make_lease):
        lease = make_lease(
            expiration=None,
            lease_term={"years": 5, "include_abatement_in_term": True},
            concessions={"abatement": {"kind": "at_commencement", "months": 6}},
        )
        normalized = normalize_lease(lease).normalized

        assert normalized.term_months_total == 66
        assert normalized.expiration == date(2030, 6, 30)

    def test_expiration_before_commencement_is_an_error(self, make_lease):
        lease = make_lease(commencement=date(2025, 1, 1), expiration=date(2024, 12, 31))
        result = normalize_lease(lease)

        assert result.has_errors
        assert "expiration_before_commencement" in _codes(result)
        assert not result.normalized.has_valid_dates
        assert result.normalized.term_months_total == 0

    def test_no_expiration_and_no_term(self, make_lease):
        normalized = normalize_lease(make_lease(expiration=None)).normalized

        assert normalized.expiration is None
        assert not normalized.has_valid_dates

    def test_rent_start_defaults_after_free_months(self, free_rent_lease):
        normalized = normalize_lease(free_rent_lease).normalized

        assert normalized.rent_start == date(2025, 7, 1)
        assert normalized.abatement_months_total == 6

    def test_rent_start_before_commencement(self, make_lease):
        lease = make_lease(
            key_dates={
                "commencement": date(2025, 1, 1),
                "expiration": date(2029, 12, 31),
                "rent_start": date(2024, 12, 1),
            }
        )
        result = normalize_lease(lease)

        assert "rent_start_before_commencement" in _codes(result)
        assert not result.has_errors


class TestClamping:
    def test_negative_rsf(self, make_lease):
        result = normalize_lease(make_lease(rsf=-100))

        assert "negative_rsf" in _codes(result)
        assert result.normalized.rsf == 0.0

    def test_negative_free_rent_months(self, make_lease):
        lease = make_lease(concessions={"abatement": {"kind": "at_commencement", "months": -2}})
        result = normalize_lease(lease)

        assert "negative_free_rent_months" in _codes(result)
        assert result.normalized.abatement_months_total == 0
        assert result.normalized.abatement_periods == []

    def test_empty_rent_schedule(self, make_lease):
        result = normalize_lease(make_lease(rent_schedule=[]))

        assert "rent_schedule_empty" in _codes(result)
        assert result.normalized.base_rent_psf == 0.0


class TestPeriodOrdering:
    def test_unsorted_and_overlapping_escalation_periods(self, make_lease):
        lease = make_lease(
            rent_escalation={
                "kind": "custom",
                "periods": [
                    {"start": "2027-01-01", "end": "2027-12-31", "rate": 0.04},
                    {"start": "2026-01-01", "end": "2027-06-30", "rate": 0.02},
                ],
            }
        )
        result = normalize_lease(lease)
        fields = {issue.field for issue in result.issues}

        assert {"escalation_periods_unsorted", "escalation_periods_overlap"} <= _codes(result)
        assert "rent_escalation.periods" in fields
        assert all(i.severity == IssueSeverityEnum.WARNING for i in result.issues)

    def test_unsorted_abatement_periods(self, make_lease):
        lease = make_lease(
            concessions={
                "abatement": {
                    "kind": "custom",
                    "periods": [
                        {"start": "2026-01-01", "end": "2026-03-31", "months": 3},
                        {"start": "2025-01-01", "end": "2025-03-31", "months": 3},
                    ],
                }
            }
        )
        result = normalize_lease(lease)

        assert "abatement_periods_unsorted" in _codes(result)
        assert "abatement_periods_overlap" not in _codes(result)
        assert result.normalized.abatement_months_total == 6
