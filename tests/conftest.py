# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared test fixtures and lease builders.

The builders return fully validated `LeaseDescription` objects with sensible
defaults so that each test only spells out the fields it is about.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

import pytest

from leasecalc.lease import (
    KeyDates,
    LeaseDescription,
    OperatingExpenses,
    RentRow,
)


def create_lease(
    rsf: float = 20000,
    lease_type: str = "NNN",
    commencement: date = date(2025, 1, 1),
    expiration: Optional[date] = date(2029, 12, 31),
    rent_psf: float = 50.0,
    row_escalation: Optional[float] = None,
    est_op_ex_psf: Optional[float] = None,
    **overrides: Any,
) -> LeaseDescription:
    """
    Create a single-row lease for testing.

    Args:
        rsf: Rentable square feet
        lease_type: "NNN" or "FS"
        commencement: Commencement date
        expiration: Expiration date (None to derive it from a lease term)
        rent_psf: Rent of the single schedule row in $/RSF/yr
        row_escalation: Escalation percentage of that row
        est_op_ex_psf: Operating expense estimate
        **overrides: Any other LeaseDescription field

    Returns:
        LeaseDescription ready for testing

    Example:
        >>> lease = create_lease(rent_escalation={"kind": "fixed", "rate": 0.03})
        >>> lease.rent_escalation.rate
        0.03
    """
    row_end = expiration or date(commencement.year + 30, 12, 31)
    data: Dict[str, Any] = {
        "name": "Test Lease",
        "rsf": rsf,
        "lease_type": lease_type,
        "key_dates": KeyDates(commencement=commencement, expiration=expiration),
        "operating": OperatingExpenses(est_op_ex_psf=est_op_ex_psf),
        "rent_schedule": [
            RentRow(
                period_start=commencement,
                period_end=row_end,
                rent_psf=rent_psf,
                escalation_percentage=row_escalation,
            )
        ],
    }
    data.update(overrides)
    return LeaseDescription.model_validate(data)


@pytest.fixture
def nnn_lease() -> LeaseDescription:
    """Five-year NNN lease: 20,000 RSF at $50 escalating 3%, $12 operating."""
    return create_lease(
        est_op_ex_psf=12.0,
        rent_escalation={"kind": "fixed", "rate": 0.03},
        operating={"est_op_ex_psf": 12.0, "escalation": {"kind": "fixed", "rate": 0.03}},
    )


@pytest.fixture
def fs_lease() -> LeaseDescription:
    """Five-year full service lease with a 3% operating escalation and no estimate."""
    return create_lease(
        lease_type="FS",
        rent_escalation={"kind": "fixed", "rate": 0.03},
        operating={"escalation": {"kind": "fixed", "rate": 0.03}},
    )


@pytest.fixture
def free_rent_lease() -> LeaseDescription:
    """NNN lease with six months free at commencement."""
    return create_lease(
        concessions={"abatement": {"kind": "at_commencement", "months": 6}},
    )


@pytest.fixture
def make_lease():
    """Factory fixture around `create_lease`."""
    return create_lease
