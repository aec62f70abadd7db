# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base value object for every lease, schedule and result model.

    Instances are frozen snapshots: the engine never patches a lease or a
    cashflow line in place, every derived value is a new object.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra="forbid",  # Misspelled lease fields fail at construction
    )

    def with_updates(self, updates: Optional[Dict[str, Any]] = None) -> "Model":
        """Return a re-validated copy with top-level fields replaced."""
        data = self.model_dump()
        data.update(updates or {})
        return type(self).model_validate(data)
