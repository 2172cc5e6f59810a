"""Validation context handed to record parsing."""

from __future__ import annotations

import datetime
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationContext:
    current_year: int  # latest year an item may carry

    @classmethod
    def today(cls) -> "ValidationContext":
        return cls(current_year=datetime.date.today().year)
