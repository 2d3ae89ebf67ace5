"""Calendar month a statutory report covers."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ReportPeriod:
    """A month/year pair, validated on construction."""

    month: int
    year: int

    def __post_init__(self) -> None:
        """Validate period."""
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {self.month}")
        if not 1900 <= self.year <= 9999:
            raise ValueError(f"year must be between 1900 and 9999, got {self.year}")

    @property
    def start(self) -> date:
        """First day of the month."""
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        """Last day of the month."""
        return date(self.year, self.month, self.days_in_month)

    @property
    def days_in_month(self) -> int:
        """Calendar days in the month, leap years included."""
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def label(self) -> str:
        """Zero-padded "MM/YYYY" label."""
        return f"{self.month:02d}/{self.year}"

    def contains(self, day: date) -> bool:
        """Check whether a date falls inside the month."""
        return day.year == self.year and day.month == self.month
