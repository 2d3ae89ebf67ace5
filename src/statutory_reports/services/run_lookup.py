"""Resolve the completed payroll run a statutory report is built from."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from statutory_reports.models import PayrollRunStatus
from statutory_reports.services.data_store import (
    PayrollRunRecord,
    ReportDataSource,
    RunPeriodStatus,
)
from statutory_reports.services.errors import PayrollRunNotFoundError
from statutory_reports.services.period import ReportPeriod

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Why no completed run matched the requested period."""

    OTHER_PERIOD_COMPLETED = "other_period_completed"
    OTHER_STATUS = "other_status"
    NO_RUNS = "no_runs"


@dataclass(frozen=True)
class RunDiagnostic:
    """Structured explanation of a failed run lookup.

    ``available`` holds "month/year" entries for OTHER_PERIOD_COMPLETED and
    "month/year (status)" entries for OTHER_STATUS; it is empty for NO_RUNS.
    """

    kind: DiagnosticKind
    month: int
    year: int
    available: list[str] = field(default_factory=list)

    def render(self) -> str:
        """Render the diagnostic as a user-facing message."""
        message = f"No completed payroll run found for {self.month}/{self.year}."
        listing = ", ".join(self.available)
        if self.kind == DiagnosticKind.OTHER_PERIOD_COMPLETED:
            return f"{message} Available completed payroll runs: {listing}."
        if self.kind == DiagnosticKind.OTHER_STATUS:
            return (
                f"{message} Available payroll runs: {listing}. "
                "Please complete a payroll run first."
            )
        return (
            f"{message} No payroll runs found for this organization. "
            "Please create and process a payroll run first."
        )


def build_diagnostic(period: ReportPeriod, runs: list[RunPeriodStatus]) -> RunDiagnostic:
    """Classify a tenant's existing runs into a diagnostic for ``period``."""
    if not runs:
        return RunDiagnostic(DiagnosticKind.NO_RUNS, period.month, period.year)

    completed = [
        f"{r.month}/{r.year}" for r in runs if r.status == PayrollRunStatus.COMPLETED.value
    ]
    if completed:
        return RunDiagnostic(
            DiagnosticKind.OTHER_PERIOD_COMPLETED, period.month, period.year, completed
        )

    return RunDiagnostic(
        DiagnosticKind.OTHER_STATUS,
        period.month,
        period.year,
        [f"{r.month}/{r.year} ({r.status})" for r in runs],
    )


class PayrollRunLookup:
    """Finds the completed payroll run for a tenant and month."""

    def __init__(self, source: ReportDataSource):
        self.source = source

    async def resolve(self, tenant_id: UUID, month: int, year: int) -> PayrollRunRecord:
        """Return the most recent completed run paid in month/year.

        Raises PayrollRunNotFoundError with a diagnostic of the tenant's
        other runs when none matches.
        """
        period = ReportPeriod(month, year)
        run = await self.source.find_completed_run(tenant_id, period)
        if run is not None:
            return run

        diagnostic = build_diagnostic(period, await self.source.summarize_runs(tenant_id))
        logger.info(
            "No completed payroll run for tenant=%s period=%s (%s)",
            tenant_id,
            period.label,
            diagnostic.kind.value,
        )
        raise PayrollRunNotFoundError(diagnostic)
