"""Errors raised by statutory report generation.

All of them are terminal for the current request: the caller gets the
exception unchanged and no partial artifact.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from statutory_reports.services.run_lookup import RunDiagnostic


class StatutoryReportError(Exception):
    """Base class for report generation failures."""

    code = "STATUTORY_REPORT_ERROR"
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PayrollRunNotFoundError(StatutoryReportError):
    """Raised when no completed payroll run exists for the requested period."""

    code = "PAYROLL_RUN_NOT_FOUND"
    status_code = 404

    def __init__(self, diagnostic: RunDiagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.render())


class InvalidConfigError(StatutoryReportError):
    """Raised when the organization or a required statutory code is missing."""

    code = "INVALID_CONFIG"
    status_code = 422


class EmptyResultError(StatutoryReportError):
    """Raised when a report that needs at least one employee row has none."""

    code = "EMPTY_RESULT"
    status_code = 404
