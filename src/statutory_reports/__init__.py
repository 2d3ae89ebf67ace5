"""Statutory payroll reports: PF ECR, ESI return and TDS summary."""

from statutory_reports.services import (
    EmptyResultError,
    ESIReportBuilder,
    InvalidConfigError,
    PayrollRunLookup,
    PayrollRunNotFoundError,
    PFReportBuilder,
    StatutoryDataStore,
    StatutoryReportError,
    TDSReportBuilder,
)

__version__ = "0.1.0"

__all__ = [
    "PayrollRunLookup",
    "PFReportBuilder",
    "ESIReportBuilder",
    "TDSReportBuilder",
    "StatutoryDataStore",
    "StatutoryReportError",
    "PayrollRunNotFoundError",
    "InvalidConfigError",
    "EmptyResultError",
]
