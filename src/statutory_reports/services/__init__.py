"""Statutory report services."""

from statutory_reports.services.data_store import ReportDataSource, StatutoryDataStore
from statutory_reports.services.errors import (
    EmptyResultError,
    InvalidConfigError,
    PayrollRunNotFoundError,
    StatutoryReportError,
)
from statutory_reports.services.esi_return import ESIReportBuilder
from statutory_reports.services.pf_ecr import PFReportBuilder
from statutory_reports.services.run_lookup import (
    DiagnosticKind,
    PayrollRunLookup,
    RunDiagnostic,
)
from statutory_reports.services.tds_summary import TDSReportBuilder, TDSSection, TDSSummary

__all__ = [
    "ReportDataSource",
    "StatutoryDataStore",
    "StatutoryReportError",
    "PayrollRunNotFoundError",
    "InvalidConfigError",
    "EmptyResultError",
    "PayrollRunLookup",
    "RunDiagnostic",
    "DiagnosticKind",
    "PFReportBuilder",
    "ESIReportBuilder",
    "TDSReportBuilder",
    "TDSSection",
    "TDSSummary",
]
