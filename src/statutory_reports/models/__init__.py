"""SQLAlchemy models for the tables statutory reports read."""

from statutory_reports.models.base import Base, TimestampMixin
from statutory_reports.models.employee import Employee, Profile, display_name
from statutory_reports.models.organization import Organization
from statutory_reports.models.payroll import (
    PayrollRun,
    PayrollRunEmployee,
    PayrollRunStatus,
    RunEmployeeStatus,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "Profile",
    "display_name",
    "Organization",
    "PayrollRun",
    "PayrollRunEmployee",
    "PayrollRunStatus",
    "RunEmployeeStatus",
]
