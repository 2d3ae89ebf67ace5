"""Read-only data access for statutory reports.

The report builders depend on the ``ReportDataSource`` protocol. The
SQLAlchemy-backed ``StatutoryDataStore`` implements it against the payroll
tables; tests substitute an in-memory source.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Protocol
from uuid import UUID

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from statutory_reports.models import (
    Employee,
    Organization,
    PayrollRun,
    PayrollRunEmployee,
    PayrollRunStatus,
    Profile,
    RunEmployeeStatus,
    display_name,
)
from statutory_reports.services.period import ReportPeriod

# Number of period/status groups loaded when explaining a failed lookup
DIAGNOSTIC_RUN_LIMIT = 10


@dataclass(frozen=True)
class PayrollRunRecord:
    """A payroll run as seen by the report builders."""

    id: UUID
    tenant_id: UUID
    pay_period_start: date
    pay_period_end: date
    pay_date: date
    status: str


@dataclass(frozen=True)
class RunPeriodStatus:
    """Count of a tenant's runs sharing a pay month, year and status."""

    month: int
    year: int
    status: str
    count: int = 1


@dataclass(frozen=True)
class OrganizationRecord:
    """Statutory registration fields of a tenant."""

    name: str | None = None
    pf_code: str | None = None
    esi_code: str | None = None
    company_pan: str | None = None
    company_tan: str | None = None


@dataclass(frozen=True)
class RunEmployeeRow:
    """One processed employee of a run joined with identity fields.

    Contribution figures are typed and default to zero when the run's
    metadata does not carry them.
    """

    employee_id: str
    employee_name: str
    gross_pay_cents: int
    uan_number: str | None = None
    esi_number: str | None = None
    pan_number: str | None = None
    pf_cents: int = 0
    tds_cents: int = 0


class ReportDataSource(Protocol):
    """Read-only queries the report builders need."""

    async def find_completed_run(
        self, tenant_id: UUID, period: ReportPeriod
    ) -> PayrollRunRecord | None: ...

    async def summarize_runs(self, tenant_id: UUID) -> list[RunPeriodStatus]: ...

    async def get_organization(self, tenant_id: UUID) -> OrganizationRecord | None: ...

    async def list_pf_employees(
        self, run_id: UUID, tenant_id: UUID
    ) -> list[RunEmployeeRow]: ...

    async def list_esi_employees(
        self, run_id: UUID, tenant_id: UUID, wage_ceiling_cents: int
    ) -> list[RunEmployeeRow]: ...

    async def list_tds_employees(
        self, run_id: UUID, tenant_id: UUID
    ) -> list[RunEmployeeRow]: ...


def contribution_cents(metadata: Mapping[str, Any] | None, key: str) -> int:
    """Read an integer paise figure from a run-employee metadata bag.

    Missing, null or blank values read as 0. Integers and integral strings
    are accepted; fractional or non-numeric values raise ValueError.
    """
    if not metadata:
        return 0
    value = metadata.get(key)
    if value is None or value == "":
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lstrip("+-").isdecimal():
        return int(value)
    raise ValueError(f"{key} must be a whole number of paise, got {value!r}")


class StatutoryDataStore:
    """SQLAlchemy implementation of ``ReportDataSource``.

    Every method is a single read; nothing is flushed or committed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_completed_run(
        self, tenant_id: UUID, period: ReportPeriod
    ) -> PayrollRunRecord | None:
        """Most recent completed run paid within the period."""
        result = await self.session.execute(
            select(PayrollRun)
            .where(
                PayrollRun.tenant_id == tenant_id,
                PayrollRun.status == PayrollRunStatus.COMPLETED.value,
                PayrollRun.pay_date >= period.start,
                PayrollRun.pay_date <= period.end,
            )
            .order_by(PayrollRun.pay_date.desc())
            .limit(1)
        )
        run = result.scalar_one_or_none()
        if run is None:
            return None
        return PayrollRunRecord(
            id=run.id,
            tenant_id=run.tenant_id,
            pay_period_start=run.pay_period_start,
            pay_period_end=run.pay_period_end,
            pay_date=run.pay_date,
            status=run.status,
        )

    async def summarize_runs(self, tenant_id: UUID) -> list[RunPeriodStatus]:
        """All runs of a tenant grouped by pay month, year and status, newest first."""
        month = extract("month", PayrollRun.pay_date)
        year = extract("year", PayrollRun.pay_date)
        result = await self.session.execute(
            select(
                month.label("month"),
                year.label("year"),
                PayrollRun.status,
                func.count().label("run_count"),
            )
            .where(PayrollRun.tenant_id == tenant_id)
            .group_by(month, year, PayrollRun.status)
            .order_by(year.desc(), month.desc())
            .limit(DIAGNOSTIC_RUN_LIMIT)
        )
        return [
            RunPeriodStatus(
                month=int(row.month),
                year=int(row.year),
                status=row.status,
                count=int(row.run_count),
            )
            for row in result
        ]

    async def get_organization(self, tenant_id: UUID) -> OrganizationRecord | None:
        """Statutory registration of the tenant, if the organization exists."""
        result = await self.session.execute(
            select(Organization).where(Organization.id == tenant_id)
        )
        org = result.scalar_one_or_none()
        if org is None:
            return None
        return OrganizationRecord(
            name=org.name,
            pf_code=org.pf_code,
            esi_code=org.esi_code,
            company_pan=org.company_pan,
            company_tan=org.company_tan,
        )

    async def list_pf_employees(
        self, run_id: UUID, tenant_id: UUID
    ) -> list[RunEmployeeRow]:
        """Processed employees of the run with their PF contribution."""
        return await self._processed_employees(run_id, tenant_id)

    async def list_esi_employees(
        self, run_id: UUID, tenant_id: UUID, wage_ceiling_cents: int
    ) -> list[RunEmployeeRow]:
        """Processed employees of the run whose gross pay is within the ESI ceiling."""
        return await self._processed_employees(
            run_id,
            tenant_id,
            PayrollRunEmployee.gross_pay_cents <= wage_ceiling_cents,
        )

    async def list_tds_employees(
        self, run_id: UUID, tenant_id: UUID
    ) -> list[RunEmployeeRow]:
        """Processed employees of the run with a positive TDS figure."""
        rows = await self._processed_employees(run_id, tenant_id)
        return [row for row in rows if row.tds_cents > 0]

    async def _processed_employees(
        self, run_id: UUID, tenant_id: UUID, *criteria: Any
    ) -> list[RunEmployeeRow]:
        """Shared projection, ordered by employee code."""
        result = await self.session.execute(
            select(
                Employee.employee_id,
                Employee.uan_number,
                Employee.esi_number,
                Employee.pan_number,
                Profile.first_name,
                Profile.last_name,
                PayrollRunEmployee.gross_pay_cents,
                PayrollRunEmployee.metadata_json.label("metadata_json"),
            )
            .select_from(PayrollRunEmployee)
            .join(Employee, Employee.id == PayrollRunEmployee.employee_id)
            .join(Profile, Profile.id == Employee.user_id)
            .where(
                PayrollRunEmployee.payroll_run_id == run_id,
                PayrollRunEmployee.status == RunEmployeeStatus.PROCESSED.value,
                Employee.tenant_id == tenant_id,
                *criteria,
            )
            .order_by(Employee.employee_id)
        )
        return [
            RunEmployeeRow(
                employee_id=row.employee_id,
                employee_name=display_name(row.first_name, row.last_name),
                gross_pay_cents=int(row.gross_pay_cents),
                uan_number=row.uan_number,
                esi_number=row.esi_number,
                pan_number=row.pan_number,
                pf_cents=contribution_cents(row.metadata_json, "pf_cents"),
                tds_cents=contribution_cents(row.metadata_json, "tds_cents"),
            )
            for row in result
        ]
