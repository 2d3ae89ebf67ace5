"""Pytest fixtures for statutory report tests."""

from __future__ import annotations

from collections import Counter
from datetime import date
from uuid import UUID, uuid4

import pytest

from statutory_reports.services.data_store import (
    DIAGNOSTIC_RUN_LIMIT,
    OrganizationRecord,
    PayrollRunRecord,
    RunEmployeeRow,
    RunPeriodStatus,
)
from statutory_reports.services.period import ReportPeriod


class FakeDataSource:
    """In-memory ReportDataSource that records which queries ran.

    Employee rows are assumed to be processed members of their run; the
    status and tenant filters are exercised against the real store in the
    integration tests.
    """

    def __init__(self, organization: OrganizationRecord | None = None):
        self.organization = organization
        self.runs: list[PayrollRunRecord] = []
        self.employees: dict[UUID, list[RunEmployeeRow]] = {}
        self.calls: list[str] = []

    def add_run(
        self,
        tenant_id: UUID,
        pay_date: date,
        status: str = "completed",
    ) -> PayrollRunRecord:
        run = PayrollRunRecord(
            id=uuid4(),
            tenant_id=tenant_id,
            pay_period_start=pay_date.replace(day=1),
            pay_period_end=pay_date,
            pay_date=pay_date,
            status=status,
        )
        self.runs.append(run)
        self.employees[run.id] = []
        return run

    def add_employee(self, run: PayrollRunRecord, **fields) -> RunEmployeeRow:
        fields.setdefault("employee_id", f"EMP{len(self.employees[run.id]) + 1:03d}")
        fields.setdefault("employee_name", "Test Employee")
        fields.setdefault("gross_pay_cents", 1_000_000)
        row = RunEmployeeRow(**fields)
        self.employees[run.id].append(row)
        return row

    async def find_completed_run(
        self, tenant_id: UUID, period: ReportPeriod
    ) -> PayrollRunRecord | None:
        self.calls.append("find_completed_run")
        matches = [
            r
            for r in self.runs
            if r.tenant_id == tenant_id and r.status == "completed" and period.contains(r.pay_date)
        ]
        return max(matches, key=lambda r: r.pay_date, default=None)

    async def summarize_runs(self, tenant_id: UUID) -> list[RunPeriodStatus]:
        self.calls.append("summarize_runs")
        groups = Counter(
            (r.pay_date.month, r.pay_date.year, r.status)
            for r in self.runs
            if r.tenant_id == tenant_id
        )
        summary = [
            RunPeriodStatus(month=m, year=y, status=s, count=n)
            for (m, y, s), n in groups.items()
        ]
        summary.sort(key=lambda r: (r.year, r.month), reverse=True)
        return summary[:DIAGNOSTIC_RUN_LIMIT]

    async def get_organization(self, tenant_id: UUID) -> OrganizationRecord | None:
        self.calls.append("get_organization")
        return self.organization

    async def list_pf_employees(self, run_id: UUID, tenant_id: UUID) -> list[RunEmployeeRow]:
        self.calls.append("list_pf_employees")
        return self._sorted(run_id)

    async def list_esi_employees(
        self, run_id: UUID, tenant_id: UUID, wage_ceiling_cents: int
    ) -> list[RunEmployeeRow]:
        self.calls.append("list_esi_employees")
        return [r for r in self._sorted(run_id) if r.gross_pay_cents <= wage_ceiling_cents]

    async def list_tds_employees(self, run_id: UUID, tenant_id: UUID) -> list[RunEmployeeRow]:
        self.calls.append("list_tds_employees")
        return [r for r in self._sorted(run_id) if r.tds_cents > 0]

    def _sorted(self, run_id: UUID) -> list[RunEmployeeRow]:
        return sorted(self.employees.get(run_id, []), key=lambda r: r.employee_id)


@pytest.fixture
def tenant_id() -> UUID:
    """A test tenant."""
    return uuid4()


@pytest.fixture
def organization() -> OrganizationRecord:
    """A fully registered organization."""
    return OrganizationRecord(
        name="Acme Industries Pvt Ltd",
        pf_code="MHBAN0012345000",
        esi_code="31000123450001001",
        company_pan="AABCA1234C",
        company_tan="MUMA12345B",
    )


@pytest.fixture
def source(organization: OrganizationRecord) -> FakeDataSource:
    """Empty in-memory data source for a registered organization."""
    return FakeDataSource(organization)


@pytest.fixture
def march_run(source: FakeDataSource, tenant_id: UUID) -> PayrollRunRecord:
    """Completed payroll run paid on 31 March 2024."""
    return source.add_run(tenant_id, date(2024, 3, 31))
