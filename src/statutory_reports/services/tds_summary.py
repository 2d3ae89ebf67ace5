"""TDS (Tax Deducted at Source) summary generation.

Returns a structured summary of withholding grouped by Income Tax Act
section, suitable for JSON serialization.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID

from statutory_reports.services.data_store import ReportDataSource, RunEmployeeRow
from statutory_reports.services.errors import InvalidConfigError
from statutory_reports.services.formatting import to_whole_units
from statutory_reports.services.run_lookup import PayrollRunLookup

logger = logging.getLogger(__name__)


class TDSSection(str, Enum):
    """Statutory sections TDS can be deducted under."""

    SALARY = "192B"

    @property
    def description(self) -> str:
        return SECTION_DESCRIPTIONS[self]


SECTION_DESCRIPTIONS: dict[TDSSection, str] = {
    TDSSection.SALARY: "Tax Deducted at Source on Salary",
}

# Sections that always appear in a summary, even with no deductions
REPORTED_SECTIONS = (TDSSection.SALARY,)


@dataclass(frozen=True)
class TDSEmployeeRecord:
    """One employee's withholding, amounts in whole rupees."""

    employee_id: str
    pan: str
    name: str
    gross_pay: int
    tds_deducted: int
    section: TDSSection

    @classmethod
    def from_row(cls, row: RunEmployeeRow, section: TDSSection) -> TDSEmployeeRecord:
        return cls(
            employee_id=row.employee_id,
            pan=row.pan_number or "",
            name=row.employee_name.strip(),
            gross_pay=to_whole_units(row.gross_pay_cents),
            tds_deducted=to_whole_units(row.tds_cents),
            section=section,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "pan": self.pan,
            "name": self.name,
            "gross_pay": self.gross_pay,
            "tds_deducted": self.tds_deducted,
            "section": self.section.value,
        }


@dataclass
class SectionSummary:
    """Running totals for one TDS section."""

    section: TDSSection
    total_amount: int = 0
    employee_count: int = 0
    employees: list[TDSEmployeeRecord] = field(default_factory=list)

    @property
    def description(self) -> str:
        return self.section.description

    def add(self, record: TDSEmployeeRecord) -> None:
        self.total_amount += record.tds_deducted
        self.employee_count += 1
        self.employees.append(record)

    def to_dict(self) -> dict[str, Any]:
        return {
            "section": self.section.value,
            "description": self.description,
            "total_amount": self.total_amount,
            "employee_count": self.employee_count,
            "employees": [e.to_dict() for e in self.employees],
        }


@dataclass
class TDSSummary:
    """Withholding summary for one payroll run."""

    organization_name: str
    organization_pan: str
    organization_tan: str
    month: int
    year: int
    pay_date: date
    total_tds: int = 0
    employees: list[TDSEmployeeRecord] = field(default_factory=list)
    by_section: dict[TDSSection, SectionSummary] = field(
        default_factory=lambda: {s: SectionSummary(s) for s in REPORTED_SECTIONS}
    )

    @property
    def total_employees(self) -> int:
        return len(self.employees)

    def add(self, record: TDSEmployeeRecord) -> None:
        """Record an employee in the flat list and in its section bucket."""
        self.employees.append(record)
        self.total_tds += record.tds_deducted
        bucket = self.by_section.get(record.section)
        if bucket is None:
            bucket = self.by_section[record.section] = SectionSummary(record.section)
        bucket.add(record)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "organization": {
                "name": self.organization_name,
                "pan": self.organization_pan,
                "tan": self.organization_tan,
            },
            "period": {
                "month": self.month,
                "year": self.year,
                "pay_date": self.pay_date.isoformat(),
            },
            "total_tds": self.total_tds,
            "total_employees": self.total_employees,
            "by_section": {
                section.value: summary.to_dict()
                for section, summary in self.by_section.items()
            },
            "employees": [e.to_dict() for e in self.employees],
        }


def section_for(row: RunEmployeeRow) -> TDSSection:
    """Section a payroll deduction falls under. Payroll withholding is salary TDS."""
    return TDSSection.SALARY


class TDSReportBuilder:
    """Builds the TDS summary for a tenant's completed payroll run."""

    def __init__(self, source: ReportDataSource):
        self.source = source
        self.lookup = PayrollRunLookup(source)

    async def generate(self, tenant_id: UUID, month: int, year: int) -> TDSSummary:
        """Generate the TDS summary for month/year.

        A run where nobody had tax withheld yields an empty summary, not an
        error.

        Raises:
            PayrollRunNotFoundError: no completed run for the period
            InvalidConfigError: organization missing
        """
        try:
            run = await self.lookup.resolve(tenant_id, month, year)

            org = await self.source.get_organization(tenant_id)
            if org is None:
                raise InvalidConfigError("Organization not found")

            rows = await self.source.list_tds_employees(run.id, tenant_id)

            summary = TDSSummary(
                organization_name=org.name or "",
                organization_pan=org.company_pan or "",
                organization_tan=org.company_tan or "",
                month=month,
                year=year,
                pay_date=run.pay_date,
            )
            for row in rows:
                summary.add(TDSEmployeeRecord.from_row(row, section_for(row)))
        except Exception:
            logger.exception(
                "Error generating TDS summary for tenant=%s period=%02d/%s",
                tenant_id,
                month,
                year,
            )
            raise

        logger.info(
            "Generated TDS summary for tenant=%s period=%02d/%s run=%s employees=%d",
            tenant_id,
            month,
            year,
            run.id,
            summary.total_employees,
        )
        return summary
