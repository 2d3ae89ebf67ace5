"""PF ECR (Electronic Challan cum Return) file generation.

Format: pipe-delimited text for the EPFO.

    Header:   establishment_code|MM|YYYY|employee_count|total_epf|total_eps|total_edli
    Employee: UAN|NAME|gross_wages|epf_wages|eps_wages|epf|eps|edli

All amounts are whole rupees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from statutory_reports.config import DEFAULT_RATES, StatutoryRates
from statutory_reports.services.data_store import ReportDataSource, RunEmployeeRow
from statutory_reports.services.errors import EmptyResultError, InvalidConfigError
from statutory_reports.services.formatting import (
    capped,
    pipe_record,
    share_cents,
    to_whole_units,
)
from statutory_reports.services.run_lookup import PayrollRunLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ECRMemberLine:
    """One employee's contribution line, amounts in paise."""

    uan: str
    name: str
    gross_wages_cents: int
    epf_wages_cents: int
    eps_wages_cents: int
    epf_cents: int
    eps_cents: int
    edli_cents: int

    @classmethod
    def from_row(cls, row: RunEmployeeRow, rates: StatutoryRates) -> ECRMemberLine:
        """Apply the wage ceiling and derive EPS/EDLI from the PF contribution."""
        wage_base = capped(row.gross_pay_cents, rates.pf_wage_ceiling_cents)
        return cls(
            uan=row.uan_number or "",
            name=row.employee_name.strip().upper(),
            gross_wages_cents=row.gross_pay_cents,
            epf_wages_cents=wage_base,
            eps_wages_cents=wage_base,
            epf_cents=row.pf_cents,
            eps_cents=share_cents(row.pf_cents, rates.eps_ratio),
            edli_cents=share_cents(row.pf_cents, rates.edli_ratio),
        )

    def to_record(self) -> str:
        """Serialize as a pipe-delimited member record."""
        return pipe_record([
            self.uan,
            self.name,
            to_whole_units(self.gross_wages_cents),
            to_whole_units(self.epf_wages_cents),
            to_whole_units(self.eps_wages_cents),
            to_whole_units(self.epf_cents),
            to_whole_units(self.eps_cents),
            to_whole_units(self.edli_cents),
        ])


@dataclass(frozen=True)
class ECRHeader:
    """Establishment totals line, amounts in paise."""

    establishment_code: str
    month: int
    year: int
    employee_count: int
    total_epf_cents: int
    total_eps_cents: int
    total_edli_cents: int

    def to_record(self) -> str:
        """Serialize as the pipe-delimited header record."""
        return pipe_record([
            self.establishment_code,
            f"{self.month:02d}",
            self.year,
            self.employee_count,
            to_whole_units(self.total_epf_cents),
            to_whole_units(self.total_eps_cents),
            to_whole_units(self.total_edli_cents),
        ])


def build_header(
    establishment_code: str,
    month: int,
    year: int,
    rows: list[RunEmployeeRow],
    rates: StatutoryRates,
) -> ECRHeader:
    """Total PF across employees, then derive EPS and EDLI from the total."""
    total_epf = sum(row.pf_cents for row in rows)
    return ECRHeader(
        establishment_code=establishment_code,
        month=month,
        year=year,
        employee_count=len(rows),
        total_epf_cents=total_epf,
        total_eps_cents=share_cents(total_epf, rates.eps_ratio),
        total_edli_cents=share_cents(total_epf, rates.edli_ratio),
    )


class PFReportBuilder:
    """Builds the PF ECR file for a tenant's completed payroll run."""

    def __init__(self, source: ReportDataSource, rates: StatutoryRates = DEFAULT_RATES):
        self.source = source
        self.rates = rates
        self.lookup = PayrollRunLookup(source)

    async def generate(self, tenant_id: UUID, month: int, year: int) -> str:
        """Generate the ECR text for month/year.

        Raises:
            PayrollRunNotFoundError: no completed run for the period
            InvalidConfigError: organization missing or PF code blank
            EmptyResultError: no processed employees in the run
        """
        try:
            run = await self.lookup.resolve(tenant_id, month, year)

            org = await self.source.get_organization(tenant_id)
            if org is None:
                raise InvalidConfigError("Organization not found")
            pf_code = (org.pf_code or "").strip()
            if not pf_code:
                raise InvalidConfigError("PF Code not configured for organization")

            rows = await self.source.list_pf_employees(run.id, tenant_id)
            if not rows:
                raise EmptyResultError("No employees found in payroll run")

            header = build_header(pf_code, month, year, rows, self.rates)
            lines = [header.to_record()]
            lines.extend(ECRMemberLine.from_row(row, self.rates).to_record() for row in rows)
        except Exception:
            logger.exception(
                "Error generating PF ECR for tenant=%s period=%02d/%s", tenant_id, month, year
            )
            raise

        logger.info(
            "Generated PF ECR for tenant=%s period=%02d/%s run=%s employees=%d",
            tenant_id,
            month,
            year,
            run.id,
            len(rows),
        )
        return "\n".join(lines)
