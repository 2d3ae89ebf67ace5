"""ESI return generation.

Format: CSV with columns IP Number, IP Name, Days Worked, Wages. Only
employees whose gross pay is within the ESI wage ceiling are listed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from statutory_reports.config import DEFAULT_RATES, StatutoryRates
from statutory_reports.services.data_store import ReportDataSource, RunEmployeeRow
from statutory_reports.services.errors import EmptyResultError, InvalidConfigError
from statutory_reports.services.formatting import to_whole_units, write_csv
from statutory_reports.services.period import ReportPeriod
from statutory_reports.services.run_lookup import PayrollRunLookup

logger = logging.getLogger(__name__)

ESI_HEADER = ("IP Number", "IP Name", "Days Worked", "Wages")


@dataclass(frozen=True)
class ESIContributionRow:
    """One insured person's line of the return."""

    ip_number: str
    ip_name: str
    days_worked: int
    wages: int

    @classmethod
    def from_row(cls, row: RunEmployeeRow, days_in_month: int) -> ESIContributionRow:
        # No attendance source is wired in, so every employee is reported
        # for the full calendar month.
        return cls(
            ip_number=row.esi_number or row.employee_id or "",
            ip_name=row.employee_name.strip(),
            days_worked=days_in_month,
            wages=to_whole_units(row.gross_pay_cents),
        )

    def as_fields(self) -> tuple[str, str, int, int]:
        return (self.ip_number, self.ip_name, self.days_worked, self.wages)


class ESIReportBuilder:
    """Builds the ESI return for a tenant's completed payroll run."""

    def __init__(self, source: ReportDataSource, rates: StatutoryRates = DEFAULT_RATES):
        self.source = source
        self.rates = rates
        self.lookup = PayrollRunLookup(source)

    async def generate(self, tenant_id: UUID, month: int, year: int) -> str:
        """Generate the ESI return CSV for month/year.

        Raises:
            PayrollRunNotFoundError: no completed run for the period
            InvalidConfigError: organization missing
            EmptyResultError: no employee within the ESI wage ceiling
        """
        try:
            run = await self.lookup.resolve(tenant_id, month, year)

            # The ESI code may be blank; only the organization must exist.
            org = await self.source.get_organization(tenant_id)
            if org is None:
                raise InvalidConfigError("Organization not found")

            days_in_month = ReportPeriod(month, year).days_in_month

            rows = await self.source.list_esi_employees(
                run.id, tenant_id, self.rates.esi_wage_ceiling_cents
            )
            if not rows:
                raise EmptyResultError("No employees eligible for ESI in this payroll run")

            content = write_csv(
                ESI_HEADER,
                (ESIContributionRow.from_row(row, days_in_month).as_fields() for row in rows),
            )
        except Exception:
            logger.exception(
                "Error generating ESI return for tenant=%s period=%02d/%s",
                tenant_id,
                month,
                year,
            )
            raise

        logger.info(
            "Generated ESI return for tenant=%s period=%02d/%s run=%s employees=%d",
            tenant_id,
            month,
            year,
            run.id,
            len(rows),
        )
        return content
