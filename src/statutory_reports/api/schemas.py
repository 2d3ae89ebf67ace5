"""Pydantic schemas for API responses."""

from datetime import date

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error payload returned for failed report requests."""

    detail: str
    code: str


class OrganizationBlock(BaseModel):
    name: str
    pan: str
    tan: str


class PeriodBlock(BaseModel):
    month: int
    year: int
    pay_date: date


class TDSEmployeeResponse(BaseModel):
    """One employee's withholding."""

    employee_id: str
    pan: str
    name: str
    gross_pay: int
    tds_deducted: int
    section: str


class TDSSectionResponse(BaseModel):
    """Totals for one TDS section."""

    section: str
    description: str
    total_amount: int
    employee_count: int
    employees: list[TDSEmployeeResponse]


class TDSSummaryResponse(BaseModel):
    """TDS summary for a payroll run."""

    organization: OrganizationBlock
    period: PeriodBlock
    total_tds: int
    total_employees: int
    by_section: dict[str, TDSSectionResponse]
    employees: list[TDSEmployeeResponse]
