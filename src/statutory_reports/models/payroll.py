"""Payroll run models, as written by the payroll-processing subsystem."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, BigInteger, CheckConstraint, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from statutory_reports.models.base import Base, TimestampMixin


class PayrollRunStatus(str, Enum):
    """Payroll run lifecycle values."""

    DRAFT = "draft"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RunEmployeeStatus(str, Enum):
    """Per-employee processing outcome within a run."""

    PENDING = "pending"
    PROCESSED = "processed"
    ERROR = "error"


class PayrollRun(Base, TimestampMixin):
    """One pay cycle for a tenant. Only completed runs are reportable."""

    __tablename__ = "payroll_runs"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    tenant_id: Mapped[UUID] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    pay_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    pay_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    pay_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=PayrollRunStatus.DRAFT.value
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'processing', 'completed', 'cancelled')",
            name="payroll_runs_status_check",
        ),
    )


class PayrollRunEmployee(Base, TimestampMixin):
    """One employee's outcome within a payroll run."""

    __tablename__ = "payroll_run_employees"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    payroll_run_id: Mapped[UUID] = mapped_column(
        ForeignKey("payroll_runs.id", ondelete="CASCADE"),
        nullable=False,
    )
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    gross_pay_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=RunEmployeeStatus.PENDING.value
    )
    # Derived contribution figures keyed by name ("pf_cents", "tds_cents")
    metadata_json: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'processed', 'error')",
            name="payroll_run_employees_status_check",
        ),
    )
