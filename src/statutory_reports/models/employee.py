"""Employee identity models."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from statutory_reports.models.base import Base, TimestampMixin


class Profile(Base, TimestampMixin):
    """Person profile holding the display name parts."""

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str | None] = mapped_column(String, nullable=True)


class Employee(Base, TimestampMixin):
    """Employee record with national statutory identifiers."""

    __tablename__ = "employees"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    tenant_id: Mapped[UUID] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("profiles.id"),
        nullable=False,
    )
    # Employer-assigned code, e.g. "EMP001"
    employee_id: Mapped[str] = mapped_column(String, nullable=False)
    uan_number: Mapped[str | None] = mapped_column(String, nullable=True)
    esi_number: Mapped[str | None] = mapped_column(String, nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "employee_id", name="employees_tenant_code_unique"),
    )


def display_name(first_name: str | None, last_name: str | None) -> str:
    """Join first and last name, falling back to whichever part exists."""
    if first_name is not None and last_name is not None:
        return f"{first_name} {last_name}"
    return first_name or last_name or ""
