"""Organization (tenant) statutory registration model."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from statutory_reports.models.base import Base, TimestampMixin


class Organization(Base, TimestampMixin):
    """Tenant-level employer registration.

    The organization id doubles as the tenant id.
    """

    __tablename__ = "organizations"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    pf_code: Mapped[str | None] = mapped_column(String, nullable=True)
    esi_code: Mapped[str | None] = mapped_column(String, nullable=True)
    company_pan: Mapped[str | None] = mapped_column(String, nullable=True)
    company_tan: Mapped[str | None] = mapped_column(String, nullable=True)
