"""Integration test fixtures with a real database.

Tests run against in-memory SQLite through aiosqlite; the models only use
portable column types so the same mappings serve Postgres in production.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date
from typing import Any
from uuid import UUID

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from statutory_reports.models import (
    Base,
    Employee,
    Organization,
    PayrollRun,
    PayrollRunEmployee,
    Profile,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh schema per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for integration tests."""
    async with AsyncSession(test_engine, expire_on_commit=False) as session:
        yield session
        await session.rollback()


class Seeder:
    """Insert payroll fixtures through the ORM."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def organization(self, **fields: Any) -> Organization:
        fields.setdefault("name", "Acme Industries Pvt Ltd")
        fields.setdefault("pf_code", "MHBAN0012345000")
        fields.setdefault("esi_code", "31000123450001001")
        fields.setdefault("company_pan", "AABCA1234C")
        fields.setdefault("company_tan", "MUMA12345B")
        org = Organization(**fields)
        self.session.add(org)
        await self.session.flush()
        return org

    async def employee(
        self,
        tenant_id: UUID,
        code: str,
        first_name: str | None = "Test",
        last_name: str | None = "Employee",
        **fields: Any,
    ) -> Employee:
        profile = Profile(first_name=first_name, last_name=last_name)
        self.session.add(profile)
        await self.session.flush()
        employee = Employee(tenant_id=tenant_id, user_id=profile.id, employee_id=code, **fields)
        self.session.add(employee)
        await self.session.flush()
        return employee

    async def run(
        self, tenant_id: UUID, pay_date: date, status: str = "completed"
    ) -> PayrollRun:
        run = PayrollRun(
            tenant_id=tenant_id,
            pay_period_start=pay_date.replace(day=1),
            pay_period_end=pay_date,
            pay_date=pay_date,
            status=status,
        )
        self.session.add(run)
        await self.session.flush()
        return run

    async def run_employee(
        self,
        run: PayrollRun,
        employee: Employee,
        gross_pay_cents: int = 1_000_000,
        status: str = "processed",
        metadata: dict[str, Any] | None = None,
    ) -> PayrollRunEmployee:
        entry = PayrollRunEmployee(
            payroll_run_id=run.id,
            employee_id=employee.id,
            gross_pay_cents=gross_pay_cents,
            status=status,
            metadata_json=metadata if metadata is not None else {},
        )
        self.session.add(entry)
        await self.session.flush()
        return entry


@pytest_asyncio.fixture
async def seed(db_session: AsyncSession) -> Seeder:
    """Fixture inserter bound to the test session."""
    return Seeder(db_session)


@pytest_asyncio.fixture
async def org(seed: Seeder) -> Organization:
    """A fully registered tenant."""
    return await seed.organization()
