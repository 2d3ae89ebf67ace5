"""Statutory reports command line interface.

Usage:
    python -m statutory_reports.cli pf-ecr --tenant-id X --month 3 --year 2024
    python -m statutory_reports.cli esi-return --tenant-id X --month 3 --year 2024 --output esi.csv
    python -m statutory_reports.cli tds-summary --tenant-id X --month 3 --year 2024
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import AsyncGenerator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path
from typing import Callable
from uuid import UUID

from statutory_reports.config import configure_logging
from statutory_reports.database import dispose_db, get_session
from statutory_reports.services.data_store import ReportDataSource, StatutoryDataStore
from statutory_reports.services.errors import StatutoryReportError
from statutory_reports.services.esi_return import ESIReportBuilder
from statutory_reports.services.pf_ecr import PFReportBuilder
from statutory_reports.services.tds_summary import TDSReportBuilder

SourceFactory = Callable[[], AbstractAsyncContextManager[ReportDataSource]]


def parse_uuid(s: str) -> UUID:
    """Parse UUID string."""
    return UUID(s)


def parse_month(s: str) -> int:
    """Parse a month number between 1 and 12."""
    month = int(s)
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month must be between 1 and 12, got {month}")
    return month


def parse_year(s: str) -> int:
    """Parse a year between 1900 and 9999."""
    year = int(s)
    if not 1900 <= year <= 9999:
        raise argparse.ArgumentTypeError(f"year must be between 1900 and 9999, got {year}")
    return year


@asynccontextmanager
async def database_source() -> AsyncGenerator[ReportDataSource, None]:
    """Data store bound to a session from the configured database."""
    try:
        async with get_session() as session:
            yield StatutoryDataStore(session)
    finally:
        await dispose_db()


class ReportsCli:
    """Statutory reports command line interface."""

    def __init__(self, source_factory: SourceFactory = database_source) -> None:
        self.source_factory = source_factory
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m statutory_reports.cli",
            description="Generate statutory payroll reports",
        )
        subparsers = parser.add_subparsers(dest="command", help="Reports")

        for name, help_text in (
            ("pf-ecr", "PF ECR pipe-delimited contribution file"),
            ("esi-return", "ESI return CSV"),
            ("tds-summary", "TDS summary JSON"),
        ):
            report = subparsers.add_parser(name, help=help_text)
            report.add_argument(
                "--tenant-id",
                type=parse_uuid,
                required=True,
                help="Tenant (organization) ID",
            )
            report.add_argument(
                "--month",
                type=parse_month,
                required=True,
                help="Pay month (1-12)",
            )
            report.add_argument(
                "--year",
                type=parse_year,
                required=True,
                help="Pay year",
            )
            report.add_argument(
                "--output",
                type=Path,
                help="Output file path (default: stdout)",
            )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        try:
            content = asyncio.run(self._generate(parsed))
        except StatutoryReportError as e:
            print(f"ERROR [{e.code}]: {e.message}", file=sys.stderr)
            return 1

        if parsed.output:
            parsed.output.write_text(content + "\n", encoding="utf-8")
            print(f"Wrote {parsed.command} to {parsed.output}")
        else:
            print(content)
        return 0

    async def _generate(self, args: argparse.Namespace) -> str:
        """Generate the requested report as text."""
        async with self.source_factory() as source:
            if args.command == "pf-ecr":
                return await PFReportBuilder(source).generate(
                    args.tenant_id, args.month, args.year
                )
            if args.command == "esi-return":
                return await ESIReportBuilder(source).generate(
                    args.tenant_id, args.month, args.year
                )
            summary = await TDSReportBuilder(source).generate(
                args.tenant_id, args.month, args.year
            )
            return json.dumps(summary.to_dict(), indent=2)


def main() -> int:
    """CLI entry point."""
    configure_logging()
    cli = ReportsCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
