"""Money rounding and text serialization shared by the report builders."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

_ONE = Decimal("1")
_HUNDRED = Decimal("100")


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(_ONE, rounding=ROUND_HALF_UP))


def to_whole_units(cents: int) -> int:
    """Convert paise to whole rupees, rounding half up."""
    return round_half_up(Decimal(cents) / _HUNDRED)


def share_cents(cents: int, ratio: Decimal) -> int:
    """A ratio of a paise amount, rounded to whole paise."""
    return round_half_up(Decimal(cents) * ratio)


def capped(cents: int, ceiling_cents: int) -> int:
    """Apply a statutory wage ceiling."""
    return min(cents, ceiling_cents)


def write_csv(header: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    """Serialize rows as CSV text joined by newlines, without a trailing newline.

    Fields containing a comma, double quote or newline are wrapped in double
    quotes with inner quotes doubled.
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(header)
    writer.writerows(rows)
    return output.getvalue().removesuffix("\n")


def read_csv(text: str) -> list[list[str]]:
    """Parse CSV text produced by ``write_csv`` back into fields."""
    return list(csv.reader(io.StringIO(text)))


def pipe_record(fields: Iterable[object]) -> str:
    """Join fields with the ECR pipe delimiter."""
    return "|".join(str(f) for f in fields)
