"""Delimited record parsing for the company list."""

import csv
import io
from collections.abc import Iterator
from dataclasses import dataclass

from nikkei_yprice.shared.errors import RecordFormatError


@dataclass(frozen=True)
class Record:
    """One input company after header rows are skipped.

    Attributes:
        original_index: 0-based position among data rows.
        entity_name: Company name from column 0.
    """

    original_index: int
    entity_name: str


def parse(text: str, header_skip_count: int = 1) -> Iterator[Record]:
    """Lazily parse CSV text into Records.

    Every row, header rows included, must have the same number of fields as
    the first row read. Blank lines are not records.

    Args:
        text: Decoded input text.
        header_skip_count: Number of leading records to skip.

    Yields:
        Record for each data row, indexed from 0.

    Raises:
        RecordFormatError: On bad quoting, a field count mismatch or an empty
            company name. The error carries the 1-based line number.
    """
    if header_skip_count < 0:
        raise ValueError("header_skip_count must be >= 0")

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    expected_fields: int | None = None
    skipped = 0
    index = 0

    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            raise RecordFormatError(reader.line_num, str(e)) from e

        if not row:
            continue

        if expected_fields is None:
            expected_fields = len(row)
        elif len(row) != expected_fields:
            raise RecordFormatError(
                reader.line_num,
                f"expected {expected_fields} fields, got {len(row)}",
            )

        if skipped < header_skip_count:
            skipped += 1
            continue

        name = row[0]
        if not name.strip():
            raise RecordFormatError(reader.line_num, "empty company name")

        yield Record(original_index=index, entity_name=name)
        index += 1
