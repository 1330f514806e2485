"""Thread-safe CSV writer for scrape results."""

import csv
import threading
from pathlib import Path

from nikkei_yprice.pipelines.yearly_price.schema import OUTPUT_COLUMNS, ScrapeResult


class CsvSinkWriter:
    """Appends one CSV row per ScrapeResult.

    The header is written on open. Each row is written and flushed while
    holding a lock, so rows from concurrent tasks never interleave and every
    row that was written is on disk if the run aborts later. Rows appear in
    arrival order; the index column preserves input order.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._file = open(self.path, "w", encoding="utf-8", newline="")
        self._writer = csv.writer(self._file)
        self._closed = False
        self.rows_written = 0

        self._writer.writerow(OUTPUT_COLUMNS)
        self._file.flush()

    def write(self, result: ScrapeResult) -> None:
        """Serialize and append one result."""
        row = result.to_row()
        with self._lock:
            if self._closed:
                raise RuntimeError(f"sink {self.path} is already finalized")
            self._writer.writerow(row)
            self._file.flush()
            self.rows_written += 1

    def finalize(self) -> None:
        """Flush and close the output file. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._file.flush()
            self._file.close()

    def __enter__(self) -> "CsvSinkWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finalize()
