"""nikkei-yprice exception hierarchy.

Every failure that aborts a run derives from ScraperError so the CLI can
report it with one handler. Per-record soft failures (unknown company,
unparseable price) are logged instead of raised.
"""

from __future__ import annotations


class ScraperError(Exception):
    """Base exception for all run-aborting failures."""


class InputNotFoundError(ScraperError):
    """Raised when the input file does not exist."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Input file not found: {path}")


class EncodingUnknownError(ScraperError):
    """Raised when the input encoding cannot be mapped to a codec."""

    def __init__(self, charset: str | None) -> None:
        self.charset = charset
        super().__init__(f"Unknown input file encoding: {charset}")


class RecordFormatError(ScraperError):
    """Raised for a malformed input row. `row` is 1-based."""

    def __init__(self, row: int, reason: str) -> None:
        self.row = row
        self.reason = reason
        super().__init__(f"Malformed record on line {row}: {reason}")


class UpstreamStatusError(ScraperError):
    """Raised when Nikkei answers with a non-2xx status."""

    def __init__(self, status: int, url: str) -> None:
        self.status = status
        self.url = url
        super().__init__(f"Nikkei returned status code {status} for {url}")


class TransportError(ScraperError):
    """Raised when a request fails before an HTTP status is received."""


class RunCancelledError(ScraperError):
    """Raised inside a task that observed the run being aborted."""
