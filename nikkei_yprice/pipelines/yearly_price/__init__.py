"""Yearly closing price pipeline."""

from nikkei_yprice.pipelines.yearly_price.gate import ConcurrencyGate, GateToken
from nikkei_yprice.pipelines.yearly_price.schema import OUTPUT_COLUMNS, RunSummary, ScrapeResult
from nikkei_yprice.pipelines.yearly_price.sink import CsvSinkWriter

__all__ = [
    "ConcurrencyGate",
    "CsvSinkWriter",
    "GateToken",
    "OUTPUT_COLUMNS",
    "RunSummary",
    "ScrapeResult",
]
