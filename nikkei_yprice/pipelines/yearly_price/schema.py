"""
Yearly Price Output Schema

One output row per input company:
    企業名, index, コード, 2013, ..., 2022
"""

from dataclasses import dataclass, field

from nikkei_yprice.ingestion.collectors.nikkei_utils import SUPPORTED_YEARS
from nikkei_yprice.ingestion.collectors.yearly_price_collector import empty_prices

ENTITY_NAME_COLUMN = "企業名"
INDEX_COLUMN = "index"
STOCK_CODE_COLUMN = "コード"

OUTPUT_COLUMNS: list[str] = [
    ENTITY_NAME_COLUMN,
    INDEX_COLUMN,
    STOCK_CODE_COLUMN,
    *(str(year) for year in SUPPORTED_YEARS),
]


@dataclass
class ScrapeResult:
    """Result of one company's lookup.

    Filled in by its pipeline task: name and index first, the stock code
    after resolution, prices after extraction. An empty stock_code means the
    company was not found; its prices stay at 0.0.
    """

    entity_name: str
    original_index: int
    stock_code: str = ""
    prices: dict[int, float] = field(default_factory=empty_prices)

    @property
    def resolved(self) -> bool:
        return bool(self.stock_code)

    def to_row(self) -> list[str]:
        """Serialize in OUTPUT_COLUMNS order, prices with one decimal."""
        return [
            self.entity_name,
            str(self.original_index),
            self.stock_code,
            *(f"{self.prices.get(year, 0.0):.1f}" for year in SUPPORTED_YEARS),
        ]


@dataclass
class RunSummary:
    """Counts reported at the end of a run."""

    launched: int = 0
    written: int = 0
    unresolved: int = 0
