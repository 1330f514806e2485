"""Nikkei collectors package."""

from nikkei_yprice.ingestion.collectors.base_collector import BaseCollector
from nikkei_yprice.ingestion.collectors.stock_code_collector import StockCodeCollector
from nikkei_yprice.ingestion.collectors.yearly_price_collector import YearlyPriceCollector

__all__ = ["BaseCollector", "StockCodeCollector", "YearlyPriceCollector"]
