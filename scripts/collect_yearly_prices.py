"""Yearly closing price collection script.

Usage:
    # Scrape all companies listed in companies.csv
    python scripts/collect_yearly_prices.py --input companies.csv --output prices.csv

    # Input with two header rows, ten concurrent lookups
    python scripts/collect_yearly_prices.py --input companies.csv --output prices.csv \\
        --header 2 --concurrency 10

    # Health check only
    python scripts/collect_yearly_prices.py --health-check

Example:
    $ python scripts/collect_yearly_prices.py --input companies.csv --output prices.csv
    ... - YearlyPricePipeline - INFO - 0: トヨタ自動車
    ... - YearlyPricePipeline - INFO - 1: ソニーグループ
    ... - YearlyPricePipeline - INFO - Wrote 2 rows to prices.csv (0 companies not found)
"""

import sys

from nikkei_yprice.pipelines.yearly_price.run_yearly_price_pipeline import main

if __name__ == "__main__":
    sys.exit(main())
