"""Nikkei yearly price history scraper.

Fetches /nkd/company/history/yprice?scode=<code> and reads the closing price
per year from the section headed "年間高安（過去10年）".

Page layout (simplified):

    <div class="m-headline"><h2 class="m-headline_text">年間高安（過去10年）</h2></div>
    <div>
      <table>
        <tr><th>年</th><td>始値</td><td>高値</td><td>安値</td><td>終値</td></tr>
        <tr><th>2022年</th><td>..</td><td>..</td><td>..</td><td>1,234(12/30)</td></tr>
      </table>
    </div>

Rows with an unsupported year label are ignored. A closing price that does
not parse is logged and the year keeps its 0.0 default.
"""

import threading

from bs4 import BeautifulSoup, Tag

from nikkei_yprice.ingestion.collectors.base_collector import BaseCollector
from nikkei_yprice.ingestion.collectors.nikkei_utils import (
    CLOSING_PRICE_SELECTOR,
    HEADLINE_SELECTOR,
    HEADLINE_TEXT_SELECTOR,
    STOCK_CODE_PARAM,
    SUPPORTED_YEARS,
    YEAR_HEADER_LABEL,
    YEARLY_PRICE_PATH,
    YEARLY_SECTION_LABEL,
    parse_price,
    parse_year_label,
)


def empty_prices() -> dict[int, float]:
    """Return a mapping with every supported year set to 0.0."""
    return dict.fromkeys(SUPPORTED_YEARS, 0.0)


class YearlyPriceCollector(BaseCollector):
    """Extracts yearly closing prices for a stock code."""

    SOURCE_NAME = "nikkei_yprice"

    @property
    def yearly_price_url(self) -> str:
        return f"{self.base_url}{YEARLY_PRICE_PATH}"

    def extract(
        self, stock_code: str, cancel_event: threading.Event | None = None
    ) -> dict[int, float]:
        """Fetch and parse the yearly price history of one company.

        Args:
            stock_code: Nikkei stock code (e.g. "7203").
            cancel_event: Run-wide abort flag, checked before the request.

        Returns:
            Mapping of every supported year to its closing price (0.0 if absent).

        Raises:
            UpstreamStatusError: On a non-2xx response.
            TransportError: On network failure.
        """
        response = self._get(
            self.yearly_price_url,
            params={STOCK_CODE_PARAM: stock_code},
            cancel_event=cancel_event,
        )
        return self.parse_prices(response.content, stock_code)

    def parse_prices(self, html: bytes | str, stock_code: str = "") -> dict[int, float]:
        """Parse closing prices out of a yearly price history page."""
        prices = empty_prices()
        soup = BeautifulSoup(html, "html.parser")

        found = False
        for headline in soup.select(HEADLINE_SELECTOR):
            label = "".join(t.get_text() for t in headline.select(HEADLINE_TEXT_SELECTOR))
            if label != YEARLY_SECTION_LABEL:
                continue
            found = True

            table = headline.find_next_sibling()
            if table is None:
                continue
            for row in table.find_all("tr"):
                self._parse_row(row, prices, stock_code)

        if not found:
            self.logger.warning("No yearly price section for %s", stock_code)
        return prices

    def _parse_row(self, row: Tag, prices: dict[int, float], stock_code: str) -> None:
        header = row.find("th")
        year_label = header.get_text() if header is not None else ""
        if year_label == YEAR_HEADER_LABEL:
            return

        year = parse_year_label(year_label)
        if year is None:
            return

        cell = row.select_one(CLOSING_PRICE_SELECTOR)
        price_text = cell.get_text().strip() if cell is not None else ""
        try:
            prices[year] = parse_price(price_text)
        except ValueError:
            self.logger.warning(
                "Could not parse closing price for %s year %d: %r",
                stock_code,
                year,
                price_text,
            )

    def health_check(self) -> bool:
        """Verify the yearly price page answers with a 2xx status.

        Returns:
            True if the history endpoint is available
        """
        try:
            response = self._get(self.yearly_price_url)
        except Exception as e:
            self.logger.warning("Health check failed: %s", e)
            return False

        self.logger.info("Health check OK: HTTP %s", response.status_code)
        return True
