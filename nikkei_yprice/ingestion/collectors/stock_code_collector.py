"""Nikkei company search: resolve a company name to its stock code.

Resolution order:
1. Search request. Nikkei redirects an unambiguous query straight to the
   company page, whose URL carries the code in its `scode` parameter.
2. Otherwise scan the rendered result listing and take the first entry whose
   trimmed display name equals the query exactly.
3. No match -> "" (not an error).

Matching is exact on purpose. Names that differ only in case, character
width (e.g. ＡＢＣ vs ABC) or inner whitespace stay unresolved.

Example usage:
    >>> collector = StockCodeCollector()
    >>> collector.resolve("トヨタ自動車")
    '7203'
"""

import threading

from bs4 import BeautifulSoup

from nikkei_yprice.ingestion.collectors.base_collector import BaseCollector
from nikkei_yprice.ingestion.collectors.nikkei_utils import (
    COMPANY_NAME_SELECTOR,
    SEARCH_PATH,
    SEARCH_QUERY_PARAM,
    extract_stock_code,
)


class StockCodeCollector(BaseCollector):
    """Resolves company names through the Nikkei search page."""

    SOURCE_NAME = "nikkei_search"

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{SEARCH_PATH}"

    def resolve(self, entity_name: str, cancel_event: threading.Event | None = None) -> str:
        """Look up the stock code for a company name.

        Args:
            entity_name: Company name exactly as listed on Nikkei.
            cancel_event: Run-wide abort flag, checked before the request.

        Returns:
            Stock code, or "" when no listed company matches.

        Raises:
            UpstreamStatusError: On a non-2xx search response.
            TransportError: On network failure.
        """
        response = self._get(
            self.search_url,
            params={SEARCH_QUERY_PARAM: entity_name},
            cancel_event=cancel_event,
        )

        # Fast path: redirected to the company page
        code = extract_stock_code(response.url)
        if code:
            self.logger.debug("Resolved %s -> %s via redirect", entity_name, code)
            return code

        code = self._scan_listing(response.content, entity_name)
        if code:
            self.logger.debug("Resolved %s -> %s via search listing", entity_name, code)
        else:
            self.logger.warning("No matching company found: %s", entity_name)
        return code

    def _scan_listing(self, html: bytes | str, entity_name: str) -> str:
        """Return the code of the first listing entry named entity_name.

        Scanning stops at the first name match, even when that entry has no
        usable link.
        """
        soup = BeautifulSoup(html, "html.parser")
        for entry in soup.select(COMPANY_NAME_SELECTOR):
            if entry.get_text().strip() != entity_name:
                continue
            return extract_stock_code(entry.get("href"))
        return ""

    def health_check(self) -> bool:
        """Verify the search page answers with a 2xx status.

        Returns:
            True if the search endpoint is available
        """
        try:
            response = self._get(self.search_url, params={SEARCH_QUERY_PARAM: ""})
        except Exception as e:
            self.logger.warning("Health check failed: %s", e)
            return False

        self.logger.info("Health check OK: HTTP %s", response.status_code)
        return True
