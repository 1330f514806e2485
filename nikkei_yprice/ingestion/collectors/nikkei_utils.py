"""Shared Nikkei utilities for company lookup and yearly price scraping.

Provides the page selectors, label constants, parsing helpers and the HTTP
session factory used by StockCodeCollector and YearlyPriceCollector.
"""

import math
import re
from urllib.parse import parse_qs, urlparse

import requests
from requests.adapters import HTTPAdapter

from nikkei_yprice.shared.config import Config

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SEARCH_PATH = "/nkd/search"
YEARLY_PRICE_PATH = "/nkd/company/history/yprice"

SEARCH_QUERY_PARAM = "searchKeyword"
STOCK_CODE_PARAM = "scode"

# Search result listing
COMPANY_NAME_SELECTOR = ".m-companyList_item_data_name"

# Yearly price history page
HEADLINE_SELECTOR = ".m-headline"
HEADLINE_TEXT_SELECTOR = ".m-headline_text"
YEARLY_SECTION_LABEL = "年間高安（過去10年）"
YEAR_HEADER_LABEL = "年"
# 5th cell of each row: closing price followed by its date, e.g. "1,234(12/30)"
CLOSING_PRICE_SELECTOR = "td:nth-child(5)"

# Years the output schema reserves a column for
SUPPORTED_YEARS: tuple[int, ...] = tuple(range(2013, 2023))

_YEAR_LABEL_RE = re.compile(r"^(\d{4})年$")

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def extract_stock_code(url: str | None) -> str:
    """Return the scode query parameter of a URL, or "" if absent.

    Example:
        >>> extract_stock_code("/nkd/company/?scode=8304&ba=1")
        '8304'
        >>> extract_stock_code("/nkd/company/")
        ''
    """
    if not url:
        return ""
    values = parse_qs(urlparse(url).query).get(STOCK_CODE_PARAM)
    return values[0] if values else ""


def parse_year_label(label: str) -> int | None:
    """Map a row label such as "2019年" to a supported year.

    Returns:
        The year, or None when the label is not a supported year.

    Example:
        >>> parse_year_label("2019年")
        2019
        >>> parse_year_label("2001年") is None
        True
    """
    match = _YEAR_LABEL_RE.match(label.strip())
    if not match:
        return None
    year = int(match.group(1))
    return year if year in SUPPORTED_YEARS else None


def parse_price(text: str) -> float:
    """Parse a closing price cell into a float.

    Everything from the first "(" on is dropped and "," grouping separators
    are removed before parsing.

    Raises:
        ValueError: If the remainder is not a finite, non-negative number.

    Example:
        >>> parse_price("1,234(△56)")
        1234.0
    """
    raw = text.split("(")[0].replace(",", "").strip()
    value = float(raw)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"price out of range: {raw}")
    return value


# ---------------------------------------------------------------------------
# HTTP Session
# ---------------------------------------------------------------------------


def create_nikkei_session(pool_size: int = 10) -> requests.Session:
    """Create a requests session for nikkei.com.

    Failed requests are not retried. The connection pool is sized so that
    `pool_size` concurrent workers can share the session.

    Example:
        >>> session = create_nikkei_session(pool_size=5)
        >>> response = session.get("https://www.nikkei.com/nkd/search")
    """
    session = requests.Session()

    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    session.headers.update(
        {
            "User-Agent": Config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "ja,en-US;q=0.7,en;q=0.3",
        }
    )

    return session
