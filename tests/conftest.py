"""
Root pytest configuration.

Provides canned nikkei.com pages and a factory for fake HTTP responses so
collector and pipeline tests never touch the network.
"""

from unittest.mock import Mock

import pytest

SEARCH_LISTING_HTML = """
<html>
  <body>
    <ul class="m-companyList">
      <li class="m-companyList_item">
        <a class="m-companyList_item_data_name" href="/nkd/company/?scode=7201"> 日産自動車 </a>
      </li>
      <li class="m-companyList_item">
        <a class="m-companyList_item_data_name" href="/nkd/company/?scode=7203&amp;ba=1">
          トヨタ自動車
        </a>
      </li>
      <li class="m-companyList_item">
        <a class="m-companyList_item_data_name" href="/nkd/company/?scode=9999">トヨタ自動車</a>
      </li>
      <li class="m-companyList_item">
        <a class="m-companyList_item_data_name" href="/nkd/company/?scode=5332">TOTO</a>
      </li>
    </ul>
  </body>
</html>
"""

YEARLY_PRICE_HTML = """
<html>
  <body>
    <div class="m-headline"><h2 class="m-headline_text">株価推移</h2></div>
    <div>
      <table>
        <tr><th>2021年</th><td>1</td><td>2</td><td>3</td><td>999(12/30)</td></tr>
      </table>
    </div>
    <div class="m-headline"><h2 class="m-headline_text">年間高安（過去10年）</h2></div>
    <div class="m-tableType01">
      <table>
        <thead>
          <tr><th>年</th><td>始値</td><td>高値</td><td>安値</td><td>終値</td></tr>
        </thead>
        <tbody>
          <tr><th>2022年</th><td>1,000(1/4)</td><td>2,000(3/1)</td><td>900(6/1)</td><td>1,234(△56)</td></tr>
          <tr><th>2021年</th><td>1,100(1/4)</td><td>1,900(3/1)</td><td>800(6/1)</td><td>1,500.5(12/30)</td></tr>
          <tr><th>2020年</th><td>-</td><td>-</td><td>-</td><td>--</td></tr>
          <tr><th>2013年</th><td>300(1/4)</td><td>600(5/1)</td><td>250(6/1)</td><td>512(12/30)</td></tr>
          <tr><th>2012年</th><td>100(1/4)</td><td>200(3/1)</td><td>90(6/1)</td><td>800(12/28)</td></tr>
        </tbody>
      </table>
    </div>
  </body>
</html>
"""

NO_SECTION_HTML = """
<html>
  <body>
    <div class="m-headline"><h2 class="m-headline_text">株価推移</h2></div>
    <div><table><tr><th>2022年</th><td>1</td><td>2</td><td>3</td><td>10(12/30)</td></tr></table></div>
  </body>
</html>
"""


def _make_response(
    status_code: int = 200,
    content: str | bytes = b"",
    url: str = "https://www.nikkei.com/nkd/search",
) -> Mock:
    """Build a Mock shaped like a requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.url = url
    response.content = content.encode("utf-8") if isinstance(content, str) else content
    return response


@pytest.fixture
def make_response():
    """Factory fixture for fake requests.Response objects."""
    return _make_response


@pytest.fixture
def search_listing_html() -> str:
    return SEARCH_LISTING_HTML


@pytest.fixture
def yearly_price_html() -> str:
    return YEARLY_PRICE_HTML


@pytest.fixture
def no_section_html() -> str:
    return NO_SECTION_HTML


@pytest.fixture
def mock_session() -> Mock:
    return Mock()
