"""Abstract base class for Nikkei page collectors.

Holds the shared requests session and the status/transport error mapping so
that every network call made by the pipeline fails the same way:

- non-2xx status  -> UpstreamStatusError
- network failure -> TransportError
- run aborted     -> RunCancelledError (checked before each request)
"""

import threading
from abc import ABC, abstractmethod
from pathlib import Path

import requests

from nikkei_yprice.ingestion.collectors.nikkei_utils import create_nikkei_session
from nikkei_yprice.shared.config import Config
from nikkei_yprice.shared.errors import RunCancelledError, TransportError, UpstreamStatusError
from nikkei_yprice.shared.utils import setup_logger


class BaseCollector(ABC):
    """Base class for Nikkei collectors.

    Subclasses must define:
        SOURCE_NAME (str): identifier used in log messages.

    Subclasses must implement:
        health_check(): verify the endpoint is reachable.
    """

    SOURCE_NAME: str

    def __init__(
        self,
        session: requests.Session | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        pool_size: int = 10,
        log_file: Path | None = None,
        log_level: int | str | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            session: Session to reuse; a new one is created if omitted.
            base_url: Site root (default: Config.NIKKEI_BASE_URL).
            timeout: Per-request timeout in seconds (default: Config.REQUEST_TIMEOUT).
            pool_size: Connection pool size for a newly created session.
            log_file: Optional path for file-based logging.
            log_level: Logger level (default: Config.LOG_LEVEL).
        """
        self.base_url = (base_url or Config.NIKKEI_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.session = session if session is not None else create_nikkei_session(pool_size)
        self.logger = setup_logger(
            self.__class__.__name__, log_file, log_level or Config.LOG_LEVEL
        )

    @abstractmethod
    def health_check(self) -> bool:
        """Verify the endpoint is reachable and responding.

        Returns:
            True if the endpoint is available, False otherwise.
        """
        ...

    def _get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> requests.Response:
        """GET a page and map failures onto the pipeline error types.

        Raises:
            RunCancelledError: If cancel_event is already set.
            TransportError: If the request fails without a response.
            UpstreamStatusError: If the final response status is not 2xx.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise RunCancelledError(f"{self.SOURCE_NAME}: run aborted before request to {url}")

        self.logger.debug("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise UpstreamStatusError(response.status_code, url)
        return response
