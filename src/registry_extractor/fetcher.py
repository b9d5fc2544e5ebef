"""HTTP fetch engine: retrying session, politeness and HTML parsing."""

import logging
import threading
import time
from typing import Dict, Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import RunConfig
from .exceptions import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetch registry pages and hand back parsed DOM trees."""

    def __init__(self, config: RunConfig, session: Optional[requests.Session] = None):
        """Initialize fetcher.

        Args:
            config: Run configuration
            session: Pre-built session (tests inject mocks here)
        """
        self.config = config
        self.session = session or self._create_session()
        self._lock = threading.Lock()
        self._last_request_time: Optional[float] = None

    def _create_session(self) -> requests.Session:
        """Create requests session with retry logic.

        Returns:
            Configured session
        """
        session = requests.Session()

        # POSTs are not retried: the search submission is not idempotent
        retry_strategy = Retry(
            total=self.config.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'de-DE,de;q=0.9,en;q=0.8',
        })

        return session

    def _wait(self) -> None:
        """Space consecutive requests at least politeness_delay apart."""
        with self._lock:
            if self._last_request_time is not None:
                elapsed = time.monotonic() - self._last_request_time
                if elapsed < self.config.politeness_delay:
                    time.sleep(self.config.politeness_delay - elapsed)
            self._last_request_time = time.monotonic()

    def _parse(self, response: requests.Response) -> BeautifulSoup:
        return BeautifulSoup(response.content, 'html.parser')

    def get(self, url: str) -> BeautifulSoup:
        """Fetch a page with GET.

        Raises:
            FetchError: On transport failure or non-success status
        """
        self._wait()
        try:
            response = self.session.get(url, timeout=self.config.request_timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FetchError(url, str(e)) from e

        logger.debug(f"GET {url} -> {response.status_code}")
        return self._parse(response)

    def post(self, url: str, data: Dict[str, str]) -> BeautifulSoup:
        """Submit a form-encoded POST and parse the response page.

        Raises:
            FetchError: On transport failure or non-success status
        """
        self._wait()
        try:
            response = self.session.post(url, data=data, timeout=self.config.request_timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FetchError(url, str(e)) from e

        logger.debug(f"POST {url} -> {response.status_code}")
        return self._parse(response)

    def close(self) -> None:
        self.session.close()
