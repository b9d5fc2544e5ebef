"""Crawl orchestration: search submission and detail-page fan-out."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

from tqdm import tqdm

from .config import RunConfig
from .exceptions import FetchError, SearchError
from .fetcher import PageFetcher
from .handlers import DetailPageHandler, SearchResultHandler
from .models import DateRange, Registration

logger = logging.getLogger(__name__)


def build_search_params(date_range: DateRange) -> Dict[str, str]:
    """Translate a date range into the registry's search form fields.

    Day and month are sent without zero padding. The remaining keys are
    fixed values the search endpoint expects verbatim.
    """
    start, end = date_range.start, date_range.end
    return {
        'suchart': 'uneingeschr',
        'button': 'Suche+starten',
        'vt': str(start.day),
        'vm': str(start.month),
        'vj': str(start.year),
        'bt': str(end.day),
        'bm': str(end.month),
        'bj': str(end.year),
        'land': '',
        'gericht': '',
        'gericht_name': '',
        'seite': '',
        'l': '',
        'r': '',
        'all': 'false',
        'rubrik': '',
        'az': '',
        'gegenstand': '0',
        'order': '4',
    }


@dataclass
class CrawlStats:
    """Counters for one crawl run."""

    links_found: int = 0
    pages_fetched: int = 0
    pages_failed: int = 0
    pages_skipped: int = 0
    records: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class RegistrationCrawler:
    """Search the registry for a date range and collect registrations."""

    def __init__(self, config: RunConfig, fetcher: Optional[PageFetcher] = None):
        """Initialize crawler.

        Args:
            config: Run configuration
            fetcher: Fetch engine (defaults to a PageFetcher for config)
        """
        self.config = config
        self.fetcher = fetcher or PageFetcher(config)
        self.search_handler = SearchResultHandler(config)
        self.detail_handler = DetailPageHandler()
        self.stats = CrawlStats()

    def search(self, date_range: DateRange) -> List[str]:
        """Submit the search and return detail URLs in discovery order.

        Raises:
            SearchError: If the search submission fails
        """
        params = build_search_params(date_range)
        logger.info(f"Searching announcements from {date_range.start} to {date_range.end}")

        try:
            page = self.fetcher.post(self.config.search_url, params)
        except FetchError as e:
            raise SearchError(f"Search submission failed: {e}") from e

        outcome = self.search_handler.handle(page, self.config.search_url)
        self.stats.links_found = len(outcome.follow_ups)
        return outcome.follow_ups

    def fetch_registration(self, url: str) -> Optional[Registration]:
        """Fetch and parse one detail page.

        Raises:
            FetchError: If the page cannot be fetched
        """
        page = self.fetcher.get(url)
        return self.detail_handler.handle(page, url).record

    def collect(self, date_range: Optional[DateRange] = None) -> List[Registration]:
        """Run the full crawl.

        Detail pages are fetched by a bounded thread pool. A failed detail
        fetch is logged and yields no record; the other fetches carry on.
        Records are returned in the order their links appeared on the
        results page.

        Args:
            date_range: Search window (defaults to the configured range)

        Returns:
            Registrations in link discovery order

        Raises:
            SearchError: If the initial search submission fails
        """
        date_range = date_range or self.config.date_range
        self.stats = CrawlStats()

        urls = self.search(date_range)
        slots: List[Optional[Registration]] = [None] * len(urls)

        if urls:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = {executor.submit(self.fetch_registration, url): index
                           for index, url in enumerate(urls)}

                with tqdm(total=len(urls), desc="Fetching announcements",
                          disable=not self.config.show_progress) as pbar:
                    for future in as_completed(futures):
                        index = futures[future]
                        try:
                            record = future.result()
                        except FetchError as e:
                            logger.warning(str(e))
                            self.stats.pages_failed += 1
                        else:
                            self.stats.pages_fetched += 1
                            if record is None:
                                self.stats.pages_skipped += 1
                            slots[index] = record
                        pbar.update(1)

        registrations = [record for record in slots if record is not None]
        self.stats.records = len(registrations)

        logger.info(f"Crawl complete: {self.stats.records} registrations from "
                    f"{self.stats.links_found} links")
        if self.stats.pages_failed:
            logger.info(f"Failed detail pages: {self.stats.pages_failed}")

        return registrations


def collect_registrations(config: RunConfig) -> List[Registration]:
    """Convenience wrapper: crawl the configured date range."""
    crawler = RegistrationCrawler(config)
    try:
        return crawler.collect()
    finally:
        crawler.fetcher.close()
