"""Per-page-type handlers for results pages and detail pages.

A handler takes a parsed page and returns a ``PageOutcome``: zero or more
follow-up URLs to fetch and zero or one record. The crawler composes them.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup

from .config import RunConfig
from .models import Registration
from .parser import parse_registration

logger = logging.getLogger(__name__)

RESULT_LINK_SELECTOR = 'li > a[href]'
ANNOUNCEMENT_CONTAINER = 'font'
ANNOUNCEMENT_ROW = 'tr'

# e.g. javascript:NeuFenster('rb_id=742541&land_abk=bw')
_RB_ID_PATTERN = re.compile(r"rb_id=([^&'\"]+)&")


@dataclass
class PageOutcome:
    """What a handler produced for one page."""

    follow_ups: List[str] = field(default_factory=list)
    record: Optional[Registration] = None


def extract_rb_id(href: str) -> Optional[str]:
    """Return the registry id bound to ``rb_id`` in a link target, if any."""
    match = _RB_ID_PATTERN.search(href or '')
    if not match:
        return None
    return match.group(1)


class SearchResultHandler:
    """Discover detail pages linked from a search results page."""

    def __init__(self, config: RunConfig):
        self.config = config

    def handle(self, page: BeautifulSoup, url: str = '') -> PageOutcome:
        """Collect one detail URL per matching link, in document order.

        Repeated links are kept; each one yields its own fetch.
        """
        follow_ups = []
        links = page.select(RESULT_LINK_SELECTOR)

        for link in links:
            rb_id = extract_rb_id(link.get('href', ''))
            if rb_id is None:
                continue
            follow_ups.append(self.config.detail_url(rb_id))

        logger.info(f"Found {len(follow_ups)} detail links among {len(links)} result links")
        return PageOutcome(follow_ups=follow_ups)


class DetailPageHandler:
    """Turn a detail page into a Registration."""

    def announcement_lines(self, page: BeautifulSoup) -> List[str]:
        """Text of every row inside the announcement container, in document order.

        Row text is kept raw (line breaks included) because the header
        extractors rely on them.
        """
        for container in page.select(ANNOUNCEMENT_CONTAINER):
            rows = container.find_all(ANNOUNCEMENT_ROW)
            if rows:
                return [row.get_text() for row in rows]
        return []

    def handle(self, page: BeautifulSoup, url: str = '') -> PageOutcome:
        lines = self.announcement_lines(page)
        if not lines:
            logger.debug(f"No announcement rows on {url or 'detail page'}, skipping")
            return PageOutcome()

        return PageOutcome(record=parse_registration(lines, source=url))
