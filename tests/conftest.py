"""Shared test fixtures and utilities."""

import threading
import time
from datetime import date

import pytest
from bs4 import BeautifulSoup

from registry_extractor.config import RunConfig
from registry_extractor.exceptions import FetchError

HEADER_LINE = (
    "Amtsgericht Stuttgart Aktenzeichen: HRB 776767\n"
    "Bekannt gemacht am: 01.02.2024 12:00 Uhr"
)
COMPANY_LINE = "HRB 776767: Acme GmbH, Stuttgart, Königstr. 10, 70173 Stuttgart."


def detail_html(header=HEADER_LINE, company=COMPANY_LINE, rows=6):
    """Build a detail page with the announcement laid out as table rows."""
    cells = [header, 'Neueintragungen', '01.02.2024', 'HRB 776767', 'Acme GmbH', company]
    cells += [f'Zusatz {i}' for i in range(max(0, rows - len(cells)))]
    body = ''.join(f'<tr><td>{cell}</td></tr>' for cell in cells[:rows])
    return (
        '<html><body><font face="Arial">'
        f'<table>{body}</table>'
        '</font></body></html>'
    )


def results_html(rb_ids, extra_links=()):
    """Build a results page linking to the given registry ids."""
    items = ''.join(
        f"<li><a href=\"javascript:NeuFenster('rb_id={rb_id}&amp;land_abk=bw')\">Eintrag {rb_id}</a></li>"
        for rb_id in rb_ids
    )
    items += ''.join(f'<li><a href="{href}">Other</a></li>' for href in extra_links)
    return f'<html><body><ul>{items}</ul></body></html>'


class FakeFetcher:
    """In-memory stand-in for PageFetcher."""

    def __init__(self, search_page, detail_pages=None, failing=(), delays=None,
                 search_error=None):
        self.search_page = search_page
        self.detail_pages = detail_pages or {}
        self.failing = set(failing)
        self.delays = delays or {}
        self.search_error = search_error
        self.posts = []
        self.gets = []
        self._lock = threading.Lock()
        self.closed = False

    def post(self, url, data):
        self.posts.append((url, data))
        if self.search_error:
            raise self.search_error
        return BeautifulSoup(self.search_page, 'html.parser')

    def get(self, url):
        with self._lock:
            self.gets.append(url)
        time.sleep(self.delays.get(url, 0))
        if url in self.failing:
            raise FetchError(url, 'connection reset')
        return BeautifulSoup(self.detail_pages.get(url, '<html></html>'), 'html.parser')

    def close(self):
        self.closed = True


@pytest.fixture
def sample_config():
    """Configuration with fixed dates and no delays."""
    return RunConfig(
        start_date=date(2024, 2, 1),
        end_date=date(2024, 2, 7),
        politeness_delay=0,
        show_progress=False,
        max_workers=4,
    )


@pytest.fixture
def header_line():
    return HEADER_LINE


@pytest.fixture
def company_line():
    return COMPANY_LINE


@pytest.fixture
def make_detail_html():
    return detail_html


@pytest.fixture
def make_results_html():
    return results_html


@pytest.fixture
def fake_fetcher():
    return FakeFetcher
