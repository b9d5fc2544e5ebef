"""Configuration management for registry crawling runs."""

import logging
import os
from dataclasses import dataclass, asdict
from datetime import date, datetime
from pathlib import Path
from typing import Union
from urllib.parse import urlparse

import yaml

from .models import DateRange
from .utils import today

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('csv', 'jsonl')
DATE_FORMAT = '%Y-%m-%d'


def parse_date(value: Union[str, date, None], label: str = 'date') -> date:
    """Parse a ``YYYY-MM-DD`` date string.

    Args:
        value: Date string, date object, or None for today
        label: Name used in the error message

    Returns:
        Parsed date

    Raises:
        ValueError: If the string is not a valid ``YYYY-MM-DD`` date
    """
    if value is None:
        return today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise ValueError(f"Unable to parse {label} parameter {text!r}: {e}") from e


@dataclass
class RunConfig:
    """Configuration for a single crawl run.

    Attributes:
        start_date: First announcement day to search for (inclusive, default today)
        end_date: Last announcement day to search for (inclusive, default today)
        output_format: Output format, 'csv' or 'jsonl'
        base_url: Registry host (scheme + netloc)
        search_path: Path (and fragment) the search form posts to
        detail_path: Path of the per-announcement detail script
        land_abk: Fixed jurisdiction code substituted into detail URLs
        max_workers: Maximum concurrent detail-page fetches
        politeness_delay: Seconds to wait between requests per worker
        request_timeout: HTTP request timeout in seconds
        max_retries: Retries for idempotent requests on 429/5xx
        user_agent: User agent string for HTTP requests
        show_progress: Whether to display a progress bar for detail fetches
    """

    start_date: Union[date, str, None] = None
    end_date: Union[date, str, None] = None
    output_format: str = 'csv'

    # Registry endpoints
    base_url: str = 'https://www.handelsregisterbekanntmachungen.de'
    search_path: str = '/?aktion=suche#Ergebnis'
    detail_path: str = '/skripte/hrb.php'
    land_abk: str = 'bw'

    # Crawling behavior
    max_workers: int = 4
    politeness_delay: float = 0.2
    request_timeout: int = 30
    max_retries: int = 3
    user_agent: str = "RegistryExtractor/1.0 (+https://www.handelsregisterbekanntmachungen.de)"
    show_progress: bool = True

    def __post_init__(self):
        """Validate and normalize configuration."""
        self.start_date = parse_date(self.start_date, 'start date')
        self.end_date = parse_date(self.end_date, 'end date')

        if self.start_date > self.end_date:
            logger.warning(f"Start date {self.start_date} is after end date {self.end_date}")

        self.output_format = str(self.output_format).strip().lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Output {self.output_format!r} not supported. Use one of: {', '.join(OUTPUT_FORMATS)}"
            )

        self.base_url = self.base_url.strip().rstrip('/')
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"Invalid base_url: {self.base_url}")
        if parsed.scheme != 'https':
            logger.warning(f"Base URL is not HTTPS: {self.base_url}")

        if not self.land_abk:
            raise ValueError("land_abk cannot be empty")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.politeness_delay < 0:
            raise ValueError(f"politeness_delay cannot be negative, got {self.politeness_delay}")

        logger.debug(f"Configuration initialized for {parsed.netloc}")
        logger.debug(f"Date range: {self.start_date} .. {self.end_date}")

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{self.search_path}"

    def detail_url(self, rb_id: str) -> str:
        """Build the fully-qualified detail page URL for a registry id.

        Args:
            rb_id: Registry identifier taken from a results page link

        Returns:
            Detail page URL with the configured jurisdiction code
        """
        return f"{self.base_url}{self.detail_path}?rb_id={rb_id}&land_abk={self.land_abk}"

    @classmethod
    def from_yaml(cls, path: Path, **overrides) -> "RunConfig":
        """Load configuration from a YAML file.

        Keyword overrides that are not None replace values from the file.
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    @classmethod
    def from_env(cls) -> "RunConfig":
        """Load configuration from REGISTRY_* environment variables."""
        kwargs = {}
        if os.getenv("REGISTRY_START_DATE"):
            kwargs['start_date'] = os.getenv("REGISTRY_START_DATE")
        if os.getenv("REGISTRY_END_DATE"):
            kwargs['end_date'] = os.getenv("REGISTRY_END_DATE")
        if os.getenv("REGISTRY_OUTPUT"):
            kwargs['output_format'] = os.getenv("REGISTRY_OUTPUT")
        if os.getenv("REGISTRY_BASE_URL"):
            kwargs['base_url'] = os.getenv("REGISTRY_BASE_URL")
        if os.getenv("REGISTRY_LAND"):
            kwargs['land_abk'] = os.getenv("REGISTRY_LAND")
        if os.getenv("REGISTRY_MAX_WORKERS"):
            kwargs['max_workers'] = int(os.getenv("REGISTRY_MAX_WORKERS"))
        return cls(**kwargs)

    def to_yaml(self, path: Path):
        """Save configuration to a YAML file."""
        data = asdict(self)
        data['start_date'] = self.start_date.strftime(DATE_FORMAT)
        data['end_date'] = self.end_date.strftime(DATE_FORMAT)

        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False)
