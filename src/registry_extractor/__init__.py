"""Company registration announcement extractor.

Crawls the German commercial register announcement search for a date range,
follows every result to its detail page and parses the free-text
announcement into structured registration records.
"""

__version__ = "1.0.0"

from .config import RunConfig, parse_date
from .models import DateRange, Registration
from .utils import setup_logging
from .extractors import (
    Extraction,
    extract_address,
    extract_city,
    extract_name,
    extract_postal_code,
    extract_reg_no,
    extract_registration_date,
)
from .parser import parse_registration
from .handlers import DetailPageHandler, SearchResultHandler
from .crawler import RegistrationCrawler, build_search_params, collect_registrations
from .output import write_csv, write_jsonl, write_records

__all__ = [
    # Configuration
    'RunConfig',
    'parse_date',

    # Data model
    'DateRange',
    'Registration',

    # Utilities
    'setup_logging',

    # Field extraction
    'Extraction',
    'extract_reg_no',
    'extract_registration_date',
    'extract_name',
    'extract_address',
    'extract_city',
    'extract_postal_code',
    'parse_registration',

    # Crawling
    'SearchResultHandler',
    'DetailPageHandler',
    'RegistrationCrawler',
    'build_search_params',
    'collect_registrations',

    # Output
    'write_csv',
    'write_jsonl',
    'write_records',
]
