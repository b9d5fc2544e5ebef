"""Utility functions and helpers."""

import logging
from datetime import date
from typing import Optional


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging with proper formatting.

    Log output goes to stderr so that records written to stdout stay clean.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def section_at(text: str, index: int, separator: str = ',') -> Optional[str]:
    """Return the Nth delimited section of a line, or None if out of range.

    Args:
        text: Line of announcement text
        index: Zero-based section index
        separator: Section delimiter (default: comma)

    Returns:
        The raw (untrimmed) section or None
    """
    sections = text.split(separator)
    if index < 0 or index >= len(sections):
        return None
    return sections[index]


def today() -> date:
    """Current local date (wrapped so tests can patch it)."""
    return date.today()


def shorten(text: str, limit: int = 80) -> str:
    """Shorten text for log messages, keeping it on a single line."""
    single = ' '.join(text.split())
    if len(single) <= limit:
        return single
    return single[:limit - 3] + '...'
