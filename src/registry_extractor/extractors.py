"""Field extractors for free-text register announcements.

Each extractor maps one line of announcement text to one field and returns
an ``Extraction``. Expected absence is reported through ``Extraction.error``
instead of raising, so a malformed line never aborts parsing of a page.

Line 0 of an announcement holds the court file number and the announcement
date, e.g.::

    Amtsgericht Stuttgart Aktenzeichen: HRB 776767
    Bekannt gemacht am: 01.02.2024 12:00 Uhr

Line 5 holds the entity name, seat and address, comma separated::

    HRB 776767: Acme GmbH, Stuttgart, Königstr. 10, 70173 Stuttgart.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from .utils import section_at, shorten

MAX_ADDRESS_LENGTH = 35
DATE_LAYOUT = '%d.%m.%Y %H:%M'

# Value after the first colon + whitespace, up to the end of that line
_REG_NO_PATTERN = re.compile(r':[^\S\n](.*)\n')
_DATE_PATTERN = re.compile(r"(?:Bekannt gemacht am|announced on):(.*?)(?:Uhr|o'clock)", re.IGNORECASE)
_DATE_PAYLOAD_PATTERN = re.compile(r'^\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}$')
# Greedy prefix picks the last 5-digit run on the line, skipping register numbers
_POSTAL_CODE_PATTERN = re.compile(r'.*(\d{5})')


@dataclass(frozen=True)
class Extraction:
    """Outcome of a single field extraction.

    Attributes:
        value: Extracted value (None when not found)
        error: Failure message, None on success
        warning: Non-fatal anomaly noticed during extraction
    """

    value: Any = None
    error: Optional[str] = None
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def found(value: Any, warning: Optional[str] = None) -> Extraction:
    return Extraction(value=value, warning=warning)


def not_found(message: str) -> Extraction:
    return Extraction(error=message)


def extract_reg_no(text: str) -> Extraction:
    """Extract the court file / registration number from the header line.

    Args:
        text: Header line, ``<label>: <value>\\n<trailing>``

    Returns:
        Extraction with the untrimmed number, or a failure echoing the text
    """
    match = _REG_NO_PATTERN.search(text or '')
    if not match:
        return not_found(f"unable to extract company registration number: {text!r}")
    return found(match.group(1))


def extract_registration_date(text: str) -> Extraction:
    """Extract the announcement date-time from the header line.

    The payload between the marker phrase and the time unit must match
    ``DD.MM.YYYY HH:MM`` exactly. Parsed timestamps are UTC.

    Args:
        text: Header line containing "Bekannt gemacht am:" / "announced on:"

    Returns:
        Extraction with a timezone-aware datetime
    """
    match = _DATE_PATTERN.search(text or '')
    if not match:
        return not_found("unable to extract company registration date")

    payload = match.group(1).strip()
    if not _DATE_PAYLOAD_PATTERN.match(payload):
        return not_found(f"unable to extract company reg date: {payload!r} does not match DD.MM.YYYY HH:MM")

    try:
        parsed = datetime.strptime(payload, DATE_LAYOUT)
    except ValueError as e:
        return not_found(f"unable to extract company reg date: {e}")

    return found(parsed.replace(tzinfo=timezone.utc))


def extract_name(text: str) -> Extraction:
    """Extract the legal entity name: first comma section, after ``": "``."""
    first = section_at(text or '', 0)
    parts = first.split(': ') if first is not None else []
    if len(parts) < 2:
        return not_found(f"unable to extract company name: {text!r}")
    return found(parts[1])


def extract_address(text: str) -> Extraction:
    """Extract the street address (third comma section).

    Sections longer than MAX_ADDRESS_LENGTH are returned anyway but carry a
    warning, since they usually mean the comma layout was not the expected one.
    """
    address = section_at(text or '', 2)
    if address is None:
        return not_found(f"unable to extract company address: {text!r}")

    if len(address) > MAX_ADDRESS_LENGTH:
        warning = f"suspiciously long address ({len(address)} chars) in: {shorten(text, 120)}"
        return found(address, warning=warning)

    return found(address)


def extract_city(text: str) -> Extraction:
    """Extract the city (second comma section)."""
    city = section_at(text or '', 1)
    if city is None:
        return not_found(f"unable to extract company city: {text!r}")
    return found(city)


def extract_postal_code(text: str) -> Extraction:
    """Extract a five digit postal code from anywhere in the line."""
    match = _POSTAL_CODE_PATTERN.search(text or '')
    if not match:
        return not_found(f"unable to extract company postal code: {text!r}")
    return found(match.group(1))
