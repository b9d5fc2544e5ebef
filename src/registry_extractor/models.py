"""Data model: date ranges and registration records."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

CSV_COLUMNS = ['RegNo', 'Date', 'Name', 'Address', 'City', 'PostalCode']


@dataclass(frozen=True)
class DateRange:
    """Inclusive search window. ``start <= end`` is not enforced."""

    start: date
    end: date


@dataclass(frozen=True)
class Registration:
    """One structured company registry announcement.

    Attributes:
        reg_no: Court file / registration number (e.g. "HRB 12345")
        date: Announcement date-time in UTC, None if it could not be parsed
        name: Legal entity name
        address: Street address line
        city: City name
        postal_code: Five digit postal code
    """

    reg_no: str = ''
    date: Optional[datetime] = None
    name: str = ''
    address: str = ''
    city: str = ''
    postal_code: str = ''

    def _utc_date(self) -> datetime:
        """The date in UTC; naive values are taken to be UTC already."""
        if self.date.tzinfo is None:
            return self.date.replace(tzinfo=timezone.utc)
        return self.date.astimezone(timezone.utc)

    def formatted_date(self) -> str:
        """Render the date as ``YYYY-MM-DD HH:MM:SS +0000 UTC`` (empty if absent)."""
        if self.date is None:
            return ''
        value = self._utc_date()
        return value.strftime('%Y-%m-%d %H:%M:%S +0000 UTC')

    def iso_date(self) -> Optional[str]:
        """Render the date as RFC 3339 with a ``Z`` suffix, or None."""
        if self.date is None:
            return None
        value = self._utc_date()
        return value.strftime('%Y-%m-%dT%H:%M:%SZ')

    def to_csv_row(self) -> List[str]:
        return [
            self.reg_no,
            self.formatted_date(),
            self.name,
            self.address,
            self.city,
            self.postal_code,
        ]

    def to_dict(self) -> Dict[str, Optional[str]]:
        """JSON-ready mapping using the public field names."""
        return {
            'regNo': self.reg_no,
            'date': self.iso_date(),
            'name': self.name,
            'address': self.address,
            'city': self.city,
            'postalCode': self.postal_code,
        }
