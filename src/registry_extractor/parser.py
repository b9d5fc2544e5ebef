"""Assemble a Registration from the text lines of one detail page."""

import logging
from typing import Callable, Optional, Sequence

from .extractors import (
    Extraction,
    extract_address,
    extract_city,
    extract_name,
    extract_postal_code,
    extract_reg_no,
    extract_registration_date,
)
from .models import Registration

logger = logging.getLogger(__name__)

HEADER_LINE = 0
COMPANY_LINE = 5


def _line_at(lines: Sequence[str], index: int) -> Optional[str]:
    if index < len(lines):
        return lines[index]
    return None


def _run(extractor: Callable[[str], Extraction], line: Optional[str], index: int,
         source: str) -> Extraction:
    """Apply an extractor to a positional line and log any failure."""
    if line is None:
        result = Extraction(error=f"{extractor.__name__}: line {index} missing")
    else:
        result = extractor(line)

    if result.error:
        logger.warning(f"{source}: {result.error}")
    elif result.warning:
        logger.warning(f"{source}: {result.warning}")
    return result


def _text(result: Extraction) -> str:
    return result.value.strip() if result.ok and result.value is not None else ''


def parse_registration(lines: Sequence[str], source: str = '') -> Registration:
    """Build a Registration from the ordered announcement lines.

    Parsing is best-effort: every field whose extraction fails keeps its
    zero value and the failure is logged. Lines missing from a short page
    count as extraction failures for the fields they would have supplied.

    Args:
        lines: Text of each structural row in document order
        source: Page URL, used only for log messages

    Returns:
        A (possibly partially populated) Registration
    """
    source = source or 'detail page'
    header = _line_at(lines, HEADER_LINE)
    company = _line_at(lines, COMPANY_LINE)

    if company is None:
        logger.debug(f"{source}: only {len(lines)} rows, company fields unavailable")

    date_result = _run(extract_registration_date, header, HEADER_LINE, source)

    return Registration(
        reg_no=_text(_run(extract_reg_no, header, HEADER_LINE, source)),
        date=date_result.value if date_result.ok else None,
        name=_text(_run(extract_name, company, COMPANY_LINE, source)),
        address=_text(_run(extract_address, company, COMPANY_LINE, source)),
        city=_text(_run(extract_city, company, COMPANY_LINE, source)),
        postal_code=_text(_run(extract_postal_code, company, COMPANY_LINE, source)),
    )
