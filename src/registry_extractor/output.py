"""Serialization of registrations to CSV and JSON Lines."""

import json
import logging
from typing import IO, Iterable

import pandas as pd

from .models import CSV_COLUMNS, Registration

logger = logging.getLogger(__name__)


def records_to_dataframe(records: Iterable[Registration]) -> pd.DataFrame:
    """Tabulate registrations with the CSV column names, all values as strings."""
    rows = [record.to_csv_row() for record in records]
    return pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)


def write_csv(records: Iterable[Registration], stream: IO[str]) -> None:
    """Write a semicolon-separated table with a header line."""
    df = records_to_dataframe(records)
    df.to_csv(stream, sep=';', index=False, lineterminator='\n')
    logger.debug(f"Wrote {len(df)} CSV rows")


def write_jsonl(records: Iterable[Registration], stream: IO[str]) -> None:
    """Write one JSON object per line."""
    count = 0
    for record in records:
        stream.write(json.dumps(record.to_dict(), ensure_ascii=False))
        stream.write('\n')
        count += 1
    logger.debug(f"Wrote {count} JSON lines")


def write_records(records: Iterable[Registration], output_format: str, stream: IO[str]) -> None:
    """Write records in the requested format.

    Raises:
        ValueError: For unsupported formats
    """
    if output_format == 'csv':
        write_csv(records, stream)
    elif output_format == 'jsonl':
        write_jsonl(records, stream)
    else:
        raise ValueError(f"Output {output_format!r} not supported")
