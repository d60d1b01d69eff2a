"""
activation_app/services/csv_decoder.py

Turn uploaded CSV text into raw membership records.

The first non-empty line is the header and must match ``EXPECTED_HEADERS``
exactly (names, order, case) before any data row is decoded. Lines with
no cells are skipped; a line of bare commas is kept as a record of empty
strings. Rows shorter than the header leave the missing columns as
``None``; surplus cells are dropped.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence

from activation_app.domain.membership import EXPECTED_HEADERS, InputRecord

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVDecodeError(ValueError):
    """
    Raised when an upload cannot be decoded into records at all.
    """


class CSVHeaderMismatchError(CSVDecodeError):
    """
    Raised when the header row differs from the expected column order.
    """

    def __init__(self, found: Sequence[str]) -> None:
        super().__init__(
            f"CSV header does not match expected order. Expected: {', '.join(EXPECTED_HEADERS)}"
        )
        self.found = tuple(found)


class CSVParseError(CSVDecodeError):
    """
    Raised when the payload is not valid UTF-8 CSV.
    """


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_csv_bytes(payload: bytes) -> list[InputRecord]:
    """
    Decode a UTF-8 payload (optional BOM) and parse it with ``decode_csv``.
    """

    try:
        text = payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CSVParseError("CSV must be UTF-8 encoded.") from exc
    return decode_csv(text)


def decode_csv(text: str) -> list[InputRecord]:
    """
    Parse CSV text into records keyed by the expected headers.

    Raises:
        CSVHeaderMismatchError: header row missing or not exactly ``EXPECTED_HEADERS``.
        CSVParseError: malformed CSV syntax.
    """

    if text.startswith(_BOM):
        text = text[len(_BOM):]

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    records: list[InputRecord] = []
    headers: list[str] | None = None

    try:
        for cells in reader:
            if not cells:
                continue
            if headers is None:
                headers = cells
                if tuple(headers) != EXPECTED_HEADERS:
                    logger.warning("CSV header mismatch found=%s", headers)
                    raise CSVHeaderMismatchError(headers)
                continue
            records.append(_to_record(cells))
    except csv.Error as exc:
        logger.warning("CSV parse failure line=%s error=%s", reader.line_num, exc)
        raise CSVParseError(f"Invalid CSV format on line {reader.line_num}: {exc}") from exc

    if headers is None:
        raise CSVHeaderMismatchError(())

    return records


def _to_record(cells: Sequence[str]) -> dict[str, str | None]:
    return {
        header: cells[position] if position < len(cells) else None
        for position, header in enumerate(EXPECTED_HEADERS)
    }
