"""
activation_app/services/report_exporter.py

CSV serialisation for the header template and the activation report.
Both functions are pure: they read their arguments and return text.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence

from activation_app.domain.membership import (
    ACTIVATION_STATUS_COLUMN,
    EXPECTED_HEADERS,
    AnnotatedRow,
)

HEADER_TEMPLATE_FILENAME = "csv_header_format.csv"
ACTIVATION_REPORT_FILENAME = "activation_results.csv"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"

REPORT_FIELDS: tuple[str, ...] = (*EXPECTED_HEADERS, ACTIVATION_STATUS_COLUMN)


def render_header_template() -> str:
    """Return the expected header row alone."""

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\r\n")
    writer.writerow(EXPECTED_HEADERS)
    return buf.getvalue()


def render_activation_report(rows: Sequence[AnnotatedRow]) -> str | None:
    """
    Return every row with its activation status, or ``None`` when empty.
    """

    if not rows:
        return None

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=REPORT_FIELDS, lineterminator="\r\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row.to_report_row())
    return buf.getvalue()
