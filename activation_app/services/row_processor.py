"""
activation_app/services/row_processor.py

Partition decoded records into validated rows and per-field error messages.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from activation_app.domain.membership import InputRecord, RowValidationError, ValidatedRow
from activation_app.validators.membership_validator import MembershipRowValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowProcessingResult:
    """
    Valid rows in input order plus every field failure.
    """

    valid_rows: list[ValidatedRow] = field(default_factory=list)
    errors: list[RowValidationError] = field(default_factory=list)
    rows_received: int = 0

    @property
    def rows_invalid(self) -> int:
        return self.rows_received - len(self.valid_rows)

    @property
    def error_messages(self) -> list[str]:
        return [error.render() for error in self.errors]


class RowProcessor:
    """
    Applies the membership validator to each record, in order.
    """

    def __init__(
        self,
        *,
        validator: MembershipRowValidator | None = None,
        log_validation_errors: bool = True,
    ) -> None:
        self._validator = validator or MembershipRowValidator()
        self._log_validation_errors = log_validation_errors

    def process(self, records: Iterable[InputRecord]) -> RowProcessingResult:
        valid_rows: list[ValidatedRow] = []
        errors: list[RowValidationError] = []
        rows_received = 0

        for row_index, record in enumerate(records, start=1):
            rows_received += 1
            parsed, row_errors = self._validator.validate_record(record, row_index=row_index)
            if parsed is not None:
                valid_rows.append(parsed)
                continue
            for error in row_errors:
                self._record_error(errors, error)

        return RowProcessingResult(
            valid_rows=valid_rows,
            errors=errors,
            rows_received=rows_received,
        )

    def _record_error(
        self,
        captured_errors: list[RowValidationError],
        error: RowValidationError,
    ) -> None:
        if self._log_validation_errors:
            logger.warning(
                "CSV validation error row=%s field=%s kind=%s message=%s",
                error.row_index,
                error.field_path,
                error.kind.value,
                error.message,
            )
        captured_errors.append(error)
