"""
activation_app/services/membership_upload_service.py

Service layer for the membership upload workflow:

    1. decode_csv_bytes()                 : header check, raw records
    2. RowProcessor.process()             : valid rows + error messages
    3. ActivationBatchService.activate_all: one lookup per valid row
    4. UploadSession.replace()            : publish errors and rows

A header mismatch or CSV syntax failure stores that single message with no
rows, makes no lookups, and is re-raised for the caller to report.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from functools import lru_cache

from activation_app.config import get_upload_settings
from activation_app.domain.membership import AnnotatedRow
from activation_app.services.activation_batch_service import (
    ActivationBatchService,
    get_activation_batch_service,
)
from activation_app.services.csv_decoder import CSVDecodeError, decode_csv_bytes
from activation_app.services.row_processor import RowProcessor
from activation_app.services.upload_session import UploadSession, get_upload_session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadOutcome:
    """
    End-of-run upload summary.
    """

    rows_received: int
    rows_valid: int
    rows_invalid: int
    errors: list[str] = field(default_factory=list)
    rows: list[AnnotatedRow] = field(default_factory=list)

    @property
    def status_counts(self) -> dict[str, int]:
        return dict(Counter(row.activation_status.value for row in self.rows))


class MembershipUploadService:
    """
    Coordinates decoding, validation, activation and session state.
    """

    def __init__(
        self,
        *,
        batch_service: ActivationBatchService,
        session: UploadSession,
        row_processor: RowProcessor | None = None,
    ) -> None:
        self._batch_service = batch_service
        self._session = session
        self._row_processor = row_processor or RowProcessor()

    @property
    def session(self) -> UploadSession:
        return self._session

    def process_upload(self, payload: bytes) -> UploadOutcome:
        """
        Run one upload end to end and replace the session contents.

        Raises:
            CSVDecodeError: the payload could not be decoded; the session
                holds the error message and no rows.
        """

        try:
            records = decode_csv_bytes(payload)
        except CSVDecodeError as exc:
            self._session.replace(errors=[str(exc)], rows=[])
            raise

        processed = self._row_processor.process(records)
        annotated = self._batch_service.activate_all(processed.valid_rows)
        error_messages = processed.error_messages
        self._session.replace(errors=error_messages, rows=annotated)

        outcome = UploadOutcome(
            rows_received=processed.rows_received,
            rows_valid=len(processed.valid_rows),
            rows_invalid=processed.rows_invalid,
            errors=error_messages,
            rows=annotated,
        )
        logger.info(
            "Membership upload processed rows_received=%s rows_valid=%s rows_invalid=%s statuses=%s",
            outcome.rows_received,
            outcome.rows_valid,
            outcome.rows_invalid,
            outcome.status_counts,
        )
        return outcome

    def clear(self) -> None:
        self._session.clear()


@lru_cache(maxsize=1)
def get_membership_upload_service() -> MembershipUploadService:
    """
    Build and cache the upload service with env-driven settings.
    """

    settings = get_upload_settings()
    return MembershipUploadService(
        batch_service=get_activation_batch_service(),
        session=get_upload_session(),
        row_processor=RowProcessor(log_validation_errors=settings.log_validation_errors),
    )
