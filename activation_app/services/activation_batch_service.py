"""
activation_app/services/activation_batch_service.py

Concurrent fan-out of activation lookups over a batch of validated rows.

Every row gets its own worker unless ``max_concurrency`` caps the pool.
``Executor.map`` yields results in submission order, so the output lines
up with the input no matter which lookup finishes first.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Protocol

from activation_app.config import get_activation_api_settings
from activation_app.connectors.activation_connector import ActivationConnector
from activation_app.domain.membership import ActivationStatus, AnnotatedRow, ValidatedRow

logger = logging.getLogger(__name__)


class ActivationLookup(Protocol):
    def lookup(self, item: ValidatedRow) -> AnnotatedRow:
        ...


class ActivationBatchService:
    """
    Runs one activation lookup per row and joins on all of them.
    """

    def __init__(
        self,
        *,
        connector: ActivationLookup,
        max_concurrency: int = 0,
    ) -> None:
        self._connector = connector
        self._max_concurrency = max(0, max_concurrency)

    def activate_all(self, rows: list[ValidatedRow]) -> list[AnnotatedRow]:
        """
        Annotate every row; the result has the same length and order as ``rows``.
        """

        if not rows:
            return []

        workers = len(rows)
        if self._max_concurrency:
            workers = min(workers, self._max_concurrency)

        started = time.monotonic()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="activation") as executor:
            annotated = list(executor.map(self._lookup_safely, rows))

        counts = Counter(row.activation_status.value for row in annotated)
        logger.info(
            "Activation batch completed rows=%s workers=%s elapsed_seconds=%.3f statuses=%s",
            len(annotated),
            workers,
            time.monotonic() - started,
            dict(counts),
        )
        return annotated

    def close(self) -> None:
        close = getattr(self._connector, "close", None)
        if close is not None:
            close()

    def _lookup_safely(self, row: ValidatedRow) -> AnnotatedRow:
        try:
            return self._connector.lookup(row)
        except Exception:  # noqa: BLE001
            logger.exception("Activation lookup raised uid=%s", row.uid)
            return row.annotate(ActivationStatus.ERROR)


@lru_cache(maxsize=1)
def get_activation_batch_service() -> ActivationBatchService:
    """
    Build and cache the batch service with env-driven settings.
    """

    settings = get_activation_api_settings()
    return ActivationBatchService(
        connector=ActivationConnector(settings=settings),
        max_concurrency=settings.max_concurrency,
    )
