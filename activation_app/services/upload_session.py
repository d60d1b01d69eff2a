"""
activation_app/services/upload_session.py

In-process holding area for the latest upload's errors and annotated rows.
Each upload replaces both collections wholesale; nothing is merged.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from functools import lru_cache

from activation_app.domain.membership import AnnotatedRow


@dataclass(frozen=True)
class UploadSnapshot:
    errors: tuple[str, ...] = field(default_factory=tuple)
    rows: tuple[AnnotatedRow, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.errors and not self.rows


class UploadSession:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = UploadSnapshot()

    def replace(self, *, errors: list[str], rows: list[AnnotatedRow]) -> UploadSnapshot:
        snapshot = UploadSnapshot(errors=tuple(errors), rows=tuple(rows))
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def clear(self) -> None:
        with self._lock:
            self._snapshot = UploadSnapshot()

    def snapshot(self) -> UploadSnapshot:
        with self._lock:
            return self._snapshot


@lru_cache(maxsize=1)
def get_upload_session() -> UploadSession:
    """
    Return the process-wide upload session.
    """

    return UploadSession()
