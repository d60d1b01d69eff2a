"""
tests/test_activation_batch_service.py

Ordering, fan-out and failure isolation for ActivationBatchService.
"""

from __future__ import annotations

import random
import threading
import time
from unittest.mock import MagicMock

import pytest
import requests

from activation_app.config import ActivationAPISettings
from activation_app.connectors.activation_connector import ActivationConnector
from activation_app.domain.membership import ActivationStatus, AnnotatedRow, ValidatedRow
from activation_app.services.activation_batch_service import ActivationBatchService
from conftest import make_row


class RandomLatencyConnector:
    """Annotates rows after a random delay and tracks peak concurrency."""

    def __init__(self, *, fail_uids: frozenset[int] = frozenset()) -> None:
        self.calls: list[int] = []
        self.peak_in_flight = 0
        self._in_flight = 0
        self._lock = threading.Lock()
        self._fail_uids = fail_uids
        self._rng = random.Random(1234)

    def lookup(self, item: ValidatedRow) -> AnnotatedRow:
        with self._lock:
            self.calls.append(item.uid)
            self._in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self._in_flight)
            delay = self._rng.uniform(0.0, 0.02)
        try:
            time.sleep(delay)
            if item.uid in self._fail_uids:
                raise RuntimeError(f"lookup blew up for uid={item.uid}")
            return item.annotate(ActivationStatus.ACTIVATED)
        finally:
            with self._lock:
                self._in_flight -= 1


@pytest.mark.parametrize("count", [1, 2, 7, 25])
def test_output_order_matches_input_order(count: int) -> None:
    rows = [make_row(uid=uid) for uid in range(1, count + 1)]
    service = ActivationBatchService(connector=RandomLatencyConnector())

    annotated = service.activate_all(rows)

    assert [row.uid for row in annotated] == [row.uid for row in rows]
    assert all(row.activation_status is ActivationStatus.ACTIVATED for row in annotated)


def test_empty_batch_makes_no_calls() -> None:
    connector = RandomLatencyConnector()
    service = ActivationBatchService(connector=connector)

    assert service.activate_all([]) == []
    assert connector.calls == []


def test_escaped_exception_becomes_error_row() -> None:
    rows = [make_row(uid=uid) for uid in range(1, 6)]
    service = ActivationBatchService(connector=RandomLatencyConnector(fail_uids=frozenset({3})))

    annotated = service.activate_all(rows)

    assert len(annotated) == 5
    assert [row.activation_status for row in annotated] == [
        ActivationStatus.ACTIVATED,
        ActivationStatus.ACTIVATED,
        ActivationStatus.ERROR,
        ActivationStatus.ACTIVATED,
        ActivationStatus.ACTIVATED,
    ]


def test_one_network_failure_among_five_rows() -> None:
    def _request(*, method, url, params, headers, timeout):  # noqa: ANN001, ANN202
        if params["uid"] == 4:
            raise requests.ConnectionError("connection reset")
        response = MagicMock(spec=requests.Response)
        response.json.return_value = {"response": params["uid"] % 2 == 1}
        return response

    session = MagicMock(spec=requests.Session)
    session.request.side_effect = _request
    connector = ActivationConnector(
        settings=ActivationAPISettings(base_url="http://activation.test/api/", token="t"),
        session=session,
    )
    service = ActivationBatchService(connector=connector)

    annotated = service.activate_all([make_row(uid=uid) for uid in range(1, 6)])

    assert [(row.uid, row.activation_status.value) for row in annotated] == [
        (1, "Activated"),
        (2, "Inactive"),
        (3, "Activated"),
        (4, "Error"),
        (5, "Activated"),
    ]
    assert session.request.call_count == 5


def test_max_concurrency_caps_in_flight_lookups() -> None:
    connector = RandomLatencyConnector()
    service = ActivationBatchService(connector=connector, max_concurrency=2)

    annotated = service.activate_all([make_row(uid=uid) for uid in range(1, 11)])

    assert len(annotated) == 10
    assert connector.peak_in_flight <= 2
    assert sorted(connector.calls) == list(range(1, 11))


def test_batch_completion_is_logged_with_status_counts(caplog: pytest.LogCaptureFixture) -> None:
    service = ActivationBatchService(
        connector=RandomLatencyConnector(fail_uids=frozenset({2})),
        max_concurrency=3,
    )

    with caplog.at_level("INFO", logger="activation_app.services.activation_batch_service"):
        service.activate_all([make_row(uid=uid) for uid in range(1, 5)])

    assert "Activation batch completed rows=4 workers=3" in caplog.text
    assert "statuses={'Activated': 3, 'Error': 1}" in caplog.text


def test_close_closes_connector() -> None:
    connector = MagicMock()
    ActivationBatchService(connector=connector).close()

    connector.close.assert_called_once_with()
