"""
activation_app/connectors/activation_connector.py

Membership activation endpoint connector.

One GET per validated row. The endpoint answers with a JSON body whose
``response`` field is ``true`` when the plan was applied to the user.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from activation_app.config import ActivationAPISettings
from activation_app.connectors.base import BaseConnector, ConnectorRequestError
from activation_app.domain.membership import ActivationStatus, AnnotatedRow, ValidatedRow

logger = logging.getLogger(__name__)


class ActivationConnector(BaseConnector):
    """
    Connector that applies a membership plan to a user id.
    """

    def __init__(
        self,
        *,
        settings: ActivationAPISettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            source="activation_api",
            timeout_seconds=settings.timeout_seconds,
            session=session,
        )
        self._settings = settings

    def lookup(self, item: ValidatedRow) -> AnnotatedRow:
        """
        Annotate ``item`` with its activation status. Never raises.
        """

        try:
            payload = self._request_json(
                method="GET",
                url=self._settings.base_url,
                params=self.build_params(item),
            )
            status = self.interpret(payload)
        except Exception:  # noqa: BLE001
            logger.exception(
                "Activation lookup failed source=%s uid=%s lid=%s",
                self.source,
                item.uid,
                item.membershipplanid,
            )
            return item.annotate(ActivationStatus.ERROR)

        logger.debug(
            "Activation lookup uid=%s lid=%s status=%s",
            item.uid,
            item.membershipplanid,
            status.value,
        )
        return item.annotate(status)

    def build_params(self, row: ValidatedRow) -> dict[str, Any]:
        return {
            "ihc_action": "api-gate",
            "ihch": self._settings.token or "",
            "action": self._settings.action,
            "uid": row.uid,
            "lid": row.membershipplanid,
        }

    @staticmethod
    def interpret(payload: Any) -> ActivationStatus:
        if payload is None:
            raise ConnectorRequestError("activation_api: response body was JSON null.")
        if isinstance(payload, dict) and payload.get("response") is True:
            return ActivationStatus.ACTIVATED
        return ActivationStatus.INACTIVE
