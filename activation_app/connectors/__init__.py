"""
activation_app/connectors package marker.
"""

from activation_app.connectors.activation_connector import ActivationConnector
from activation_app.connectors.base import BaseConnector, ConnectorRequestError

__all__ = [
    "ActivationConnector",
    "BaseConnector",
    "ConnectorRequestError",
]
