"""
activation_app/domain package marker.
"""

from activation_app.domain.membership import (
    ACTIVATION_STATUS_COLUMN,
    EXPECTED_HEADERS,
    ActivationStatus,
    AnnotatedRow,
    FieldErrorKind,
    InputRecord,
    RowValidationError,
    ValidatedRow,
)

__all__ = [
    "ACTIVATION_STATUS_COLUMN",
    "EXPECTED_HEADERS",
    "ActivationStatus",
    "AnnotatedRow",
    "FieldErrorKind",
    "InputRecord",
    "RowValidationError",
    "ValidatedRow",
]
