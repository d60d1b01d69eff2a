"""
activation_app/domain/membership.py

Domain models used by the membership upload and activation flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

EXPECTED_HEADERS: tuple[str, ...] = (
    "firstname",
    "lastname",
    "username",
    "uid",
    "password",
    "email",
    "membershipplanid",
)

ACTIVATION_STATUS_COLUMN = "activationStatus"

# Raw CSV row keyed by header name, before validation.
InputRecord = Mapping[str, str | None]


class ActivationStatus(str, Enum):
    ACTIVATED = "Activated"
    INACTIVE = "Inactive"
    ERROR = "Error"


class FieldErrorKind(str, Enum):
    EMPTY_FIELD = "EmptyField"
    INVALID_FORMAT = "InvalidFormat"
    NOT_A_NUMBER = "NotANumber"


@dataclass(frozen=True)
class ValidatedRow:
    """
    One membership record whose every field passed validation.
    """

    firstname: str
    lastname: str
    username: str
    uid: int
    password: str
    email: str
    membershipplanid: int

    def annotate(self, status: ActivationStatus) -> AnnotatedRow:
        values = {name: getattr(self, name) for name in EXPECTED_HEADERS}
        return AnnotatedRow(**values, activation_status=status)


@dataclass(frozen=True)
class AnnotatedRow(ValidatedRow):
    """
    Validated record plus the outcome of its activation lookup.
    """

    activation_status: ActivationStatus

    def to_report_row(self) -> dict[str, str | int]:
        """
        Return the row keyed by CSV column name, status last.
        """

        row: dict[str, str | int] = {header: getattr(self, header) for header in EXPECTED_HEADERS}
        row[ACTIVATION_STATUS_COLUMN] = self.activation_status.value
        return row


@dataclass(frozen=True)
class RowValidationError:
    """
    One field-level validation failure for a CSV row.
    """

    row_index: int
    field_path: str
    message: str
    kind: FieldErrorKind
    value: str | None = None

    def render(self) -> str:
        return f"Row {self.row_index} - {self.field_path}: {self.message}"
