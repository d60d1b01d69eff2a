"""
activation_app/validators/membership_validator.py

Field rules and record-level validation for membership CSV rows.

Every column has one named rule that returns a tagged ``FieldCheck``.
All rules run for every record; a record becomes a ``ValidatedRow`` only
when every check passed.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable

from activation_app.domain.membership import (
    EXPECTED_HEADERS,
    FieldErrorKind,
    InputRecord,
    RowValidationError,
    ValidatedRow,
)

EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+\-]@(?:[A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)

# ASCII decimal or exponent literal; no digit separators, no other scripts.
NUMERIC_PATTERN = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


@dataclass(frozen=True)
class FieldCheck:
    """
    Outcome of one field rule: either a parsed value or a failure.
    """

    ok: bool
    value: Any = None
    kind: FieldErrorKind | None = None
    message: str | None = None

    @classmethod
    def passed(cls, value: Any) -> FieldCheck:
        return cls(ok=True, value=value)

    @classmethod
    def failed(cls, kind: FieldErrorKind, message: str) -> FieldCheck:
        return cls(ok=False, kind=kind, message=message)


FieldRule = Callable[[str | None], FieldCheck]


def required_text(message: str) -> FieldRule:
    """
    Build a rule that rejects values that are empty after trimming.
    """

    def _rule(value: str | None) -> FieldCheck:
        text = (value or "").strip()
        if not text:
            return FieldCheck.failed(FieldErrorKind.EMPTY_FIELD, message)
        return FieldCheck.passed(text)

    return _rule


def email_address(message: str) -> FieldRule:
    def _rule(value: str | None) -> FieldCheck:
        text = (value or "").strip()
        if not EMAIL_PATTERN.match(text):
            return FieldCheck.failed(FieldErrorKind.INVALID_FORMAT, message)
        return FieldCheck.passed(text)

    return _rule


def whole_number(message: str) -> FieldRule:
    """
    Build a rule that coerces text to an integer.

    Accepts integer literals and finite float literals with no fractional
    part (``"42"``, ``" 7 "``, ``"1e3"``, ``"12.0"``).
    """

    def _rule(value: str | None) -> FieldCheck:
        parsed = coerce_whole_number(value)
        if parsed is None:
            return FieldCheck.failed(FieldErrorKind.NOT_A_NUMBER, message)
        return FieldCheck.passed(parsed)

    return _rule


def coerce_whole_number(value: str | None) -> int | None:
    text = (value or "").strip()
    if not NUMERIC_PATTERN.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


FIELD_RULES: dict[str, FieldRule] = {
    "firstname": required_text("First name is required"),
    "lastname": required_text("Last name is required"),
    "username": required_text("Username is required"),
    "uid": whole_number("UID must be a number"),
    "password": required_text("Password is required"),
    "email": email_address("Invalid email format"),
    "membershipplanid": whole_number("Membership Plan id must be a number"),
}


class MembershipRowValidator:
    """
    Validates and parses one raw membership CSV record.
    """

    def __init__(self, rules: dict[str, FieldRule] | None = None) -> None:
        self._rules = rules or FIELD_RULES

    def validate_record(
        self,
        record: InputRecord,
        *,
        row_index: int,
    ) -> tuple[ValidatedRow | None, list[RowValidationError]]:
        """
        Run every field rule against ``record``.

        Returns the parsed row and an empty list, or ``None`` and the
        failures in column order.
        """

        parsed: dict[str, Any] = {}
        errors: list[RowValidationError] = []

        for field_name in EXPECTED_HEADERS:
            raw_value = record.get(field_name)
            check = self._rules[field_name](raw_value)
            if check.ok:
                parsed[field_name] = check.value
                continue
            errors.append(
                RowValidationError(
                    row_index=row_index,
                    field_path=field_name,
                    message=check.message or "Invalid value",
                    kind=check.kind or FieldErrorKind.INVALID_FORMAT,
                    value=raw_value,
                )
            )

        if errors:
            return None, errors
        return ValidatedRow(**parsed), []
