from __future__ import annotations

import unittest

from activation_app.domain.membership import FieldErrorKind, ValidatedRow
from activation_app.validators.membership_validator import (
    MembershipRowValidator,
    coerce_whole_number,
)


def _record(**overrides: str | None) -> dict[str, str | None]:
    record: dict[str, str | None] = {
        "firstname": "Ada",
        "lastname": "Lovelace",
        "username": "ada",
        "uid": "42",
        "password": "s3cret",
        "email": "ada@example.com",
        "membershipplanid": "7",
    }
    record.update(overrides)
    return record


class TestMembershipRowValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = MembershipRowValidator()

    def test_valid_record_is_coerced(self) -> None:
        row, errors = self.validator.validate_record(_record(uid=" 42 "), row_index=1)

        self.assertEqual(errors, [])
        self.assertEqual(
            row,
            ValidatedRow(
                firstname="Ada",
                lastname="Lovelace",
                username="ada",
                uid=42,
                password="s3cret",
                email="ada@example.com",
                membershipplanid=7,
            ),
        )

    def test_non_numeric_uid_is_not_a_number(self) -> None:
        row, errors = self.validator.validate_record(_record(uid="abc"), row_index=3)

        self.assertIsNone(row)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].field_path, "uid")
        self.assertEqual(errors[0].kind, FieldErrorKind.NOT_A_NUMBER)
        self.assertEqual(errors[0].row_index, 3)
        self.assertEqual(errors[0].render(), "Row 3 - uid: UID must be a number")

    def test_underscored_uid_is_not_a_number(self) -> None:
        row, errors = self.validator.validate_record(_record(uid="4_2"), row_index=1)

        self.assertIsNone(row)
        self.assertEqual(
            [(e.field_path, e.kind) for e in errors],
            [("uid", FieldErrorKind.NOT_A_NUMBER)],
        )

    def test_whitespace_name_is_empty_field(self) -> None:
        _, errors = self.validator.validate_record(_record(firstname="   "), row_index=1)

        self.assertEqual([e.kind for e in errors], [FieldErrorKind.EMPTY_FIELD])
        self.assertEqual(errors[0].message, "First name is required")

    def test_invalid_email_is_invalid_format(self) -> None:
        _, errors = self.validator.validate_record(_record(email="not-an-email"), row_index=1)

        self.assertEqual(errors[0].field_path, "email")
        self.assertEqual(errors[0].kind, FieldErrorKind.INVALID_FORMAT)
        self.assertEqual(errors[0].message, "Invalid email format")

    def test_all_failures_are_reported_in_column_order(self) -> None:
        record = _record(
            firstname="",
            lastname="",
            username="",
            uid="x",
            password="",
            email="@",
            membershipplanid="plan",
        )

        row, errors = self.validator.validate_record(record, row_index=5)

        self.assertIsNone(row)
        self.assertEqual(
            [e.field_path for e in errors],
            ["firstname", "lastname", "username", "uid", "password", "email", "membershipplanid"],
        )
        self.assertTrue(all(e.row_index == 5 for e in errors))

    def test_missing_values_fail_like_empty_values(self) -> None:
        _, errors = self.validator.validate_record(
            _record(password=None, membershipplanid=None),
            row_index=2,
        )

        self.assertEqual(
            [(e.field_path, e.kind) for e in errors],
            [
                ("password", FieldErrorKind.EMPTY_FIELD),
                ("membershipplanid", FieldErrorKind.NOT_A_NUMBER),
            ],
        )


class TestCoerceWholeNumber(unittest.TestCase):
    def test_accepts_integral_literals(self) -> None:
        self.assertEqual(coerce_whole_number("12"), 12)
        self.assertEqual(coerce_whole_number("-3"), -3)
        self.assertEqual(coerce_whole_number("1e3"), 1000)
        self.assertEqual(coerce_whole_number("12.0"), 12)

    def test_rejects_non_finite_and_fractional(self) -> None:
        for value in ("", "  ", "abc", "nan", "inf", "-Infinity", "4.5", "1e400", None):
            with self.subTest(value=value):
                self.assertIsNone(coerce_whole_number(value))

    def test_rejects_digit_separators_and_non_ascii_digits(self) -> None:
        for value in ("1_000", "4_2", "\u0664\u0662", "\uff11\uff12", "0x1f"):
            with self.subTest(value=value):
                self.assertIsNone(coerce_whole_number(value))


class TestEmailRule(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = MembershipRowValidator()

    def test_accepts_common_addresses(self) -> None:
        for email in ("a@b.co", "first.last+tag@sub.example.org", "o'neil@example.ie"):
            with self.subTest(email=email):
                row, errors = self.validator.validate_record(_record(email=email), row_index=1)
                self.assertEqual(errors, [])
                self.assertIsNotNone(row)

    def test_rejects_malformed_addresses(self) -> None:
        for email in (".a@example.com", "a..b@example.com", "a@example", "a@.com", "a b@example.com"):
            with self.subTest(email=email):
                _, errors = self.validator.validate_record(_record(email=email), row_index=1)
                self.assertEqual([e.field_path for e in errors], ["email"])


if __name__ == "__main__":
    unittest.main()
