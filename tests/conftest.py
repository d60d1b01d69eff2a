from __future__ import annotations

import os

import pytest

os.environ.setdefault("ACTIVATION_API_TOKEN", "test-token")
os.environ.setdefault("ACTIVATION_API_BASE_URL", "http://activation.test/api/")

from activation_app.domain.membership import ValidatedRow  # noqa: E402

HEADER_LINE = "firstname,lastname,username,uid,password,email,membershipplanid"


@pytest.fixture()
def header_line() -> str:
    return HEADER_LINE


def make_row(uid: int = 42, plan: int = 7) -> ValidatedRow:
    return ValidatedRow(
        firstname="Ada",
        lastname="Lovelace",
        username=f"ada{uid}",
        uid=uid,
        password="s3cret",
        email=f"ada{uid}@example.com",
        membershipplanid=plan,
    )


def csv_payload(*lines: str) -> bytes:
    return ("\r\n".join((HEADER_LINE, *lines)) + "\r\n").encode("utf-8")
