from __future__ import annotations

import unittest
from dataclasses import asdict

from activation_app.domain.membership import ActivationStatus, AnnotatedRow
from conftest import make_row


class TestAnnotatedRow(unittest.TestCase):
    def test_status_is_required(self) -> None:
        values = asdict(make_row())

        with self.assertRaises(TypeError):
            AnnotatedRow(**values)

    def test_annotate_carries_every_field_and_the_status(self) -> None:
        row = make_row(uid=42, plan=7)

        annotated = row.annotate(ActivationStatus.INACTIVE)

        self.assertEqual(annotated.activation_status, ActivationStatus.INACTIVE)
        self.assertEqual(annotated.to_report_row()["activationStatus"], "Inactive")
        self.assertEqual(
            {name: value for name, value in asdict(annotated).items() if name != "activation_status"},
            asdict(row),
        )


if __name__ == "__main__":
    unittest.main()
