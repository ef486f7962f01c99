# accounting/tests/test_entry_validator.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from accounting.services.entry_validator import validate_entry
from accounting.services.exceptions import UnknownAccountError, ValidationError
from accounting.tests.builders import account


def _payload(**overrides):
    data = {
        "date": "2024-01-15",
        "description": "Initial capital investment",
        "reference": "JE001",
        "lines": [
            {"account": "Cash", "debit": "50000", "credit": "0"},
            {"account": "Owner's Equity", "debit": "0", "credit": "50000"},
        ],
    }
    data.update(overrides)
    return data


class EntryValidatorTests(SimpleTestCase):
    def setUp(self):
        self.accounts = [
            account("1000", "Cash", "ASSET"),
            account("3000", "Owner's Equity", "EQUITY"),
            account("6300", "Office Supplies Expense", "EXPENSE"),
            account("1900", "Old Clearing", "ASSET", is_active=False),
        ]

    def _rule(self, payload):
        with self.assertRaises(ValidationError) as ctx:
            validate_entry(payload, self.accounts)
        return ctx.exception.rule

    # ---------------------------------------------------------
    # Accepted
    # ---------------------------------------------------------
    def test_balanced_entry_is_normalized(self):
        record = validate_entry(_payload(), self.accounts)

        self.assertIsNone(record.id)
        self.assertEqual(record.date, date(2024, 1, 15))
        self.assertEqual(record.reference, "JE001")
        self.assertEqual(len(record.lines), 2)
        self.assertEqual(record.lines[0].debit_minor, 5_000_000)
        self.assertEqual(record.total_debit_minor, record.total_credit_minor)

    def test_one_cent_difference_is_tolerated(self):
        payload = _payload(
            lines=[
                {"account": "Cash", "debit": "100.00", "credit": "0"},
                {"account": "Owner's Equity", "debit": "0", "credit": "99.99"},
            ]
        )
        record = validate_entry(payload, self.accounts)
        self.assertEqual(record.total_debit_minor - record.total_credit_minor, 1)

    def test_blank_amount_counts_as_zero(self):
        payload = _payload(
            lines=[
                {"account": "Cash", "debit": "10", "credit": ""},
                {"account": "Owner's Equity", "debit": None, "credit": "10"},
            ]
        )
        record = validate_entry(payload, self.accounts)
        self.assertEqual(record.lines[1].credit_minor, 1000)

    # ---------------------------------------------------------
    # Rejected
    # ---------------------------------------------------------
    def test_unbalanced_entry_reports_imbalance(self):
        payload = _payload(
            lines=[
                {"account": "Office Supplies Expense", "debit": 250, "credit": 0},
                {"account": "Cash", "debit": 0, "credit": 200},
            ]
        )

        with self.assertRaises(ValidationError) as ctx:
            validate_entry(payload, self.accounts)

        self.assertEqual(ctx.exception.rule, "unbalanced")
        self.assertEqual(ctx.exception.details["imbalance"], Decimal("50.00"))

    def test_missing_header_fields(self):
        self.assertEqual(self._rule(_payload(description="  ")), "missing_fields")
        self.assertEqual(self._rule(_payload(reference=None)), "missing_fields")
        self.assertEqual(self._rule(_payload(date="")), "missing_fields")
        self.assertEqual(self._rule(_payload(date="not-a-date")), "missing_fields")

    def test_no_lines(self):
        self.assertEqual(self._rule(_payload(lines=[])), "no_lines")

    def test_invalid_lines(self):
        cases = [
            [{"account": "Cash", "debit": "-5", "credit": "0"}],
            [{"account": "Cash", "debit": "5", "credit": "5"}],
            [{"account": "Cash", "debit": "0", "credit": "0"}],
            [{"account": "Cash", "debit": "abc", "credit": "0"}],
            [{"account": "", "debit": "5", "credit": "0"}],
        ]
        for lines in cases:
            with self.subTest(lines=lines):
                self.assertEqual(self._rule(_payload(lines=lines)), "invalid_line")

    def test_amounts_beyond_storable_range_are_invalid_lines(self):
        cases = ["1e30", "1000000000000", "1000000000000.00"]
        for amount in cases:
            lines = [
                {"account": "Cash", "debit": amount, "credit": "0"},
                {"account": "Owner's Equity", "debit": "0", "credit": amount},
            ]
            with self.subTest(amount=amount):
                self.assertEqual(self._rule(_payload(lines=lines)), "invalid_line")

    def test_largest_storable_amount_is_accepted(self):
        lines = [
            {"account": "Cash", "debit": "999999999999.99", "credit": "0"},
            {"account": "Owner's Equity", "debit": "0", "credit": "999999999999.99"},
        ]

        record = validate_entry(_payload(lines=lines), self.accounts)

        self.assertEqual(record.total_debit_minor, 99_999_999_999_999)

    def test_unknown_account(self):
        payload = _payload(
            lines=[
                {"account": "Cash", "debit": "10", "credit": "0"},
                {"account": "Nonexistent", "debit": "0", "credit": "10"},
            ]
        )

        with self.assertRaises(UnknownAccountError) as ctx:
            validate_entry(payload, self.accounts)

        self.assertEqual(ctx.exception.rule, "unknown_account")
        self.assertEqual(ctx.exception.account_name, "Nonexistent")

    def test_inactive_account_is_rejected(self):
        payload = _payload(
            lines=[
                {"account": "Old Clearing", "debit": "10", "credit": "0"},
                {"account": "Cash", "debit": "0", "credit": "10"},
            ]
        )

        with self.assertRaises(UnknownAccountError):
            validate_entry(payload, self.accounts)

    def test_first_failing_rule_wins(self):
        # missing header beats missing lines
        self.assertEqual(self._rule(_payload(reference="", lines=[])), "missing_fields")

        # unknown account beats imbalance
        payload = _payload(
            lines=[
                {"account": "Ghost", "debit": "10", "credit": "0"},
                {"account": "Cash", "debit": "0", "credit": "3"},
            ]
        )
        self.assertEqual(self._rule(payload), "unknown_account")
