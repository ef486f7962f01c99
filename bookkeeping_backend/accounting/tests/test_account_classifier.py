# accounting/tests/test_account_classifier.py

from __future__ import annotations

from django.test import SimpleTestCase

from accounting.services.account_classifier import (
    BUCKET_CURRENT,
    BUCKET_EQUITY,
    BUCKET_EXPENSE,
    BUCKET_LONG_TERM,
    BUCKET_NON_CURRENT,
    BUCKET_REVENUE,
    build_account_tree,
    classify,
    validate_parent,
)
from accounting.services.exceptions import ValidationError
from accounting.tests.builders import account


class ClassifyTests(SimpleTestCase):
    def test_receivable_asset_is_current(self):
        self.assertEqual(classify("ASSET", "Accounts Receivable"), BUCKET_CURRENT)

    def test_equipment_asset_is_non_current(self):
        self.assertEqual(classify("ASSET", "Equipment"), BUCKET_NON_CURRENT)

    def test_asset_keywords_are_case_insensitive(self):
        self.assertEqual(classify("ASSET", "PETTY CASH"), BUCKET_CURRENT)
        self.assertEqual(classify("ASSET", "Inventory - Raw Materials"), BUCKET_CURRENT)

    def test_liability_buckets(self):
        self.assertEqual(classify("LIABILITY", "Accounts Payable"), BUCKET_CURRENT)
        self.assertEqual(classify("LIABILITY", "Accrued Expenses"), BUCKET_CURRENT)
        self.assertEqual(classify("LIABILITY", "Long-term Debt"), BUCKET_LONG_TERM)

    def test_other_types_map_to_their_own_bucket(self):
        self.assertEqual(classify("EQUITY", "Owner's Equity"), BUCKET_EQUITY)
        self.assertEqual(classify("REVENUE", "Sales Revenue"), BUCKET_REVENUE)
        self.assertEqual(classify("EXPENSE", "Rent Expense"), BUCKET_EXPENSE)

    def test_subcategory_overrides_name_heuristic(self):
        self.assertEqual(classify("ASSET", "Equipment", "CURRENT_ASSETS"), BUCKET_CURRENT)
        self.assertEqual(classify("ASSET", "Cash", "NON_CURRENT_ASSETS"), BUCKET_NON_CURRENT)
        self.assertEqual(
            classify("LIABILITY", "Accounts Payable", "NON_CURRENT_LIABILITIES"),
            BUCKET_LONG_TERM,
        )

    def test_subcategory_of_another_type_is_ignored(self):
        self.assertEqual(classify("ASSET", "Equipment", "CURRENT_LIABILITIES"), BUCKET_NON_CURRENT)

    def test_unknown_type_raises(self):
        with self.assertRaises(ValidationError) as ctx:
            classify("MYSTERY", "Something")
        self.assertEqual(ctx.exception.rule, "invalid_type")


class HierarchyTests(SimpleTestCase):
    def test_root_account_is_valid(self):
        validate_parent("ASSET", None)

    def test_parent_with_parent_is_rejected(self):
        parent = account("1010", "Petty Cash", "ASSET", parent_id="1000")

        with self.assertRaises(ValidationError) as ctx:
            validate_parent("ASSET", parent)

        self.assertEqual(ctx.exception.rule, "hierarchy")
        self.assertEqual(ctx.exception.details["check"], "parent_has_no_parent")

    def test_parent_type_must_match(self):
        parent = account("1000", "Cash", "ASSET")

        with self.assertRaises(ValidationError) as ctx:
            validate_parent("LIABILITY", parent)

        self.assertEqual(ctx.exception.details["check"], "same_type_as_parent")

    def test_tree_nests_children_under_parent(self):
        accounts = [
            account("1000", "Cash", "ASSET"),
            account("1010", "Petty Cash", "ASSET", parent_id="1000"),
            account("3000", "Owner's Equity", "EQUITY"),
            account("2010", "Orphan Payable", "LIABILITY", parent_id="9999"),
        ]

        tree = {group["account_type"]: group["accounts"] for group in build_account_tree(accounts)}

        self.assertEqual([node["name"] for node in tree["ASSET"]], ["Cash"])
        self.assertEqual([c["name"] for c in tree["ASSET"][0]["children"]], ["Petty Cash"])
        # parent missing from the list: shown as a root
        self.assertEqual([node["name"] for node in tree["LIABILITY"]], ["Orphan Payable"])
        self.assertEqual(tree["REVENUE"], [])
