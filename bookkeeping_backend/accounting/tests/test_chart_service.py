# accounting/tests/test_chart_service.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings

from accounting.models import Account
from accounting.services.chart_service import (
    DEFAULT_CHART,
    create_account,
    deactivate_account,
    delete_account,
    seed_default_accounts,
    update_account,
)
from accounting.services.exceptions import (
    AccountInUseError,
    DuplicateAccountError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from accounting.services.journal_entry_service import append_journal_entry
from companies.services.company_service import add_member, create_company
from permissions.roles import ROLE_VIEWER

User = get_user_model()


class SeedDefaultAccountsTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(email="owner@example.com", password="pass12345")

    @override_settings(LEDGER_SEED_DEFAULT_CHART=False)
    def test_seed_is_idempotent(self):
        company = create_company(self.owner, "Blank Books")
        self.assertEqual(Account.objects.filter(company=company).count(), 0)

        self.assertEqual(seed_default_accounts(company.pk), len(DEFAULT_CHART))
        self.assertEqual(seed_default_accounts(company.pk), 0)

        codes = list(Account.objects.filter(company=company).values_list("code", flat=True))
        self.assertEqual(len(codes), 19)
        self.assertEqual(codes[0], "1000")
        self.assertEqual(codes[-1], "6500")

    @override_settings(LEDGER_SEED_DEFAULT_CHART=False)
    def test_seed_leaves_existing_accounts_alone(self):
        company = create_company(self.owner, "Blank Books")
        create_account(company.pk, code="1000", name="Main Till", account_type="ASSET")

        created = seed_default_accounts(company.pk)

        self.assertEqual(created, len(DEFAULT_CHART) - 1)
        self.assertEqual(Account.objects.get(company=company, code="1000").name, "Main Till")

    def test_unknown_company(self):
        with self.assertRaises(NotFoundError):
            seed_default_accounts("00000000-0000-0000-0000-000000000000")


class CreateAccountTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(email="owner@example.com", password="pass12345")
        self.company = create_company(self.owner, "Acme Ltd")
        self.cash = Account.objects.get(company=self.company, code="1000")

    def test_create_with_subcategory(self):
        account = create_account(
            self.company.pk,
            code="1300",
            name="Prepaid Rent",
            account_type="asset",
            subcategory="CURRENT_ASSETS",
            user=self.owner,
        )

        self.assertEqual(account.account_type, Account.ASSET)
        self.assertEqual(account.subcategory, "CURRENT_ASSETS")
        self.assertTrue(account.is_active)

    def test_required_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            create_account(self.company.pk, code="", name="X", account_type="ASSET")
        self.assertEqual(ctx.exception.rule, "missing_fields")

    def test_invalid_type_and_subcategory(self):
        with self.assertRaises(ValidationError) as ctx:
            create_account(self.company.pk, code="9000", name="X", account_type="GOODWILL")
        self.assertEqual(ctx.exception.rule, "invalid_type")

        with self.assertRaises(ValidationError) as ctx:
            create_account(
                self.company.pk, code="9000", name="X", account_type="ASSET", subcategory="GAINS"
            )
        self.assertEqual(ctx.exception.rule, "invalid_subcategory")

    def test_duplicate_code_and_name(self):
        with self.assertRaises(DuplicateAccountError):
            create_account(self.company.pk, code="1000", name="Another Cash", account_type="ASSET")

        with self.assertRaises(DuplicateAccountError):
            create_account(self.company.pk, code="1999", name="Cash", account_type="ASSET")

    def test_sub_account_under_root_parent(self):
        child = create_account(
            self.company.pk, code="1010", name="Petty Cash", account_type="ASSET", parent_id=self.cash.pk
        )
        self.assertEqual(child.parent_id, self.cash.pk)

    def test_grandchild_is_rejected(self):
        child = create_account(
            self.company.pk, code="1010", name="Petty Cash", account_type="ASSET", parent_id=self.cash.pk
        )

        with self.assertRaises(ValidationError) as ctx:
            create_account(
                self.company.pk, code="1011", name="Petty Cash Drawer", account_type="ASSET", parent_id=child.pk
            )

        self.assertEqual(ctx.exception.rule, "hierarchy")
        self.assertEqual(ctx.exception.details["check"], "parent_has_no_parent")

    def test_parent_type_mismatch_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            create_account(
                self.company.pk, code="2010", name="Card Payable", account_type="LIABILITY", parent_id=self.cash.pk
            )
        self.assertEqual(ctx.exception.rule, "hierarchy")

    def test_parent_from_another_company_is_rejected(self):
        other_owner = User.objects.create_user(email="other@example.com", password="pass12345")
        other = create_company(other_owner, "Other Co")
        foreign_cash = Account.objects.get(company=other, code="1000")

        with self.assertRaises(ValidationError) as ctx:
            create_account(
                self.company.pk, code="1010", name="Petty Cash", account_type="ASSET", parent_id=foreign_cash.pk
            )
        self.assertEqual(ctx.exception.details["check"], "parent_exists")

    def test_viewer_cannot_manage_accounts(self):
        viewer = User.objects.create_user(email="viewer@example.com", password="pass12345")
        add_member(self.company, viewer, ROLE_VIEWER)

        with self.assertRaises(PermissionDeniedError):
            create_account(self.company.pk, code="9000", name="X", account_type="ASSET", user=viewer)


class MaintainAccountTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(email="owner@example.com", password="pass12345")
        self.company = create_company(self.owner, "Acme Ltd")
        append_journal_entry(
            self.company.pk,
            self.owner,
            {
                "date": "2024-01-15",
                "description": "Initial capital investment",
                "reference": "JE001",
                "lines": [
                    {"account": "Cash", "debit": "50000", "credit": "0"},
                    {"account": "Owner's Equity", "debit": "0", "credit": "50000"},
                ],
            },
        )
        self.cash = Account.objects.get(company=self.company, code="1000")
        self.rent = Account.objects.get(company=self.company, code="6100")

    def test_type_is_locked_once_posted(self):
        with self.assertRaises(ValidationError) as ctx:
            update_account(self.company.pk, self.cash.pk, account_type="EXPENSE")
        self.assertEqual(ctx.exception.rule, "type_locked")

    def test_type_change_without_postings(self):
        account = update_account(self.company.pk, self.rent.pk, account_type="LIABILITY", name="Rent Payable")

        self.assertEqual(account.account_type, Account.LIABILITY)
        self.assertEqual(account.name, "Rent Payable")

    def test_rename_to_existing_name_is_rejected(self):
        with self.assertRaises(DuplicateAccountError):
            update_account(self.company.pk, self.rent.pk, name="Cash")

    def test_deactivate(self):
        account = deactivate_account(self.company.pk, self.cash.pk)

        self.assertFalse(account.is_active)
        self.assertFalse(Account.objects.get(pk=self.cash.pk).is_active)

    def test_delete_posted_account_is_refused(self):
        with self.assertRaises(AccountInUseError):
            delete_account(self.company.pk, self.cash.pk)

        self.assertTrue(Account.objects.filter(pk=self.cash.pk).exists())

    def test_delete_parent_with_children_is_refused(self):
        create_account(
            self.company.pk, code="6110", name="Office Rent", account_type="EXPENSE", parent_id=self.rent.pk
        )

        with self.assertRaises(AccountInUseError):
            delete_account(self.company.pk, self.rent.pk)

    def test_delete_unused_account(self):
        delete_account(self.company.pk, self.rent.pk)
        self.assertFalse(Account.objects.filter(pk=self.rent.pk).exists())

    def test_delete_missing_account(self):
        with self.assertRaises(NotFoundError):
            delete_account(self.company.pk, 999_999)

    def test_malformed_ids_raise_not_found(self):
        with self.assertRaises(NotFoundError):
            delete_account(self.company.pk, "abc")
        with self.assertRaises(NotFoundError):
            update_account("not-a-uuid", self.cash.pk, name="Petty Cash")

    def test_malformed_parent_id_is_a_hierarchy_error(self):
        with self.assertRaises(ValidationError) as ctx:
            create_account(
                self.company.pk, code="6110", name="Office Rent", account_type="EXPENSE", parent_id="abc"
            )
        self.assertEqual(ctx.exception.details["check"], "parent_exists")
