# accounting/services/chart_service.py

"""
CHART OF ACCOUNTS SERVICE

Company-scoped account maintenance:
- create / update / deactivate / delete accounts
- seed the default chart (idempotent)

Rules:
- Codes and names are unique per company
- Subcategory must belong to the account type
- Single-level hierarchy; sub-accounts share their parent's type
- An account's type is frozen once it has postings
- Hard delete only when no journal line references the account
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q

from accounting import account_types
from accounting.models import Account, JournalLine
from accounting.services.account_classifier import validate_parent
from accounting.services.exceptions import (
    AccountInUseError,
    DuplicateAccountError,
    NotFoundError,
    ValidationError,
)
from accounting.services.ledger_store import get_company
from companies.services.access import require_capability
from permissions.roles import CAP_ACCOUNTS_MANAGE

logger = logging.getLogger(__name__)


DEFAULT_CHART = [
    ("1000", "Cash", Account.ASSET),
    ("1100", "Accounts Receivable", Account.ASSET),
    ("1200", "Inventory", Account.ASSET),
    ("1500", "Equipment", Account.ASSET),
    ("1600", "Accumulated Depreciation - Equipment", Account.ASSET),
    ("2000", "Accounts Payable", Account.LIABILITY),
    ("2100", "Accrued Expenses", Account.LIABILITY),
    ("2500", "Long-term Debt", Account.LIABILITY),
    ("3000", "Owner's Equity", Account.EQUITY),
    ("3100", "Retained Earnings", Account.EQUITY),
    ("4000", "Sales Revenue", Account.REVENUE),
    ("4100", "Service Revenue", Account.REVENUE),
    ("5000", "Cost of Goods Sold", Account.EXPENSE),
    ("6000", "Salaries Expense", Account.EXPENSE),
    ("6100", "Rent Expense", Account.EXPENSE),
    ("6200", "Utilities Expense", Account.EXPENSE),
    ("6300", "Office Supplies Expense", Account.EXPENSE),
    ("6400", "Insurance Expense", Account.EXPENSE),
    ("6500", "Depreciation Expense", Account.EXPENSE),
]


def _authorize(user, company_id) -> None:
    if user is not None:
        require_capability(user, company_id, CAP_ACCOUNTS_MANAGE)


def _get_account(company_id, account_id) -> Account:
    try:
        account = Account.objects.filter(pk=account_id, company_id=company_id).first()
    except (DjangoValidationError, ValueError) as exc:
        raise NotFoundError(f"Account {account_id} not found") from exc

    if account is None:
        raise NotFoundError(f"Account {account_id} not found")
    return account


def _check_unique(company_id, *, code: str, name: str, exclude_pk=None) -> None:
    qs = Account.objects.filter(company_id=company_id)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)

    if qs.filter(code=code).exists():
        raise DuplicateAccountError(
            f"Account code '{code}' already exists", rule="duplicate", details={"field": "code"}
        )
    if qs.filter(name=name).exists():
        raise DuplicateAccountError(
            f"Account name '{name}' already exists", rule="duplicate", details={"field": "name"}
        )


def _check_type_and_subcategory(account_type: str, subcategory: str) -> None:
    if not account_types.is_valid_account_type(account_type):
        raise ValidationError(f"Invalid account type: {account_type!r}", rule="invalid_type")
    if not account_types.is_valid_subcategory(account_type, subcategory):
        raise ValidationError(
            f"Subcategory {subcategory!r} does not belong to {account_type}",
            rule="invalid_subcategory",
        )


def has_postings(account: Account) -> bool:
    return JournalLine.objects.filter(
        Q(account=account)
        | Q(account_name=account.name, journal_entry__company_id=account.company_id)
    ).exists()


@transaction.atomic
def create_account(
    company_id,
    *,
    code: str,
    name: str,
    account_type: str,
    subcategory: str | None = None,
    parent_id=None,
    user=None,
) -> Account:
    _authorize(user, company_id)
    company = get_company(company_id)

    code = (code or "").strip()
    name = (name or "").strip()
    account_type = (account_type or "").strip().upper()
    subcategory = (subcategory or "").strip()

    if not code or not name or not account_type:
        raise ValidationError("Code, name, and type are required", rule="missing_fields")

    _check_type_and_subcategory(account_type, subcategory)

    parent = None
    if parent_id:
        try:
            parent = _get_account(company.pk, parent_id)
        except NotFoundError as exc:
            raise ValidationError(
                "Parent account not found in this company",
                rule="hierarchy",
                details={"check": "parent_exists"},
            ) from exc
    validate_parent(account_type, parent)

    _check_unique(company.pk, code=code, name=name)

    account = Account.objects.create(
        company=company,
        code=code,
        name=name,
        account_type=account_type,
        subcategory=subcategory,
        parent=parent,
    )

    logger.info(
        "Account created",
        extra={"company_id": str(company.pk), "account_code": code, "account_type": account_type},
    )
    return account


@transaction.atomic
def update_account(
    company_id,
    account_id,
    *,
    code: str | None = None,
    name: str | None = None,
    account_type: str | None = None,
    subcategory: str | None = None,
    user=None,
) -> Account:
    """
    Partial update. Renaming is safe for history: postings are linked to
    the account itself, the old name survives only as the line snapshot.
    """
    _authorize(user, company_id)
    account = _get_account(company_id, account_id)

    new_code = account.code if code is None else code.strip()
    new_name = account.name if name is None else name.strip()
    new_type = account.account_type if account_type is None else account_type.strip().upper()
    new_subcategory = account.subcategory if subcategory is None else subcategory.strip()

    if not new_code or not new_name:
        raise ValidationError("Code and name are required", rule="missing_fields")

    if new_type != account.account_type:
        if has_postings(account):
            raise ValidationError(
                "Account type cannot change once the account has postings",
                rule="type_locked",
            )
        if account.parent_id is not None or account.children.exists():
            raise ValidationError(
                "Sub-account type must match its parent account type",
                rule="hierarchy",
                details={"check": "same_type_as_parent"},
            )
        if account_type is not None and subcategory is None:
            new_subcategory = ""

    _check_type_and_subcategory(new_type, new_subcategory)
    _check_unique(company_id, code=new_code, name=new_name, exclude_pk=account.pk)

    account.code = new_code
    account.name = new_name
    account.account_type = new_type
    account.subcategory = new_subcategory
    account.save()

    logger.info(
        "Account updated",
        extra={"company_id": str(company_id), "account_id": account.pk},
    )
    return account


@transaction.atomic
def deactivate_account(company_id, account_id, *, user=None) -> Account:
    _authorize(user, company_id)
    account = _get_account(company_id, account_id)

    if account.is_active:
        account.is_active = False
        account.save()
        logger.info(
            "Account deactivated",
            extra={"company_id": str(company_id), "account_id": account.pk},
        )
    return account


@transaction.atomic
def delete_account(company_id, account_id, *, user=None) -> None:
    _authorize(user, company_id)
    account = _get_account(company_id, account_id)

    if has_postings(account):
        raise AccountInUseError(
            f"Account '{account.name}' has journal lines and cannot be deleted; deactivate it instead",
            rule="account_in_use",
        )
    if account.children.exists():
        raise AccountInUseError(
            f"Account '{account.name}' has sub-accounts and cannot be deleted",
            rule="account_in_use",
            details={"children": account.children.count()},
        )

    account_pk = account.pk
    account.delete()

    logger.info(
        "Account deleted",
        extra={"company_id": str(company_id), "account_id": account_pk},
    )


@transaction.atomic
def seed_default_accounts(company_id) -> int:
    """
    Create whichever default accounts are missing. Existing accounts (by
    code or by name) are left untouched. Returns the number created.
    """
    company = get_company(company_id)

    existing = Account.objects.filter(company=company)
    existing_codes = set(existing.values_list("code", flat=True))
    existing_names = set(existing.values_list("name", flat=True))

    created_count = 0
    for code, name, account_type in DEFAULT_CHART:
        if code in existing_codes or name in existing_names:
            continue

        Account.objects.create(
            company=company,
            code=code,
            name=name,
            account_type=account_type,
        )
        created_count += 1

    logger.info(
        "Default chart seeded",
        extra={"company_id": str(company.pk), "created_count": created_count},
    )
    return created_count
