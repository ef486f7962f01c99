# accounting/services/account_classifier.py

"""
ACCOUNT CLASSIFIER & CHART HIERARCHY

Routes accounts into balance sheet / income statement buckets.

RULES
- A known subcategory (current / non-current) is authoritative.
- Otherwise ASSET and LIABILITY fall back to a name heuristic.
- EQUITY, REVENUE and EXPENSE map 1:1 to their own bucket.

HIERARCHY
- Single level: a parent account never has a parent itself.
- A sub-account always has its parent's type.
"""

from __future__ import annotations

from typing import Iterable

from accounting.account_types import (
    ACCOUNT_TYPES,
    ASSET,
    CURRENT_ASSETS,
    CURRENT_LIABILITIES,
    EQUITY,
    EXPENSE,
    LIABILITY,
    NON_CURRENT_ASSETS,
    NON_CURRENT_LIABILITIES,
    REVENUE,
)
from accounting.services.exceptions import ValidationError

BUCKET_CURRENT = "current"
BUCKET_NON_CURRENT = "non_current"
BUCKET_LONG_TERM = "long_term"
BUCKET_EQUITY = "equity"
BUCKET_REVENUE = "revenue"
BUCKET_EXPENSE = "expense"

CURRENT_ASSET_KEYWORDS = ("cash", "receivable", "inventory")
CURRENT_LIABILITY_KEYWORDS = ("payable", "accrued")

SUBCATEGORY_BUCKETS = {
    (ASSET, CURRENT_ASSETS): BUCKET_CURRENT,
    (ASSET, NON_CURRENT_ASSETS): BUCKET_NON_CURRENT,
    (LIABILITY, CURRENT_LIABILITIES): BUCKET_CURRENT,
    (LIABILITY, NON_CURRENT_LIABILITIES): BUCKET_LONG_TERM,
}

TYPE_BUCKETS = {
    EQUITY: BUCKET_EQUITY,
    REVENUE: BUCKET_REVENUE,
    EXPENSE: BUCKET_EXPENSE,
}


def _name_contains(name: str, keywords: Iterable[str]) -> bool:
    lowered = (name or "").lower()
    return any(keyword in lowered for keyword in keywords)


def classify(account_type: str, name: str, subcategory: str | None = None) -> str:
    bucket = SUBCATEGORY_BUCKETS.get((account_type, subcategory or ""))
    if bucket:
        return bucket

    if account_type == ASSET:
        return BUCKET_CURRENT if _name_contains(name, CURRENT_ASSET_KEYWORDS) else BUCKET_NON_CURRENT

    if account_type == LIABILITY:
        return BUCKET_CURRENT if _name_contains(name, CURRENT_LIABILITY_KEYWORDS) else BUCKET_LONG_TERM

    try:
        return TYPE_BUCKETS[account_type]
    except KeyError as exc:
        raise ValidationError(
            f"Unknown account type: {account_type!r}", rule="invalid_type"
        ) from exc


def classify_account(account) -> str:
    return classify(account.account_type, account.name, getattr(account, "subcategory", None))


# =========================================================
# HIERARCHY
# =========================================================
def validate_parent(child_type: str, parent) -> None:
    """
    `parent` is any account-like object exposing `account_type` and
    `parent_id`. None means a root account and is always valid.
    """
    if parent is None:
        return

    if parent.parent_id is not None:
        raise ValidationError(
            "Parent account already has a parent; only one level of sub-accounts is allowed",
            rule="hierarchy",
            details={"check": "parent_has_no_parent"},
        )

    if parent.account_type != child_type:
        raise ValidationError(
            "Sub-account type must match its parent account type",
            rule="hierarchy",
            details={"check": "same_type_as_parent"},
        )


def build_account_tree(accounts) -> list[dict]:
    """
    Groups accounts per type (type order), then nests sub-accounts under
    their parent. Sub-accounts whose parent is not in `accounts` are shown
    as roots.
    """
    accounts = list(accounts)
    known_ids = {a.id for a in accounts}

    children: dict = {}
    for account in accounts:
        if account.parent_id is not None and account.parent_id in known_ids:
            children.setdefault(account.parent_id, []).append(account)

    def _node(account) -> dict:
        return {
            "id": account.id,
            "code": account.code,
            "name": account.name,
            "account_type": account.account_type,
            "subcategory": account.subcategory,
            "is_active": account.is_active,
            "children": [_node(child) for child in children.get(account.id, [])],
        }

    tree = []
    for account_type in ACCOUNT_TYPES:
        roots = [
            a for a in accounts
            if a.account_type == account_type
            and (a.parent_id is None or a.parent_id not in known_ids)
        ]
        tree.append({"account_type": account_type, "accounts": [_node(a) for a in roots]})

    return tree
