# accounting/account_types.py

"""
ACCOUNT TYPES & SUBCATEGORIES (FRAMEWORK-AGNOSTIC)

Shared by the Django models and the ORM-free ledger engine, so the engine
never has to import models to know what an account type is.
"""

from __future__ import annotations

ASSET = "ASSET"
LIABILITY = "LIABILITY"
EQUITY = "EQUITY"
REVENUE = "REVENUE"
EXPENSE = "EXPENSE"

ACCOUNT_TYPE_CHOICES = [
    (ASSET, "Asset"),
    (LIABILITY, "Liability"),
    (EQUITY, "Equity"),
    (REVENUE, "Revenue"),
    (EXPENSE, "Expense"),
]

ACCOUNT_TYPES = tuple(value for value, _ in ACCOUNT_TYPE_CHOICES)

# Normal balance: debit-normal types grow with debits, the rest with credits.
DEBIT_NORMAL_TYPES = frozenset({ASSET, EXPENSE})
CREDIT_NORMAL_TYPES = frozenset({LIABILITY, EQUITY, REVENUE})

# Subcategories are scoped to a single account type.
CURRENT_ASSETS = "CURRENT_ASSETS"
NON_CURRENT_ASSETS = "NON_CURRENT_ASSETS"
CURRENT_LIABILITIES = "CURRENT_LIABILITIES"
NON_CURRENT_LIABILITIES = "NON_CURRENT_LIABILITIES"

SUBCATEGORIES_BY_TYPE: dict[str, list[tuple[str, str]]] = {
    ASSET: [
        (NON_CURRENT_ASSETS, "Non-current assets"),
        (CURRENT_ASSETS, "Current assets"),
    ],
    LIABILITY: [
        (NON_CURRENT_LIABILITIES, "Non-current liabilities"),
        (CURRENT_LIABILITIES, "Current liabilities"),
    ],
    EQUITY: [
        ("SHARE_CAPITAL", "Share capital"),
        ("DRAWINGS", "Drawings"),
        ("RETAINED_EARNINGS", "Retained earnings"),
    ],
    REVENUE: [
        ("REVENUE", "Revenue"),
        ("GAINS", "Gains"),
    ],
    EXPENSE: [
        ("COST_OF_SALES", "Cost of sales"),
        ("SELLING_MARKETING", "Selling & marketing expenses"),
        ("ADMIN_DISTRIBUTION", "Admin & distribution expenses"),
    ],
}

SUBCATEGORY_CHOICES = [
    (value, label)
    for account_type in ACCOUNT_TYPES
    for value, label in SUBCATEGORIES_BY_TYPE[account_type]
]


def is_valid_account_type(value) -> bool:
    return value in ACCOUNT_TYPES


def is_valid_subcategory(account_type: str, subcategory: str | None) -> bool:
    if not subcategory:
        return True
    allowed = {value for value, _ in SUBCATEGORIES_BY_TYPE.get(account_type, [])}
    return subcategory in allowed
