# accounting/services/profit_and_loss_service.py

"""
PROFIT & LOSS SERVICE (INCOME STATEMENT)

Pure aggregation over the journal snapshot.

Contract-locked numbers:
{
  "revenue": [{"name", "code", "amount", "amount_minor"}],
  "expenses": [...],
  "total_revenue": float,
  "total_expenses": float,
  "net_income": float,
  "total_revenue_minor": int,
  "total_expenses_minor": int,
  "net_income_minor": int
}

Key rules:
- REVENUE and EXPENSE accounts only, in chart order
- Accounts with |balance| <= 0.01 are omitted
"""

from __future__ import annotations

from typing import Iterable

from accounting.account_types import EXPENSE, REVENUE
from accounting.ledger_records import AccountRecord, EntryRecord
from accounting.services.balance_service import material_balances
from accounting.services.money import money_fields


def _row(account, balance) -> dict:
    return {
        "name": account.name,
        "code": account.code,
        **money_fields("amount", balance.balance_minor),
    }


def build_profit_and_loss(
    accounts: Iterable[AccountRecord],
    entries: Iterable[EntryRecord],
) -> dict:
    revenue = []
    expenses = []
    total_revenue = 0
    total_expenses = 0

    for account, balance in material_balances(accounts, entries, account_types=(REVENUE, EXPENSE)):
        if account.account_type == REVENUE:
            revenue.append(_row(account, balance))
            total_revenue += balance.balance_minor
        else:
            expenses.append(_row(account, balance))
            total_expenses += balance.balance_minor

    return {
        "revenue": revenue,
        "expenses": expenses,
        **money_fields("total_revenue", total_revenue),
        **money_fields("total_expenses", total_expenses),
        **money_fields("net_income", total_revenue - total_expenses),
    }
