# accounting/services/balance_sheet_service.py

"""
BALANCE SHEET SERVICE

Pure accounting read service.

Responsibilities:
- Fold the snapshot into signed balances per account
- Classify ASSET / LIABILITY balances into current and non-current buckets
- Check the accounting equation (Assets = Liabilities + Equity)

Important:
- Revenue/Expense activity is never closed, so its net is represented as
  "Current Period Earnings" in Equity to keep the balance sheet correct.
- An unbalanced sheet is reported, never corrected: `is_balanced` is False
  and a DataConsistencyWarning travels in `warnings`.

Contract:
- Numeric JSON values (floats, 2dp) alongside exact minor-unit ints
"""

from __future__ import annotations

import logging
from typing import Iterable

from accounting.account_types import ASSET, EQUITY, EXPENSE, LIABILITY, REVENUE
from accounting.ledger_records import AccountRecord, EntryRecord
from accounting.services.account_classifier import BUCKET_CURRENT, classify_account
from accounting.services.balance_service import is_negligible, material_balances
from accounting.services.exceptions import DataConsistencyWarning
from accounting.services.money import from_minor, money_fields, within_tolerance

logger = logging.getLogger(__name__)

CURRENT_EARNINGS_CODE = "E-CURR"
CURRENT_EARNINGS_NAME = "Current Period Earnings"


def _row(code, name, amount_minor: int) -> dict:
    return {"code": code, "name": name, **money_fields("amount", amount_minor)}


def build_balance_sheet(
    accounts: Iterable[AccountRecord],
    entries: Iterable[EntryRecord],
) -> dict:
    sections = {
        "assets": {"current": [], "non_current": []},
        "liabilities": {"current": [], "long_term": []},
        "equity": [],
    }
    totals = {ASSET: 0, LIABILITY: 0, EQUITY: 0, REVENUE: 0, EXPENSE: 0}

    for account, balance in material_balances(accounts, entries):
        amount = balance.balance_minor
        totals[account.account_type] += amount

        if account.account_type in (REVENUE, EXPENSE):
            continue

        row = _row(account.code, account.name, amount)

        if account.account_type == ASSET:
            bucket = "current" if classify_account(account) == BUCKET_CURRENT else "non_current"
            sections["assets"][bucket].append(row)
        elif account.account_type == LIABILITY:
            bucket = "current" if classify_account(account) == BUCKET_CURRENT else "long_term"
            sections["liabilities"][bucket].append(row)
        else:
            sections["equity"].append(row)

    current_earnings = totals[REVENUE] - totals[EXPENSE]
    if not is_negligible(current_earnings):
        sections["equity"].append(_row(CURRENT_EARNINGS_CODE, CURRENT_EARNINGS_NAME, current_earnings))
        totals[EQUITY] += current_earnings

    total_assets = totals[ASSET]
    total_liabilities = totals[LIABILITY]
    total_equity = totals[EQUITY]
    liabilities_and_equity = total_liabilities + total_equity
    difference = total_assets - liabilities_and_equity
    is_balanced = within_tolerance(difference)

    warnings = []
    if not is_balanced:
        warning = DataConsistencyWarning(
            code="balance_sheet_unbalanced",
            message=(
                "Balance Sheet is unbalanced "
                f"(Assets={from_minor(total_assets)} "
                f"Liabilities+Equity={from_minor(liabilities_and_equity)})"
            ),
            difference_minor=difference,
        )
        logger.warning(warning.message, extra={"difference_minor": difference})
        warnings.append(warning.as_dict())

    return {
        **sections,
        **money_fields("total_assets", total_assets),
        **money_fields("total_liabilities", total_liabilities),
        **money_fields("total_equity", total_equity),
        **money_fields("total_liabilities_and_equity", liabilities_and_equity),
        **money_fields("difference", difference),
        "is_balanced": is_balanced,
        "warnings": warnings,
    }
