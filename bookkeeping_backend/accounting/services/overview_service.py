# accounting/services/overview_service.py

"""
OVERVIEW (DASHBOARD SUMMARY)

Headline figures for a company, built from the same report builders the
full statements use so the numbers always agree.
"""

from __future__ import annotations

from typing import Iterable

from accounting.ledger_records import AccountRecord, EntryRecord
from accounting.services.balance_sheet_service import build_balance_sheet
from accounting.services.money import money_fields
from accounting.services.profit_and_loss_service import build_profit_and_loss
from accounting.services.trial_balance_service import build_trial_balance

RECENT_ACTIVITY_LIMIT = 3


def build_overview(
    accounts: Iterable[AccountRecord],
    entries: Iterable[EntryRecord],
) -> dict:
    accounts = list(accounts)
    entries = list(entries)

    balance_sheet = build_balance_sheet(accounts, entries)
    profit_and_loss = build_profit_and_loss(accounts, entries)
    trial_balance = build_trial_balance(entries)

    recent = entries[-RECENT_ACTIVITY_LIMIT:][::-1]

    return {
        **money_fields("total_assets", balance_sheet["total_assets_minor"]),
        **money_fields("net_income", profit_and_loss["net_income_minor"]),
        "journal_entry_count": len(entries),
        "active_account_count": sum(1 for a in accounts if a.is_active),
        "is_balanced": trial_balance["totals"]["balanced"],
        "recent_activity": [
            {
                "id": entry.id,
                "reference": entry.reference,
                "description": entry.description,
                "date": entry.date.isoformat(),
            }
            for entry in recent
        ],
    }
