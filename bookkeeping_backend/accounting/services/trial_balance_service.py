# accounting/services/trial_balance_service.py

"""
TRIAL BALANCE

Two modes over the same snapshot:

- gross (`build_trial_balance`): per account name, debits and credits are
  summed independently. Σdebit == Σcredit whenever every entry balanced.
- net (`build_net_trial_balance`): one signed balance per account, placed
  on its natural side (negligible balances omitted).

Returns JSON-safe numbers (float major units + int minor units).
"""

from __future__ import annotations

from typing import Iterable

from accounting.account_types import DEBIT_NORMAL_TYPES
from accounting.ledger_records import AccountRecord, EntryRecord
from accounting.services.balance_service import iter_postings, material_balances
from accounting.services.money import money_fields, within_tolerance


def _totals(total_debit: int, total_credit: int) -> dict:
    difference = total_debit - total_credit
    return {
        **money_fields("debit", total_debit),
        **money_fields("credit", total_credit),
        **money_fields("difference", difference),
        "balanced": within_tolerance(difference),
    }


def build_trial_balance(entries: Iterable[EntryRecord]) -> dict:
    debit_by_account: dict[str, int] = {}
    credit_by_account: dict[str, int] = {}

    for _entry, line in iter_postings(entries):
        name = line.account_name
        debit_by_account[name] = debit_by_account.get(name, 0) + line.debit_minor
        credit_by_account[name] = credit_by_account.get(name, 0) + line.credit_minor

    rows = [
        {
            "account": name,
            **money_fields("debit", debit_by_account[name]),
            **money_fields("credit", credit_by_account[name]),
        }
        for name in debit_by_account
    ]

    return {
        "mode": "gross",
        "accounts": rows,
        "totals": _totals(sum(debit_by_account.values()), sum(credit_by_account.values())),
    }


def build_net_trial_balance(
    accounts: Iterable[AccountRecord],
    entries: Iterable[EntryRecord],
) -> dict:
    rows = []
    total_debit = 0
    total_credit = 0

    for account, balance in material_balances(accounts, entries):
        amount = balance.balance_minor
        on_debit_side = (account.account_type in DEBIT_NORMAL_TYPES) == (amount > 0)

        debit = abs(amount) if on_debit_side else 0
        credit = 0 if on_debit_side else abs(amount)

        rows.append(
            {
                "account": account.name,
                "account_code": account.code,
                "account_type": account.account_type,
                **money_fields("debit", debit),
                **money_fields("credit", credit),
            }
        )
        total_debit += debit
        total_credit += credit

    return {
        "mode": "net",
        "accounts": rows,
        "totals": _totals(total_debit, total_credit),
    }
