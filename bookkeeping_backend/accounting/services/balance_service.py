# accounting/services/balance_service.py

"""
BALANCE ACCUMULATOR

Folds a company's journal into one signed balance per account.

RULES
- ASSET / EXPENSE:                balance = debit − credit
- LIABILITY / EQUITY / REVENUE:   balance = credit − debit
- Balances are integer minor units; nothing is rounded mid-fold.
- Lines naming an account that is not in the chart are skipped (and logged).

Pure: same (accounts, entries) in, same balances out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator

from accounting.account_types import DEBIT_NORMAL_TYPES
from accounting.ledger_records import AccountRecord, EntryRecord, LineRecord
from accounting.services.money import from_minor, within_tolerance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountBalance:
    account_name: str
    account_type: str
    balance_minor: int

    @property
    def balance(self) -> Decimal:
        return from_minor(self.balance_minor)

    @property
    def is_negligible(self) -> bool:
        return is_negligible(self.balance_minor)


def signed_amount(account_type: str, debit_minor: int, credit_minor: int) -> int:
    if account_type in DEBIT_NORMAL_TYPES:
        return debit_minor - credit_minor
    return credit_minor - debit_minor


def is_negligible(balance_minor: int) -> bool:
    """Balance-consuming reports hide accounts within one cent of zero."""
    return within_tolerance(balance_minor)


def accounts_by_name(accounts: Iterable[AccountRecord]) -> dict[str, AccountRecord]:
    by_name: dict[str, AccountRecord] = {}
    for account in accounts:
        by_name.setdefault(account.name, account)
    return by_name


def iter_postings(entries: Iterable[EntryRecord]) -> Iterator[tuple[EntryRecord, LineRecord]]:
    for entry in entries:
        for line in entry.lines:
            yield entry, line


def compute_balances(
    accounts: Iterable[AccountRecord],
    entries: Iterable[EntryRecord],
) -> dict[str, AccountBalance]:
    """
    One AccountBalance per account name with at least one posted line,
    in order of first posting.
    """
    chart = accounts_by_name(accounts)
    totals: dict[str, int] = {}
    unknown: set[str] = set()

    for entry, line in iter_postings(entries):
        account = chart.get(line.account_name)
        if account is None:
            if line.account_name not in unknown:
                unknown.add(line.account_name)
                logger.warning(
                    "Journal line references an account missing from the chart",
                    extra={"account_name": line.account_name, "entry_id": str(entry.id)},
                )
            continue

        totals[account.name] = totals.get(account.name, 0) + signed_amount(
            account.account_type, line.debit_minor, line.credit_minor
        )

    return {
        name: AccountBalance(
            account_name=name,
            account_type=chart[name].account_type,
            balance_minor=balance_minor,
        )
        for name, balance_minor in totals.items()
    }


def material_balances(
    accounts: Iterable[AccountRecord],
    entries: Iterable[EntryRecord],
    *,
    account_types: Iterable[str] | None = None,
) -> list[tuple[AccountRecord, AccountBalance]]:
    """
    Non-negligible balances in chart order, optionally restricted to
    some account types.
    """
    accounts = list(accounts)
    balances = compute_balances(accounts, entries)
    wanted = set(account_types) if account_types is not None else None

    rows = []
    seen: set[str] = set()
    for account in accounts:
        if account.name in seen:
            continue
        seen.add(account.name)

        if wanted is not None and account.account_type not in wanted:
            continue

        balance = balances.get(account.name)
        if balance is None or balance.is_negligible:
            continue

        rows.append((account, balance))

    return rows
