# accounting/services/general_ledger_service.py

"""
GENERAL LEDGER (LEDGER RECONSTRUCTOR)

Replays each account's postings in date order with a running balance.

Rules:
- Entries are replayed by ascending date; ties keep input order, and
  lines keep their order inside an entry.
- The running balance follows the account's normal-balance sign rule, so
  the last row always equals the balance accumulator's figure.
- Accounts with fewer than MIN_LEDGER_LINES postings are omitted. This is
  a line-count rule, unrelated to the 0.01 balance tolerance.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Iterable, Optional

from accounting.ledger_records import AccountRecord, EntryRecord
from accounting.services.balance_service import signed_amount
from accounting.services.money import money_fields

MIN_LEDGER_LINES = 1


def _replay_order(entries: Iterable[EntryRecord]) -> list[EntryRecord]:
    # sorted() is stable: same-day entries keep their input order.
    return sorted(entries, key=attrgetter("date"))


def build_general_ledger(
    accounts: Iterable[AccountRecord],
    entries: Iterable[EntryRecord],
    *,
    account_name: Optional[str] = None,
) -> dict:
    ordered = _replay_order(entries)

    lines_by_account: dict[str, list] = {}
    for entry in ordered:
        for line in entry.lines:
            lines_by_account.setdefault(line.account_name, []).append((entry, line))

    ledgers = []
    seen: set[str] = set()

    for account in accounts:
        if account.name in seen:
            continue
        seen.add(account.name)

        if account_name is not None and account.name != account_name:
            continue

        postings = lines_by_account.get(account.name, [])
        if len(postings) < MIN_LEDGER_LINES:
            continue

        running = 0
        rows = []
        for entry, line in postings:
            running += signed_amount(account.account_type, line.debit_minor, line.credit_minor)
            rows.append(
                {
                    "entry_id": entry.id,
                    "date": entry.date.isoformat(),
                    "description": line.description or entry.description,
                    "reference": entry.reference,
                    **money_fields("debit", line.debit_minor),
                    **money_fields("credit", line.credit_minor),
                    **money_fields("running_balance", running),
                }
            )

        ledgers.append(
            {
                "account": {
                    "id": account.id,
                    "code": account.code,
                    "name": account.name,
                    "account_type": account.account_type,
                },
                "entries": rows,
                **money_fields("balance", running),
            }
        )

    return {"ledgers": ledgers}
