# accounting/services/ledger_store.py

"""
LEDGER STORE (READ SIDE)

Loads a company's chart and journal out of the ORM as plain records the
report engine can fold.

Rules:
- Inactive accounts are listed by default: retired accounts keep their
  history in every report.
- Journal entries come back in creation order; lines in posting order.
- Lines carry the account's *current* name (via the immutable FK), so a
  rename never orphans earlier postings.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import connection, transaction

from accounting.ledger_records import AccountRecord, EntryRecord, LedgerSnapshot, LineRecord
from accounting.models import Account, JournalEntry, JournalLine
from accounting.services.exceptions import NotFoundError
from accounting.services.money import to_minor
from companies.models import Company
from companies.services.access import require_capability
from permissions.roles import CAP_REPORTS_VIEW

SNAPSHOT_ISOLATION_SQL = "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ"


def get_company(company_id) -> Company:
    try:
        company = Company.objects.filter(pk=company_id).first()
    except (DjangoValidationError, ValueError) as exc:
        raise NotFoundError(f"Company {company_id} not found") from exc

    if company is None:
        raise NotFoundError(f"Company {company_id} not found")
    return company


def list_accounts(company_id, *, include_inactive: bool = True) -> list[AccountRecord]:
    qs = Account.objects.filter(company_id=company_id).order_by("code", "id")
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return [AccountRecord.from_model(account) for account in qs]


def _line_record(line: JournalLine) -> LineRecord:
    return LineRecord(
        account_name=line.account.name,
        debit_minor=to_minor(line.debit),
        credit_minor=to_minor(line.credit),
        description=line.description,
    )


def list_journal_entries(company_id) -> list[EntryRecord]:
    qs = (
        JournalEntry.objects.filter(company_id=company_id)
        .order_by("created_at", "id")
        .prefetch_related("lines__account")
    )

    return [
        EntryRecord(
            id=entry.pk,
            date=entry.date,
            description=entry.description,
            reference=entry.reference,
            lines=tuple(_line_record(line) for line in entry.lines.all()),
        )
        for entry in qs
    ]


def load_snapshot(company_id, *, user=None) -> LedgerSnapshot:
    """
    Chart and journal read together inside one transaction. `user=None` is
    reserved for trusted callers; otherwise the user must hold the report
    view capability in the company.

    Under PostgreSQL's default READ COMMITTED every statement sees its own
    snapshot, so the accounts query, the entries query and the prefetches
    could straddle a concurrent commit. When this call owns the transaction
    it switches it to REPEATABLE READ, making all reads share one snapshot.
    Nested inside a caller's transaction, the caller's isolation applies.
    """
    owns_transaction = not connection.in_atomic_block
    with transaction.atomic():
        if owns_transaction and connection.vendor == "postgresql":
            with connection.cursor() as cursor:
                cursor.execute(SNAPSHOT_ISOLATION_SQL)
        get_company(company_id)
        if user is not None:
            require_capability(user, company_id, CAP_REPORTS_VIEW)
        return LedgerSnapshot(
            accounts=tuple(list_accounts(company_id)),
            entries=tuple(list_journal_entries(company_id)),
        )
