# accounting/services/journal_entry_service.py

"""
JOURNAL ENTRY SERVICE (WRITE SIDE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create JournalLine
- Delete a JournalEntry (whole entry, lines cascade)

Guarantees:
- Every entry passes the entry validator before anything is written
- Entry + all lines are inserted in one transaction
- Appends are serialized per company (row lock on the company)
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from accounting.models import Account, JournalEntry, JournalLine
from accounting.services.entry_validator import validate_entry
from accounting.services.exceptions import NotFoundError, ValidationError
from accounting.services.ledger_store import get_company, list_accounts
from accounting.services.money import from_minor
from companies.models import Company
from companies.services.access import require_capability
from permissions.roles import CAP_LEDGER_DELETE, CAP_LEDGER_POST

logger = logging.getLogger(__name__)


@transaction.atomic
def append_journal_entry(company_id, user, entry: dict) -> JournalEntry:
    """
    Validate and persist one journal entry for `company_id`.

    Raises ValidationError / UnknownAccountError (nothing persisted),
    PermissionDeniedError, or NotFoundError for an unknown company.
    """
    require_capability(user, company_id, CAP_LEDGER_POST)

    company = get_company(company_id)
    company = Company.objects.select_for_update().get(pk=company.pk)

    try:
        record = validate_entry(entry, list_accounts(company_id))
    except ValidationError as exc:
        logger.warning(
            "Journal entry rejected",
            extra={
                "company_id": str(company_id),
                "rule": exc.rule,
                "reference": str(entry.get("reference") or "") if isinstance(entry, dict) else "",
            },
        )
        raise

    accounts = {
        account.name: account
        for account in Account.objects.filter(
            company=company,
            name__in={line.account_name for line in record.lines},
        )
    }

    journal = JournalEntry.objects.create(
        company=company,
        user=user,
        date=record.date,
        description=record.description,
        reference=record.reference,
    )

    for position, line in enumerate(record.lines):
        JournalLine.objects.create(
            journal_entry=journal,
            position=position,
            account=accounts[line.account_name],
            account_name=line.account_name,
            description=line.description,
            debit=from_minor(line.debit_minor),
            credit=from_minor(line.credit_minor),
        )

    logger.info(
        "Journal entry posted",
        extra={
            "company_id": str(company_id),
            "journal_entry_id": journal.pk,
            "reference": journal.reference,
            "line_count": len(record.lines),
        },
    )
    return journal


@transaction.atomic
def delete_journal_entry(entry_id, company_id, *, user=None) -> None:
    """
    Delete a whole journal entry and its lines. `user=None` is reserved for
    trusted callers (management commands); otherwise the user must hold the
    ledger delete capability in the company.
    """
    if user is not None:
        require_capability(user, company_id, CAP_LEDGER_DELETE)

    try:
        journal = (
            JournalEntry.objects.select_for_update()
            .filter(pk=entry_id, company_id=company_id)
            .first()
        )
    except (DjangoValidationError, ValueError) as exc:
        raise NotFoundError(f"Journal entry {entry_id} not found") from exc
    if journal is None:
        raise NotFoundError(f"Journal entry {entry_id} not found")

    reference = journal.reference
    journal.delete()

    logger.info(
        "Journal entry deleted",
        extra={
            "company_id": str(company_id),
            "journal_entry_id": entry_id,
            "reference": reference,
        },
    )
