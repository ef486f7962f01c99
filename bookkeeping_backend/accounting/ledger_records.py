# accounting/ledger_records.py

"""
LEDGER RECORDS (ORM-FREE)

Plain, immutable records the ledger engine folds over.

- Amounts are integer minor units (cents).
- `from_raw` accepts data handed over by an external collaborator
  (JSON payloads, fixtures) in either snake_case or camelCase.
- `from_model` adapts Django model instances without importing them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from accounting.services.exceptions import ValidationError
from accounting.services.money import to_minor


def _pick(raw: dict, *keys, default=None):
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def parse_entry_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value or "").strip()
    if not text:
        raise ValidationError("Entry date is required", rule="missing_fields")

    try:
        # Accepts "2024-01-15" as well as "2024-01-15T00:00:00.000Z".
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise ValidationError(
            f"Invalid entry date: {value!r}", rule="missing_fields"
        ) from exc


@dataclass(frozen=True)
class AccountRecord:
    id: Any
    code: str
    name: str
    account_type: str
    subcategory: Optional[str] = None
    parent_id: Any = None
    is_active: bool = True

    @staticmethod
    def from_raw(raw: dict) -> "AccountRecord":
        return AccountRecord(
            id=_pick(raw, "id"),
            code=str(_pick(raw, "code", default="")).strip(),
            name=str(_pick(raw, "name", default="")).strip(),
            account_type=str(_pick(raw, "account_type", "type", default="")).strip().upper(),
            subcategory=_pick(raw, "subcategory") or None,
            parent_id=_pick(raw, "parent_id", "parentId"),
            is_active=bool(_pick(raw, "is_active", "isActive", default=True)),
        )

    @staticmethod
    def from_model(account) -> "AccountRecord":
        return AccountRecord(
            id=account.pk,
            code=account.code,
            name=account.name,
            account_type=account.account_type,
            subcategory=account.subcategory or None,
            parent_id=account.parent_id,
            is_active=account.is_active,
        )


@dataclass(frozen=True)
class LineRecord:
    account_name: str
    debit_minor: int = 0
    credit_minor: int = 0
    description: str = ""

    @staticmethod
    def from_raw(raw: dict) -> "LineRecord":
        return LineRecord(
            account_name=str(_pick(raw, "account_name", "accountName", "account", default="")).strip(),
            debit_minor=to_minor(_pick(raw, "debit", default=0)),
            credit_minor=to_minor(_pick(raw, "credit", default=0)),
            description=str(_pick(raw, "description", default="")).strip(),
        )


@dataclass(frozen=True)
class EntryRecord:
    id: Any
    date: date
    description: str
    reference: str
    lines: tuple[LineRecord, ...] = field(default_factory=tuple)

    @property
    def total_debit_minor(self) -> int:
        return sum(line.debit_minor for line in self.lines)

    @property
    def total_credit_minor(self) -> int:
        return sum(line.credit_minor for line in self.lines)

    @staticmethod
    def from_raw(raw: dict) -> "EntryRecord":
        return EntryRecord(
            id=_pick(raw, "id"),
            date=parse_entry_date(_pick(raw, "date")),
            description=str(_pick(raw, "description", default="")).strip(),
            reference=str(_pick(raw, "reference", default="")).strip(),
            lines=tuple(LineRecord.from_raw(line) for line in (_pick(raw, "lines", default=[]))),
        )


@dataclass(frozen=True)
class LedgerSnapshot:
    """One company's full chart and journal, read together."""

    accounts: tuple[AccountRecord, ...]
    entries: tuple[EntryRecord, ...]
