# accounting/services/entry_validator.py

"""
ENTRY VALIDATOR

Gatekeeper for every journal entry before it is appended.

Checks run in a fixed order; the first failure wins and nothing is
persisted:
1. header fields (date, description, reference)
2. at least one line
3. per-line amounts (parseable, non-negative, storable, exactly one side non-zero)
4. every line names an existing, active account
5. Σdebit and Σcredit agree within 0.01
"""

from __future__ import annotations

import logging
from typing import Iterable

from accounting.ledger_records import AccountRecord, EntryRecord, LineRecord, parse_entry_date
from accounting.services.exceptions import UnknownAccountError, ValidationError
from accounting.services.money import MAX_AMOUNT_MINOR, from_minor, to_minor, within_tolerance

logger = logging.getLogger(__name__)

REQUIRED_HEADER_FIELDS = ("date", "description", "reference")


def _check_header(raw: dict):
    if not isinstance(raw, dict):
        raise ValidationError("Journal entry payload must be an object", rule="missing_fields")

    missing = [
        field
        for field in REQUIRED_HEADER_FIELDS
        if raw.get(field) is None or not str(raw.get(field)).strip()
    ]
    if missing:
        raise ValidationError(
            "Date, description, and reference are required",
            rule="missing_fields",
            details={"missing": missing},
        )

    return (
        parse_entry_date(raw["date"]),
        str(raw["description"]).strip(),
        str(raw["reference"]).strip(),
    )


def _parse_line(index: int, raw_line) -> LineRecord:
    if not isinstance(raw_line, dict):
        raise ValidationError(
            f"Line {index + 1}: malformed line", rule="invalid_line", details={"line": index}
        )

    account_name = str(
        raw_line.get("account") or raw_line.get("account_name") or raw_line.get("accountName") or ""
    ).strip()
    if not account_name:
        raise ValidationError(
            f"Line {index + 1}: account is required", rule="invalid_line", details={"line": index}
        )

    try:
        debit_minor = to_minor(raw_line.get("debit"))
        credit_minor = to_minor(raw_line.get("credit"))
    except ValidationError as exc:
        raise ValidationError(
            f"Line {index + 1}: {exc}", rule="invalid_line", details={"line": index}
        ) from exc

    if debit_minor < 0 or credit_minor < 0:
        raise ValidationError(
            f"Line {index + 1}: amounts must be non-negative",
            rule="invalid_line",
            details={"line": index},
        )

    if max(debit_minor, credit_minor) > MAX_AMOUNT_MINOR:
        raise ValidationError(
            f"Line {index + 1}: amount exceeds {from_minor(MAX_AMOUNT_MINOR)}",
            rule="invalid_line",
            details={"line": index},
        )

    if debit_minor > 0 and credit_minor > 0:
        raise ValidationError(
            f"Line {index + 1}: cannot have both debit and credit",
            rule="invalid_line",
            details={"line": index},
        )

    if debit_minor == 0 and credit_minor == 0:
        raise ValidationError(
            f"Line {index + 1}: debit or credit must be greater than zero",
            rule="invalid_line",
            details={"line": index},
        )

    return LineRecord(
        account_name=account_name,
        debit_minor=debit_minor,
        credit_minor=credit_minor,
        description=str(raw_line.get("description") or "").strip(),
    )


def _resolve_accounts(lines: list[LineRecord], accounts: Iterable[AccountRecord]) -> list[LineRecord]:
    by_name: dict[str, AccountRecord] = {}
    for account in accounts:
        by_name.setdefault(account.name, account)

    resolved = []
    for line in lines:
        account = by_name.get(line.account_name)
        if account is None:
            raise UnknownAccountError(
                f"Account '{line.account_name}' does not exist",
                account_name=line.account_name,
            )
        if not account.is_active:
            raise UnknownAccountError(
                f"Account '{line.account_name}' is inactive",
                account_name=line.account_name,
                details={"inactive": True},
            )
        resolved.append(line)

    return resolved


def validate_entry(raw: dict, accounts: Iterable[AccountRecord]) -> EntryRecord:
    """
    Validate a raw entry payload against the company's accounts and
    return the normalized EntryRecord (id is None until persisted).
    """
    entry_date, description, reference = _check_header(raw)

    raw_lines = raw.get("lines") or []
    if not raw_lines:
        raise ValidationError("At least one line is required", rule="no_lines")

    lines = [_parse_line(index, raw_line) for index, raw_line in enumerate(raw_lines)]
    lines = _resolve_accounts(lines, accounts)

    total_debit = sum(line.debit_minor for line in lines)
    total_credit = sum(line.credit_minor for line in lines)
    difference = total_debit - total_credit

    if not within_tolerance(difference):
        imbalance = from_minor(abs(difference))
        raise ValidationError(
            f"Journal entry is not balanced: debits {from_minor(total_debit)} "
            f"!= credits {from_minor(total_credit)} (difference {imbalance})",
            rule="unbalanced",
            details={
                "total_debit": from_minor(total_debit),
                "total_credit": from_minor(total_credit),
                "imbalance": imbalance,
            },
        )

    logger.debug(
        "Journal entry validated",
        extra={"reference": reference, "line_count": len(lines)},
    )

    return EntryRecord(
        id=None,
        date=entry_date,
        description=description,
        reference=reference,
        lines=tuple(lines),
    )
