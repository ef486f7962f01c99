# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for the ledger engine and its storage services.

- Everything raised here is recoverable: the caller reports it and nothing
  is persisted.
- Report-level inconsistencies are NOT exceptions; they travel as data
  (DataConsistencyWarning) inside the report that detected them.
"""

from __future__ import annotations

from dataclasses import dataclass


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""


class ValidationError(AccountingServiceError):
    """
    Raised when a journal entry or account fails a structural or
    arithmetic rule. `rule` names the first rule that was violated.
    """

    def __init__(self, message: str, *, rule: str = "invalid", details: dict | None = None):
        super().__init__(message)
        self.rule = rule
        self.details = details or {}


class UnknownAccountError(ValidationError):
    """Raised when a line references a missing or inactive account."""

    def __init__(self, message: str, *, account_name: str = "", details: dict | None = None):
        super().__init__(message, rule="unknown_account", details=details)
        self.account_name = account_name


class DuplicateAccountError(ValidationError):
    """Raised when an account code or name is already used in the company."""


class AccountInUseError(ValidationError):
    """Raised when deleting an account that journal lines still reference."""


class NotFoundError(AccountingServiceError):
    """Raised when a requested account or journal entry does not exist."""


class PermissionDeniedError(AccountingServiceError):
    """Raised when a user's company role does not grant the capability."""


@dataclass(frozen=True)
class DataConsistencyWarning:
    """
    A report that is internally unbalanced despite individually valid
    entries. Surfaced inside the report, never raised and never corrected.
    """

    code: str
    message: str
    difference_minor: int = 0

    def as_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "difference_minor": self.difference_minor,
        }
