# permissions/roles.py

from __future__ import annotations

from typing import Optional


# =========================================================
# ROLE CONSTANTS (COMPANY MEMBERSHIP ROLES)
# =========================================================
# A role belongs to a (user, company) membership, never to the user.
ROLE_OWNER = "OWNER"
ROLE_ADMIN = "ADMIN"
ROLE_ACCOUNTANT = "ACCOUNTANT"
ROLE_VIEWER = "VIEWER"

ROLE_CHOICES = [
    (ROLE_OWNER, "Owner"),
    (ROLE_ADMIN, "Admin"),
    (ROLE_ACCOUNTANT, "Accountant"),
    (ROLE_VIEWER, "Viewer"),
]

MEMBERSHIP_ROLES = {role for role, _ in ROLE_CHOICES}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Services protect capabilities, not raw roles.
CAP_LEDGER_POST = "ledger.post"          # append journal entries
CAP_LEDGER_DELETE = "ledger.delete"      # delete whole journal entries
CAP_ACCOUNTS_MANAGE = "accounts.manage"  # create / edit / retire / delete accounts
CAP_REPORTS_VIEW = "reports.view"

ALL_CAPABILITIES = {
    CAP_LEDGER_POST,
    CAP_LEDGER_DELETE,
    CAP_ACCOUNTS_MANAGE,
    CAP_REPORTS_VIEW,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_OWNER: {
        *ALL_CAPABILITIES,
    },
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_ACCOUNTANT: {
        *ALL_CAPABILITIES,
    },
    ROLE_VIEWER: {
        CAP_REPORTS_VIEW,
    },
}


# =========================================================
# Helpers
# =========================================================
def capabilities_for_role(role: Optional[str]) -> set[str]:
    return set(ROLE_CAPABILITIES.get(role or "", set()))


def role_has_capability(role: Optional[str], capability: str) -> bool:
    return capability in capabilities_for_role(role)
