# companies/services/access.py

"""
COMPANY ACCESS GUARD

Answers two questions for the ledger services:
- Which membership (if any) does this user hold in this company?
- Does that membership grant a given capability?

Superusers bypass membership checks (operator tooling).
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError

from accounting.services.exceptions import PermissionDeniedError
from companies.models import CompanyMembership
from permissions.roles import role_has_capability

logger = logging.getLogger(__name__)


def get_membership(user, company_id) -> CompanyMembership | None:
    if user is None or not getattr(user, "pk", None):
        return None
    try:
        return (
            CompanyMembership.objects.filter(user=user, company_id=company_id)
            .select_related("company")
            .first()
        )
    except (DjangoValidationError, ValueError):
        # malformed company id: no membership can match
        return None


def user_can(user, company_id, capability: str) -> bool:
    if user is None:
        return False
    if getattr(user, "is_superuser", False):
        return True

    membership = get_membership(user, company_id)
    if membership is None:
        return False
    return role_has_capability(membership.role, capability)


def require_capability(user, company_id, capability: str) -> None:
    """
    Raise PermissionDeniedError unless `user` may exercise `capability`
    inside `company_id`.
    """
    if user_can(user, company_id, capability):
        return

    logger.warning(
        "Capability denied",
        extra={
            "user_id": str(getattr(user, "pk", "") or ""),
            "company_id": str(company_id),
            "capability": capability,
        },
    )
    raise PermissionDeniedError(
        f"User is not allowed to perform '{capability}' in this company"
    )
