# companies/services/company_service.py

"""
COMPANY SERVICE

- create_company: company + OWNER membership (+ default chart when enabled)
- add_member: grant another user a role in a company
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction

from accounting.services.chart_service import seed_default_accounts
from accounting.services.exceptions import ValidationError
from companies.models import Company, CompanyMembership
from permissions.roles import MEMBERSHIP_ROLES, ROLE_OWNER

logger = logging.getLogger(__name__)

COMPANY_DETAIL_FIELDS = ("description", "industry", "address", "phone", "email", "tax_id")


@transaction.atomic
def create_company(user, name: str, **details) -> Company:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Company name is required", rule="missing_fields")

    unknown = set(details) - set(COMPANY_DETAIL_FIELDS)
    if unknown:
        raise ValidationError(
            f"Unknown company fields: {', '.join(sorted(unknown))}", rule="invalid"
        )

    company = Company(name=name, created_by=user, **details)
    company.full_clean()
    company.save()

    CompanyMembership.objects.create(user=user, company=company, role=ROLE_OWNER)

    if getattr(settings, "LEDGER_SEED_DEFAULT_CHART", True):
        seed_default_accounts(company.pk)

    logger.info(
        "Company created",
        extra={"company_id": str(company.pk), "user_id": str(user.pk)},
    )
    return company


@transaction.atomic
def add_member(company: Company, user, role: str) -> CompanyMembership:
    if role not in MEMBERSHIP_ROLES:
        raise ValidationError(f"Invalid role: {role!r}", rule="invalid_role")

    membership, created = CompanyMembership.objects.update_or_create(
        user=user,
        company=company,
        defaults={"role": role},
    )

    logger.info(
        "Company membership saved",
        extra={
            "company_id": str(company.pk),
            "user_id": str(user.pk),
            "role": role,
            "membership_created": created,
        },
    )
    return membership
