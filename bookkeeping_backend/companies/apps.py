# companies/apps.py

"""
COMPANIES APP CONFIG

Tenancy module:
- Company (the tenant every ledger record is scoped to)
- CompanyMembership (user ↔ company with a role)
"""

from django.apps import AppConfig


class CompaniesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "companies"
