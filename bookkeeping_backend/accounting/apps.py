# accounting/apps.py

"""
ACCOUNTING APP CONFIG

Ledger module:
- Account (company chart of accounts)
- JournalEntry / JournalLine (immutable double-entry journal)
- ORM-free report engine under accounting/services
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
