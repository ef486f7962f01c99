# accounting/management/commands/seed_demo_company.py

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from accounting.models import JournalEntry
from accounting.services.chart_service import seed_default_accounts
from accounting.services.journal_entry_service import append_journal_entry
from companies.models import Company
from companies.services.company_service import add_member, create_company
from permissions.roles import ROLE_OWNER

DEMO_EMAIL = "demo@accountech.com"
DEMO_COMPANY_NAME = "Demo Company Inc."

DEMO_COMPANY_DETAILS = {
    "description": "A sample company for demonstration purposes",
    "industry": "Technology",
    "address": "123 Demo Street, Demo City, DC 12345",
    "phone": "+1 (555) 123-4567",
    "email": "info@democompany.com",
    "tax_id": "12-3456789",
}

DEMO_ENTRIES = [
    {
        "date": "2024-01-15",
        "description": "Initial capital investment",
        "reference": "JE001",
        "lines": [
            {"account": "Cash", "description": "Initial investment", "debit": "50000", "credit": "0"},
            {"account": "Owner's Equity", "description": "Initial investment", "debit": "0", "credit": "50000"},
        ],
    },
    {
        "date": "2024-01-16",
        "description": "Purchase of office supplies",
        "reference": "JE002",
        "lines": [
            {"account": "Office Supplies Expense", "description": "Office supplies purchase", "debit": "250", "credit": "0"},
            {"account": "Cash", "description": "Payment for office supplies", "debit": "0", "credit": "250"},
        ],
    },
]


class Command(BaseCommand):
    help = "Seed a demo user, company, default chart and sample journal entries (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument("--password", default="password123", help="Password for the demo user")

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()

        user = User.objects.filter(email=DEMO_EMAIL).first()
        if user is None:
            user = User.objects.create_user(
                email=DEMO_EMAIL,
                password=options["password"],
                first_name="Demo",
                last_name="User",
            )
            self.stdout.write(f"Created demo user: {user.email}")

        company = Company.objects.filter(name=DEMO_COMPANY_NAME, created_by=user).first()
        if company is None:
            company = create_company(user, DEMO_COMPANY_NAME, **DEMO_COMPANY_DETAILS)
            self.stdout.write(f"Created demo company: {company.name}")
        else:
            add_member(company, user, ROLE_OWNER)

        seed_default_accounts(company.pk)

        existing_refs = set(
            JournalEntry.objects.filter(company=company).values_list("reference", flat=True)
        )
        posted = 0
        for entry in DEMO_ENTRIES:
            if entry["reference"] in existing_refs:
                continue
            append_journal_entry(company.pk, user, entry)
            posted += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"✔ Demo company ready (id={company.pk}, {posted} sample entries posted)."
            )
        )
