# accounting/management/commands/seed_default_chart.py

from django.core.management.base import BaseCommand, CommandError

from accounting.services.chart_service import seed_default_accounts
from accounting.services.exceptions import NotFoundError


class Command(BaseCommand):
    help = "Seed the default chart of accounts for a company (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument("--company", required=True, help="Company id (uuid)")

    def handle(self, *args, **options):
        company_id = options["company"]
        self.stdout.write(f"Seeding default chart of accounts for {company_id}...")

        try:
            created_count = seed_default_accounts(company_id)
        except NotFoundError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            self.style.SUCCESS(f"✔ Default chart seeded ({created_count} new accounts).")
        )
