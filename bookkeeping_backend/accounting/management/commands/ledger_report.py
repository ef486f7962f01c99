# accounting/management/commands/ledger_report.py

import json

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from accounting.services.account_classifier import build_account_tree
from accounting.services.balance_sheet_service import build_balance_sheet
from accounting.services.exceptions import NotFoundError, PermissionDeniedError
from accounting.services.general_ledger_service import build_general_ledger
from accounting.services.ledger_store import load_snapshot
from accounting.services.overview_service import build_overview
from accounting.services.profit_and_loss_service import build_profit_and_loss
from accounting.services.trial_balance_service import (
    build_net_trial_balance,
    build_trial_balance,
)

REPORTS = {
    "chart": lambda snap, opts: {"chart": build_account_tree(snap.accounts)},
    "trial-balance": lambda snap, opts: build_trial_balance(snap.entries),
    "net-trial-balance": lambda snap, opts: build_net_trial_balance(snap.accounts, snap.entries),
    "profit-loss": lambda snap, opts: build_profit_and_loss(snap.accounts, snap.entries),
    "balance-sheet": lambda snap, opts: build_balance_sheet(snap.accounts, snap.entries),
    "general-ledger": lambda snap, opts: build_general_ledger(
        snap.accounts, snap.entries, account_name=opts.get("account")
    ),
    "overview": lambda snap, opts: build_overview(snap.accounts, snap.entries),
}


class Command(BaseCommand):
    help = "Print a ledger report for a company as JSON"

    def add_arguments(self, parser):
        parser.add_argument("--company", required=True, help="Company id (uuid)")
        parser.add_argument("--report", required=True, choices=sorted(REPORTS))
        parser.add_argument("--account", default=None, help="Account name (general-ledger only)")
        parser.add_argument(
            "--user",
            default=None,
            help="Read as this member (email); omit to read as operator",
        )

    def handle(self, *args, **options):
        user = None
        if options["user"]:
            user = get_user_model().objects.filter(email__iexact=options["user"]).first()
            if user is None:
                raise CommandError(f"User {options['user']} not found")

        try:
            snapshot = load_snapshot(options["company"], user=user)
        except (NotFoundError, PermissionDeniedError) as exc:
            raise CommandError(str(exc)) from exc

        report = REPORTS[options["report"]](snapshot, options)
        self.stdout.write(json.dumps(report, cls=DjangoJSONEncoder, indent=2))
