from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=150)),
                (
                    "account_type",
                    models.CharField(
                        choices=[
                            ("ASSET", "Asset"),
                            ("LIABILITY", "Liability"),
                            ("EQUITY", "Equity"),
                            ("REVENUE", "Revenue"),
                            ("EXPENSE", "Expense"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "subcategory",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("NON_CURRENT_ASSETS", "Non-current assets"),
                            ("CURRENT_ASSETS", "Current assets"),
                            ("NON_CURRENT_LIABILITIES", "Non-current liabilities"),
                            ("CURRENT_LIABILITIES", "Current liabilities"),
                            ("SHARE_CAPITAL", "Share capital"),
                            ("DRAWINGS", "Drawings"),
                            ("RETAINED_EARNINGS", "Retained earnings"),
                            ("REVENUE", "Revenue"),
                            ("GAINS", "Gains"),
                            ("COST_OF_SALES", "Cost of sales"),
                            ("SELLING_MARKETING", "Selling & marketing expenses"),
                            ("ADMIN_DISTRIBUTION", "Admin & distribution expenses"),
                        ],
                        default="",
                        max_length=40,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="accounts",
                        to="companies.company",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["company", "code"], name="accounting__company_0e3b1d_idx"),
                    models.Index(fields=["company", "account_type"], name="accounting__company_5a9f2c_idx"),
                    models.Index(fields=["is_active"], name="accounting__is_acti_7c41e8_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "code"), name="uniq_account_company_code"),
                    models.UniqueConstraint(fields=("company", "name"), name="uniq_account_company_name"),
                    models.CheckConstraint(condition=models.Q(("code", ""), _negated=True), name="chk_account_code_not_blank"),
                    models.CheckConstraint(condition=models.Q(("name", ""), _negated=True), name="chk_account_name_not_blank"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(help_text="Accounting effective date")),
                ("description", models.TextField(help_text="Narrative description of the journal entry")),
                (
                    "reference",
                    models.CharField(
                        help_text="External reference (invoice number, voucher id, etc.)",
                        max_length=100,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        help_text="Timestamp when the journal entry was created",
                    ),
                ),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="journal_entries",
                        to="companies.company",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who recorded the entry",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["company", "date"], name="accounting__company_b2d6a0_idx"),
                    models.Index(fields=["company", "created_at"], name="accounting__company_4f8e37_idx"),
                    models.Index(fields=["reference"], name="accounting__referen_9d2c51_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "position",
                    models.PositiveIntegerField(default=0, help_text="Order of the line inside its entry"),
                ),
                ("account_name", models.CharField(help_text="Account name as of posting", max_length=150)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                (
                    "debit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "credit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="accounting.account",
                    ),
                ),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Line",
                "verbose_name_plural": "Journal Lines",
                "ordering": ["journal_entry", "position", "id"],
                "indexes": [
                    models.Index(fields=["account"], name="accounting__account_3e7a92_idx"),
                    models.Index(fields=["account_name"], name="accounting__account_c81f04_idx"),
                    models.Index(fields=["journal_entry", "position"], name="accounting__journal_6b0d5e_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("debit__gte", 0), ("credit__gte", 0)),
                        name="chk_line_amounts_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("debit", 0), ("credit", 0), _connector="OR"),
                        name="chk_line_single_side",
                    ),
                ],
            },
        ),
    ]
