# accounting/models/journal_line.py

"""
JOURNAL LINE MODEL

One debit or credit posting inside a journal entry.

Guarantees:
- Immutable once created (removed only with its journal entry)
- debit >= 0, credit >= 0, never both non-zero
- `account` is the immutable link used by reports; `account_name` keeps
  the display name as it was at posting time
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.journal import JournalEntry


class JournalLine(models.Model):
    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.CASCADE,
        related_name="lines",
    )

    position = models.PositiveIntegerField(
        default=0,
        help_text="Order of the line inside its entry",
    )

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )

    account_name = models.CharField(
        max_length=150,
        help_text="Account name as of posting",
    )

    description = models.CharField(max_length=255, blank=True, default="")

    debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        verbose_name = "Journal Line"
        verbose_name_plural = "Journal Lines"
        ordering = ["journal_entry", "position", "id"]
        indexes = [
            models.Index(fields=["account"], name="accounting__account_3e7a92_idx"),
            models.Index(fields=["account_name"], name="accounting__account_c81f04_idx"),
            models.Index(fields=["journal_entry", "position"], name="accounting__journal_6b0d5e_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(debit__gte=0) & Q(credit__gte=0),
                name="chk_line_amounts_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(debit=0) | Q(credit=0),
                name="chk_line_single_side",
            ),
        ]

    def __str__(self):
        side = f"Dr {self.debit}" if self.debit else f"Cr {self.credit}"
        return f"{side} → {self.account_name}"

    def clean(self):
        if self.debit is None or self.credit is None:
            raise ValidationError("Debit and credit are required")
        if self.debit < 0 or self.credit < 0:
            raise ValidationError("Line amounts must be non-negative")
        if self.debit > 0 and self.credit > 0:
            raise ValidationError("A line cannot have both a debit and a credit")

        if self.journal_entry_id and self.account_id:
            if self.account.company_id != self.journal_entry.company_id:
                raise ValidationError("Line account must belong to the entry's company")

        if not self.account_name and self.account_id:
            self.account_name = self.account.name

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalLine records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)
