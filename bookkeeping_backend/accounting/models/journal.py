# accounting/models/journal.py

"""
JOURNAL ENTRY MODEL

Represents a single accounting transaction (journal header).

Guarantees:
- Immutable once created; the only permitted change is full deletion,
  which cascades to its lines
- `date` is the accounting effective date used for ledger replay
- Company-scoped: every line posts to an account of the same company
"""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from companies.models import Company


class JournalEntry(models.Model):
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="journal_entries",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="journal_entries",
        help_text="User who recorded the entry",
    )

    date = models.DateField(help_text="Accounting effective date")

    description = models.TextField(help_text="Narrative description of the journal entry")

    reference = models.CharField(
        max_length=100,
        help_text="External reference (invoice number, voucher id, etc.)",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when the journal entry was created",
    )

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["company", "date"], name="accounting__company_b2d6a0_idx"),
            models.Index(fields=["company", "created_at"], name="accounting__company_4f8e37_idx"),
            models.Index(fields=["reference"], name="accounting__referen_9d2c51_idx"),
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"{self.reference} – {self.date}"

    def clean(self):
        self.reference = (self.reference or "").strip()
        self.description = (self.description or "").strip()

        if not self.reference:
            raise ValidationError("Journal entry reference is required")
        if not self.description:
            raise ValidationError("Journal entry description is required")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntry records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)
