# accounting/models/account.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting import account_types
from companies.models import Company


class Account(models.Model):
    """
    Represents a single account within a company's chart of accounts.

    Guarantees:
    - Account codes and names are unique per company
    - Code + name are normalized (trimmed)
    - Subcategory belongs to the account's type
    - Single-level hierarchy: a parent has no parent, and shares the child's type
    """

    ASSET = account_types.ASSET
    LIABILITY = account_types.LIABILITY
    EQUITY = account_types.EQUITY
    REVENUE = account_types.REVENUE
    EXPENSE = account_types.EXPENSE

    ACCOUNT_TYPES = account_types.ACCOUNT_TYPE_CHOICES

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="accounts",
    )

    code = models.CharField(max_length=20)
    name = models.CharField(max_length=150)

    account_type = models.CharField(
        max_length=20,
        choices=ACCOUNT_TYPES,
    )

    subcategory = models.CharField(
        max_length=40,
        choices=account_types.SUBCATEGORY_CHOICES,
        blank=True,
        default="",
    )

    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        related_name="children",
        null=True,
        blank=True,
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["company", "code"], name="accounting__company_0e3b1d_idx"),
            models.Index(fields=["company", "account_type"], name="accounting__company_5a9f2c_idx"),
            models.Index(fields=["is_active"], name="accounting__is_acti_7c41e8_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "code"],
                name="uniq_account_company_code",
            ),
            models.UniqueConstraint(
                fields=["company", "name"],
                name="uniq_account_company_name",
            ),
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_account_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()
        self.subcategory = (self.subcategory or "").strip()

        if not self.code:
            raise ValidationError("Account code is required")
        if not self.name:
            raise ValidationError("Account name is required")

        if not account_types.is_valid_account_type(self.account_type):
            raise ValidationError("Invalid account type")

        if not account_types.is_valid_subcategory(self.account_type, self.subcategory):
            raise ValidationError("Subcategory does not belong to this account type")

        if self.parent_id:
            parent = self.parent
            if self.pk and parent.pk == self.pk:
                raise ValidationError("An account cannot be its own parent")
            if parent.company_id != self.company_id:
                raise ValidationError("Parent account must belong to the same company")
            if parent.parent_id is not None:
                raise ValidationError("Parent account cannot itself be a sub-account")
            if parent.account_type != self.account_type:
                raise ValidationError("Sub-account type must match its parent account type")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
