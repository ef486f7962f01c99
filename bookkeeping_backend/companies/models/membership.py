# companies/models/membership.py

from django.conf import settings
from django.db import models

from companies.models.company import Company
from permissions.roles import ROLE_CHOICES, ROLE_VIEWER


class CompanyMembership(models.Model):
    """
    Grants a user access to a company with a single role.

    Guarantees:
    - One membership per (user, company)
    - Role is one of OWNER / ADMIN / ACCOUNTANT / VIEWER
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="company_memberships",
    )
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_VIEWER)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["company", "user"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "company"],
                name="uniq_membership_user_company",
            ),
        ]

    def __str__(self):
        return f"{self.user} @ {self.company} ({self.role})"
