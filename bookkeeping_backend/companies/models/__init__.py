# companies/models/__init__.py

from companies.models.company import Company
from companies.models.membership import CompanyMembership

__all__ = [
    "Company",
    "CompanyMembership",
]
