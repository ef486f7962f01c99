# backend/urls.py
"""
PROJECT URLS

The ledger has no HTTP API of its own. Mounted here:
- Django admin (chart maintenance, read-only journal) under ADMIN_PATH
- /health/ for load balancers: database reachable + ledger tables readable
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError
from django.http import JsonResponse
from django.urls import path

from accounting.models import JournalEntry

logger = logging.getLogger(__name__)


def health_check(request):
    try:
        JournalEntry.objects.exists()
    except DatabaseError:
        logger.exception("Health check failed: database unavailable")
        return JsonResponse({"status": "degraded", "db": "down"}, status=503)
    return JsonResponse({"status": "ok", "db": "ok"})


ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/").rstrip("/") + "/"

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("health/", health_check, name="health-check"),
]
