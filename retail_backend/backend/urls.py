# backend/urls.py
"""
PROJECT URLS

Everything public sits under /api/:
- /api/                 discovery document (AllowAny)
- /api/health/          liveness + database check (AllowAny)
- /api/schema/, /api/docs/
- /api/auth/jwt/...     SimpleJWT token pair
- /api/accounting/...   ledger, chart of accounts, reports

The Django admin is mounted at settings.ADMIN_PATH (default "admin/").
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connection
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

ACCOUNTING_ROOT = "/api/accounting/"


@extend_schema(responses={200: dict})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Retail Accounting API is running",
            "auth": {
                "jwt_create": "/api/auth/jwt/create/",
                "jwt_refresh": "/api/auth/jwt/refresh/",
            },
            "docs": {"swagger": "/api/docs/", "schema": "/api/schema/"},
            "accounting": {
                "accounts": f"{ACCOUNTING_ROOT}accounts/",
                "journal_entries": f"{ACCOUNTING_ROOT}journal-entries/",
                "ledger_lines": f"{ACCOUNTING_ROOT}ledger-lines/",
                "trial_balance": f"{ACCOUNTING_ROOT}reports/trial-balance/",
                "income_statement": f"{ACCOUNTING_ROOT}reports/income-statement/",
                "balance_sheet": f"{ACCOUNTING_ROOT}reports/balance-sheet/",
            },
        }
    )


@extend_schema(responses={200: dict, 503: dict})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    200 when the process answers and the database runs a trivial query.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        return Response({"status": "degraded", "db": "down", "error": str(exc)}, status=503)
    return Response({"status": "ok", "db": "ok"})


# trailing slash is required by path()
ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/").strip("/") + "/"

api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("accounting/", include("accounting.api.urls")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
