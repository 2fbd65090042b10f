# backend/urls.py
"""
PROJECT URLS

All API routes live under /api/

Ledger aggregation endpoints live under:
- /api/ledger/...

Operational maturity:
- /api/health/ endpoint (AllowAny). The engine is stateless and has no
  database, so health only confirms the app responds and settings load.
"""

from __future__ import annotations

from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ledger.conf import base_currency


# ------------------ API ROOT (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "message": {"type": "string"},
                "docs": {"type": "object"},
                "modules": {"type": "object"},
            },
        }
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Ledger Aggregation API is running",
            "docs": {
                "swagger": "/api/docs/",
                "schema": "/api/schema/",
            },
            "modules": {
                "ledger": "/api/ledger/",
                "periods": "/api/ledger/periods/resolve/",
                "balance_sheet": "/api/ledger/balance-sheet/",
                "trial_balance": "/api/ledger/trial-balance/",
                "profit_and_loss": "/api/ledger/profit-and-loss/",
                "aged_receivables": "/api/ledger/aged-receivables/",
                "aged_payables": "/api/ledger/aged-payables/",
                "report_batch": "/api/ledger/reports/batch/",
            },
        }
    )


# ------------------ HEALTH CHECK (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "base_currency": {"type": "string"},
            },
        },
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Minimal operational endpoint:
    - Confirms app is responding
    - Echoes the configured base currency (settings loaded)
    """
    return Response({"status": "ok", "base_currency": base_currency()})


# ------------------ API ROUTES (ALL UNDER /api/) ------------------
api_urlpatterns = [
    # Health check / root
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    # OpenAPI / Swagger
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Ledger aggregation engine
    path("ledger/", include("ledger.api.urls")),
]

urlpatterns = [
    # Root convenience: visiting / takes you to Swagger docs
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]