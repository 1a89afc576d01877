# backend/views.py
"""
PROJECT-LEVEL ENDPOINTS (AllowAny)

- GET /api/          endpoint index for the frontend / humans
- GET /api/health/   liveness + DB check for the load balancer
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)

API_INDEX = {
    "auth": {
        "register": "/api/auth/register/",
        "login": "/api/auth/login/",
        "me": "/api/auth/me/",
        "settings": "/api/auth/settings/",
        "owners": "/api/auth/owners/",
        "jwt_create": "/api/auth/jwt/create/",
        "jwt_refresh": "/api/auth/jwt/refresh/",
    },
    "suites": {
        "catalog": "/api/suites/",
        "map": "/api/suites/map/",
    },
    "verification": {
        "applications": "/api/applications/",
        "mine": "/api/applications/mine/",
        "uploads": "/api/applications/uploads/",
        "pending_count": "/api/applications/pending-count/",
    },
    "listings": {
        "browse": "/api/listings/",
        "mine": "/api/listings/mine/",
        "sell_tickets": "/api/listings/sell-tickets/",
        "mark_all_sold": "/api/listings/mark-all-sold/",
        "mark_available": "/api/listings/mark-available/",
        "toggle_status": "/api/listings/mark-sold/",
    },
    "messages": "/api/messages/",
    "discussions": "/api/discussions/",
    "docs": {
        "swagger": "/api/docs/",
        "schema": "/api/schema/",
    },
}


@extend_schema(responses={200: {"type": "object"}})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": f"{settings.APP_NAME} API is running",
            "version": settings.SPECTACULAR_SETTINGS.get("VERSION"),
            "endpoints": API_INDEX,
        }
    )


@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
                "time": {"type": "string"},
            },
        },
        503: {"type": "object"},
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """Only a failed DB round trip degrades the service."""
    now = timezone.now().isoformat()
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except OperationalError as exc:
        logger.error("Health check: database unreachable", extra={"error": str(exc)})
        return Response({"status": "degraded", "db": "down", "time": now}, status=503)

    return Response({"status": "ok", "db": "ok", "time": now})
