"""``GET /health``: answers 200 when every configured database responds."""

import time
from typing import Any, Dict

import structlog
from django.conf import settings
from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.core.db import SqlRepository

logger = structlog.get_logger(__name__)


def check_database(alias: str) -> Dict[str, Any]:
    """Round-trip a trivial query through the repository layer for ``alias``.

    ``row_locks`` tells whether order closing can rely on ``FOR UPDATE``
    or falls back to the database-wide write lock.
    """
    repository = SqlRepository(using=alias)
    started = time.monotonic()
    try:
        repository.select_scalar("SELECT 1")
    except DatabaseError:
        logger.error("health.database_unreachable", alias=alias, exc_info=True)
        return {"status": "down"}
    connection = repository.connection
    return {
        "status": "up",
        "vendor": connection.vendor,
        "row_locks": connection.features.has_select_for_update,
        "response_time_ms": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    databases = {alias: check_database(alias) for alias in settings.DATABASES}
    healthy = all(report["status"] == "up" for report in databases.values())
    status = "healthy" if healthy else "unhealthy"

    logger.info("health.checked", status=status, databases=sorted(databases))

    return JsonResponse(
        {
            "status": status,
            "timestamp": timezone.now().isoformat(),
            "databases": databases,
        },
        status=200 if healthy else 503,
    )
