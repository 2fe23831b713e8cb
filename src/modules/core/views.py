"""Operational endpoints."""

import time

import structlog
from asgiref.sync import async_to_sync
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.products.repositories import get_product_store

logger = structlog.get_logger(__name__)


def health_check(request: HttpRequest) -> JsonResponse:
    """Report whether the product store answers a live-set count."""
    store = get_product_store()
    start = time.monotonic()
    try:
        async_to_sync(store.connect)()
        live_products = async_to_sync(store.count)({"available": True})
    except Exception as exc:
        logger.error("health.store_down", cause=str(exc))
        store_status = {"status": "down"}
        healthy = False
    else:
        store_status = {
            "status": "up",
            "live_products": live_products,
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
        healthy = True

    logger.info("health.completed", status="healthy" if healthy else "unhealthy")
    return JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": {"store": store_status},
        },
        status=200 if healthy else 503,
    )
