"""
Métriques Prometheus pour l'application.

Ce module définit les métriques HTTP et métier (personnes, affectations, erreurs) exposées sur
`/metrics`, ainsi que le middleware de mesure par route.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Business metrics
PEOPLE_CREATED = Counter(
    "stargate_people_created_total",
    "Total people created",
)
DUTIES_RECORDED = Counter(
    "stargate_duties_recorded_total",
    "Total astronaut duties recorded",
    ["retirement"],
)
COMMAND_ERRORS = Counter(
    "stargate_command_errors_total",
    "Errors returned in the standard envelope",
    ["route", "kind"],
)


def route_label(request: Request) -> str:
    """Libellé de route borné: le gabarit (`/Person/{name}`) plutôt que le chemin concret."""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route pour l'exposition
    Prometheus.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Traite une requête HTTP et collecte les métriques.

        Args:
            request: Requête HTTP entrante.
            call_next: Fonction pour appeler le middleware suivant.

        Returns:
            Response: Réponse HTTP avec métriques collectées.
        """
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = route_label(request)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
