"""
Application principale FastAPI.

Ce module assemble tous les composants de l'API Stargate : middlewares, routes, métriques et
gestionnaires d'erreurs.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (CORS pour l'UI, timing, métriques, request id)
- Monter les routers (santé, personnes, affectations, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stargate.api.errors import install_error_handlers
from stargate.api.routes_duty import router as duty_router
from stargate.api.routes_health import router as health_router
from stargate.api.routes_person import router as person_router
from stargate.app.metrics import PrometheusMiddleware, metrics_router
from stargate.core.container import container
from stargate.core.logging import setup_logging
from stargate.middlewares.request_id import RequestIDMiddleware
from stargate.middlewares.timing import TimingMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares (le dernier ajouté est le plus externe)
    - Publie les routes et les gestionnaires d'erreurs à enveloppe standard
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(o).rstrip("/") for o in settings.CORS_ORIGINS],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)
    install_error_handlers(app)
    app.include_router(health_router)
    app.include_router(person_router)
    app.include_router(duty_router)
    app.include_router(metrics_router)
    return app


app = create_app()


def run() -> None:
    """Point d'entrée console: lance uvicorn avec les paramètres d'hôte/port."""
    import uvicorn  # noqa: PLC0415

    uvicorn.run(
        "stargate.app.main:app",
        host=container.settings.APP_HOST,
        port=container.settings.APP_PORT,
    )
