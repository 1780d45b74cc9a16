"""
Endpoint de santé pour vérifier la disponibilité de l'API et de la base de données.

Expose `/health` pour signaler l'état général de l'application et du stockage.
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from stargate.api.deps import get_engine

router = APIRouter(tags=["health"])
log = structlog.get_logger(__name__)
engine_dep = Depends(get_engine)


@router.get("/health")
def health(engine: Engine = engine_dep):
    """Vérifie la disponibilité de l'API et la connexion à la base."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as err:
        log.warning("health_database_unreachable", error=str(err))
        database = "unreachable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "storage": engine.dialect.name,
        "database": database,
    }
