"""Écriture du journal d'audit des requêtes (table `log`).

Chaque entrée est commitée dans sa propre transaction courte: une requête annulée conserve
ses traces d'audit.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Engine

from .db import session_scope
from .models import LogORM


class AuditLogRepo:
    """Ajout et lecture des lignes du journal d'audit."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def append(
        self,
        name: str,
        identifier: str,
        message: str,
        elapsed_ms: int | None = None,
    ) -> None:
        with session_scope(self._engine) as session:
            session.add(
                LogORM(
                    request_response_name=name,
                    request_identifier=identifier,
                    log_message=message,
                    elapsed_time_in_millis=elapsed_ms,
                )
            )

    def list_for(self, identifier: str) -> list[dict]:
        """Retourne les entrées d'un identifiant de requête dans l'ordre d'insertion."""
        with session_scope(self._engine) as session:
            stmt = (
                select(LogORM)
                .where(LogORM.request_identifier == identifier)
                .order_by(LogORM.id)
            )
            return [
                {
                    "name": r.request_response_name,
                    "message": r.log_message,
                    "timestamp": r.timestamp,
                    "elapsed_ms": r.elapsed_time_in_millis,
                }
                for r in session.execute(stmt).scalars().all()
            ]
