"""Journal d'audit du cycle de vie des requêtes (table `log`).

Chaque commande/requête traitée produit, sous un même identifiant:
- `[STARTING] <Requête>`
- `[PROPS] <json>` (ou une trace d'erreur de sérialisation)
- `[ENDED] <Résultat>` avec la durée en millisecondes, ou `[FAILED] <Résultat>` si le
  traitement lève une exception.

Une erreur d'écriture du journal n'interrompt jamais le traitement de la requête.
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import uuid4

import structlog
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from stargate.infra.repo.log_repo import AuditLogRepo

log = structlog.get_logger(__name__)

SERIALIZATION_ERROR = "[Serialization ERROR] Could not serialize the request."


def serialize_request(request: Any) -> str:
    """Sérialise la requête en JSON. Lève TypeError/ValueError si impossible."""
    if isinstance(request, BaseModel):
        return request.model_dump_json(by_alias=True)
    return json.dumps(request)


class RequestLog:
    """Écrit les étapes de traitement d'une requête dans le journal d'audit."""

    def __init__(self, repo: AuditLogRepo | None, enabled: bool = True) -> None:
        self.repo = repo
        self.enabled = enabled and repo is not None

    def _write(self, name: str, identifier: str, message: str, elapsed_ms: int | None = None):
        if not self.enabled:
            return
        try:
            self.repo.append(name, identifier, message, elapsed_ms)
        except SQLAlchemyError as err:
            log.warning("audit_log_write_failed", name=name, identifier=identifier, error=str(err))

    @contextmanager
    def track(self, request: Any, result_name: str) -> Iterator[str]:
        """Encadre le traitement d'une requête et retourne son identifiant d'audit."""
        request_name = type(request).__name__
        identifier = str(uuid4())
        self._write(request_name, identifier, f"[STARTING] {request_name}")
        start = time.perf_counter()
        try:
            props = serialize_request(request)
        except (TypeError, ValueError):
            self._write(request_name, identifier, SERIALIZATION_ERROR)
        else:
            self._write(request_name, identifier, f"[PROPS] {props}")

        try:
            yield identifier
        except Exception as exc:
            elapsed = int((time.perf_counter() - start) * 1000)
            self._write(result_name, identifier, f"[FAILED] {result_name}: {exc}", elapsed)
            raise
        elapsed = int((time.perf_counter() - start) * 1000)
        self._write(result_name, identifier, f"[ENDED] {result_name}", elapsed)
