"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Centraliser la création des services métier à partir du conteneur.
- Offrir des points d'ancrage (`get_engine`, `get_config`, `get_request_log`) que les tests
  remplacent via `app.dependency_overrides`.
"""

from fastapi import Depends
from sqlalchemy.engine import Engine

from stargate.core.container import container
from stargate.domain.config import AppConfig
from stargate.domain.duty_history import DutyHistoryEngine
from stargate.domain.person_registry import PersonRegistry
from stargate.domain.queries import AstronautQueries
from stargate.services.request_log import RequestLog


def get_engine() -> Engine:
    return container.engine


def get_config() -> AppConfig:
    return container.app_config


def get_request_log() -> RequestLog:
    return container.request_log


def get_registry(engine: Engine = Depends(get_engine)) -> PersonRegistry:
    return PersonRegistry(engine)


def get_duty_engine(
    engine: Engine = Depends(get_engine), config: AppConfig = Depends(get_config)
) -> DutyHistoryEngine:
    return DutyHistoryEngine(engine, config)


def get_queries(engine: Engine = Depends(get_engine)) -> AstronautQueries:
    return AstronautQueries(engine)
