"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit, pour chaque test, une base SQLite en
mémoire neuve ainsi qu'un client HTTP dont les dépendances pointent vers cette base.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from stargate...` and `from scripts...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from stargate.api import deps  # noqa: E402
from stargate.app.main import app  # noqa: E402
from stargate.domain.config import AppConfig  # noqa: E402
from stargate.domain.duty_history import DutyHistoryEngine  # noqa: E402
from stargate.domain.entities import CreatePerson  # noqa: E402
from stargate.domain.person_registry import PersonRegistry  # noqa: E402
from stargate.infra.repo.db import MEMORY_URL, get_engine  # noqa: E402
from stargate.infra.repo.log_repo import AuditLogRepo  # noqa: E402
from stargate.infra.repo.models import Base  # noqa: E402
from stargate.services.request_log import RequestLog  # noqa: E402


@pytest.fixture
def engine():
    """Base SQLite en mémoire isolée par test."""
    eng = get_engine(MEMORY_URL)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def registry(engine) -> PersonRegistry:
    return PersonRegistry(engine)


@pytest.fixture
def duties(engine, config) -> DutyHistoryEngine:
    return DutyHistoryEngine(engine, config)


@pytest.fixture
def audit_repo(engine) -> AuditLogRepo:
    return AuditLogRepo(engine)


@pytest.fixture
def client(engine, config, audit_repo):
    """Client HTTP branché sur la base du test (via `dependency_overrides`)."""
    app.dependency_overrides[deps.get_engine] = lambda: engine
    app.dependency_overrides[deps.get_config] = lambda: config
    app.dependency_overrides[deps.get_request_log] = lambda: RequestLog(audit_repo)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def neil(registry) -> int:
    return registry.create_person(CreatePerson(name="Neil Armstrong"))
