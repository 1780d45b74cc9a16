"""
Initialisation et amorçage de la base Stargate.

Crée les tables pour `DATABASE_URL` (ou `--database-url`) puis, si un fichier JSON est fourni,
crée les personnes et enregistre leurs affectations via les services métier (mêmes règles que
l'API). Format attendu:

    [{"name": "Neil Armstrong",
      "duties": [{"rank": "Capcom", "dutyTitle": "Pilot", "dutyStartDate": "1966-01-01"}]}]
"""

from __future__ import annotations

import argparse
import json
from datetime import datetime
from pathlib import Path

from sqlalchemy.engine import Engine

from stargate.core.settings import get_settings
from stargate.domain.config import AppConfig
from stargate.domain.duty_history import DutyHistoryEngine
from stargate.domain.entities import CreatePerson, RecordDuty
from stargate.domain.person_registry import PersonRegistry
from stargate.infra.repo.db import get_engine
from stargate.infra.repo.models import Base


def seed(engine: Engine, config: AppConfig, people: list[dict]) -> tuple[int, int]:
    """Crée les personnes et leurs affectations dans l'ordre du fichier.

    Retour: (nombre de personnes, nombre d'affectations).
    """
    registry = PersonRegistry(engine)
    duties = DutyHistoryEngine(engine, config)
    n_people = n_duties = 0
    for entry in people:
        registry.create_person(CreatePerson(name=entry["name"]))
        n_people += 1
        for duty in entry.get("duties", []):
            duties.record_duty(
                RecordDuty(
                    name=entry["name"],
                    rank=duty["rank"],
                    duty_title=duty["dutyTitle"],
                    duty_start_date=datetime.fromisoformat(duty["dutyStartDate"]),
                )
            )
            n_duties += 1
    return n_people, n_duties


def main(argv: list[str] | None = None) -> None:
    """Point d'entrée: crée le schéma et amorce éventuellement les données."""
    parser = argparse.ArgumentParser()
    parser.add_argument("--database-url", default=None, help="SQLAlchemy URL (default: settings)")
    parser.add_argument("--seed", type=Path, default=None, help="JSON file of people and duties")
    args = parser.parse_args(argv)

    settings = get_settings()
    engine = get_engine(args.database_url or settings.DATABASE_URL)
    Base.metadata.create_all(engine)
    print(f"schema ready on {engine.url.render_as_string(hide_password=True)}")

    if args.seed:
        people = json.loads(args.seed.read_text(encoding="utf-8"))
        n_people, n_duties = seed(engine, AppConfig.from_settings(settings), people)
        print(f"seeded people={n_people} duties={n_duties}")


if __name__ == "__main__":  # pragma: no cover - script entry
    main()
