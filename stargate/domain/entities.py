"""
Entités du domaine métier.

Ce module définit les commandes et requêtes reçues par les services (modèles Pydantic tolérants:
les champs manquants valent `None` et sont rejetés par la couche de validation) ainsi que les
enregistrements renvoyés par le Record Store (dataclasses).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import MINYEAR, UTC, datetime

from pydantic import BaseModel, field_validator

# ---------------------------------------------------------------------------
# Commandes / requêtes
# ---------------------------------------------------------------------------


class CreatePerson(BaseModel):
    """Création d'une personne identifiée par son nom."""

    name: str | None = None


class RenamePerson(BaseModel):
    """Renommage d'une personne existante."""

    current_name: str | None = None
    new_name: str | None = None


class RecordDuty(BaseModel):
    """Enregistrement d'une nouvelle affectation pour une personne existante."""

    name: str | None = None
    rank: str | None = None
    duty_title: str | None = None
    duty_start_date: datetime | None = None

    @field_validator("duty_start_date")
    @classmethod
    def _naive_utc(cls, value: datetime | None) -> datetime | None:
        # Les dates sont stockées sans fuseau
        if value is not None and value.tzinfo is not None:
            try:
                return value.astimezone(UTC).replace(tzinfo=None)
            except OverflowError:
                # Hors de la plage représentable en UTC: borne la plus proche
                return datetime.min if value.year == MINYEAR else datetime.max
        return value


class GetPeople(BaseModel):
    """Liste de toutes les personnes (sans paramètre)."""


class GetPersonByName(BaseModel):
    name: str | None = None


class GetDutyHistoryByName(BaseModel):
    name: str | None = None


# ---------------------------------------------------------------------------
# Enregistrements
# ---------------------------------------------------------------------------


@dataclass
class Person:
    id: int
    name: str


@dataclass
class AstronautDetail:
    """Projection de l'état courant d'une personne (au plus une par personne)."""

    person_id: int
    current_rank: str
    current_duty_title: str
    career_start_date: datetime
    career_end_date: datetime | None = None
    id: int | None = None


@dataclass
class AstronautDuty:
    """Ligne d'historique d'affectation. `duty_end_date` à `None` = affectation ouverte."""

    id: int
    person_id: int
    rank: str
    duty_title: str
    duty_start_date: datetime
    duty_end_date: datetime | None = None


@dataclass
class PersonAstronaut:
    """Vue lecture: personne jointe (à gauche) avec son détail d'astronaute."""

    person_id: int
    name: str
    current_rank: str = ""
    current_duty_title: str = ""
    career_start_date: datetime | None = None
    career_end_date: datetime | None = None


@dataclass
class DutyHistory:
    """Vue lecture: personne et ses affectations, de la plus récente à la plus ancienne."""

    person: PersonAstronaut
    duties: list[AstronautDuty] = field(default_factory=list)
