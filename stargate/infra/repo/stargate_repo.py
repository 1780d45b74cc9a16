# ============================================================
# Module : stargate/infra/repo/stargate_repo.py
# Objet  : Accès SQL (lecture/écriture) pour Person, AstronautDetail, AstronautDuty.
# Notes  : les écritures font un flush; le commit appartient à l'unité de travail.
# ============================================================

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stargate.domain.entities import (
    AstronautDetail,
    AstronautDuty,
    Person,
    PersonAstronaut,
)
from stargate.domain.errors import ConflictError

from .models import AstronautDetailORM, AstronautDutyORM, PersonORM, name_key


def _person(row: PersonORM) -> Person:
    return Person(id=row.id, name=row.name)


def _detail(row: AstronautDetailORM) -> AstronautDetail:
    return AstronautDetail(
        id=row.id,
        person_id=row.person_id,
        current_rank=row.current_rank,
        current_duty_title=row.current_duty_title,
        career_start_date=row.career_start_date,
        career_end_date=row.career_end_date,
    )


def _duty(row: AstronautDutyORM) -> AstronautDuty:
    return AstronautDuty(
        id=row.id,
        person_id=row.person_id,
        rank=row.rank,
        duty_title=row.duty_title,
        duty_start_date=row.duty_start_date,
        duty_end_date=row.duty_end_date,
    )


def _projection(person: PersonORM, detail: AstronautDetailORM | None) -> PersonAstronaut:
    if detail is None:
        return PersonAstronaut(person_id=person.id, name=person.name)
    return PersonAstronaut(
        person_id=person.id,
        name=person.name,
        current_rank=detail.current_rank,
        current_duty_title=detail.current_duty_title,
        career_start_date=detail.career_start_date,
        career_end_date=detail.career_end_date,
    )


class StargateRepo:
    """Dépôt SQL des personnes et de leur historique d'affectations."""

    def __init__(self, session: Session) -> None:
        """Construit le repo avec une session (SQLAlchemy)."""
        self._session = session

    # ------------------------------------------------------------------
    # Lecture
    # ------------------------------------------------------------------

    def _person_row_by_name(self, name: str) -> PersonORM | None:
        stmt = select(PersonORM).where(PersonORM.name_key == name_key(name))
        return self._session.execute(stmt).scalars().first()

    def get_person_by_name(self, name: str) -> Person | None:
        """Recherche une personne par nom (comparaison ordinale insensible à la casse)."""
        if not name:
            return None
        row = self._person_row_by_name(name)
        return _person(row) if row else None

    def get_person_by_id(self, person_id: int) -> Person | None:
        row = self._session.get(PersonORM, person_id)
        return _person(row) if row else None

    def list_people_with_details(self) -> list[PersonAstronaut]:
        """Retourne toutes les personnes jointes à gauche avec leur détail."""
        stmt = (
            select(PersonORM, AstronautDetailORM)
            .outerjoin(AstronautDetailORM, AstronautDetailORM.person_id == PersonORM.id)
            .order_by(PersonORM.id)
        )
        return [_projection(p, d) for p, d in self._session.execute(stmt).all()]

    def get_person_with_detail_by_name(self, name: str) -> PersonAstronaut | None:
        stmt = (
            select(PersonORM, AstronautDetailORM)
            .outerjoin(AstronautDetailORM, AstronautDetailORM.person_id == PersonORM.id)
            .where(PersonORM.name_key == name_key(name))
        )
        row = self._session.execute(stmt).first()
        if not row:
            return None
        return _projection(row[0], row[1])

    def get_detail_by_person_id(self, person_id: int) -> AstronautDetail | None:
        stmt = select(AstronautDetailORM).where(AstronautDetailORM.person_id == person_id)
        row = self._session.execute(stmt).scalars().first()
        return _detail(row) if row else None

    def get_duty_by_title_and_start(
        self, person_id: int, duty_title: str, duty_start_date: datetime
    ) -> AstronautDuty | None:
        """Retourne l'affectation de même intitulé et même date de début."""
        stmt = select(AstronautDutyORM).where(
            AstronautDutyORM.person_id == person_id,
            AstronautDutyORM.duty_title == duty_title,
            AstronautDutyORM.duty_start_date == duty_start_date,
        )
        row = self._session.execute(stmt).scalars().first()
        return _duty(row) if row else None

    def get_open_duty(self, person_id: int) -> AstronautDuty | None:
        """Retourne l'affectation ouverte la plus récemment insérée (ordre des id)."""
        stmt = (
            select(AstronautDutyORM)
            .where(
                AstronautDutyORM.person_id == person_id,
                AstronautDutyORM.duty_end_date.is_(None),
            )
            .order_by(AstronautDutyORM.id.desc())
            .limit(1)
        )
        row = self._session.execute(stmt).scalars().first()
        return _duty(row) if row else None

    def list_duties(self, person_id: int) -> list[AstronautDuty]:
        """Retourne l'historique d'une personne, du plus récent au plus ancien (par id)."""
        stmt = (
            select(AstronautDutyORM)
            .where(AstronautDutyORM.person_id == person_id)
            .order_by(AstronautDutyORM.id.desc())
        )
        return [_duty(r) for r in self._session.execute(stmt).scalars().all()]

    # ------------------------------------------------------------------
    # Écriture
    # ------------------------------------------------------------------

    def _flush_unique(self, name: str) -> None:
        try:
            self._session.flush()
        except IntegrityError as err:
            raise ConflictError(f"A person already exists with name matching '{name}'") from err

    def add_person(self, name: str) -> Person:
        """Crée une personne. Lève ConflictError si la clé de nom existe déjà."""
        row = PersonORM(name=name, name_key=name_key(name))
        self._session.add(row)
        self._flush_unique(name)
        return _person(row)

    def rename_person(self, person_id: int, new_name: str) -> Person:
        row = self._session.get(PersonORM, person_id)
        if row is None:
            raise LookupError(person_id)
        row.name = new_name
        row.name_key = name_key(new_name)
        self._flush_unique(new_name)
        return _person(row)

    def add_detail(self, detail: AstronautDetail) -> AstronautDetail:
        row = AstronautDetailORM(
            person_id=detail.person_id,
            current_rank=detail.current_rank,
            current_duty_title=detail.current_duty_title,
            career_start_date=detail.career_start_date,
            career_end_date=detail.career_end_date,
        )
        self._session.add(row)
        self._session.flush()
        return _detail(row)

    def save_detail(self, detail: AstronautDetail) -> AstronautDetail:
        """Met à jour le détail existant de la personne (jamais remplacé)."""
        stmt = select(AstronautDetailORM).where(AstronautDetailORM.person_id == detail.person_id)
        row = self._session.execute(stmt).scalars().one()
        row.current_rank = detail.current_rank
        row.current_duty_title = detail.current_duty_title
        row.career_end_date = detail.career_end_date
        self._session.flush()
        return _detail(row)

    def close_duty(self, duty_id: int, duty_end_date: datetime) -> None:
        row = self._session.get(AstronautDutyORM, duty_id)
        if row is None:
            raise LookupError(duty_id)
        row.duty_end_date = duty_end_date
        self._session.flush()

    def add_duty(
        self, person_id: int, rank: str, duty_title: str, duty_start_date: datetime
    ) -> AstronautDuty:
        """Ajoute une affectation ouverte (`duty_end_date` à None)."""
        row = AstronautDutyORM(
            person_id=person_id,
            rank=rank,
            duty_title=duty_title,
            duty_start_date=duty_start_date,
            duty_end_date=None,
        )
        self._session.add(row)
        self._session.flush()
        return _duty(row)
