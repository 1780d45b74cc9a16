"""SQLAlchemy models for persistence layer (Person, AstronautDetail, AstronautDuty, Log)."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    """Classe de base pour tous les modèles SQLAlchemy."""

    metadata = MetaData()


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def name_key(name: str) -> str:
    """Clé de comparaison ordinale insensible à la casse d'un nom de personne."""
    # Correspondance simple caractère par caractère: "ß" ne devient pas "SS"
    return "".join(c.upper() if len(c.upper()) == 1 else c for c in name)


class PersonORM(Base):
    """Modèle ORM des personnes. `name_key` porte l'unicité insensible à la casse."""

    __tablename__ = "person"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    name_key = Column(String(255), nullable=False)

    detail = relationship("AstronautDetailORM", back_populates="person", uselist=False)

    __table_args__ = (UniqueConstraint("name_key", name="uq_person_name_key"),)


class AstronautDetailORM(Base):
    """Modèle ORM de la projection d'état courant (0 ou 1 par personne)."""

    __tablename__ = "astronaut_detail"

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(Integer, ForeignKey("person.id"), nullable=False, unique=True)
    current_rank = Column(String(255), nullable=False)
    current_duty_title = Column(String(255), nullable=False)
    career_start_date = Column(DateTime, nullable=False)
    career_end_date = Column(DateTime, nullable=True)

    person = relationship("PersonORM", back_populates="detail")


class AstronautDutyORM(Base):
    """Modèle ORM de l'historique des affectations (ajout seul)."""

    __tablename__ = "astronaut_duty"

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(Integer, ForeignKey("person.id"), nullable=False, index=True)
    rank = Column(String(255), nullable=False)
    duty_title = Column(String(255), nullable=False)
    duty_start_date = Column(DateTime, nullable=False)
    duty_end_date = Column(DateTime, nullable=True)


class LogORM(Base):
    """Modèle ORM du journal d'audit des requêtes."""

    __tablename__ = "log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    request_response_name = Column(String(255), nullable=False, default="")
    request_identifier = Column(String(64), nullable=False, default="")
    log_message = Column(String, nullable=False, default="")
    timestamp = Column(DateTime, nullable=False, default=_utcnow)
    elapsed_time_in_millis = Column(BigInteger, nullable=True)
