"""DB utilities for SQLAlchemy sessions/engine.

Uses `DATABASE_URL` env var or falls back to `sqlite+pysqlite:///:memory:` for tests.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stargate.domain.errors import PersistenceError

MEMORY_URL = "sqlite+pysqlite:///:memory:"


def get_engine(url: str | None = None) -> Engine:
    """Crée un moteur SQLAlchemy à partir de l'URL de base de données."""
    db_url = url or os.getenv("DATABASE_URL") or MEMORY_URL
    kwargs = {}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url:
            # Une seule connexion partagée, sinon chaque session voit une base vide
            kwargs["poolclass"] = StaticPool
    return create_engine(db_url, future=True, echo=False, **kwargs)


def get_session_factory(engine: Engine) -> sessionmaker:
    """Crée une factory de sessions SQLAlchemy."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Contexte de session SQLAlchemy avec gestion automatique des transactions.

    Commit à la sortie normale, rollback puis propagation en cas d'exception.
    """
    SessionLocal = get_session_factory(engine)
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def unit_of_work(engine: Engine) -> Iterator[Session]:
    """Comme `session_scope`, mais traduit les erreurs du stockage en `PersistenceError`.

    Les erreurs métier levées dans le bloc traversent inchangées (après rollback).
    """
    try:
        with session_scope(engine) as session:
            yield session
    except SQLAlchemyError as err:
        raise PersistenceError(str(err)) from err
