"""
Tests du moteur d'historique des affectations.

Scénarios sur une base SQLite en mémoire: projection du détail courant, clôture de l'affectation
ouverte, règles de retraite, garde anti-doublon et atomicité.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from stargate.domain.config import AppConfig
from stargate.domain.duty_history import DutyHistoryEngine, date_part, day_before
from stargate.domain.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from stargate.infra.repo.db import session_scope
from stargate.infra.repo.stargate_repo import StargateRepo
from tests.factories import make_duty


def _detail(engine, person_id):
    with session_scope(engine) as session:
        return StargateRepo(session).get_detail_by_person_id(person_id)


def _duties(engine, person_id):
    with session_scope(engine) as session:
        return StargateRepo(session).list_duties(person_id)


def test_date_helpers() -> None:
    assert date_part(datetime(1969, 7, 20, 20, 17)) == datetime(1969, 7, 20)
    assert day_before(datetime(1969, 7, 20, 20, 17)) == datetime(1969, 7, 19)
    assert day_before(datetime(2000, 3, 1)) == datetime(2000, 2, 29)


def test_first_duty_creates_detail(duties, engine, neil) -> None:
    """Teste qu'une première affectation crée le détail et une ligne ouverte."""
    duty_id = duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))

    detail = _detail(engine, neil)
    assert detail.current_rank == "Capcom"
    assert detail.current_duty_title == "Pilot"
    assert detail.career_start_date == datetime(1966, 1, 1)
    assert detail.career_end_date is None

    rows = _duties(engine, neil)
    assert [r.id for r in rows] == [duty_id]
    assert rows[0].duty_end_date is None


def test_second_duty_closes_previous(duties, engine, neil) -> None:
    """Teste la clôture de l'affectation précédente à la veille du nouveau début."""
    first = duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))
    second = duties.record_duty(
        make_duty("neil armstrong", "Commander", "Apollo 11", "1969-07-16")
    )

    rows = _duties(engine, neil)
    assert [r.id for r in rows] == [second, first]
    assert rows[0].duty_end_date is None
    assert rows[1].duty_end_date == datetime(1969, 7, 15)

    detail = _detail(engine, neil)
    assert detail.current_rank == "Commander"
    assert detail.current_duty_title == "Apollo 11"
    assert detail.career_start_date == datetime(1966, 1, 1)
    assert detail.career_end_date is None


def test_retirement_after_career(duties, engine, neil) -> None:
    """Teste la retraite: fin de carrière à la veille du début de l'affectation RETIRED."""
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))
    duties.record_duty(make_duty("Neil Armstrong", "Commander", "RETIRED", "1971-08-01"))

    detail = _detail(engine, neil)
    assert detail.current_duty_title == "RETIRED"
    assert detail.career_end_date == datetime(1971, 7, 31)

    rows = _duties(engine, neil)
    assert rows[0].duty_title == "RETIRED"
    assert rows[0].duty_end_date is None
    assert rows[1].duty_end_date == datetime(1971, 7, 31)


def test_retirement_as_first_duty(duties, engine, neil) -> None:
    """Teste qu'une première affectation RETIRED fixe la fin de carrière au jour même."""
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "RETIRED", "1980-05-05T13:00:00"))

    detail = _detail(engine, neil)
    assert detail.career_start_date == datetime(1980, 5, 5)
    assert detail.career_end_date == datetime(1980, 5, 5)


def test_retired_title_is_case_sensitive(duties, engine, neil) -> None:
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "retired", "1980-05-05"))
    assert _detail(engine, neil).career_end_date is None


def test_start_time_is_truncated(duties, engine, neil) -> None:
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01T10:30:00"))
    assert _duties(engine, neil)[0].duty_start_date == datetime(1966, 1, 1)


def test_single_open_duty(duties, engine, neil) -> None:
    """Teste qu'il n'y a jamais plus d'une affectation ouverte par personne."""
    for i, start in enumerate(("1960-01-01", "1962-01-01", "1964-01-01", "1966-01-01")):
        duties.record_duty(make_duty("Neil Armstrong", "Capcom", f"Duty {i}", start))
    rows = _duties(engine, neil)
    assert len(rows) == 4
    assert [r for r in rows if r.duty_end_date is None] == [rows[0]]


def test_duty_before_floor_rejected(duties, engine, neil) -> None:
    """Teste qu'une date antérieure au plancher est refusée sans aucune écriture."""
    with pytest.raises(ValidationError):
        duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1899-12-31"))
    assert _detail(engine, neil) is None
    assert _duties(engine, neil) == []


def test_duty_missing_field_rejected(duties, engine, neil) -> None:
    with pytest.raises(ValidationError):
        duties.record_duty(make_duty("Neil Armstrong", "", "Pilot", "1966-01-01"))
    assert _duties(engine, neil) == []


def test_duty_unknown_person(duties) -> None:
    with pytest.raises(NotFoundError) as exc:
        duties.record_duty(make_duty("Nobody", "Capcom", "Pilot", "1966-01-01"))
    assert exc.value.message == "No person was found matching name 'Nobody'"


def test_duplicate_guard_at_midnight(duties, engine, neil) -> None:
    """Teste la garde anti-doublon: même intitulé et même début exact (minuit)."""
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))
    with pytest.raises(ConflictError) as exc:
        duties.record_duty(make_duty("Neil Armstrong", "Major", "Pilot", "1966-01-01"))
    assert exc.value.message == "'Neil Armstrong' already has this duty"

    # rien n'a changé
    assert _detail(engine, neil).current_rank == "Capcom"
    assert len(_duties(engine, neil)) == 1


def test_duplicate_guard_skipped_when_time_present(duties, engine, neil) -> None:
    """Teste que la garde compare l'horodatage exact: une heure non nulle la contourne."""
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01T09:00:00"))

    rows = _duties(engine, neil)
    assert len(rows) == 2
    assert rows[1].duty_end_date == datetime(1965, 12, 31)
    assert rows[0].duty_start_date == datetime(1966, 1, 1)


def test_backdated_duty_closes_latest_inserted(duties, engine, neil) -> None:
    """Teste que la clôture vise la dernière insérée, même si la nouvelle est antérieure."""
    later = duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "2000-01-01"))
    earlier = duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Trainee", "1990-01-01"))

    rows = _duties(engine, neil)
    assert [r.id for r in rows] == [earlier, later]
    assert rows[1].duty_end_date == datetime(1989, 12, 31)
    assert rows[0].duty_end_date is None
    assert _detail(engine, neil).current_duty_title == "Trainee"


def test_career_end_kept_after_reinstatement(duties, engine, neil) -> None:
    """Teste le comportement par défaut: la fin de carrière survit à une reprise d'activité."""
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "RETIRED", "1971-08-01"))
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Advisor", "1975-01-01"))

    detail = _detail(engine, neil)
    assert detail.current_duty_title == "Advisor"
    assert detail.career_end_date == datetime(1971, 7, 31)


def test_career_end_cleared_on_reinstatement_when_enabled(engine, neil) -> None:
    duties = DutyHistoryEngine(engine, AppConfig(clear_career_end_on_reinstatement=True))
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "RETIRED", "1971-08-01"))
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Advisor", "1975-01-01"))
    assert _detail(engine, neil).career_end_date is None


def test_custom_retired_title(engine, neil) -> None:
    duties = DutyHistoryEngine(engine, AppConfig(retired_duty_title="EMERITUS"))
    duties.record_duty(make_duty("Neil Armstrong", "Capcom", "EMERITUS", "1990-01-01"))
    assert duties.is_retirement("EMERITUS")
    assert not duties.is_retirement("RETIRED")
    assert _detail(engine, neil).career_end_date == datetime(1990, 1, 1)


def test_failed_write_rolls_back_everything(duties, engine, neil, monkeypatch) -> None:
    """Teste l'atomicité: un échec à l'ajout n'applique ni la projection ni la clôture."""
    first = duties.record_duty(make_duty("Neil Armstrong", "Capcom", "Pilot", "1966-01-01"))

    def broken_add_duty(self, **kwargs):
        raise OperationalError("INSERT INTO astronaut_duty", {}, Exception("disk I/O error"))

    monkeypatch.setattr(StargateRepo, "add_duty", broken_add_duty)
    with pytest.raises(PersistenceError):
        duties.record_duty(make_duty("Neil Armstrong", "Commander", "Apollo 11", "1969-07-16"))

    detail = _detail(engine, neil)
    assert detail.current_rank == "Capcom"
    assert detail.current_duty_title == "Pilot"
    rows = _duties(engine, neil)
    assert [r.id for r in rows] == [first]
    assert rows[0].duty_end_date is None
