"""
Moteur d'historique des affectations.

Pour chaque nouvelle affectation d'une personne:
- crée ou met à jour la projection d'état courant (`AstronautDetail`),
- clôt l'affectation ouverte précédente à la veille du nouveau début,
- ajoute la nouvelle affectation, ouverte.

L'affectation "la plus récente" est déterminée par l'ordre d'insertion (id) et non par la date de
début: les dates sont fournies par l'appelant et ne sont pas contrôlées chronologiquement.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta

import structlog
from sqlalchemy.engine import Engine

from stargate.domain.config import AppConfig
from stargate.domain.entities import AstronautDetail, RecordDuty
from stargate.domain.errors import ConflictError, invalid_request, person_not_found
from stargate.domain.validators import is_valid_record_duty
from stargate.infra.repo.db import unit_of_work
from stargate.infra.repo.stargate_repo import StargateRepo

log = structlog.get_logger(__name__)


def date_part(value: datetime) -> datetime:
    """Tronque l'heure: minuit du même jour."""
    return datetime.combine(value.date(), time.min)


def day_before(value: datetime) -> datetime:
    return date_part(value - timedelta(days=1))


class DutyHistoryEngine:
    """Service métier d'enregistrement des affectations."""

    def __init__(self, engine: Engine, config: AppConfig) -> None:
        """Initialise le moteur.

        Paramètres:
        - engine: moteur SQLAlchemy du Record Store.
        - config: titre de retraite, date plancher et options de projection.
        """
        self.engine = engine
        self.config = config

    def is_retirement(self, duty_title: str) -> bool:
        return duty_title == self.config.retired_duty_title

    def record_duty(self, request: RecordDuty) -> int:
        """Enregistre une affectation et retourne l'id de la nouvelle ligne d'historique.

        Les contrôles (validation, existence, doublon) précèdent toute écriture; les écritures
        (détail, clôture, ajout) sont commitées ensemble.
        """
        if not is_valid_record_duty(self.config, request):
            raise invalid_request()

        with unit_of_work(self.engine) as session:
            repo = StargateRepo(session)

            person = repo.get_person_by_name(request.name)
            if person is None:
                raise person_not_found(request.name)

            # Comparaison sur l'horodatage exact: ne se déclenche que pour un début à minuit
            if repo.get_duty_by_title_and_start(
                person.id, request.duty_title, request.duty_start_date
            ):
                raise ConflictError(f"'{request.name}' already has this duty")

            self._project_detail(repo, person.id, request)

            open_duty = repo.get_open_duty(person.id)
            if open_duty is not None:
                end = day_before(request.duty_start_date)
                repo.close_duty(open_duty.id, end)
                log.debug("duty_closed", person_id=person.id, duty_id=open_duty.id, end=end)

            duty = repo.add_duty(
                person_id=person.id,
                rank=request.rank,
                duty_title=request.duty_title,
                duty_start_date=date_part(request.duty_start_date),
            )

        log.info(
            "duty_recorded",
            person_id=person.id,
            duty_id=duty.id,
            duty_title=duty.duty_title,
            retirement=self.is_retirement(duty.duty_title),
        )
        return duty.id

    def _project_detail(self, repo: StargateRepo, person_id: int, request: RecordDuty) -> None:
        retiring = self.is_retirement(request.duty_title)
        detail = repo.get_detail_by_person_id(person_id)

        if detail is None:
            start = date_part(request.duty_start_date)
            repo.add_detail(
                AstronautDetail(
                    person_id=person_id,
                    current_rank=request.rank,
                    current_duty_title=request.duty_title,
                    career_start_date=start,
                    # Une première affectation peut déjà être une retraite
                    career_end_date=start if retiring else None,
                )
            )
            return

        detail.current_rank = request.rank
        detail.current_duty_title = request.duty_title
        if retiring:
            detail.career_end_date = day_before(request.duty_start_date)
        elif self.config.clear_career_end_on_reinstatement:
            detail.career_end_date = None
        repo.save_detail(detail)
