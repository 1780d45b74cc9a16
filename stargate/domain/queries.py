"""
Couche de projection en lecture.

Joint Person, AstronautDetail et AstronautDuty en vues destinées à l'API. Les recherches par nom
renvoient un résultat étiqueté `Found | NotFound` plutôt que de lever une erreur.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine

from stargate.domain.entities import (
    DutyHistory,
    GetDutyHistoryByName,
    GetPersonByName,
    PersonAstronaut,
)
from stargate.domain.errors import invalid_request
from stargate.domain.results import Found, LookupResult, NotFound
from stargate.domain.validators import (
    is_valid_get_duty_history_by_name,
    is_valid_get_person_by_name,
)
from stargate.infra.repo.db import unit_of_work
from stargate.infra.repo.stargate_repo import StargateRepo


class AstronautQueries:
    """Requêtes de lecture; n'écrivent jamais."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def get_all_people(self) -> list[PersonAstronaut]:
        with unit_of_work(self.engine) as session:
            return StargateRepo(session).list_people_with_details()

    def get_person_by_name(self, request: GetPersonByName) -> LookupResult[PersonAstronaut]:
        if not is_valid_get_person_by_name(request):
            raise invalid_request()
        with unit_of_work(self.engine) as session:
            person = StargateRepo(session).get_person_with_detail_by_name(request.name)
        if person is None:
            return NotFound(request.name)
        return Found(person)

    def get_duty_history_by_name(
        self, request: GetDutyHistoryByName
    ) -> LookupResult[DutyHistory]:
        """Retourne la personne et ses affectations, les plus récentes d'abord."""
        if not is_valid_get_duty_history_by_name(request):
            raise invalid_request()
        with unit_of_work(self.engine) as session:
            repo = StargateRepo(session)
            person = repo.get_person_with_detail_by_name(request.name)
            if person is None:
                return NotFound(request.name)
            duties = repo.list_duties(person.person_id)
        return Found(DutyHistory(person=person, duties=duties))
