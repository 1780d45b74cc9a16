"""
Routes liées aux personnes: liste, recherche par nom, création et renommage.

Les chemins (`/Person`) et les corps (chaîne JSON brute pour le nom) sont ceux attendus par l'UI
d'administration.
"""

from fastapi import APIRouter, Body, Depends

from stargate.api.deps import get_queries, get_registry, get_request_log
from stargate.api.schemas import (
    CreatePersonResult,
    GetPeopleResult,
    GetPersonByNameResult,
    PersonAstronautOut,
    UpdatePersonResult,
    envelope,
)
from stargate.app.metrics import PEOPLE_CREATED
from stargate.core.http_constants import HTTP_NOT_FOUND
from stargate.domain.entities import CreatePerson, GetPeople, GetPersonByName, RenamePerson
from stargate.domain.person_registry import PersonRegistry
from stargate.domain.queries import AstronautQueries
from stargate.domain.results import NotFound
from stargate.services.request_log import RequestLog

router = APIRouter(prefix="/Person", tags=["person"])
queries_dep = Depends(get_queries)
registry_dep = Depends(get_registry)
audit_dep = Depends(get_request_log)
name_body = Body(None)


@router.get("", response_model=GetPeopleResult)
def get_people(queries: AstronautQueries = queries_dep, audit: RequestLog = audit_dep):
    """Liste toutes les personnes avec leur état courant (vide si aucune affectation)."""
    with audit.track(GetPeople(), GetPeopleResult.__name__):
        people = queries.get_all_people()
    return envelope(GetPeopleResult(people=[PersonAstronautOut.of(p) for p in people]))


@router.get("/{name}", response_model=GetPersonByNameResult)
def get_person_by_name(
    name: str,
    queries: AstronautQueries = queries_dep,
    audit: RequestLog = audit_dep,
):
    """
    Retourne une personne par nom (insensible à la casse).

    Une personne absente n'est pas une erreur: `success=true`, `responseCode=404`,
    `person=null`.
    """
    request = GetPersonByName(name=name)
    with audit.track(request, GetPersonByNameResult.__name__):
        result = queries.get_person_by_name(request)
    if isinstance(result, NotFound):
        return envelope(
            GetPersonByNameResult(message=result.message, response_code=HTTP_NOT_FOUND)
        )
    return envelope(GetPersonByNameResult(person=PersonAstronautOut.of(result.value)))


@router.post("", response_model=CreatePersonResult)
def create_person(
    name: str | None = name_body,
    registry: PersonRegistry = registry_dep,
    audit: RequestLog = audit_dep,
):
    """Crée une personne. Corps: le nom, sous forme de chaîne JSON."""
    request = CreatePerson(name=name)
    with audit.track(request, CreatePersonResult.__name__):
        person_id = registry.create_person(request)
    PEOPLE_CREATED.inc()
    return envelope(CreatePersonResult(id=person_id))


@router.put("/{name}", response_model=UpdatePersonResult)
def update_person(
    name: str,
    new_name: str | None = name_body,
    registry: PersonRegistry = registry_dep,
    audit: RequestLog = audit_dep,
):
    """Renomme la personne `name`. Corps: le nouveau nom, sous forme de chaîne JSON."""
    request = RenamePerson(current_name=name, new_name=new_name)
    with audit.track(request, UpdatePersonResult.__name__):
        person_id = registry.rename_person(request)
    return envelope(UpdatePersonResult(id=person_id))
