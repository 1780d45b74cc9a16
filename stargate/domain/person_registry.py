"""
Registre des personnes: création et renommage sous contrainte d'unicité du nom.

Règle n°1: une personne est identifiée de façon unique par son nom, comparé sans tenir compte
de la casse (comparaison ordinale, pas de collation locale).
"""

from __future__ import annotations

import structlog
from sqlalchemy.engine import Engine

from stargate.domain.entities import CreatePerson, RenamePerson
from stargate.domain.errors import ConflictError, invalid_request, person_not_found
from stargate.domain.validators import is_valid_create_person, is_valid_rename_person
from stargate.infra.repo.db import unit_of_work
from stargate.infra.repo.stargate_repo import StargateRepo

log = structlog.get_logger(__name__)


class PersonRegistry:
    """Service métier de création/renommage des personnes."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def create_person(self, request: CreatePerson) -> int:
        """Crée une personne et retourne son identifiant.

        Lève:
        - ValidationError si le nom est vide ou absent.
        - ConflictError si une personne porte déjà ce nom (toute casse confondue).
        """
        if not is_valid_create_person(request):
            raise invalid_request()

        with unit_of_work(self.engine) as session:
            repo = StargateRepo(session)
            if repo.get_person_by_name(request.name) is not None:
                raise ConflictError(
                    f"A person already exists with name matching '{request.name}'"
                )
            person = repo.add_person(request.name)

        log.info("person_created", person_id=person.id, name=person.name)
        return person.id

    def rename_person(self, request: RenamePerson) -> int:
        """Renomme une personne existante et retourne son identifiant.

        Lève:
        - ValidationError si l'un des noms est vide ou absent.
        - NotFoundError si aucune personne ne correspond à `current_name`.
        - ConflictError si `new_name` appartient déjà à une autre personne.
        """
        if not is_valid_rename_person(request):
            raise invalid_request()

        with unit_of_work(self.engine) as session:
            repo = StargateRepo(session)
            person = repo.get_person_by_name(request.current_name)
            if person is None:
                raise person_not_found(request.current_name)

            holder = repo.get_person_by_name(request.new_name)
            if holder is not None and holder.id != person.id:
                raise ConflictError(
                    f"A person already exists with name matching '{request.new_name}'"
                )
            renamed = repo.rename_person(person.id, request.new_name)

        log.info("person_renamed", person_id=renamed.id, old_name=person.name, name=renamed.name)
        return renamed.id
