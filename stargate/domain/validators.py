"""
Prédicats de validation des commandes et requêtes.

Fonctions pures, sans effet de bord, évaluées par les services avant toute lecture ou écriture
dans le Record Store.
"""

from __future__ import annotations

from stargate.domain.config import AppConfig
from stargate.domain.entities import (
    CreatePerson,
    GetDutyHistoryByName,
    GetPersonByName,
    RecordDuty,
    RenamePerson,
)


def _filled(value: str | None) -> bool:
    return bool(value)


def is_valid_create_person(request: CreatePerson | None) -> bool:
    return request is not None and _filled(request.name)


def is_valid_rename_person(request: RenamePerson | None) -> bool:
    return (
        request is not None
        and _filled(request.current_name)
        and _filled(request.new_name)
    )


def is_valid_record_duty(config: AppConfig, request: RecordDuty | None) -> bool:
    """Vérifie les champs obligatoires et la date plancher de début d'affectation."""
    if request is None:
        return False
    if not (_filled(request.name) and _filled(request.rank) and _filled(request.duty_title)):
        return False
    if request.duty_start_date is None:
        return False
    return request.duty_start_date >= config.min_duty_start_date


def is_valid_get_person_by_name(request: GetPersonByName | None) -> bool:
    return request is not None and _filled(request.name)


def is_valid_get_duty_history_by_name(request: GetDutyHistoryByName | None) -> bool:
    return request is not None and _filled(request.name)
