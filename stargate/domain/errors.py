"""
Erreurs métier du domaine Stargate.

Chaque erreur porte le `response_code` utilisé par l'enveloppe de réponse standard.
"""

from __future__ import annotations

from stargate.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
)


class StargateError(Exception):
    """Erreur de base du domaine avec code de réponse associé."""

    response_code: int = HTTP_INTERNAL_SERVER_ERROR
    kind: str = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StargateError):
    """Requête mal formée ou incomplète. Jamais persistée."""

    response_code = HTTP_BAD_REQUEST
    kind = "validation"


class NotFoundError(StargateError):
    """La personne référencée n'existe pas."""

    response_code = HTTP_NOT_FOUND
    kind = "not_found"


class ConflictError(StargateError):
    """Nom de personne déjà pris, ou affectation identique déjà enregistrée."""

    response_code = HTTP_BAD_REQUEST
    kind = "conflict"


class PersistenceError(StargateError):
    """Échec du stockage sous-jacent; la transaction en cours est annulée."""

    response_code = HTTP_INTERNAL_SERVER_ERROR
    kind = "persistence"


def invalid_request() -> ValidationError:
    return ValidationError("A valid request object is required.")


def person_not_found(name: str | None) -> NotFoundError:
    return NotFoundError(f"No person was found matching name '{name}'")
