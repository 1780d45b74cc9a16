"""Gestion standardisée des erreurs API avec l'enveloppe de réponse.

Toute erreur, métier ou inattendue, est renvoyée sous la forme
`{success: false, message, responseCode}` avec un statut HTTP égal à `responseCode`. Aucune pile
d'appels n'est exposée au client.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from stargate.api.schemas import BaseResponse, envelope
from stargate.app.metrics import COMMAND_ERRORS, route_label
from stargate.core.http_constants import HTTP_BAD_REQUEST, HTTP_INTERNAL_SERVER_ERROR
from stargate.domain.errors import StargateError

log = structlog.get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Crée une réponse d'erreur à l'enveloppe standard."""
    return envelope(BaseResponse(success=False, message=message, response_code=status_code))


def extract_trace_id(request: Request) -> str | None:
    """Extrait l'identifiant de requête posé par le middleware ou reçu en en-tête."""
    trace_id = getattr(request.state, "request_id", None)
    if trace_id:
        return trace_id
    return request.headers.get("X-Request-ID")


def handle_stargate_error(request: Request, exc: StargateError) -> JSONResponse:
    """Traduit une erreur métier (validation, absence, conflit, persistance)."""
    COMMAND_ERRORS.labels(route_label(request), exc.kind).inc()
    log.warning(
        "stargate_error",
        kind=exc.kind,
        error_message=exc.message,
        status_code=exc.response_code,
        trace_id=extract_trace_id(request),
    )
    return error_response(exc.response_code, exc.message)


def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps ou paramètres illisibles: même traitement qu'une ValidationError métier."""
    COMMAND_ERRORS.labels(route_label(request), "validation").inc()
    log.warning(
        "request_validation_error",
        errors=exc.errors(),
        trace_id=extract_trace_id(request),
    )
    return error_response(HTTP_BAD_REQUEST, "A valid request object is required.")


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI/Starlette HTTPException (route inconnue, méthode refusée...)."""
    log.info(
        "http_exception",
        status_code=exc.status_code,
        error_message=str(exc.detail),
        trace_id=extract_trace_id(request),
    )
    return error_response(exc.status_code, str(exc.detail))


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Erreur inattendue: code 500, message de l'exception tel quel."""
    COMMAND_ERRORS.labels(route_label(request), "internal").inc()
    log.error(
        "unexpected_error",
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        trace_id=extract_trace_id(request),
        exc_info=True,
    )
    return error_response(HTTP_INTERNAL_SERVER_ERROR, str(exc))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StargateError, handle_stargate_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
