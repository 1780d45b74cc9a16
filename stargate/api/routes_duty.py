"""
Routes liées aux affectations d'astronautes: historique par nom et enregistrement.
"""

from fastapi import APIRouter, Depends

from stargate.api.deps import get_duty_engine, get_queries, get_request_log
from stargate.api.schemas import (
    AstronautDutyOut,
    CreateAstronautDutyRequest,
    CreateAstronautDutyResult,
    GetAstronautDutiesByNameResult,
    PersonAstronautOut,
    envelope,
)
from stargate.app.metrics import DUTIES_RECORDED
from stargate.core.http_constants import HTTP_NOT_FOUND
from stargate.domain.duty_history import DutyHistoryEngine
from stargate.domain.entities import GetDutyHistoryByName, RecordDuty
from stargate.domain.queries import AstronautQueries
from stargate.domain.results import NotFound
from stargate.services.request_log import RequestLog

router = APIRouter(prefix="/AstronautDuty", tags=["astronaut-duty"])
queries_dep = Depends(get_queries)
duty_engine_dep = Depends(get_duty_engine)
audit_dep = Depends(get_request_log)


@router.get("/{name}", response_model=GetAstronautDutiesByNameResult)
def get_astronaut_duties_by_name(
    name: str,
    queries: AstronautQueries = queries_dep,
    audit: RequestLog = audit_dep,
):
    """Retourne la personne et son historique, du plus récent au plus ancien."""
    request = GetDutyHistoryByName(name=name)
    with audit.track(request, GetAstronautDutiesByNameResult.__name__):
        result = queries.get_duty_history_by_name(request)
    if isinstance(result, NotFound):
        return envelope(
            GetAstronautDutiesByNameResult(message=result.message, response_code=HTTP_NOT_FOUND)
        )
    history = result.value
    return envelope(
        GetAstronautDutiesByNameResult(
            person=PersonAstronautOut.of(history.person),
            astronaut_duties=[AstronautDutyOut.of(d) for d in history.duties],
        )
    )


@router.post("", response_model=CreateAstronautDutyResult)
def create_astronaut_duty(
    payload: CreateAstronautDutyRequest,
    engine: DutyHistoryEngine = duty_engine_dep,
    audit: RequestLog = audit_dep,
):
    """
    Enregistre une affectation pour une personne existante.

    Paramètres:
    - payload: `CreateAstronautDutyRequest` (name, rank, dutyTitle, dutyStartDate).

    Retour: `CreateAstronautDutyResult` avec l'id de la nouvelle ligne d'historique.
    """
    request = RecordDuty(**payload.model_dump())
    with audit.track(request, CreateAstronautDutyResult.__name__):
        duty_id = engine.record_duty(request)
    DUTIES_RECORDED.labels(str(engine.is_retirement(request.duty_title)).lower()).inc()
    return envelope(CreateAstronautDutyResult(id=duty_id))
