# Schémas Pydantic exposés par l'API (requêtes et réponses).
#
# Les noms de champs JSON sont en camelCase pour rester compatibles avec l'UI d'administration.

from __future__ import annotations

from datetime import datetime

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stargate.core.http_constants import DEFAULT_SUCCESS_MESSAGE, HTTP_OK
from stargate.domain.entities import AstronautDuty, PersonAstronaut


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseResponse(CamelModel):
    """Enveloppe standard de toutes les réponses.

    Champs:
    - success: bool
    - message: str
    - responseCode: int (reflété aussi en statut HTTP)
    """

    success: bool = True
    message: str = DEFAULT_SUCCESS_MESSAGE
    response_code: int = HTTP_OK


class CreateAstronautDutyRequest(CamelModel):
    """Corps de `POST /AstronautDuty`.

    Champs:
    - name: str (nom de la personne, déjà créée)
    - rank: str
    - dutyTitle: str
    - dutyStartDate: datetime ISO 8601
    """

    name: str | None = None
    rank: str | None = None
    duty_title: str | None = None
    duty_start_date: datetime | None = None


class PersonAstronautOut(CamelModel):
    person_id: int
    name: str
    current_rank: str = ""
    current_duty_title: str = ""
    career_start_date: datetime | None = None
    career_end_date: datetime | None = None

    @classmethod
    def of(cls, person: PersonAstronaut) -> PersonAstronautOut:
        return cls(
            person_id=person.person_id,
            name=person.name,
            current_rank=person.current_rank or "",
            current_duty_title=person.current_duty_title or "",
            career_start_date=person.career_start_date,
            career_end_date=person.career_end_date,
        )


class AstronautDutyOut(CamelModel):
    id: int
    person_id: int
    rank: str
    duty_title: str
    duty_start_date: datetime
    duty_end_date: datetime | None = None

    @classmethod
    def of(cls, duty: AstronautDuty) -> AstronautDutyOut:
        return cls(
            id=duty.id,
            person_id=duty.person_id,
            rank=duty.rank,
            duty_title=duty.duty_title,
            duty_start_date=duty.duty_start_date,
            duty_end_date=duty.duty_end_date,
        )


class CreatePersonResult(BaseResponse):
    id: int | None = None


class UpdatePersonResult(BaseResponse):
    id: int | None = None


class CreateAstronautDutyResult(BaseResponse):
    id: int | None = None


class GetPeopleResult(BaseResponse):
    people: list[PersonAstronautOut] = Field(default_factory=list)


class GetPersonByNameResult(BaseResponse):
    person: PersonAstronautOut | None = None


class GetAstronautDutiesByNameResult(BaseResponse):
    person: PersonAstronautOut | None = None
    astronaut_duties: list[AstronautDutyOut] = Field(default_factory=list)


def envelope(payload: BaseResponse) -> JSONResponse:
    """Sérialise l'enveloppe; le statut HTTP reprend `responseCode`."""
    return JSONResponse(
        status_code=payload.response_code,
        content=payload.model_dump(mode="json", by_alias=True),
    )
