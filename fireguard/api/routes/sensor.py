"""
Sensor ingress and current-status endpoints.

Devices post either JSON or form-encoded bodies; both are validated by
the same models.
"""

from typing import Any, List, Optional, Type
from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import AliasChoices, BaseModel, Field, ValidationError
from fireguard.api.deps import Services, current_identity, get_services, require_authenticated
from fireguard.core.errors import InvalidInput
from fireguard.core.models import FireEvent, Identity

router = APIRouter(prefix="/api/sensor", tags=["sensor"])

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class StatusUpdateIn(BaseModel):
    # 형식 검사는 상태 캐시가 담당
    status: Optional[Any] = None


class LocationIn(BaseModel):
    event_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("eventId", "logId", "event_id"),
    )
    latitude: Optional[float] = Field(default=None, allow_inf_nan=False, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, allow_inf_nan=False, ge=-180, le=180)
    address: Optional[str] = None


async def read_body(request: Request, model: Type[BaseModel]) -> BaseModel:
    """JSON 또는 폼 본문을 모델로 검증 (빈 본문은 빈 객체)"""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_TYPES):
        data = dict(await request.form())
    elif await request.body():
        try:
            data = await request.json()
        except ValueError as e:
            raise InvalidInput("Request body is not valid JSON.") from e
    else:
        data = {}
    if data is None:
        data = {}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.post("/update")
async def update_status(request: Request, services: Services = Depends(get_services)):
    """센서 상태 업데이트 (FIRE | SAFE, 대소문자 무관)"""
    payload = await read_body(request, StatusUpdateIn)
    report = await services.orchestrator.report_status(payload.status)
    return {
        "message": "Status updated successfully",
        **report.model_dump(by_alias=True, mode="json"),
    }


@router.post("/location")
async def update_location(request: Request,
                          who: Identity = Depends(current_identity),
                          services: Services = Depends(get_services)):
    """화재 위치 보고"""
    payload = await read_body(request, LocationIn)
    result = await services.orchestrator.report_location(
        payload.event_id, payload.latitude, payload.longitude, payload.address, who,
    )
    return {
        "message": "Location received successfully",
        "location": {
            "latitude": result.latitude,
            "longitude": result.longitude,
            "address": result.address,
        },
    }


@router.get("/status")
async def get_status(services: Services = Depends(get_services)):
    value = services.orchestrator.get_current_status()
    return {"status": value.status, "timestamp": value.model_dump(mode="json")["updated_at"]}


@router.get("/fire-locations", response_model=List[FireEvent], response_model_by_alias=True)
async def fire_locations(_: Identity = Depends(require_authenticated),
                         services: Services = Depends(get_services)):
    return await services.orchestrator.list_fire_locations()
