"""
Fire event history endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends
from fireguard.api.deps import Services, get_services, require_admin, require_authenticated
from fireguard.core.models import FireEvent, Identity

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("", response_model=List[FireEvent], response_model_by_alias=True)
async def all_logs(_: Identity = Depends(require_admin),
                   services: Services = Depends(get_services)):
    """전체 이벤트 (관리자 전용, 최신순)"""
    return await services.orchestrator.list_all_events()


@router.get("/my", response_model=List[FireEvent], response_model_by_alias=True)
async def my_logs(who: Identity = Depends(require_authenticated),
                  services: Services = Depends(get_services)):
    """내가 보고한 이벤트"""
    return await services.orchestrator.list_my_events(who.id)
