"""
Admin user management endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from fireguard.api.deps import Services, get_services, require_admin
from fireguard.core.models import Identity, Role

router = APIRouter(prefix="/api/users", tags=["users"])


class UserUpdateIn(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    password: Optional[str] = None


@router.get("")
async def list_users(_: Identity = Depends(require_admin),
                     services: Services = Depends(get_services)):
    return [u.model_dump(by_alias=True, mode="json") for u in await services.accounts.list_users()]


@router.put("/{user_id}")
async def update_user(user_id: int,
                      payload: UserUpdateIn,
                      _: Identity = Depends(require_admin),
                      services: Services = Depends(get_services)):
    user = await services.accounts.update_user(
        user_id,
        username=payload.username,
        email=payload.email,
        role=payload.role,
        password=payload.password,
    )
    return {"message": "User updated successfully", "user": user.model_dump(by_alias=True, mode="json")}


@router.delete("/{user_id}")
async def delete_user(user_id: int,
                      who: Identity = Depends(require_admin),
                      services: Services = Depends(get_services)):
    await services.accounts.delete_user(user_id, who)
    return {"message": "User deleted successfully"}
