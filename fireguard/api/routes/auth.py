"""
Registration, login and current-user endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from fireguard.api.deps import Services, get_services, require_authenticated
from fireguard.core.models import Identity

router = APIRouter(prefix="/api/auth", tags=["auth"])


class RegisterIn(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("/register", status_code=201)
async def register(payload: RegisterIn, services: Services = Depends(get_services)):
    user = await services.accounts.register(payload.username, payload.email, payload.password)
    return {"message": "User registered successfully", "user": user.model_dump(by_alias=True, mode="json")}


@router.post("/login")
async def login(payload: LoginIn, services: Services = Depends(get_services)):
    token, user = await services.accounts.login(payload.email, payload.password)
    return {"token": token, "user": user.model_dump(by_alias=True, mode="json")}


@router.get("/me")
async def me(who: Identity = Depends(require_authenticated),
             services: Services = Depends(get_services)):
    user = await services.accounts.get_user(who.id)
    return user.model_dump(by_alias=True, mode="json")
