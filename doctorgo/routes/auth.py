from fastapi import APIRouter, Depends, status

from ..dependencies import get_services
from ..schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from ..security import get_current_user_id
from ..services import Services

router = APIRouter(tags=["Auth"])


@router.post("/auth/login", response_model=AuthResponse)
async def login(data: LoginRequest, services: Services = Depends(get_services)):
    user, token = await services.auth.login(data.email, data.password)
    return {"user": user, "token": token}


@router.post("/auth/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, services: Services = Depends(get_services)):
    user, token = await services.auth.register(data)
    return {"user": user, "token": token}


@router.get("/auth/me", response_model=UserResponse)
async def me(
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
):
    return {"user": await services.auth.get(user_id)}


@router.put("/users/{user_id}", response_model=UserResponse)
async def update_profile(
    user_id: str,
    data: UpdateProfileRequest,
    services: Services = Depends(get_services),
):
    return {"user": await services.auth.update_profile(user_id, data)}
