from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.access import Caller, UserDep
from modelfit.db.session import get_db
from modelfit.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from modelfit.schemas.common import MessageResponse
from modelfit.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    return await AuthService(db).register(body)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    return await AuthService(db).login(body)


@router.post("/logout", response_model=MessageResponse)
async def logout(caller: Caller = UserDep) -> MessageResponse:
    """Tokens are stateless; the client simply discards its copy."""
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def me(
    caller: Caller = UserDep,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    user = await AuthService(db).profile(caller.user_id)
    return UserResponse.model_validate(user)
