"""Admin role management (super admin only) and the one-time bootstrap."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.access import AdminCaller, SuperAdminDep
from modelfit.db.session import get_db
from modelfit.schemas.admin import AdminListResponse, GrantRoleRequest, RoleChangeResponse
from modelfit.schemas.auth import SuperAdminInitRequest, SuperAdminInitResponse, UserResponse
from modelfit.services.admin_service import AdminService
from modelfit.services.auth_service import AuthService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/admins", response_model=AdminListResponse)
async def list_admins(
    admin: AdminCaller = SuperAdminDep,
    db: AsyncSession = Depends(get_db),
) -> AdminListResponse:
    return await AdminService(db).list_admins()


@router.post("/admins", response_model=RoleChangeResponse)
async def grant_admin(
    body: GrantRoleRequest,
    admin: AdminCaller = SuperAdminDep,
    db: AsyncSession = Depends(get_db),
) -> RoleChangeResponse:
    return await AdminService(db).grant_role(admin, body.user_id, body.role)


@router.delete("/admins/{user_id}", response_model=RoleChangeResponse)
async def revoke_admin(
    user_id: str,
    admin: AdminCaller = SuperAdminDep,
    db: AsyncSession = Depends(get_db),
) -> RoleChangeResponse:
    return await AdminService(db).revoke_role(admin, user_id)


@router.post("/init", response_model=SuperAdminInitResponse)
async def init_super_admin(
    body: SuperAdminInitRequest,
    db: AsyncSession = Depends(get_db),
) -> SuperAdminInitResponse:
    """Promote an existing account to super admin using the bootstrap secret."""
    user, changed = await AuthService(db).bootstrap_super_admin(body.identifier, body.secret)
    message = "User promoted to super_admin" if changed else "User is already super_admin"
    return SuperAdminInitResponse(message=message, user=UserResponse.model_validate(user))
