"""Admin console endpoints. Every route here requires an admin role."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.access import AdminCaller, AdminDep
from modelfit.db.session import get_db
from modelfit.schemas.admin import (
    AdminEvaluationDetail,
    AdminEvaluationListResponse,
    AdminStatsResponse,
    AdminUserListResponse,
    ArchiveRequest,
    ArchiveResponse,
)
from modelfit.schemas.common import PaginationParams
from modelfit.schemas.feedback import FeedbackListResponse
from modelfit.schemas.site import (
    AnnouncementCreate,
    AnnouncementListResponse,
    AnnouncementResponse,
    AnnouncementUpdate,
    MaintenanceSettings,
    MaintenanceUpdate,
)
from modelfit.services.admin_service import AdminService
from modelfit.services.evaluation_service import EvaluationService
from modelfit.services.site_service import SiteService
from modelfit.services.stats_service import StatsService

router = APIRouter(prefix="/admin", tags=["admin"])


def pagination(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)


PageDep = Depends(pagination)


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> AdminStatsResponse:
    return await StatsService(db).dashboard()


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    params: PaginationParams = PageDep,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> AdminUserListResponse:
    return await AdminService(db).list_users(params)


# --- Evaluations ---


@router.get("/evaluations", response_model=AdminEvaluationListResponse)
async def list_evaluations(
    params: PaginationParams = PageDep,
    include_archived: bool = False,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> AdminEvaluationListResponse:
    return await EvaluationService(db).admin_list(params, include_archived=include_archived)


@router.get("/evaluations/{evaluation_id}", response_model=AdminEvaluationDetail)
async def get_evaluation(
    evaluation_id: str,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> AdminEvaluationDetail:
    return await EvaluationService(db).admin_detail(evaluation_id)


@router.patch("/evaluations/{evaluation_id}/archive", response_model=ArchiveResponse)
async def archive_evaluation(
    evaluation_id: str,
    body: ArchiveRequest,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> ArchiveResponse:
    """Archive or restore an evaluation. Archived records leave the default list."""
    return await EvaluationService(db).set_archived(evaluation_id, body.archived)


@router.get("/feedbacks", response_model=FeedbackListResponse)
async def list_feedbacks(
    params: PaginationParams = PageDep,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> FeedbackListResponse:
    return await AdminService(db).list_feedbacks(params)


# --- Announcements ---


@router.get("/announcements", response_model=AnnouncementListResponse)
async def list_announcements(
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> AnnouncementListResponse:
    announcements = await SiteService(db).list_announcements()
    return AnnouncementListResponse(
        items=[AnnouncementResponse.model_validate(a) for a in announcements]
    )


@router.post("/announcements", response_model=AnnouncementResponse, status_code=201)
async def create_announcement(
    body: AnnouncementCreate,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> AnnouncementResponse:
    announcement = await SiteService(db).create_announcement(body)
    return AnnouncementResponse.model_validate(announcement)


@router.patch("/announcements/{announcement_id}", response_model=AnnouncementResponse)
async def update_announcement(
    announcement_id: str,
    body: AnnouncementUpdate,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> AnnouncementResponse:
    announcement = await SiteService(db).update_announcement(announcement_id, body)
    return AnnouncementResponse.model_validate(announcement)


# --- Site settings ---


@router.get("/settings/maintenance", response_model=MaintenanceSettings)
async def get_maintenance(
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> MaintenanceSettings:
    return await SiteService(db).maintenance()


@router.patch("/settings/maintenance", response_model=MaintenanceSettings)
async def update_maintenance(
    body: MaintenanceUpdate,
    admin: AdminCaller = AdminDep,
    db: AsyncSession = Depends(get_db),
) -> MaintenanceSettings:
    return await SiteService(db).update_maintenance(body)
