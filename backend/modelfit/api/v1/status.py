from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.db.session import get_db
from modelfit.schemas.site import StatusResponse
from modelfit.services.site_service import SiteService

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(db: AsyncSession = Depends(get_db)) -> StatusResponse:
    """Public maintenance flag and announcements."""
    return await SiteService(db).status()
