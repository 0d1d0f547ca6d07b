from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, StringConstraints

AnnouncementTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
AnnouncementText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class AnnouncementCreate(BaseModel):
    title: str | None = None
    content: str | None = None
    active: bool = True


class AnnouncementUpdate(BaseModel):
    """Partial update; every field is optional and validated on its own."""

    title: AnnouncementTitle | None = None
    content: AnnouncementText | None = None
    active: bool | None = None

    model_config = {"strict": True}


class AnnouncementResponse(BaseModel):
    id: str
    title: str
    content: str
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AnnouncementListResponse(BaseModel):
    items: list[AnnouncementResponse]


class MaintenanceSettings(BaseModel):
    maintenance: bool
    maintenance_message: str


class MaintenanceUpdate(BaseModel):
    maintenance: bool
    maintenance_message: str | None = None


class StatusResponse(BaseModel):
    maintenance: bool
    maintenance_message: str
    latest_announcement: AnnouncementResponse | None
    announcement_history: list[AnnouncementResponse]
