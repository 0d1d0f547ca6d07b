from datetime import datetime

from pydantic import BaseModel

from modelfit.schemas.common import Pagination, Role
from modelfit.schemas.evaluation import EvaluationDetail, ScoreSummary


# --- Stats ---


class StatsOverview(BaseModel):
    total_users: int
    total_evaluations: int
    total_feedbacks: int
    recent_users: int
    recent_evaluations: int


class CategoryCountResponse(BaseModel):
    value: str
    count: int


class DailyCountResponse(BaseModel):
    date: str
    count: int


class AdminStatsResponse(BaseModel):
    overview: StatsOverview
    model_stats: list[CategoryCountResponse]
    hardware_stats: list[CategoryCountResponse]
    feedback_stats: list[CategoryCountResponse]
    daily_trend: list[DailyCountResponse]

    model_config = {"protected_namespaces": ()}


# --- Users ---


class AdminUserResponse(BaseModel):
    id: str
    email: str | None
    phone: str | None
    name: str | None
    role: str
    evaluation_count: int
    feedback_count: int
    created_at: datetime
    updated_at: datetime


class AdminUserListResponse(BaseModel):
    items: list[AdminUserResponse]
    pagination: Pagination


class AdminListResponse(BaseModel):
    items: list[AdminUserResponse]
    total: int


class GrantRoleRequest(BaseModel):
    user_id: str
    role: Role


class RoleChangeResponse(BaseModel):
    user: AdminUserResponse
    message: str


# --- Evaluations ---


class AdminEvaluationItem(BaseModel):
    id: str
    user_id: str
    user_email: str | None
    user_name: str | None
    model: str
    hardware: str
    card_count: int
    business_scenario: str
    business_data_quality: str
    performance_qps: int
    performance_concurrency: int
    score: ScoreSummary
    archived: bool
    archived_at: datetime | None
    created_at: datetime


class AdminEvaluationListResponse(BaseModel):
    items: list[AdminEvaluationItem]
    pagination: Pagination


class AdminEvaluationDetail(EvaluationDetail):
    user_email: str | None
    user_name: str | None
    user_phone: str | None


class ArchiveRequest(BaseModel):
    archived: bool


class ArchiveResponse(BaseModel):
    id: str
    archived: bool
    archived_at: datetime | None
