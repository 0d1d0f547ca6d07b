from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class EvaluationCreate(BaseModel):
    """Sizing inputs plus the payloads already scored by the scoring engine."""

    model: str = Field(..., min_length=1, max_length=255)
    hardware: str = Field(..., min_length=1, max_length=255)
    card_count: int = Field(..., ge=1)
    business_scenario: str = ""
    performance_qps: int = Field(default=50, ge=0)
    performance_concurrency: int = Field(default=100, ge=0)
    business_data_types: list[str] = Field(default_factory=list)
    business_data_quality: str = Field(default="high", pattern="^(high|medium|low)$")
    business_data_volume: str | None = Field(default=None, max_length=255)

    resource_feasibility: dict[str, Any]
    technical_feasibility: dict[str, Any]
    business_value: dict[str, Any] | None = None


class ScoreSummary(BaseModel):
    resource: float
    technical: float
    business: float
    overall: int | float


class EvaluationSummary(BaseModel):
    id: str
    model: str
    hardware: str
    card_count: int
    business_scenario: str
    score: ScoreSummary
    archived: bool
    created_at: datetime


class EvaluationDetail(BaseModel):
    id: str
    user_id: str
    model: str
    hardware: str
    card_count: int
    business_scenario: str
    performance_qps: int
    performance_concurrency: int
    business_data_types: list[str]
    business_data_quality: str
    business_data_volume: str | None
    resource_feasibility: Any | None
    technical_feasibility: Any | None
    business_value: Any | None
    score: ScoreSummary
    archived: bool
    archived_at: datetime | None
    created_at: datetime


class HistoryItem(BaseModel):
    id: str
    created_at: datetime
    model: str
    business_scenario: str
    score: int | float


class HistoryResponse(BaseModel):
    items: list[HistoryItem]
