"""Known shapes of the feasibility payloads written by the scoring engine.

The engine's schema evolves independently, so every model accepts unknown
fields, and anything that fails validation is kept as an ``OpaquePayload``
with a best-effort score instead of being rejected.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError


class Dimension(str, Enum):
    RESOURCE = "resource"
    TECHNICAL = "technical"
    BUSINESS = "business"


class ScoredPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    score: float = 0.0


class ResourcePayload(ScoredPayload):
    pretraining: dict[str, Any] | None = None
    fine_tuning: dict[str, Any] | None = Field(default=None, alias="fineTuning")
    inference: dict[str, Any] | None = None


class TechnicalPayload(ScoredPayload):
    appropriate: bool | None = None
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class BusinessPayload(ScoredPayload):
    analysis: str | None = None
    risks: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)


@dataclass
class OpaquePayload:
    """A payload of unknown shape, kept verbatim."""

    data: Any
    score: float


PAYLOAD_MODELS: dict[Dimension, type[ScoredPayload]] = {
    Dimension.RESOURCE: ResourcePayload,
    Dimension.TECHNICAL: TechnicalPayload,
    Dimension.BUSINESS: BusinessPayload,
}


def load_json(raw: str | dict[str, Any] | None) -> Any | None:
    """Decode stored JSON text; None when absent or undecodable."""
    if raw is None:
        return None
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        return None


def score_of(data: Any) -> float:
    """The numeric ``score`` of a decoded payload, or 0."""
    if not isinstance(data, dict):
        return 0.0
    value = data.get("score")
    # bool is an int subclass but never a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        score = float(value)
    except OverflowError:
        # JSON integers can exceed the float range
        return 0.0
    if not math.isfinite(score):
        return 0.0
    return score


def parse_payload(
    dimension: Dimension,
    raw: str | dict[str, Any] | None,
) -> ScoredPayload | OpaquePayload | None:
    data = load_json(raw)
    if data is None:
        return None
    score = score_of(data)
    if isinstance(data, dict):
        try:
            payload = PAYLOAD_MODELS[dimension].model_validate({**data, "score": score})
        except PydanticValidationError:
            return OpaquePayload(data=data, score=score)
        return payload
    return OpaquePayload(data=data, score=score)
