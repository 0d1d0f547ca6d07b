"""Pure math: per-record overall scores, zero-filled daily trends, top-K counts.

Malformed payloads never raise here. A payload that cannot be decoded or has
no numeric ``score`` contributes 0, so one bad legacy row cannot break a
whole list.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any

from modelfit.scoring.payloads import load_json, score_of


@dataclass
class RecordScores:
    resource: float
    technical: float
    business: float
    overall: float


@dataclass
class DailyCount:
    date: str  # ISO calendar date, UTC
    count: int


@dataclass
class CategoryCount:
    value: str
    count: int


def round_half_up(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def extract_score(payload: str | dict[str, Any] | None) -> float:
    """Score of one stored payload; 0 on any parse failure or missing field."""
    return score_of(load_json(payload))


def overall_score(
    technical: str | dict[str, Any] | None,
    business: str | dict[str, Any] | None = None,
) -> float:
    """Combine technical and business scores into one comparable number.

    Both positive: their mean, rounded half up. One positive: that one,
    unchanged. Neither: 0.
    """
    present = [s for s in (extract_score(technical), extract_score(business)) if s > 0]
    if not present:
        return 0
    if len(present) == 1:
        return present[0]
    # Halve before adding so two scores near the float limit cannot overflow
    first, second = present
    return round_half_up(first / 2 + second / 2)


def score_record(
    resource: str | dict[str, Any] | None,
    technical: str | dict[str, Any] | None,
    business: str | dict[str, Any] | None,
) -> RecordScores:
    return RecordScores(
        resource=extract_score(resource),
        technical=extract_score(technical),
        business=extract_score(business),
        overall=overall_score(technical, business),
    )


def utc_date(moment: datetime) -> date:
    """Calendar date of a timestamp in UTC; naive values are taken as UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def trend_window_start(days: int, today: date) -> datetime:
    """Midnight UTC of the first day of a ``days``-long window ending ``today``."""
    first = today - timedelta(days=days - 1)
    return datetime(first.year, first.month, first.day, tzinfo=timezone.utc)


def daily_trend(
    timestamps: Iterable[datetime],
    days: int = 30,
    today: date | None = None,
) -> list[DailyCount]:
    """One bucket per UTC day over the window, oldest first, empty days included."""
    if days < 1:
        return []
    if today is None:
        today = datetime.now(timezone.utc).date()

    first = today - timedelta(days=days - 1)
    counts: dict[date, int] = {}
    for moment in timestamps:
        day = utc_date(moment)
        if first <= day <= today:
            counts[day] = counts.get(day, 0) + 1

    trend: list[DailyCount] = []
    for offset in range(days):
        day = first + timedelta(days=offset)
        trend.append(DailyCount(date=day.isoformat(), count=counts.get(day, 0)))
    return trend


def top_k(rows: Iterable[tuple[Any, int]], k: int = 10) -> list[CategoryCount]:
    """Sort ``(value, count)`` rows by count descending and keep the first ``k``.

    The sort is stable, so ties keep the order the rows arrived in.
    """
    ranked = sorted(rows, key=lambda row: row[1], reverse=True)
    return [CategoryCount(value=str(value), count=int(count)) for value, count in ranked[:k]]

