from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modelfit.models.base import Base


class Evaluation(Base):
    """A persisted sizing evaluation.

    The three feasibility columns hold JSON text produced by the external
    scoring engine. They are written once at submission and only ever parsed
    afterwards; ``archived``/``archived_at`` are the only mutable fields.
    """

    __tablename__ = "evaluations"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    model: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    hardware: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    card_count: Mapped[int] = mapped_column(Integer, nullable=False)
    business_scenario: Mapped[str] = mapped_column(Text, nullable=False, default="")
    performance_qps: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    performance_concurrency: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    business_data_types: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    business_data_quality: Mapped[str] = mapped_column(String(20), nullable=False, default="high")
    business_data_volume: Mapped[str | None] = mapped_column(String(255))

    resource_feasibility: Mapped[str] = mapped_column(Text, nullable=False)
    technical_feasibility: Mapped[str] = mapped_column(Text, nullable=False)
    business_value: Mapped[str | None] = mapped_column(Text)

    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Relationships
    owner: Mapped["User"] = relationship()  # type: ignore[name-defined]  # noqa: F821
