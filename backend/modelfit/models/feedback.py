from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modelfit.models.base import Base


class Feedback(Base):
    """General and per-module feedback share this table, told apart by ``type``."""

    __tablename__ = "feedbacks"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # type == "general"
    feedback_type: Mapped[str | None] = mapped_column(String(20))
    title: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    contact_email: Mapped[str | None] = mapped_column(String(255))

    # type == "module"
    evaluation_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("evaluations.id", ondelete="CASCADE"),
        index=True,
    )
    module_name: Mapped[str | None] = mapped_column(String(20))
    rating: Mapped[str | None] = mapped_column(String(20))
    comment: Mapped[str | None] = mapped_column(Text)

    # Relationships
    owner: Mapped["User"] = relationship()  # type: ignore[name-defined]  # noqa: F821
