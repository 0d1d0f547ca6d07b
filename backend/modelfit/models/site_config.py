from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from modelfit.models.base import Base, utcnow

SITE_CONFIG_KEY = "site"


class SiteConfig(Base):
    """Singleton row, addressed by ``key`` and only ever upserted."""

    __tablename__ = "site_config"

    key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, default=SITE_CONFIG_KEY)
    maintenance: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    maintenance_message: Mapped[str | None] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
