from enum import Enum

from pydantic import BaseModel, Field


class PaginationParams(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


class Pagination(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, params: PaginationParams, total: int) -> "Pagination":
        total_pages = (total + params.page_size - 1) // params.page_size
        return cls(page=params.page, page_size=params.page_size, total=total, total_pages=total_pages)


class MessageResponse(BaseModel):
    message: str


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


ADMIN_ROLES = (Role.ADMIN.value, Role.SUPER_ADMIN.value)


class FeedbackKind(str, Enum):
    GENERAL = "general"
    MODULE = "module"


class GeneralFeedbackType(str, Enum):
    BUG = "bug"
    FEATURE = "feature"
    IMPROVEMENT = "improvement"
    OTHER = "other"


class ModuleName(str, Enum):
    RESOURCE = "resource"
    TECHNICAL = "technical"
    BUSINESS = "business"


class ModuleFeedbackType(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"


class ModuleRating(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
