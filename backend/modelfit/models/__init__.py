from modelfit.models.announcement import Announcement
from modelfit.models.base import Base
from modelfit.models.evaluation import Evaluation
from modelfit.models.feedback import Feedback
from modelfit.models.site_config import SiteConfig
from modelfit.models.user import User

__all__ = [
    "Base",
    "User",
    "Evaluation",
    "Feedback",
    "Announcement",
    "SiteConfig",
]
