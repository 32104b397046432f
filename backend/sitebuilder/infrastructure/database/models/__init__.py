from .user_state import UserStateModel
from .website_models import PageModel, WebsiteModel

__all__ = [
    "UserStateModel",
    "PageModel",
    "WebsiteModel",
]
