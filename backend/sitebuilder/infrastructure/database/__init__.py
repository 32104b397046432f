from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import PageModel, UserStateModel, WebsiteModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "PageModel",
    "UserStateModel",
    "WebsiteModel",
]
