from .site_repository import SQLAlchemySiteRepository
from .user_state_repository import SQLAlchemyUserStateRepository

__all__ = [
    "SQLAlchemySiteRepository",
    "SQLAlchemyUserStateRepository",
]
