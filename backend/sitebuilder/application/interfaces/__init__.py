from .chat_provider import ChatProvider
from .image_provider import ImageProvider
from .site_repository import SiteRepository
from .user_state_repository import UserStateRepository

__all__ = [
    "ChatProvider",
    "ImageProvider",
    "SiteRepository",
    "UserStateRepository",
]
