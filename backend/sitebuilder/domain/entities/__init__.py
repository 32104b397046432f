from .business_profile import BusinessProfile, REQUIRED_PROFILE_FIELDS
from .chat_message import ChatMessage, TokenUsage, ChatCompletionResult
from .content_block import BlockType, ContentBlock, BLOCK_CONTENT_FIELDS, IMAGE_FIELDS
from .project_summary import ProjectSummary
from .site_record import SitePage, SiteRecord, SiteStatus
from .stock_image import StockImage
from .theme import DEFAULT_THEME, Theme, ThemeColors, ThemeFonts, theme_for_business_type
from .website import MoveDirection, Website

__all__ = [
    "BusinessProfile",
    "REQUIRED_PROFILE_FIELDS",
    "ChatMessage",
    "TokenUsage",
    "ChatCompletionResult",
    "BlockType",
    "ContentBlock",
    "BLOCK_CONTENT_FIELDS",
    "IMAGE_FIELDS",
    "ProjectSummary",
    "SitePage",
    "SiteRecord",
    "SiteStatus",
    "StockImage",
    "DEFAULT_THEME",
    "Theme",
    "ThemeColors",
    "ThemeFonts",
    "theme_for_business_type",
    "MoveDirection",
    "Website",
]
