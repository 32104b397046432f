from .block_editor import BlockEditor, EditorServices, ElementKind, MenuAction, PanelKind, Viewport
from .business_profile_store import BusinessProfileStore
from .content_generation_gateway import ContentGenerationGateway
from .editor_session_manager import EditorSessionManager
from .image_query_builder import ImageQueryBuilder
from .image_service import ImageService
from .persistence_facade import PersistenceFacade
from .section_catalog import SectionCatalog
from .website_generation_service import WebsiteGenerationService
from .website_service import WebsiteService

__all__ = [
    "BlockEditor",
    "EditorServices",
    "ElementKind",
    "MenuAction",
    "PanelKind",
    "Viewport",
    "BusinessProfileStore",
    "ContentGenerationGateway",
    "EditorSessionManager",
    "ImageQueryBuilder",
    "ImageService",
    "PersistenceFacade",
    "SectionCatalog",
    "WebsiteGenerationService",
    "WebsiteService",
]
