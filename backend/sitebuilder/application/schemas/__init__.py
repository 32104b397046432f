from .business_profile import (
    BusinessInfoSchema,
    BusinessProfileResponse,
    LocationSuggestionsResponse,
)
from .content import (
    ErrorResponse,
    FetchImageRequest,
    FetchImageResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerateCopyRequest,
)
from .editor import EditorAction, EditorStateResponse, GenerateWebsiteRequest
from .website import (
    PageCreateRequest,
    ProjectSummaryResponse,
    SavedWebsiteSchema,
    SectionCategorySchema,
    SectionSchema,
    SitePageResponse,
    SiteResponse,
    SubdomainCheckResponse,
    WebsiteSaveRequest,
    WebsiteSaveResponse,
    WebsiteUpdateRequest,
)

__all__ = [
    "PageCreateRequest",
    "BusinessInfoSchema",
    "BusinessProfileResponse",
    "LocationSuggestionsResponse",
    "ErrorResponse",
    "FetchImageRequest",
    "FetchImageResponse",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerateCopyRequest",
    "EditorAction",
    "EditorStateResponse",
    "GenerateWebsiteRequest",
    "ProjectSummaryResponse",
    "SavedWebsiteSchema",
    "SectionCategorySchema",
    "SectionSchema",
    "SitePageResponse",
    "SiteResponse",
    "SubdomainCheckResponse",
    "WebsiteSaveRequest",
    "WebsiteSaveResponse",
    "WebsiteUpdateRequest",
]
