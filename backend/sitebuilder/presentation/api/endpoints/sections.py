"""Section catalog endpoint — what the "Add section" panel lists."""

from fastapi import APIRouter, Depends, Query

from sitebuilder.application.schemas import SectionCategorySchema
from sitebuilder.application.services import SectionCatalog
from sitebuilder.infrastructure.dependencies import get_section_catalog

router = APIRouter(prefix="/sections", tags=["Sections"])


@router.get("", response_model=list[SectionCategorySchema])
async def list_sections(
    q: str | None = Query(None, description="Filter by name or description"),
    catalog: SectionCatalog = Depends(get_section_catalog),
) -> list[SectionCategorySchema]:
    return [SectionCategorySchema.model_validate(c.to_dict()) for c in catalog.filter_by_query(q)]
