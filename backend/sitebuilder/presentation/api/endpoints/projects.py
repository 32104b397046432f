"""Dashboard endpoint — the caller's recent projects."""

from fastapi import APIRouter, Depends

from sitebuilder.application.schemas import ProjectSummaryResponse
from sitebuilder.application.services import PersistenceFacade
from sitebuilder.infrastructure.dependencies import get_persistence_facade, get_user_id

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("/recent", response_model=list[ProjectSummaryResponse])
async def recent_projects(
    user_id: str = Depends(get_user_id),
    persistence: PersistenceFacade = Depends(get_persistence_facade),
) -> list[ProjectSummaryResponse]:
    """Most recently edited first, at most ten."""
    projects = await persistence.recent_projects(user_id)
    return [ProjectSummaryResponse.model_validate(p.to_dict()) for p in projects]
