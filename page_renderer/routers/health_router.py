"""Health endpoint."""

from fastapi import APIRouter, Depends

from page_renderer import __version__
from page_renderer.dependencies import get_view_manager
from page_renderer.models import HealthResponse
from page_renderer.views.view_manager import ViewManager

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(views: ViewManager = Depends(get_view_manager)):
    """Basic health check reporting the template cache state."""
    return HealthResponse(
        status="ok",
        version=__version__,
        production=views.production,
        template_count=len(views.template_names),
    )
