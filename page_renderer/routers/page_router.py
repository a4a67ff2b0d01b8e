"""Page routes rendered through the view manager."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from page_renderer.dependencies import get_view_manager
from page_renderer.views.template_data import TemplateData
from page_renderer.views.view_manager import ViewManager

router = APIRouter()

PAGE_SUFFIX = ".page.html"


# Plain ``def`` routes: rendering is blocking file and CPU work, so
# FastAPI runs it in the threadpool.
@router.get("/", response_class=HTMLResponse)
def home(request: Request, views: ViewManager = Depends(get_view_manager)):
    """Render the home page."""
    data = TemplateData(
        title="Welcome",
        string_slice=["Templates are compiled once in production", "and reloaded per request in development"],
        data={"mode": "production" if views.production else "development"},
    )
    return views.render_response(request, f"home{PAGE_SUFFIX}", data)


@router.get("/pages/{page}", response_class=HTMLResponse)
def page(page: str, request: Request, views: ViewManager = Depends(get_view_manager)):
    """Render ``{page}.page.html`` with a generic title."""
    data = TemplateData(title=page.replace("-", " ").title())
    return views.render_response(request, f"{page}{PAGE_SUFFIX}", data)
