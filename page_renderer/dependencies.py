"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from page_renderer.views.view_manager import ViewManager


async def get_view_manager(request: Request) -> ViewManager:
    """
    Get the shared view manager from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The ViewManager built during startup.

    Raises:
        RuntimeError: If the view manager is not initialized.
    """
    manager: ViewManager | None = getattr(request.app.state, "view_manager", None)

    if manager is None:
        raise RuntimeError("View manager not initialized.")

    return manager
