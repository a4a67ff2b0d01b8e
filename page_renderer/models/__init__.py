"""Page Renderer models"""

from page_renderer.models.base_models import ErrorResponse, HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
