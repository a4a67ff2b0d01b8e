"""View manager: the render entry point for pages."""

import threading
from collections.abc import Callable
from io import BytesIO
from typing import Any, BinaryIO

from fastapi.responses import HTMLResponse
from jinja2 import Template
from starlette.requests import HTTPConnection

from page_renderer.exceptions import TemplateExecutionException, TemplateNotFoundException, TemplateWriteException
from page_renderer.logging_config import get_logger, log_with_context
from page_renderer.security import get_csrf_token
from page_renderer.views.cache_builder import TemplateCache, build_bundled_cache, build_disk_cache
from page_renderer.views.template_data import TemplateData
from page_renderer.views.view_config import ViewConfig

logger = get_logger(__name__)

TokenProvider = Callable[[Any], str]


class ViewManager:
    """Holds the template cache and renders pages into an output sink.

    In production the cache is built once from the bundled file set and
    only read afterwards. In development it is rebuilt from disk on every
    render so template edits show up without a restart; the rebuild and
    the lookup that follows share a lock.
    """

    def __init__(self, config: ViewConfig, token_provider: TokenProvider = get_csrf_token):
        """Build the initial template cache.

        Args:
            config: View configuration
            token_provider: Returns the anti-forgery token for a request

        Raises:
            TemplateDiscoveryException: If globbing pages or layouts fails
            TemplateCompileException: If a page or layout fails to parse
        """
        self._config = config
        self._token_provider = token_provider
        self._lock = threading.Lock()
        self._template_cache: TemplateCache = self._build_cache()

        log_with_context(
            logger,
            "info",
            "View manager ready",
            production=config.production,
            template_count=len(self._template_cache),
            event_type="view_manager_ready",
        )

    @property
    def production(self) -> bool:
        return self._config.production

    @property
    def template_names(self) -> list[str]:
        """Names currently in the cache, sorted."""
        return sorted(self._template_cache)

    def _build_cache(self) -> TemplateCache:
        if self._config.production:
            return build_bundled_cache(self._config)
        return build_disk_cache(self._config)

    def _add_default_data(self, request: HTTPConnection, data: TemplateData | None) -> TemplateData:
        if data is None:
            data = TemplateData()
        data.csrf_token = self._token_provider(request)
        return data

    def _get_template(self, template_name: str) -> Template:
        if self._config.production:
            template = self._template_cache.get(template_name)
        else:
            with self._lock:
                self._template_cache = build_disk_cache(self._config)
                template = self._template_cache.get(template_name)

        if template is None:
            log_with_context(
                logger,
                "warning",
                "Template not found in cache",
                template=template_name,
                event_type="template_not_found",
            )
            raise TemplateNotFoundException(template_name)
        return template

    def render(
        self,
        sink: BinaryIO,
        request: HTTPConnection,
        template_name: str,
        data: TemplateData | None,
    ) -> None:
        """Render ``template_name`` with ``data`` and write it to ``sink``.

        The page is rendered fully in memory first; ``sink`` receives a
        single write, and only when rendering succeeded.

        Args:
            sink: Writable binary stream receiving the page
            request: Current request, passed to the token provider
            template_name: Page base name, e.g. ``home.page.html``
            data: Template data; its ``csrf_token`` is overwritten

        Raises:
            TemplateDiscoveryException: Development reload could not glob templates
            TemplateCompileException: Development reload could not parse a template
            TemplateNotFoundException: No template with that name
            TemplateExecutionException: Template failed against ``data``
            TemplateWriteException: Writing to ``sink`` failed
        """
        data = self._add_default_data(request, data)
        template = self._get_template(template_name)

        try:
            body = template.render(data.template_context()).encode("utf-8")
        except Exception as e:
            log_with_context(
                logger,
                "error",
                "Template execution failed",
                template=template_name,
                error=str(e),
                error_type=type(e).__name__,
                event_type="template_execution_error",
            )
            raise TemplateExecutionException(
                f"unable to execute {template_name}: {e}",
                details={"template": template_name, "error_type": type(e).__name__},
            ) from e

        try:
            sink.write(body)
        except OSError as e:
            log_with_context(
                logger,
                "warning",
                "Error writing template to output",
                template=template_name,
                error=str(e),
                event_type="template_write_error",
            )
            raise TemplateWriteException(
                f"error writing {template_name} to output: {e}",
                details={"template": template_name, "bytes": len(body)},
            ) from e

    def render_response(
        self,
        request: HTTPConnection,
        template_name: str,
        data: TemplateData | None = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """Render into memory and wrap the result in an HTMLResponse."""
        buffer = BytesIO()
        self.render(buffer, request, template_name, data)
        return HTMLResponse(content=buffer.getvalue(), status_code=status_code)
