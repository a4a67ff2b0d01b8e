"""Per-request data envelope handed to templates."""

from typing import Any

from pydantic import BaseModel, Field


class TemplateData(BaseModel):
    """Fields visible to every page.

    Created by the caller for each request. The view manager only writes
    ``csrf_token``, right before the template executes.
    """

    csrf_token: str = ""
    string_slice: list[str] = Field(default_factory=list)
    string_map: dict[str, str] = Field(default_factory=dict)
    int_map: dict[str, int] = Field(default_factory=dict)
    float_map: dict[str, float] = Field(default_factory=dict)
    data: dict[str, Any] = Field(default_factory=dict)
    flash: str = ""
    warning: str = ""
    error: str = ""
    is_authenticated: bool = False
    title: str = ""
    info_msg: str = ""
    warn_msg: str = ""
    err_msg: str = ""

    def template_context(self) -> dict[str, Any]:
        """Return the fields as template variables, without copying payloads."""
        return {name: getattr(self, name) for name in type(self).model_fields}
