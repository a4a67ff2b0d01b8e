"""Default functions made available inside every compiled template."""

from collections.abc import Callable, Mapping
from typing import Any

from jinja2.utils import htmlsafe_json_dumps
from markupsafe import Markup

TemplateFunctions = Mapping[str, Callable[..., Any]]


def inc(i: int) -> int:
    """Return ``i + 1`` (handy for 1-based loop counters)."""
    return i + 1


def marshal(value: Any) -> Markup:
    """Serialize ``value`` to JSON that is safe to embed in a ``<script>`` block.

    ``<``, ``>``, ``&`` and ``'`` are written as unicode escapes and the
    result is marked safe so autoescaping leaves it alone.
    """
    return htmlsafe_json_dumps(value)


BASIC_FUNCTIONS: TemplateFunctions = {
    "inc": inc,
    "marshal": marshal,
}
