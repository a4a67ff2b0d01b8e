"""Template cache builder.

Globs pages and layouts from a file set and compiles every page, with
all layouts loaded next to it, into its own Jinja2 environment. The
result maps each page's base file name to its compiled template.
"""

import posixpath

from jinja2 import DictLoader, Environment, StrictUndefined, Template, TemplateSyntaxError, nodes

from page_renderer.exceptions import ConfigurationException, TemplateCompileException
from page_renderer.functions import TemplateFunctions
from page_renderer.logging_config import get_logger, log_with_context
from page_renderer.views.file_sets import DiskFileSet, FileSet
from page_renderer.views.template_data import TemplateData
from page_renderer.views.view_config import ViewConfig

logger = get_logger(__name__)

TemplateCache = dict[str, Template]

# Render data fields may hold callables too
_CONTEXT_NAMES = frozenset(TemplateData.model_fields)
# Provided by Jinja inside blocks, loops and macros
_RUNTIME_NAMES = frozenset({"super", "caller", "loop", "self", "varargs", "kwargs"})


def _read_source(file_set: FileSet, path: str) -> str:
    try:
        return file_set.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        log_with_context(
            logger,
            "error",
            "Unable to read template file",
            path=path,
            error=str(e),
            event_type="template_read_error",
        )
        raise TemplateCompileException(f"unable to read {path}: {e}", details={"path": path}) from e


def _create_environment(sources: dict[str, str], funcs: TemplateFunctions) -> Environment:
    env = Environment(
        loader=DictLoader(sources),
        autoescape=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    # Callable both as {{ inc(n) }} and {{ n | inc }}
    env.globals.update(funcs)
    env.filters.update(funcs)
    return env


def compile_page(
    name: str,
    source: str,
    layouts: dict[str, str],
    funcs: TemplateFunctions,
) -> Template:
    """Compile one page together with the shared layouts.

    Args:
        name: Base file name of the page, also its cache key
        source: Page template source
        layouts: Layout sources keyed by base file name
        funcs: Functions bound as template globals and filters

    Returns:
        Compiled page template; its environment resolves ``extends`` and
        ``include`` against the layouts

    Raises:
        TemplateCompileException: If the page or any layout fails to parse,
            or calls a function, filter or test that is not registered
    """
    env = _create_environment({**layouts, name: source}, funcs)
    try:
        template = env.get_template(name)
        for layout_name in layouts:
            env.get_template(layout_name)
    except TemplateSyntaxError as e:
        failed = e.name or name
        log_with_context(
            logger,
            "error",
            "Unable to parse template",
            template=name,
            failed_template=failed,
            line=e.lineno,
            error=e.message,
            event_type="template_parse_error",
        )
        raise TemplateCompileException(
            f"unable to parse {failed} (line {e.lineno}): {e.message}",
            details={"template": name, "failed_template": failed, "line": e.lineno},
        ) from e

    for template_name, template_source in {name: source, **layouts}.items():
        _check_references(env, name, template_name, template_source)
    return template


def _defined_names(tree: nodes.Template) -> set[str]:
    """Names a template binds itself: set/for/with targets, macro params, macros and imports."""
    names = {node.name for node in tree.find_all(nodes.Name) if node.ctx in ("store", "param")}
    names.update(node.name for node in tree.find_all(nodes.Macro))
    names.update(node.target for node in tree.find_all(nodes.Import))
    for node in tree.find_all(nodes.FromImport):
        names.update(item[1] if isinstance(item, tuple) else item for item in node.names)
    return names


def _unknown_reference(env: Environment, source: str) -> tuple[str, str, int] | None:
    """Return the first (kind, name, line) the environment cannot resolve, if any.

    Jinja only looks up globals when a template runs, and unknown filters or
    tests inside a conditional branch are likewise deferred to execution.
    """
    tree = env.parse(source)
    callables = env.globals.keys() | _CONTEXT_NAMES | _RUNTIME_NAMES | _defined_names(tree)
    for node in tree.find_all((nodes.Call, nodes.Filter, nodes.Test)):
        if isinstance(node, nodes.Call):
            if isinstance(node.node, nodes.Name) and node.node.name not in callables:
                return "function", node.node.name, node.lineno
        elif isinstance(node, nodes.Filter):
            if node.name not in env.filters:
                return "filter", node.name, node.lineno
        elif node.name not in env.tests:
            return "test", node.name, node.lineno
    return None


def _check_references(env: Environment, page: str, template_name: str, source: str) -> None:
    unknown = _unknown_reference(env, source)
    if unknown is None:
        return
    kind, reference, line = unknown
    log_with_context(
        logger,
        "error",
        "Template references an unknown name",
        template=page,
        failed_template=template_name,
        reference=reference,
        kind=kind,
        line=line,
        event_type="template_reference_error",
    )
    raise TemplateCompileException(
        f"unable to compile {template_name} (line {line}): no {kind} named {reference!r}",
        details={"template": page, "failed_template": template_name, "reference": reference, "line": line},
    )


def build_template_cache(file_set: FileSet, config: ViewConfig) -> TemplateCache:
    """Build the template cache from ``file_set``.

    Pages and layouts are visited in lexical path order. Two pages with
    the same base name in different directories resolve to the same key;
    the later path wins and a warning is logged.

    Args:
        file_set: Source of page and layout files
        config: Globs and functions to compile with

    Returns:
        Mapping of page base name to compiled template

    Raises:
        TemplateDiscoveryException: If either glob fails
        TemplateCompileException: If any page or layout cannot be read or parsed
    """
    pages = file_set.glob(config.page_glob)
    layout_paths = file_set.glob(config.layout_glob)
    layouts = {posixpath.basename(path): _read_source(file_set, path) for path in layout_paths}

    cache: TemplateCache = {}
    origins: dict[str, str] = {}
    for page in pages:
        name = posixpath.basename(page)
        template = compile_page(name, _read_source(file_set, page), layouts, config.funcs)
        if name in origins:
            log_with_context(
                logger,
                "warning",
                "Duplicate page name, later path replaces earlier one",
                template=name,
                replaced=origins[name],
                path=page,
                event_type="template_duplicate_name",
            )
        origins[name] = page
        cache[name] = template

    log_with_context(
        logger,
        "debug",
        "Template cache built",
        file_set=repr(file_set),
        page_count=len(cache),
        layout_count=len(layouts),
        event_type="template_cache_built",
    )
    return cache


def build_bundled_cache(config: ViewConfig) -> TemplateCache:
    """Build the cache from the bundled file set (production)."""
    return build_template_cache(config.file_set, config)


def build_disk_cache(config: ViewConfig) -> TemplateCache:
    """Build the cache from the template tree on disk (development)."""
    if config.source_dir is None:
        raise ConfigurationException("source_dir is required to build templates from disk")
    return build_template_cache(DiskFileSet(config.source_dir), config)
