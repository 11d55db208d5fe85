"""Inline 'include' directive: splice another document's rendered preview"""

import logging
from pathlib import PurePosixPath
from typing import Optional

from markdown_it.common.utils import escapeHtml

from mdpages.core.context import DocumentLookup, RenderContext
from mdpages.core.directives.registry import DefaultInlineRenderer, Directive, DirectiveRegistry
from mdpages.core.models import Document
from mdpages.core.utils.slug import slugify


logger = logging.getLogger(__name__)


def include_target(path: str) -> tuple[str, str]:
    """Split an include path into (section, slug): '/docs/Getting Started.md' -> ('docs', 'getting-started')."""
    target = PurePosixPath(path.strip().lstrip('/'))
    section = target.parent.as_posix()
    return ('' if section == '.' else section), slugify(target.stem)


def resolve_include(path: str, store: Optional[DocumentLookup]) -> Optional[Document]:
    """Find the visible, already rendered document an include path points at."""
    if store is None:
        return None
    section, slug = include_target(path)
    doc = store.find_by_slug_in_section(section, slug, recursive=True)
    return doc if doc is not None and doc.preview else None


class IncludeRenderer:
    """Renders `::include path/to/doc.md::` with the target's preview, or a placeholder naming the path.

    A target that is the document being rendered, or that already contains
    it, is refused so include cycles cannot grow on re-render.
    """

    def render(self, directive: Directive, context: RenderContext) -> str:
        path = directive.argument
        if not path:
            return ''
        context.includes.append(path)
        doc = resolve_include(path, context.store)
        if doc is None:
            logger.warning("Could not find include: %s", path)
            context.missing_includes.append(path)
            return f"<div>Could not find: {escapeHtml(path)}</div>"
        if context.path and (doc.path == context.path or context.path in doc.included_paths):
            logger.warning("Skipping recursive include %s in %s", path, context.path)
            return f"<div>Recursive include: {escapeHtml(path)}</div>"
        for included in (doc.path, *doc.included_paths):
            if included not in context.included_paths:
                context.included_paths.append(included)
        return f"<div>{doc.preview}</div>"


def default_inline_registry() -> DirectiveRegistry:
    """Registry with the stock inline directives: include."""
    return DirectiveRegistry(DefaultInlineRenderer(), {'include': IncludeRenderer()})
