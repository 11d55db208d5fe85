"""Per-render-pass state threaded through markdown-it's env mapping"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Optional, Protocol

from mdpages.core.models import Document, DocumentMap, MarkdownMenu, MarkdownMenuItem


ENV_KEY = 'mdpages'


class DocumentLookup(Protocol):
    """The slice of the document store the include directive needs."""

    def find_by_slug_in_section(self, section: str, slug: str, recursive: bool = False) -> Optional[Document]: ...


@dataclass
class RenderContext:
    """State private to one document's render pass.

    The Document Map is created lazily on the first heading that has both
    text and an id; documents without such headings keep document_map=None.
    """
    store:            Optional[DocumentLookup] = None
    path:             str = ''
    document_map:     Optional[DocumentMap] = None
    includes:         list[str] = field(default_factory=list)   # every include argument, found or not
    included_paths:   list[str] = field(default_factory=list)   # documents spliced in, transitively
    missing_includes: list[str] = field(default_factory=list)

    def env(self) -> dict:
        return {ENV_KEY: self}

    @classmethod
    def from_env(cls, env: MutableMapping) -> 'RenderContext':
        """Return the context stored in env, installing a fresh one if absent."""
        ctx = env.get(ENV_KEY)
        if ctx is None:
            ctx = env[ENV_KEY] = cls()
        return ctx

    def add_heading(self, level: int, text: str, anchor_id: str) -> None:
        """Record a rendered heading: h2 opens a menu entry, h3 nests under the latest h2."""
        if not text or not anchor_id:
            return
        if self.document_map is None:
            self.document_map = DocumentMap()

        link = f"#{anchor_id}"
        headings = self.document_map.headings
        if level == 2:
            headings.append(MarkdownMenu(text=text, link=link))
        elif level == 3 and headings:
            headings[-1].children.append(MarkdownMenuItem(text=text, link=link))
