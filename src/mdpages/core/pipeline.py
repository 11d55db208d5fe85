"""Document pipeline: parse, harvest front matter, render, finalize, and lay out pages"""

import logging
from pathlib import Path, PurePosixPath
from typing import Optional

from mdpages.config import Settings
from mdpages.core.context import DocumentLookup, RenderContext
from mdpages.core.directives.registry import DirectiveRegistry
from mdpages.core.frontmatter import apply_front_matter, extract_front_matter
from mdpages.core.layout import PageLayouts
from mdpages.core.models import Document
from mdpages.core.parse import make_parser, parse, render
from mdpages.core.source import SourceStore
from mdpages.core.utils.slug import slugify
from mdpages.core.utils.text import WORDS_PER_MIN, line_count, minutes_to_read, word_count
from mdpages.errors import ConfigurationError


logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Turns markdown text into Document records.

    One pipeline (and its MarkdownIt instance) is shared by every document;
    per-document state lives in the RenderContext created for each pass.
    """

    def __init__(
        self,
        preset: str = 'gfm-like',
        block_registry: DirectiveRegistry | None = None,
        inline_registry: DirectiveRegistry | None = None,
        slug_max_length: int = 100,
        layout_dir: Path | str | None = None,
        words_per_min: int = WORDS_PER_MIN,
        ):
        self.md = make_parser(preset, block_registry, inline_registry, slug_max_length)
        self.slug_max_length = slug_max_length
        self.words_per_min = words_per_min
        self.layouts = PageLayouts(layout_dir, words_per_min)

    @classmethod
    def from_settings(cls, settings: Settings) -> 'DocumentPipeline':
        layout_dir = settings.layout_dir if settings.layout_dir.is_dir() else None
        return cls(
            preset=settings.parser_config,
            slug_max_length=settings.slug_max_length,
            layout_dir=layout_dir,
            words_per_min=settings.words_per_min,
        )

    @property
    def block_directives(self) -> DirectiveRegistry:
        return self.md.renderer.block_directives

    @property
    def inline_directives(self) -> DirectiveRegistry:
        return self.md.renderer.inline_directives

    def create_document(self, content: str, context: Optional[RenderContext] = None) -> Document:
        """Parse content, apply its front matter, and render the preview HTML.

        The returned document has no path-derived fields yet; see load().
        """
        context = context or RenderContext()
        tokens, env = parse(self.md, content, context)
        doc = apply_front_matter(Document(), extract_front_matter(tokens))
        doc.preview = render(self.md, tokens, env)
        doc.content = content
        doc.document_map = context.document_map
        doc.includes = list(context.includes)
        doc.included_paths = list(context.included_paths)
        doc.missing_includes = list(context.missing_includes)
        return doc

    def load(self, path: str, source: Optional[SourceStore], store: Optional[DocumentLookup] = None) -> Document:
        """Read path from source and return a finalized document.

        Raises DocumentNotFoundError when the source has no such file.
        """
        if source is None:
            raise ConfigurationError("No source store configured")
        content = source.read_all_text(path)
        doc = self.create_document(content, RenderContext(store=store, path=path.lstrip('/')))
        return self.finalize(doc, path, source)

    def finalize(self, doc: Document, path: str, source: SourceStore) -> Document:
        """Fill path, file name, slug, counts, and the title/date defaults."""
        file_name = source.file_name(path)
        doc.path = path.lstrip('/')
        doc.file_name = file_name
        doc.slug = slugify(PurePosixPath(file_name).stem, self.slug_max_length)
        if doc.title is None:
            doc.title = file_name
        doc.word_count = word_count(doc.content or '')
        doc.line_count = line_count(doc.content or '')
        if doc.date is None:
            doc.date = source.last_modified(path)
        logger.debug("Loaded %s (%d words)", doc.path, doc.word_count)
        return doc

    def render_page(self, doc: Document) -> Document:
        """Render the document through its layout into html_page."""
        doc.html_page = self.layouts.render(doc)
        return doc

    def minutes_to_read(self, doc: Document) -> int:
        return minutes_to_read(doc.word_count, self.words_per_min)
