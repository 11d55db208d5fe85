"""In-memory document store: loading, visibility, section lookup, and refresh"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from mdpages.core.models import Document
from mdpages.core.pipeline import DocumentPipeline
from mdpages.core.source import SourceStore
from mdpages.errors import ConfigurationError, DocumentNotFoundError


logger = logging.getLogger(__name__)


@dataclass
class RuntimeMode:
    development:     bool = False
    background_task: bool = False

    @property
    def refresh(self) -> bool:
        """Documents are re-read on access only in development, outside background tasks."""
        return self.development and not self.background_task


def section_key(path: str) -> str:
    """Return the top-level directory of a path, or '.' for root-level files."""
    head, sep, _ = path.lstrip('/').partition('/')
    return head if sep else '.'


def in_section(doc_section: str, section: str, recursive: bool = False) -> bool:
    section = section.strip('/')
    if doc_section == section:
        return True
    return recursive and (not section or doc_section.startswith(section + '/'))


class DocumentStore:
    """Holds loaded documents and answers lookups for listing pages and includes.

    Documents are handed out by reference; fresh() reloads them in place so
    those references stay valid.
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        source: Optional[SourceStore] = None,
        mode: Optional[RuntimeMode] = None,
        render_pages: bool = False,
        ):
        self.pipeline = pipeline
        self.source = source
        self.mode = mode or RuntimeMode()
        self.render_pages = render_pages
        self._docs: dict[str, Document] = {}

    def _source(self) -> SourceStore:
        if self.source is None:
            raise ConfigurationError("DocumentStore has no source store; pass source=...")
        return self.source

    def _load(self, path: str) -> Document:
        doc = self.pipeline.load(path, self._source(), store=self)
        if self.render_pages:
            self.pipeline.render_page(doc)
        return doc

    def load(self, path: str) -> Document:
        """Load path from the source and add it. Raises DocumentNotFoundError when missing."""
        return self.add(self._load(path))

    def add(self, doc: Document) -> Document:
        """Store doc by path; an existing entry is updated in place and returned instead."""
        existing = self._docs.get(doc.path)
        if existing is not None and existing is not doc:
            return existing.update(doc)
        self._docs[doc.path] = doc
        return doc

    def load_all(self, section: str = '') -> list[Document]:
        """Load every markdown file under section in path order, then resolve includes.

        Missing files are logged and skipped. Documents with includes are
        re-rendered until their previews stop changing.
        """
        source = self._source()
        loaded = []
        for path in source.discover(section):
            try:
                loaded.append(self.load(path))
            except DocumentNotFoundError as e:
                logger.warning("Skipping %s: %s", path, e)
        self._resolve_includes(loaded)
        logger.info("Loaded %d document(s) from %s", len(loaded), section or '/')
        return loaded

    def _resolve_includes(self, docs: list[Document]) -> None:
        pending = [doc for doc in docs if doc.includes]
        # Each round settles at least one more level of nesting.
        for _ in range(len(pending)):
            changed = False
            for doc in pending:
                before = doc.preview
                doc.update(self._load(doc.path))
                changed = changed or doc.preview != before
            if not changed:
                break
        for doc in pending:
            if doc.missing_includes:
                logger.warning("%s: unresolved includes %s", doc.path, ', '.join(doc.missing_includes))

    def get(self, path: str) -> Optional[Document]:
        return self._docs.get(path.lstrip('/'))

    def get_all(self) -> list[Document]:
        return list(self._docs.values())

    @staticmethod
    def is_visible(doc: Document, development: bool = False) -> bool:
        """Drafts and future-dated documents are only visible in development."""
        if development:
            return True
        return not doc.draft and (doc.date is None or doc.date <= datetime.now(timezone.utc))

    def visible_pages(self, section: str = '', recursive: bool = False) -> list[Document]:
        return [
            doc for doc in self._docs.values()
            if in_section(doc.section, section, recursive) and self.is_visible(doc, self.mode.development)
        ]

    def find_by_slug_in_section(self, section: str, slug: str, recursive: bool = False) -> Optional[Document]:
        """Return the first visible document with slug in section (or below it when recursive)."""
        for doc in self.visible_pages(section, recursive):
            if doc.slug == slug:
                return doc
        return None

    def sections(self, development: Optional[bool] = None) -> dict[str, int]:
        """Visible document counts per top-level directory, sorted by name."""
        development = self.mode.development if development is None else development
        counts: dict[str, int] = {}
        for doc in self._docs.values():
            if self.is_visible(doc, development):
                key = section_key(doc.path)
                counts[key] = counts.get(key, 0) + 1
        return dict(sorted(counts.items()))

    def fresh(self, doc: Optional[Document]) -> Optional[Document]:
        """Reload doc from the source in place when the runtime mode allows it; returns the same object."""
        if doc is None or not self.mode.refresh:
            return doc
        return doc.update(self._load(doc.path))

    def fresh_all(self, docs: list[Document]) -> list[Document]:
        if not self.mode.refresh:
            return docs
        return [self.fresh(doc) for doc in docs]
