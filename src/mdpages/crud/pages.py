"""Page persistence: upsert by path with change detection, slug and section lookup"""

from datetime import datetime

from sqlmodel import Session, select

from mdpages.core.models import Document
from mdpages.core.utils.hashing import content_hash
from mdpages.crud.store import section_key
from mdpages.crud.tables import Page


def get_by_path(session: Session, path: str) -> Page | None:
    """Return the Page with the given source path, or None if not found."""
    return session.exec(select(Page).where(Page.path == path)).one_or_none()


def get_by_slug(session: Session, slug: str, section: str | None = None) -> Page | None:
    """Return the first Page with the given slug (optionally within section), or None."""
    query = select(Page).where(Page.slug == slug)
    if section is not None:
        query = query.where(Page.section == section.strip('/'))
    return session.exec(query.order_by(Page.path)).first()


def list_sections(session: Session) -> list[str]:
    """Return sorted distinct top-level directories across all stored pages ('.' for the root)."""
    paths = session.exec(select(Page.path)).all()
    return sorted({section_key(p) for p in paths})


def _page_fields(doc: Document) -> dict:
    content = doc.content or ''
    return {
        "section": doc.section,
        "slug": doc.slug,
        "title": doc.title,
        "summary": doc.summary,
        "author": doc.author,
        "draft": doc.draft,
        "date": doc.date,
        "tags": list(doc.tags),
        "word_count": doc.word_count,
        "line_count": doc.line_count,
        "content": content,
        "hash": content_hash(content),
        "preview": doc.preview,
        "html_page": doc.html_page,
        "document_map": doc.document_map.model_dump(mode='json') if doc.document_map else None,
    }


def save_page(session: Session, doc: Document) -> tuple[Page, str]:
    """Upsert a finalized Document by path.

    Returns (page, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; caller controls the transaction.
    """
    fields = _page_fields(doc)
    page = get_by_path(session, doc.path)

    if page:
        if page.hash == fields['hash'] and page.html_page == fields['html_page']:
            return page, 'unchanged'
        for name, value in fields.items():
            setattr(page, name, value)
        page.updated_at = datetime.now()
        session.add(page)
        session.flush()
        return page, 'updated'

    page = Page(path=doc.path, **fields)
    session.add(page)
    session.flush()
    return page, 'created'
