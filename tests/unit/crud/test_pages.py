"""Unit tests for crud/pages.py"""

from datetime import datetime, timezone

from mdpages.core.models import Document, DocumentMap, MarkdownMenu
from mdpages.crud.pages import get_by_path, get_by_slug, list_sections, save_page


def _doc(path: str, content: str = "# Hi\n", **kwargs) -> Document:
    slug = path.rsplit('/', 1)[-1].removesuffix('.md')
    return Document(path=path, slug=slug, content=content, preview="<h1>Hi</h1>",
                    date=datetime(2020, 1, 1, tzinfo=timezone.utc), **kwargs)


def test_save_page_created(session):
    page, status = save_page(session, _doc("blog/post.md", tags=["a"]))
    assert status == "created"
    assert page.section == "blog"
    assert page.tags == ["a"]
    assert get_by_path(session, "blog/post.md") is page


def test_save_page_unchanged(session):
    save_page(session, _doc("blog/post.md"))
    _, status = save_page(session, _doc("blog/post.md"))
    assert status == "unchanged"


def test_save_page_updated(session):
    first, _ = save_page(session, _doc("blog/post.md"))
    page, status = save_page(session, _doc("blog/post.md", content="# Changed\n", title="Changed"))
    assert status == "updated"
    assert page.id == first.id
    assert page.title == "Changed"
    assert page.content == "# Changed\n"


def test_save_page_stores_document_map(session):
    doc = _doc("a.md", document_map=DocumentMap(headings=[MarkdownMenu(text="Intro", link="#intro")]))
    page, _ = save_page(session, doc)
    assert page.document_map == {"headings": [{"icon": None, "text": "Intro", "link": "#intro", "children": []}]}


def test_get_by_slug(session):
    save_page(session, _doc("blog/post.md"))
    save_page(session, _doc("docs/post.md"))
    assert get_by_slug(session, "post").path == "blog/post.md"
    assert get_by_slug(session, "post", section="docs").path == "docs/post.md"
    assert get_by_slug(session, "missing") is None


def test_list_sections(session):
    for path in ("blog/a.md", "blog/b.md", "docs/x/c.md", "index.md"):
        save_page(session, _doc(path))
    assert list_sections(session) == [".", "blog", "docs"]
