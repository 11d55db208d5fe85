"""Unit tests for crud/store.py"""

from datetime import datetime, timedelta, timezone

import pytest

from mdpages.core.models import Document
from mdpages.core.source import FileSystemSource
from mdpages.crud.store import DocumentStore, RuntimeMode, in_section, section_key
from mdpages.errors import ConfigurationError, DocumentNotFoundError


NOW = datetime.now(timezone.utc)


@pytest.mark.parametrize("doc,development,expected", [
    (Document(), False, True),
    (Document(date=NOW - timedelta(days=1)), False, True),
    (Document(date=NOW + timedelta(days=1)), False, False),
    (Document(draft=True), False, False),
    (Document(draft=True, date=NOW + timedelta(days=1)), True, True),
])
def test_is_visible(doc, development, expected):
    """Drafts and future documents are hidden outside development."""
    assert DocumentStore.is_visible(doc, development) is expected


@pytest.mark.parametrize("doc_section,section,recursive,expected", [
    ("blog", "blog", False, True),
    ("blog", "/blog/", False, True),
    ("docs/guides", "docs", False, False),
    ("docs/guides", "docs", True, True),
    ("docsmore", "docs", True, False),
    ("", "", False, True),
    ("blog", "", True, True),
])
def test_in_section(doc_section, section, recursive, expected):
    assert in_section(doc_section, section, recursive) is expected


@pytest.mark.parametrize("path,expected", [("blog/a.md", "blog"), ("a.md", "."), ("/docs/x/y.md", "docs")])
def test_section_key(path, expected):
    assert section_key(path) == expected


def test_store_without_source_raises(pipeline):
    with pytest.raises(ConfigurationError):
        DocumentStore(pipeline).load("index.md")


def test_load_missing_file_raises(pipeline, source):
    store = DocumentStore(pipeline, source)
    with pytest.raises(DocumentNotFoundError) as exc:
        store.load("blog/nope.md")
    assert exc.value.name == "nope.md"


def test_load_all_in_path_order(pipeline, source):
    store = DocumentStore(pipeline, source)
    docs = store.load_all()
    assert [d.path for d in docs] == [
        "blog/draft-post.md", "blog/first-post.md", "docs/guides/Setup_Guide.md", "index.md",
    ]
    assert store.get("/blog/first-post.md") is docs[1]


def test_visible_pages_hide_drafts(pipeline, source):
    store = DocumentStore(pipeline, source)
    store.load_all()
    assert [d.slug for d in store.visible_pages("blog")] == ["first-post"]
    store.mode = RuntimeMode(development=True)
    assert [d.slug for d in store.visible_pages("blog")] == ["draft-post", "first-post"]


def test_find_by_slug_in_section(pipeline, source):
    store = DocumentStore(pipeline, source)
    store.load_all()
    assert store.find_by_slug_in_section("docs/guides", "setup-guide").path == "docs/guides/Setup_Guide.md"
    assert store.find_by_slug_in_section("docs", "setup-guide") is None
    assert store.find_by_slug_in_section("docs", "setup-guide", recursive=True) is not None
    assert store.find_by_slug_in_section("blog", "draft-post") is None


def test_sections_counts_visible_documents(pipeline, source):
    store = DocumentStore(pipeline, source)
    store.load_all()
    assert store.sections() == {".": 1, "blog": 1, "docs": 1}
    assert store.sections(development=True) == {".": 1, "blog": 2, "docs": 1}


def test_add_existing_path_updates_in_place(pipeline, source):
    store = DocumentStore(pipeline, source)
    original = store.load("index.md")
    again = store.load("index.md")
    assert again is original
    assert len(store.get_all()) == 1


def test_fresh_reloads_in_development(pipeline, source, content_dir):
    """In development the same object is refreshed with the file's new content."""
    store = DocumentStore(pipeline, source, RuntimeMode(development=True))
    doc = store.load("index.md")
    (content_dir / "index.md").write_text("# Home\n\nChanged.\n")
    assert store.fresh(doc) is doc
    assert "Changed." in doc.preview


@pytest.mark.parametrize("mode", [RuntimeMode(), RuntimeMode(development=True, background_task=True)])
def test_fresh_is_noop_outside_interactive_development(pipeline, source, content_dir, mode):
    store = DocumentStore(pipeline, source, mode)
    doc = store.load("index.md")
    (content_dir / "index.md").write_text("# Home\n\nChanged.\n")
    assert store.fresh(doc) is doc
    assert "Changed." not in doc.preview


def test_fresh_all_keeps_references(pipeline, source):
    store = DocumentStore(pipeline, source, RuntimeMode(development=True))
    docs = store.load_all()
    assert all(a is b for a, b in zip(store.fresh_all(docs), docs))
    assert store.fresh(None) is None


def test_load_all_resolves_forward_includes(pipeline, tmp_path):
    """A page including one that sorts after it is re-rendered once the target is loaded."""
    (tmp_path / "a.md").write_text("::include b.md::\n")
    (tmp_path / "b.md").write_text("::include c.md::\n")
    (tmp_path / "c.md").write_text("Shared text.\n")
    store = DocumentStore(pipeline, FileSystemSource(tmp_path))
    a, b, c = store.load_all()
    assert "Shared text." in a.preview
    assert "Shared text." in b.preview
    assert a.missing_includes == []


def test_load_all_keeps_placeholder_for_unknown_include(pipeline, tmp_path):
    (tmp_path / "a.md").write_text("::include nowhere.md::\n")
    store = DocumentStore(pipeline, FileSystemSource(tmp_path))
    (doc,) = store.load_all()
    assert "Could not find: nowhere.md" in doc.preview
    assert doc.missing_includes == ["nowhere.md"]


def test_load_all_resolves_nested_includes(pipeline, tmp_path):
    """A page including a page whose own include was still a placeholder picks up the final text."""
    (tmp_path / "c.md").write_text("::include z.md::\n")
    (tmp_path / "d.md").write_text("::include c.md::\n")
    (tmp_path / "z.md").write_text("Zed text.\n")
    store = DocumentStore(pipeline, FileSystemSource(tmp_path))
    c, d, z = store.load_all()
    assert "Zed text." in c.preview
    assert "Zed text." in d.preview
    assert "Could not find" not in d.preview
    assert d.included_paths == ["c.md", "z.md"]


def test_load_all_refuses_self_include(pipeline, tmp_path):
    (tmp_path / "a.md").write_text("Own text.\n\n::include a.md::\n")
    store = DocumentStore(pipeline, FileSystemSource(tmp_path))
    (doc,) = store.load_all()
    assert doc.preview.count("Own text.") == 1
    assert "Recursive include: a.md" in doc.preview
    assert doc.missing_includes == []


def test_load_all_include_cycle_settles(pipeline, tmp_path):
    (tmp_path / "a.md").write_text("Alpha.\n\n::include b.md::\n")
    (tmp_path / "b.md").write_text("Beta.\n\n::include a.md::\n")
    store = DocumentStore(pipeline, FileSystemSource(tmp_path))
    a, b = store.load_all()
    assert a.preview.count("Alpha.") == 1
    assert b.preview.count("Beta.") == 1
    assert "Recursive include: b.md" in a.preview
    previews = (a.preview, b.preview)
    store._resolve_includes([a, b])
    assert (a.preview, b.preview) == previews
