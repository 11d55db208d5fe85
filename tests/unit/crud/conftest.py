"""Shared fixtures for crud unit tests"""

import pytest
from sqlmodel import Session, SQLModel

from mdpages.core.pipeline import DocumentPipeline
from mdpages.core.source import FileSystemSource
from mdpages.crud.database import init_db, make_engine


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="pipeline")
def pipeline_fixture():
    return DocumentPipeline()


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """A small content tree: two blog posts (one draft), a doc page, and a root page."""
    root = tmp_path / "content"
    (root / "blog").mkdir(parents=True)
    (root / "docs" / "guides").mkdir(parents=True)
    (root / "index.md").write_text("# Home\n\nWelcome home.\n")
    (root / "blog" / "first-post.md").write_text(
        "---\ntitle: First Post\ndate: 2020-01-01\n---\n\n## Intro\n\nHello world.\n"
    )
    (root / "blog" / "draft-post.md").write_text("---\ntitle: Draft\ndraft: true\n---\n\nNot yet.\n")
    (root / "docs" / "guides" / "Setup_Guide.md").write_text("## Install\n\nRun it.\n")
    return root


@pytest.fixture(name="source")
def source_fixture(content_dir):
    return FileSystemSource(content_dir)
