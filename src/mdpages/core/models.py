"""Document record and Document Map models produced by the pipeline"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MarkdownMenuItem(BaseModel):
    """A level-3 heading entry; link is always an in-document anchor (#id)."""
    text: str
    link: str


class MarkdownMenu(BaseModel):
    """A level-2 heading entry with its level-3 children."""
    icon:     Optional[str] = None
    text:     str
    link:     str
    children: list[MarkdownMenuItem] = Field(default_factory=list)


class DocumentMap(BaseModel):
    """Two-level table of contents built during one render pass."""
    headings: list[MarkdownMenu] = Field(default_factory=list)


# Fields a front matter block may set; everything else is derived by the pipeline.
FRONT_MATTER_FIELDS = (
    'layout', 'draft', 'title', 'summary', 'image', 'author',
    'tags', 'date', 'url', 'group', 'order',
)

# Fields listed on index pages and written to JSON sidecars.
META_FIELDS = (
    'slug', 'title', 'summary', 'date', 'tags', 'author', 'image',
    'word_count', 'line_count', 'url', 'group', 'order',
)


class Document(BaseModel):
    """A markdown source file turned into a typed, render-ready record.

    Instances are mutable: the document store hands out references
    and refreshes them in place with update(), so holders of a reference see
    reloaded content. Assignments are validated, which is how front matter
    strings are coerced into typed fields.
    """
    model_config = ConfigDict(validate_assignment=True)

    path:         str = ''
    slug:         Optional[str] = None
    file_name:    Optional[str] = None
    layout:       Optional[str] = None
    draft:        bool = False
    title:        Optional[str] = None
    summary:      Optional[str] = None
    image:        Optional[str] = None
    author:       Optional[str] = None
    tags:         list[str] = Field(default_factory=list)
    date:         Optional[datetime] = None     # None = visible from creation
    content:      Optional[str] = None          # raw source, front matter included
    url:          Optional[str] = None
    preview:      Optional[str] = None          # rendered body HTML
    html_page:    Optional[str] = None          # body rendered through its layout
    word_count:   Optional[int] = None
    line_count:   Optional[int] = None
    group:        Optional[str] = None
    order:        Optional[int] = None
    document_map: Optional[DocumentMap] = None
    includes:         list[str] = Field(default_factory=list, exclude=True)
    included_paths:   list[str] = Field(default_factory=list, exclude=True)
    missing_includes: list[str] = Field(default_factory=list, exclude=True)

    @field_validator('tags', mode='before')
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        """Accept 'a, b' and '[a, b]' front matter strings as tag lists."""
        if isinstance(value, str):
            value = value.strip().removeprefix('[').removesuffix(']')
            return [t.strip().strip('\'"') for t in value.split(',') if t.strip().strip('\'"')]
        return value

    @field_validator('date', mode='before')
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().strip('\'"')
            return value or None
        return value

    @field_validator('date')
    @classmethod
    def _utc_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Naive dates are taken as UTC so they compare against now() safely."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def section(self) -> str:
        """Directory part of path ('' for root-level documents)."""
        return self.path.rpartition('/')[0]

    def update(self, new_doc: 'Document') -> 'Document':
        """Overwrite mutable fields from a freshly parsed instance, keeping this object's identity.

        path, slug and file_name are identity and never change; date is only
        replaced when the new document has one.
        """
        self.layout = new_doc.layout
        self.title = new_doc.title
        self.summary = new_doc.summary
        self.draft = new_doc.draft
        self.image = new_doc.image
        self.author = new_doc.author
        self.tags = list(new_doc.tags)
        self.content = new_doc.content
        self.url = new_doc.url
        self.preview = new_doc.preview
        self.html_page = new_doc.html_page
        self.word_count = new_doc.word_count
        self.line_count = new_doc.line_count
        self.group = new_doc.group
        self.order = new_doc.order
        self.document_map = new_doc.document_map
        self.includes = list(new_doc.includes)
        self.included_paths = list(new_doc.included_paths)
        self.missing_includes = list(new_doc.missing_includes)
        if new_doc.date is not None:
            self.date = new_doc.date
        return self

    def to_meta(self) -> 'Document':
        """Return a lightweight copy carrying only listing fields (no content or HTML)."""
        return Document(path=self.path, **{name: getattr(self, name) for name in META_FIELDS})
