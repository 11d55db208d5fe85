"""Database table definitions for rendered pages"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class Page(SQLModel, table=True):
    """A rendered document, keyed by its source path"""
    __tablename__ = "pages"
    id:           UUID = Field(default_factory=uuid4, primary_key=True)
    path:         str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    section:      str = Field(default='', index=True, nullable=False)
    slug:         str = Field(..., index=True, nullable=False)
    title:        Optional[str] = None
    summary:      Optional[str] = None
    author:       Optional[str] = None
    draft:        bool = Field(default=False, nullable=False)
    date:         Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    tags:         list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    word_count:   Optional[int] = None
    line_count:   Optional[int] = None
    content:      str = Field(..., sa_column=Column(Text, nullable=False))
    hash:         str = Field(..., sa_column=Column(String(64), nullable=False))
    preview:      Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    html_page:    Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    document_map: Optional[dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    created_at:   datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at:   datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
